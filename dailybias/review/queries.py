"""
Read-only review queries: due sets, upcoming reviews, stats and display text.

A record takes part in the review cycle once it has been viewed or put on
the schedule. A viewed record that was never initialised is treated as due
one step after the view.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Sequence

from dailybias.core.models import BiasProgress, resolve_now
from dailybias.review.scheduler import INTERVALS

ONE_DAY = timedelta(days=1)

LEVEL_NAMES = ("New", "Learning", "Young", "Mature", "Mastered")


@dataclass(frozen=True)
class ReviewStats:
    """Aggregate review counters."""

    due_now: int = 0
    due_today: int = 0
    due_this_week: int = 0
    total_reviewed: int = 0
    average_interval: int = 0
    mastery_progress: int = 0  # percent


def effective_due_at(progress: BiasProgress, intervals: Sequence[int] = INTERVALS) -> datetime | None:
    """Scheduled due date, or the implicit one for viewed-but-unscheduled records."""
    if progress.next_review_at is not None:
        return progress.next_review_at
    if progress.viewed_at is not None:
        return progress.viewed_at + timedelta(days=intervals[0])
    return None


def _tracked(
    progress_list: Sequence[BiasProgress],
    intervals: Sequence[int] = INTERVALS,
) -> list[tuple[BiasProgress, datetime]]:
    tracked = []
    for progress in progress_list:
        due = effective_due_at(progress, intervals)
        if due is not None:
            tracked.append((progress, due))
    return tracked


def is_due_for_review(
    progress: BiasProgress,
    now: datetime | None = None,
    intervals: Sequence[int] = INTERVALS,
) -> bool:
    due = effective_due_at(progress, intervals)
    return due is not None and due <= resolve_now(now)


def get_biases_due_for_review(
    progress_list: Sequence[BiasProgress],
    now: datetime | None = None,
    intervals: Sequence[int] = INTERVALS,
) -> list[BiasProgress]:
    """Records with a due date at or before ``now``, most overdue first."""
    now = resolve_now(now)
    due = [(p, d) for p, d in _tracked(progress_list, intervals) if d <= now]
    due.sort(key=lambda pair: pair[1])
    return [p for p, _ in due]


def get_upcoming_reviews(
    progress_list: Sequence[BiasProgress],
    limit: int = 10,
    now: datetime | None = None,
    intervals: Sequence[int] = INTERVALS,
) -> list[BiasProgress]:
    """Records due after ``now``, soonest first, at most ``limit`` of them."""
    now = resolve_now(now)
    upcoming = [(p, d) for p, d in _tracked(progress_list, intervals) if d > now]
    upcoming.sort(key=lambda pair: pair[1])
    return [p for p, _ in upcoming[: max(0, limit)]]


def calculate_review_stats(
    progress_list: Sequence[BiasProgress],
    now: datetime | None = None,
    intervals: Sequence[int] = INTERVALS,
) -> ReviewStats:
    """
    Summarise the review queue.

    - due_now: due at or before ``now``
    - due_today: due before the end of ``now``'s calendar day (includes due_now)
    - due_this_week: due after ``now`` and within the next 7 days
    - total_reviewed: records with at least one review
    - average_interval: mean interval of reviewed records, rounded
    - mastery_progress: percent of tracked records that are mastered or sit
      on the top rung of the ladder
    """
    now = resolve_now(now)
    end_of_today = datetime.combine(now.date(), time.max, tzinfo=now.tzinfo)
    week_ahead = now + timedelta(days=7)

    due_now = due_today = due_this_week = 0
    total_reviewed = total_interval = mastered = 0

    tracked = _tracked(progress_list, intervals)
    for progress, due in tracked:
        if due <= now:
            due_now += 1
        elif due <= week_ahead:
            due_this_week += 1
        if due <= end_of_today:
            due_today += 1

        if progress.review_count > 0:
            total_reviewed += 1
            total_interval += progress.interval or intervals[0]

        if progress.mastered or (progress.interval or 0) >= intervals[-1]:
            mastered += 1

    return ReviewStats(
        due_now=due_now,
        due_today=due_today,
        due_this_week=due_this_week,
        total_reviewed=total_reviewed,
        average_interval=round(total_interval / total_reviewed) if total_reviewed else 0,
        mastery_progress=round(mastered / len(tracked) * 100) if tracked else 0,
    )


def get_interval_level_name(level: int) -> str:
    """Display label for an interval level."""
    return LEVEL_NAMES[max(0, min(level, len(LEVEL_NAMES) - 1))]


def get_days_until_review(progress: BiasProgress, now: datetime | None = None) -> int | None:
    """Whole days until the scheduled review (ceil), negative when overdue."""
    if progress.next_review_at is None:
        return None
    return math.ceil((progress.next_review_at - resolve_now(now)) / ONE_DAY)


def get_review_due_text(progress: BiasProgress, now: datetime | None = None) -> str:
    """Human-readable due text, e.g. "Due now", "Due in 3 days", "Overdue by 2 days"."""
    now = resolve_now(now)
    if progress.next_review_at is None:
        return "Ready for first review" if progress.viewed_at is not None else "Not yet viewed"

    if progress.next_review_at <= now:
        overdue = math.floor((now - progress.next_review_at) / ONE_DAY)
        if overdue == 0:
            return "Due now"
        if overdue == 1:
            return "Overdue by 1 day"
        return f"Overdue by {overdue} days"

    days = get_days_until_review(progress, now)
    if days == 1:
        return "Due tomorrow"
    if days < 7:
        return f"Due in {days} days"
    if days < 14:
        return "Due next week"
    if days < 30:
        return f"Due in {math.ceil(days / 7)} weeks"
    return "Due in a month"


__all__ = [
    "LEVEL_NAMES",
    "ReviewStats",
    "effective_due_at",
    "is_due_for_review",
    "get_biases_due_for_review",
    "get_upcoming_reviews",
    "calculate_review_stats",
    "get_interval_level_name",
    "get_days_until_review",
    "get_review_due_text",
]
