"""
Spaced Repetition Scheduler.

Review state per bias is implicit in ``(interval, next_review_at)``:

    Uninitialized --initialize_review_progress--> Scheduled
    Scheduled --process_review(quality)--> Scheduled'

Transition rule:
- quality below the success threshold (Forgot / Hard) is a lapse: the
  interval resets to the first step of the ladder
- a successful recall climbs the fixed ladder 1 -> 3 -> 7 -> 14 -> 30 days
  (Perfect climbs two rungs), never moving down and capping at the top rung

The SM-2 ease factor is still tracked (clamped to [1.3, 2.5]) so that the
learner's recall strength is visible, but the interval itself follows the
ladder.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Sequence

from loguru import logger

from dailybias.core.catalog import find_bias
from dailybias.core.models import BiasProgress, ReviewQuality, resolve_now
from dailybias.core.progress import progress_map

# Standard intervals in days
INTERVALS: tuple[int, ...] = (1, 3, 7, 14, 30)

DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3
MAX_EASE_FACTOR = 2.5
LAPSE_EASE_PENALTY = 0.2


@dataclass(frozen=True)
class ReviewConfig:
    """Ladder and thresholds for the scheduler."""

    intervals: tuple[int, ...] = INTERVALS
    success_threshold: int = ReviewQuality.GOOD
    perfect_steps: int = 2

    @property
    def min_interval(self) -> int:
        return self.intervals[0]

    @property
    def max_interval(self) -> int:
        return self.intervals[-1]

    @classmethod
    def from_settings(cls, settings=None) -> ReviewConfig:
        if settings is None:
            from dailybias.config import get_settings

            settings = get_settings()
        return cls(**settings.get_review_config())


DEFAULT_CONFIG = ReviewConfig()


def get_interval_level(interval: int | None, intervals: Sequence[int] = INTERVALS) -> int:
    """Index of the highest ladder rung that ``interval`` has reached (0 when unset)."""
    if not interval:
        return 0
    for level in range(len(intervals) - 1, -1, -1):
        if interval >= intervals[level]:
            return level
    return 0


def next_ease_factor(ease_factor: float, quality: ReviewQuality, threshold: int = ReviewQuality.GOOD) -> float:
    """SM-2 ease factor update, clamped to [MIN_EASE_FACTOR, MAX_EASE_FACTOR]."""
    if quality < threshold:
        return max(MIN_EASE_FACTOR, ease_factor - LAPSE_EASE_PENALTY)
    q = int(quality)
    updated = ease_factor + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02))
    return max(MIN_EASE_FACTOR, min(MAX_EASE_FACTOR, updated))


def calculate_next_interval(
    current_interval: int,
    quality: ReviewQuality,
    config: ReviewConfig = DEFAULT_CONFIG,
) -> int:
    """
    Next interval in days for a review of the given quality.

    Lapses reset to the minimum step. Successes climb the ladder and never
    return less than ``current_interval``.
    """
    if quality < config.success_threshold:
        return config.min_interval

    steps = config.perfect_steps if quality == ReviewQuality.PERFECT else 1
    level = get_interval_level(current_interval, config.intervals)
    target = config.intervals[min(level + steps, len(config.intervals) - 1)]
    return max(target, current_interval)


def initialize_review_progress(
    progress: BiasProgress,
    now: datetime | None = None,
    config: ReviewConfig = DEFAULT_CONFIG,
) -> BiasProgress:
    """
    Put a record on the review schedule: first review due in one step.

    No-op for a record that already has a due date.
    """
    if progress.is_review_initialized:
        return progress

    now = resolve_now(now)
    return replace(
        progress,
        interval=config.min_interval,
        next_review_at=now + timedelta(days=config.min_interval),
        ease_factor=DEFAULT_EASE_FACTOR,
        review_count=0,
        consecutive_correct=0,
    )


def process_review(
    progress: BiasProgress,
    quality: ReviewQuality | int | str,
    now: datetime | None = None,
    config: ReviewConfig = DEFAULT_CONFIG,
) -> BiasProgress:
    """
    Apply one review and return the rescheduled record.

    Uninitialised records are initialised first. View bookkeeping
    (``viewed_at``, ``view_count``, ``mastered``) is left untouched.

    Raises:
        InvalidQualityError: If ``quality`` is not on the ReviewQuality scale.
    """
    quality = ReviewQuality.parse(quality)
    now = resolve_now(now)
    current = initialize_review_progress(progress, now, config)

    current_interval = current.interval or config.min_interval
    ease_factor = current.ease_factor or DEFAULT_EASE_FACTOR
    new_interval = calculate_next_interval(current_interval, quality, config)
    succeeded = quality >= config.success_threshold

    updated = replace(
        current,
        interval=new_interval,
        next_review_at=now + timedelta(days=new_interval),
        last_reviewed_at=now,
        ease_factor=next_ease_factor(ease_factor, quality, config.success_threshold),
        review_count=current.review_count + 1,
        consecutive_correct=current.consecutive_correct + 1 if succeeded else 0,
        last_quality=quality,
    )

    logger.debug(
        f"Review {progress.bias_id}: {quality.label} "
        f"interval {current_interval}d -> {new_interval}d, ease {updated.ease_factor:.2f}"
    )
    return updated


def review_bias(
    catalog: Sequence,
    progress_list: Sequence[BiasProgress],
    bias_id: str,
    quality: ReviewQuality | int | str,
    now: datetime | None = None,
    config: ReviewConfig = DEFAULT_CONFIG,
) -> BiasProgress:
    """
    Review a bias by id.

    A bias with no progress record gets a fresh one (left unviewed) before
    the review is applied.

    Raises:
        UnknownItemError: If ``bias_id`` is not in the catalog.
        InvalidQualityError: If ``quality`` is not on the scale.
    """
    find_bias(catalog, bias_id)
    existing = progress_map(progress_list).get(bias_id)
    if existing is None:
        logger.debug(f"No progress for {bias_id}, creating record before review")
        existing = BiasProgress(bias_id=bias_id)
    return process_review(existing, quality, now, config)


__all__ = [
    "INTERVALS",
    "DEFAULT_EASE_FACTOR",
    "MIN_EASE_FACTOR",
    "MAX_EASE_FACTOR",
    "ReviewConfig",
    "DEFAULT_CONFIG",
    "get_interval_level",
    "next_ease_factor",
    "calculate_next_interval",
    "initialize_review_progress",
    "process_review",
    "review_bias",
]
