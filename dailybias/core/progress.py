"""
Progress record bookkeeping.

Pure helpers for the view/mastery side of BiasProgress. They return new
records; persisting them (and debouncing rapid repeated views) is the
caller's job.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Iterable, Sequence

from dailybias.core.errors import DuplicateItemError
from dailybias.core.models import BiasProgress, resolve_now


def progress_map(progress_list: Iterable[BiasProgress]) -> dict[str, BiasProgress]:
    """
    Index progress records by bias id.

    Raises:
        DuplicateItemError: If two records share a bias id.
    """
    mapping: dict[str, BiasProgress] = {}
    for progress in progress_list:
        if progress.bias_id in mapping:
            raise DuplicateItemError(progress.bias_id, what="progress")
        mapping[progress.bias_id] = progress
    return mapping


def mark_viewed(
    progress: BiasProgress | None,
    bias_id: str,
    now: datetime | None = None,
) -> BiasProgress:
    """Record a view: create the record on first view, otherwise bump the count."""
    now = resolve_now(now)
    if progress is None:
        return BiasProgress(bias_id=bias_id, viewed_at=now, view_count=1)
    return replace(progress, viewed_at=now, view_count=progress.view_count + 1)


def toggle_mastered(
    progress: BiasProgress | None,
    bias_id: str,
    now: datetime | None = None,
) -> BiasProgress:
    """Flip the mastered flag, creating a viewed record if none exists."""
    if progress is None:
        return BiasProgress(
            bias_id=bias_id,
            viewed_at=resolve_now(now),
            view_count=1,
            mastered=True,
        )
    return replace(progress, mastered=not progress.mastered)


def upsert_progress(
    progress_list: Sequence[BiasProgress],
    updated: BiasProgress,
) -> list[BiasProgress]:
    """Return a new list with ``updated`` replacing the record for its bias id."""
    if not any(p.bias_id == updated.bias_id for p in progress_list):
        return [*progress_list, updated]
    return [updated if p.bias_id == updated.bias_id else p for p in progress_list]


__all__ = ["progress_map", "mark_viewed", "toggle_mastered", "upsert_progress"]
