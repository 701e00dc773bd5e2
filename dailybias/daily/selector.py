"""
Daily Selection Engine.

Picks one bias per calendar day. Two selectors are provided:

1. get_daily_bias - pure date hash into the catalog (same for every learner)
2. get_personalized_daily_bias - scores every bias against the learner's
   progress, then picks deterministically among the best-scored candidates

Scoring factors (personalized):
- Never viewed: large bonus, always preferred over any viewed bias
- Viewed within the last day: heavy penalty so it does not reappear at once
- Not seen for 3+ / 7+ days: staleness boost (spacing effect)
- Mastered: demoted, but revisited after two weeks
- Viewed many times: damped
- Date-keyed jitter: varies the order day to day while staying deterministic

The date key is an opaque ``YYYY-MM-DD`` string; resolving the learner's
timezone is the caller's job.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from typing import Sequence
from zoneinfo import ZoneInfo

from loguru import logger

from dailybias.core.errors import EmptyCatalogError
from dailybias.core.hashing import hash_string
from dailybias.core.models import Bias, BiasCategory, BiasProgress, resolve_now
from dailybias.core.progress import progress_map

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class SelectionWeights:
    """Tunable weights for the personalized selector."""

    base_score: float = 100.0
    unviewed_bonus: float = 500.0
    unmastered_bonus: float = 100.0
    mastered_penalty: float = 200.0
    mastered_revisit_days: float = 14.0
    mastered_revisit_bonus: float = 50.0
    recent_view_days: float = 1.0
    recent_view_penalty: float = 300.0
    stale_days: float = 3.0
    stale_bonus: float = 75.0
    very_stale_days: float = 7.0
    very_stale_bonus: float = 150.0
    heavy_view_threshold: int = 5
    heavy_view_penalty: float = 10.0
    jitter_range: int = 100
    top_candidates: int = 5

    @classmethod
    def from_settings(cls, settings=None) -> SelectionWeights:
        if settings is None:
            from dailybias.config import get_settings

            settings = get_settings()
        return cls(**settings.get_selection_weights())


DEFAULT_WEIGHTS = SelectionWeights()


@dataclass(frozen=True)
class ScoredBias:
    """A bias with its personalized priority score."""

    bias: Bias
    score: float
    unviewed: bool


def get_today_date_string(now: datetime | None = None, tz: tzinfo | str | None = None) -> str:
    """
    Calendar-day key (``YYYY-MM-DD``) for ``now`` in ``tz``.

    Args:
        now: Injected clock value (defaults to the current UTC time)
        tz: Timezone or IANA name; UTC when omitted
    """
    now = resolve_now(now)
    if tz is not None:
        now = now.astimezone(ZoneInfo(tz) if isinstance(tz, str) else tz)
    return now.date().isoformat()


def get_daily_bias(catalog: Sequence[Bias], date_key: str) -> Bias:
    """
    Unpersonalized bias of the day.

    Raises:
        EmptyCatalogError: If the catalog is empty.
    """
    if not catalog:
        raise EmptyCatalogError()
    return catalog[hash_string(date_key) % len(catalog)]


def _is_unviewed(progress: BiasProgress | None) -> bool:
    return progress is None or progress.viewed_at is None


def score_bias(
    bias: Bias,
    progress: BiasProgress | None,
    date_key: str,
    now: datetime,
    weights: SelectionWeights = DEFAULT_WEIGHTS,
) -> float:
    """Priority score of one bias for the given day (higher is better)."""
    score = weights.base_score

    if _is_unviewed(progress):
        score += weights.unviewed_bonus
    else:
        days_since_view = (resolve_now(now) - progress.viewed_at) / ONE_DAY

        if progress.mastered:
            score -= weights.mastered_penalty
            if days_since_view > weights.mastered_revisit_days:
                score += weights.mastered_revisit_bonus
        else:
            score += weights.unmastered_bonus
            if days_since_view > weights.very_stale_days:
                score += weights.very_stale_bonus
            elif days_since_view > weights.stale_days:
                score += weights.stale_bonus
            elif days_since_view < weights.recent_view_days:
                score -= weights.recent_view_penalty

        if progress.view_count > weights.heavy_view_threshold:
            score -= progress.view_count * weights.heavy_view_penalty

    # Date-keyed jitter in [-range/2, range/2)
    half = weights.jitter_range // 2
    score += hash_string(date_key + bias.id) % weights.jitter_range - half
    return score


def score_catalog(
    catalog: Sequence[Bias],
    progress_list: Sequence[BiasProgress],
    date_key: str,
    now: datetime | None = None,
    weights: SelectionWeights = DEFAULT_WEIGHTS,
) -> list[ScoredBias]:
    """Score every bias, best first. Equal scores keep catalog order."""
    now = resolve_now(now)
    by_id = progress_map(progress_list)

    scored = []
    for bias in catalog:
        progress = by_id.get(bias.id)
        scored.append(
            ScoredBias(
                bias=bias,
                score=score_bias(bias, progress, date_key, now, weights),
                unviewed=_is_unviewed(progress),
            )
        )
    scored.sort(key=lambda s: s.score, reverse=True)
    return scored


def get_personalized_daily_bias(
    catalog: Sequence[Bias],
    progress_list: Sequence[BiasProgress],
    date_key: str | None = None,
    now: datetime | None = None,
    weights: SelectionWeights = DEFAULT_WEIGHTS,
) -> Bias:
    """
    Personalized bias of the day.

    The candidate pool is the top ``weights.top_candidates`` scored biases of
    the preferred tier: unviewed biases while any remain, otherwise all
    biases. The date hash then picks one, so the result is fixed for a given
    (catalog, progress, date, now).

    Raises:
        EmptyCatalogError: If the catalog is empty.
    """
    if not catalog:
        raise EmptyCatalogError()

    now = resolve_now(now)
    if date_key is None:
        date_key = get_today_date_string(now)

    scored = score_catalog(catalog, progress_list, date_key, now, weights)
    tier = [s for s in scored if s.unviewed] or scored
    candidates = tier[: max(1, weights.top_candidates)]
    chosen = candidates[hash_string(date_key) % len(candidates)]

    logger.debug(
        f"Daily bias for {date_key}: {chosen.bias.id} "
        f"(score {chosen.score:.0f}, {len(candidates)} candidates, unviewed={chosen.unviewed})"
    )
    return chosen.bias


def get_category_distribution(
    progress_list: Sequence[BiasProgress],
    catalog: Sequence[Bias],
) -> dict[str, int]:
    """
    Count biases with a progress record per category.

    Every category of the closed set appears in the result, defaulting to 0.
    """
    distribution = {category.value: 0 for category in BiasCategory}
    tracked = progress_map(progress_list)

    for bias in catalog:
        distribution.setdefault(bias.category.value, 0)
        if bias.id in tracked:
            distribution[bias.category.value] += 1

    return distribution


def get_balanced_recommendation(
    catalog: Sequence[Bias],
    progress_list: Sequence[BiasProgress],
) -> Bias | None:
    """
    Recommend an unviewed bias from the least explored category.

    Only categories that still have unviewed biases compete; ties go to the
    category declared first in BiasCategory. Returns None once every bias has
    a progress record.
    """
    tracked = progress_map(progress_list)
    unviewed = [bias for bias in catalog if bias.id not in tracked]
    if not unviewed:
        return None

    distribution = get_category_distribution(progress_list, catalog)
    category_order = {category.value: i for i, category in enumerate(BiasCategory)}
    open_categories = {bias.category.value for bias in unviewed}
    least_explored = min(
        open_categories,
        key=lambda c: (distribution[c], category_order.get(c, len(category_order))),
    )

    recommendation = next(bias for bias in unviewed if bias.category.value == least_explored)
    logger.debug(f"Balanced recommendation: {recommendation.id} from {least_explored}")
    return recommendation


__all__ = [
    "SelectionWeights",
    "ScoredBias",
    "DEFAULT_WEIGHTS",
    "get_today_date_string",
    "get_daily_bias",
    "score_bias",
    "score_catalog",
    "get_personalized_daily_bias",
    "get_category_distribution",
    "get_balanced_recommendation",
]
