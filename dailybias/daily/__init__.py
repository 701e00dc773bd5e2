"""
Daily Selection Module.

Deterministic, personalization-weighted selection of one bias per day,
plus coverage heuristics for balanced exploration of categories.
"""

from dailybias.daily.selector import (
    DEFAULT_WEIGHTS,
    ScoredBias,
    SelectionWeights,
    get_balanced_recommendation,
    get_category_distribution,
    get_daily_bias,
    get_personalized_daily_bias,
    get_today_date_string,
    score_bias,
    score_catalog,
)

__all__ = [
    "DEFAULT_WEIGHTS",
    "ScoredBias",
    "SelectionWeights",
    "get_balanced_recommendation",
    "get_category_distribution",
    "get_daily_bias",
    "get_personalized_daily_bias",
    "get_today_date_string",
    "score_bias",
    "score_catalog",
]
