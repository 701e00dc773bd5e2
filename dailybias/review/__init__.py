"""
Spaced Repetition Module.

Ladder-based review scheduling (1 -> 3 -> 7 -> 14 -> 30 days) with SM-2
ease tracking, plus read-only queries over the review queue.
"""

from dailybias.review.queries import (
    LEVEL_NAMES,
    ReviewStats,
    calculate_review_stats,
    effective_due_at,
    get_biases_due_for_review,
    get_days_until_review,
    get_interval_level_name,
    get_review_due_text,
    get_upcoming_reviews,
    is_due_for_review,
)
from dailybias.review.scheduler import (
    DEFAULT_CONFIG,
    DEFAULT_EASE_FACTOR,
    INTERVALS,
    MAX_EASE_FACTOR,
    MIN_EASE_FACTOR,
    ReviewConfig,
    calculate_next_interval,
    get_interval_level,
    initialize_review_progress,
    next_ease_factor,
    process_review,
    review_bias,
)

__all__ = [
    "INTERVALS",
    "LEVEL_NAMES",
    "DEFAULT_CONFIG",
    "DEFAULT_EASE_FACTOR",
    "MIN_EASE_FACTOR",
    "MAX_EASE_FACTOR",
    "ReviewConfig",
    "ReviewStats",
    "calculate_next_interval",
    "calculate_review_stats",
    "effective_due_at",
    "get_biases_due_for_review",
    "get_days_until_review",
    "get_interval_level",
    "get_interval_level_name",
    "get_review_due_text",
    "get_upcoming_reviews",
    "initialize_review_progress",
    "is_due_for_review",
    "next_ease_factor",
    "process_review",
    "review_bias",
]
