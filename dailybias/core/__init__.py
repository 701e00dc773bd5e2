"""
Core Module - Shared value types and helpers.

Components:
- models: Bias, BiasProgress, ReviewQuality and quiz value types
- errors: Scheduler error taxonomy
- catalog: Merge / lookup helpers for the content catalog
- progress: View and mastery bookkeeping
- cache: Injected daily-selection cache

The daily, review and quiz packages import from here rather than
redefining shared concepts.
"""

from dailybias.core.cache import (
    CacheStore,
    InMemoryCacheStore,
    get_cached_daily_bias,
    get_or_compute,
)
from dailybias.core.catalog import catalog_index, filter_by_category, find_bias, merge_catalogs
from dailybias.core.errors import (
    DuplicateItemError,
    EmptyCatalogError,
    InvalidQualityError,
    InvalidTransitionError,
    QuizGenerationError,
    SchedulerError,
    UnknownItemError,
)
from dailybias.core.models import (
    Bias,
    BiasCategory,
    BiasProgress,
    BiasSource,
    QuizAttempt,
    QuizDifficulty,
    QuizOption,
    QuizQuestion,
    QuizSession,
    ReviewQuality,
)
from dailybias.core.progress import mark_viewed, progress_map, toggle_mastered, upsert_progress

__all__ = [
    # Models
    "Bias",
    "BiasCategory",
    "BiasProgress",
    "BiasSource",
    "QuizAttempt",
    "QuizDifficulty",
    "QuizOption",
    "QuizQuestion",
    "QuizSession",
    "ReviewQuality",
    # Errors
    "SchedulerError",
    "EmptyCatalogError",
    "UnknownItemError",
    "DuplicateItemError",
    "InvalidTransitionError",
    "InvalidQualityError",
    "QuizGenerationError",
    # Catalog / progress
    "merge_catalogs",
    "catalog_index",
    "find_bias",
    "filter_by_category",
    "progress_map",
    "mark_viewed",
    "toggle_mastered",
    "upsert_progress",
    # Cache
    "CacheStore",
    "InMemoryCacheStore",
    "get_or_compute",
    "get_cached_daily_bias",
]
