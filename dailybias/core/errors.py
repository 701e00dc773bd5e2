"""
Scheduler error taxonomy.

Every error here is a caller contract violation, not a transient condition,
so the core raises immediately and never retries or falls back on its own.
"""

from __future__ import annotations


class SchedulerError(Exception):
    """Base class for all learning scheduler errors."""


class EmptyCatalogError(SchedulerError):
    """Raised when an operation needs at least one item and the catalog is empty."""

    def __init__(self, message: str = "No biases available"):
        super().__init__(message)


class UnknownItemError(SchedulerError, KeyError):
    """Raised when a bias id is not present in the catalog or progress set."""

    def __init__(self, bias_id: str):
        self.bias_id = bias_id
        super().__init__(f"Unknown bias id: {bias_id!r}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class DuplicateItemError(SchedulerError, ValueError):
    """Raised when two records share an id that must be unique."""

    def __init__(self, bias_id: str, what: str = "bias"):
        self.bias_id = bias_id
        super().__init__(f"Duplicate {what} id: {bias_id!r}")


class InvalidTransitionError(SchedulerError):
    """Raised when a quiz session is driven through an illegal state change."""


class InvalidQualityError(SchedulerError, ValueError):
    """Raised when a review grade is outside the ReviewQuality scale."""

    def __init__(self, quality: object):
        self.quality = quality
        super().__init__(f"Invalid review quality: {quality!r}")


class QuizGenerationError(SchedulerError, ValueError):
    """Raised when the catalog cannot support a multiple-choice session."""


__all__ = [
    "SchedulerError",
    "EmptyCatalogError",
    "UnknownItemError",
    "DuplicateItemError",
    "InvalidTransitionError",
    "InvalidQualityError",
    "QuizGenerationError",
]
