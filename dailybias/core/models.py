"""
Core value types for the learning scheduler.

All records are frozen dataclasses. Operations never mutate their inputs;
they return new values built with ``dataclasses.replace`` that the caller is
expected to persist.

Design:
- Bias: a single learnable content item (catalog or user-authored)
- BiasProgress: per-item learning state, versioned for storage migrations
- ReviewQuality: ordinal recall grade supplied after a review
- QuizOption / QuizQuestion / QuizAttempt / QuizSession: assessment values
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum, IntEnum
from typing import Any

from dailybias.core.errors import InvalidQualityError

PROGRESS_SCHEMA_VERSION = 2


class BiasCategory(str, Enum):
    """Closed set of bias categories."""

    DECISION = "decision"
    MEMORY = "memory"
    SOCIAL = "social"
    PERCEPTION = "perception"
    MISC = "misc"

    @property
    def label(self) -> str:
        return {
            BiasCategory.DECISION: "Decision Making",
            BiasCategory.MEMORY: "Memory",
            BiasCategory.SOCIAL: "Social",
            BiasCategory.PERCEPTION: "Perception",
            BiasCategory.MISC: "Miscellaneous",
        }[self]


class BiasSource(str, Enum):
    """Where a bias came from."""

    CORE = "core"
    USER = "user"


class ReviewQuality(IntEnum):
    """
    Recall grade given by the learner after seeing the answer.

    Values follow the SM-2 0-5 scale; 1 is unused. Anything below GOOD
    counts as a lapse.
    """

    FORGOT = 0
    HARD = 2
    GOOD = 3
    EASY = 4
    PERFECT = 5

    @property
    def label(self) -> str:
        return self.name.title()

    @property
    def description(self) -> str:
        return {
            ReviewQuality.FORGOT: "Complete blackout",
            ReviewQuality.HARD: "Struggled to recall",
            ReviewQuality.GOOD: "Recalled with effort",
            ReviewQuality.EASY: "Recalled smoothly",
            ReviewQuality.PERFECT: "Instant recall",
        }[self]

    @classmethod
    def parse(cls, value: Any) -> ReviewQuality:
        """
        Coerce an int, enum member or name ("good", "Perfect") to a grade.

        Raises:
            InvalidQualityError: If the value is not on the scale.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise InvalidQualityError(value)
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise InvalidQualityError(value) from None
        if isinstance(value, str):
            key = value.strip().upper()
            if key in cls.__members__:
                return cls[key]
            if key.isdigit():
                return cls.parse(int(key))
        raise InvalidQualityError(value)


class QuizDifficulty(str, Enum):
    """Question difficulty derived from learner familiarity."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


# =============================================================================
# Timestamp helpers
# =============================================================================


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def resolve_now(now: datetime | None) -> datetime:
    """Return the injected clock value, or the wall clock when absent."""
    if now is None:
        return utcnow()
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def _coerce_utc(instance: Any, *names: str) -> None:
    """Attach UTC to naive datetime fields of a frozen dataclass, in place."""
    for name in names:
        value = getattr(instance, name)
        if value is not None and value.tzinfo is None:
            object.__setattr__(instance, name, value.replace(tzinfo=timezone.utc))


def _from_epoch_ms(value: Any) -> datetime | None:
    if not value:
        return None
    return datetime.fromtimestamp(int(value) / 1000, tz=timezone.utc)


def _parse_datetime(value: Any) -> datetime | None:
    if value is None or value == "" or value == 0:
        return None
    if isinstance(value, datetime):
        return resolve_now(value)
    if isinstance(value, (int, float)):
        return _from_epoch_ms(value)
    return resolve_now(datetime.fromisoformat(str(value)))


def _format_datetime(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


# =============================================================================
# Content items
# =============================================================================


@dataclass(frozen=True)
class Bias:
    """A single learnable content item."""

    id: str
    title: str
    category: BiasCategory
    summary: str
    why: str = ""
    counter: str = ""
    source: BiasSource = BiasSource.CORE
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self):
        _coerce_utc(self, "created_at", "updated_at")

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> Bias:
        return cls(
            id=str(payload["id"]),
            title=payload["title"],
            category=BiasCategory(payload.get("category", BiasCategory.MISC.value)),
            summary=payload.get("summary", ""),
            why=payload.get("why", ""),
            counter=payload.get("counter", ""),
            source=BiasSource(payload.get("source", BiasSource.CORE.value)),
            created_at=_parse_datetime(payload.get("created_at", payload.get("createdAt"))),
            updated_at=_parse_datetime(payload.get("updated_at", payload.get("updatedAt"))),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category.value,
            "summary": self.summary,
            "why": self.why,
            "counter": self.counter,
            "source": self.source.value,
            "created_at": _format_datetime(self.created_at),
            "updated_at": _format_datetime(self.updated_at),
        }


# =============================================================================
# Learning state
# =============================================================================


@dataclass(frozen=True)
class BiasProgress:
    """
    Learning state for one bias.

    View bookkeeping (``viewed_at``, ``view_count``, ``mastered``) is owned by
    the caller; the review fields are owned by the spaced repetition
    scheduler and stay ``None`` until ``initialize_review_progress`` runs.
    """

    bias_id: str
    viewed_at: datetime | None = None
    view_count: int = 0
    mastered: bool = False

    # Spaced repetition (None = not yet initialised)
    interval: int | None = None
    next_review_at: datetime | None = None
    last_reviewed_at: datetime | None = None
    ease_factor: float | None = None
    review_count: int = 0
    consecutive_correct: int = 0
    last_quality: ReviewQuality | None = None

    schema_version: int = PROGRESS_SCHEMA_VERSION

    def __post_init__(self):
        # Naive timestamps are read as UTC
        _coerce_utc(self, "viewed_at", "next_review_at", "last_reviewed_at")

    @property
    def has_been_viewed(self) -> bool:
        return self.viewed_at is not None

    @property
    def is_review_initialized(self) -> bool:
        return self.next_review_at is not None

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> BiasProgress:
        """
        Build a record from a stored dict, migrating older schema versions.

        Version 1 is the camelCase shape with millisecond epoch timestamps
        (``biasId``, ``viewedAt``, ``nextReviewAt`` ...). Version 2 is the
        snake_case shape produced by ``to_dict``.
        """
        version = int(payload.get("schema_version", 1))
        if version < 2:
            payload = migrate_progress_v1(payload)

        last_quality = payload.get("last_quality")
        interval = payload.get("interval")
        ease_factor = payload.get("ease_factor")
        return cls(
            bias_id=str(payload["bias_id"]),
            viewed_at=_parse_datetime(payload.get("viewed_at")),
            view_count=int(payload.get("view_count", 0)),
            mastered=bool(payload.get("mastered", False)),
            interval=int(interval) if interval else None,
            next_review_at=_parse_datetime(payload.get("next_review_at")),
            last_reviewed_at=_parse_datetime(payload.get("last_reviewed_at")),
            ease_factor=float(ease_factor) if ease_factor else None,
            review_count=int(payload.get("review_count") or 0),
            consecutive_correct=int(payload.get("consecutive_correct") or 0),
            last_quality=ReviewQuality.parse(last_quality) if last_quality is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "schema_version": PROGRESS_SCHEMA_VERSION,
            "bias_id": self.bias_id,
            "viewed_at": _format_datetime(self.viewed_at),
            "view_count": self.view_count,
            "mastered": self.mastered,
            "interval": self.interval,
            "next_review_at": _format_datetime(self.next_review_at),
            "last_reviewed_at": _format_datetime(self.last_reviewed_at),
            "ease_factor": self.ease_factor,
            "review_count": self.review_count,
            "consecutive_correct": self.consecutive_correct,
            "last_quality": int(self.last_quality) if self.last_quality is not None else None,
        }


def migrate_progress_v1(payload: dict[str, Any]) -> dict[str, Any]:
    """Convert a version 1 progress dict to the version 2 layout."""
    return {
        "schema_version": 2,
        "bias_id": payload.get("biasId", payload.get("bias_id")),
        "viewed_at": _from_epoch_ms(payload.get("viewedAt")),
        "view_count": payload.get("viewCount", 0),
        "mastered": payload.get("mastered", False),
        "interval": payload.get("interval"),
        "next_review_at": _from_epoch_ms(payload.get("nextReviewAt")),
        "last_reviewed_at": _from_epoch_ms(payload.get("lastReviewedAt")),
        "ease_factor": payload.get("easeFactor"),
        "review_count": payload.get("reviewCount", 0),
        "consecutive_correct": payload.get("consecutiveCorrect", 0),
        "last_quality": payload.get("lastQuality"),
    }


# =============================================================================
# Quiz values
# =============================================================================


@dataclass(frozen=True)
class QuizOption:
    """One multiple-choice option."""

    bias_id: str
    title: str
    is_correct: bool


@dataclass(frozen=True)
class QuizQuestion:
    """A "which bias is this?" question."""

    id: str
    bias_id: str
    scenario: str
    difficulty: QuizDifficulty
    options: tuple[QuizOption, ...]
    type: str = "identify"

    @property
    def correct_option(self) -> QuizOption:
        return next(option for option in self.options if option.is_correct)


@dataclass(frozen=True)
class QuizAttempt:
    """A recorded answer. Never modified after it is appended."""

    question_id: str
    question_index: int
    bias_id: str
    selected_bias_id: str
    is_correct: bool
    time_spent_ms: int
    attempted_at: datetime

    def __post_init__(self):
        _coerce_utc(self, "attempted_at")


@dataclass(frozen=True)
class QuizSession:
    """An assessment session; active until ``completed_at`` is set."""

    id: str
    started_at: datetime
    questions: tuple[QuizQuestion, ...]
    attempts: tuple[QuizAttempt, ...] = field(default_factory=tuple)
    completed_at: datetime | None = None
    score: int = 0

    def __post_init__(self):
        _coerce_utc(self, "started_at", "completed_at")

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None

    @property
    def answered_indices(self) -> frozenset[int]:
        return frozenset(attempt.question_index for attempt in self.attempts)

    @property
    def is_fully_answered(self) -> bool:
        return len(self.answered_indices) == self.total_questions


__all__ = [
    "PROGRESS_SCHEMA_VERSION",
    "BiasCategory",
    "BiasSource",
    "ReviewQuality",
    "QuizDifficulty",
    "Bias",
    "BiasProgress",
    "QuizOption",
    "QuizQuestion",
    "QuizAttempt",
    "QuizSession",
    "migrate_progress_v1",
    "resolve_now",
    "utcnow",
]
