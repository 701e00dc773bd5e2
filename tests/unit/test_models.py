"""
Unit tests for core value types and record versioning.

Run: pytest tests/unit/test_models.py -v
"""

from datetime import datetime, timedelta, timezone

import pytest

from dailybias.core.errors import InvalidQualityError, UnknownItemError
from dailybias.core.models import (
    PROGRESS_SCHEMA_VERSION,
    Bias,
    BiasCategory,
    BiasProgress,
    BiasSource,
    QuizAttempt,
    QuizSession,
    ReviewQuality,
    migrate_progress_v1,
    resolve_now,
)

# 2024-01-15T12:00:00Z in epoch milliseconds
NOON_MS = 1705320000000


class TestReviewQuality:
    """Test the recall grade scale."""

    def test_ordering(self):
        assert ReviewQuality.FORGOT < ReviewQuality.HARD < ReviewQuality.GOOD
        assert ReviewQuality.GOOD < ReviewQuality.EASY < ReviewQuality.PERFECT

    def test_labels(self):
        assert ReviewQuality.PERFECT.label == "Perfect"
        assert ReviewQuality.FORGOT.description == "Complete blackout"

    @pytest.mark.parametrize("value,expected", [(3, ReviewQuality.GOOD), ("easy", ReviewQuality.EASY), (" HARD ", ReviewQuality.HARD), ("5", ReviewQuality.PERFECT)])
    def test_parse(self, value, expected):
        assert ReviewQuality.parse(value) is expected

    def test_parse_invalid_keeps_value(self):
        with pytest.raises(InvalidQualityError) as exc:
            ReviewQuality.parse(1)
        assert exc.value.quality == 1


class TestBias:
    """Test Bias serialization."""

    def test_round_trip(self):
        bias = Bias("a", "Anchoring", BiasCategory.DECISION, "Summary.", source=BiasSource.USER,
                    created_at=datetime(2024, 1, 1, tzinfo=timezone.utc))
        assert Bias.from_dict(bias.to_dict()) == bias

    def test_camel_case_timestamps(self):
        bias = Bias.from_dict({"id": "a", "title": "A", "category": "memory", "summary": "",
                               "createdAt": NOON_MS})
        assert bias.created_at == datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
        assert bias.source == BiasSource.CORE

    def test_category_label(self):
        assert BiasCategory.MISC.label == "Miscellaneous"


class TestBiasProgress:
    """Test progress records and migrations."""

    def test_defaults(self):
        progress = BiasProgress("a")
        assert not progress.has_been_viewed
        assert not progress.is_review_initialized
        assert progress.schema_version == PROGRESS_SCHEMA_VERSION

    def test_v2_round_trip(self, now):
        progress = BiasProgress("a", viewed_at=now, view_count=2, interval=7, next_review_at=now,
                                ease_factor=2.36, review_count=2, last_quality=ReviewQuality.GOOD)
        assert BiasProgress.from_dict(progress.to_dict()) == progress

    def test_v1_migration(self, now):
        legacy = {"biasId": "a", "viewedAt": NOON_MS, "viewCount": 3, "mastered": True}
        progress = BiasProgress.from_dict(legacy)
        assert progress.bias_id == "a"
        assert progress.viewed_at == now
        assert progress.view_count == 3
        assert progress.mastered
        assert progress.interval is None
        assert progress.next_review_at is None

    def test_v1_with_review_fields(self, now):
        legacy = {"biasId": "a", "viewedAt": NOON_MS, "viewCount": 1, "mastered": False,
                  "interval": 3, "nextReviewAt": NOON_MS, "easeFactor": 2.5, "reviewCount": 1}
        progress = BiasProgress.from_dict(legacy)
        assert progress.interval == 3
        assert progress.next_review_at == now
        assert progress.review_count == 1

    def test_zero_timestamp_means_unviewed(self):
        migrated = migrate_progress_v1({"biasId": "a", "viewedAt": 0})
        assert migrated["viewed_at"] is None
        assert migrated["schema_version"] == 2


class TestClock:
    """Test clock helpers."""

    def test_naive_treated_as_utc(self):
        assert resolve_now(datetime(2024, 1, 1)).tzinfo == timezone.utc

    def test_none_is_wall_clock(self):
        assert resolve_now(None).tzinfo is not None

    def test_naive_progress_timestamps_become_utc(self):
        naive = datetime(2024, 1, 15, 12)
        progress = BiasProgress("a", viewed_at=naive, next_review_at=naive, last_reviewed_at=naive)
        assert progress.viewed_at == naive.replace(tzinfo=timezone.utc)
        assert progress.next_review_at.tzinfo == timezone.utc
        assert progress.last_reviewed_at.tzinfo == timezone.utc

    def test_aware_timestamps_untouched(self):
        aware = datetime(2024, 1, 15, 12, tzinfo=timezone(timedelta(hours=2)))
        assert BiasProgress("a", viewed_at=aware).viewed_at.tzinfo == timezone(timedelta(hours=2))

    def test_naive_quiz_timestamps_become_utc(self):
        naive = datetime(2024, 1, 15, 12)
        attempt = QuizAttempt("q", 0, "a", "a", True, 100, naive)
        session = QuizSession("s", naive, (), completed_at=naive)
        assert attempt.attempted_at.tzinfo == timezone.utc
        assert session.started_at.tzinfo == timezone.utc
        assert session.completed_at.tzinfo == timezone.utc
        assert Bias("a", "A", BiasCategory.MISC, "", created_at=naive).created_at.tzinfo == timezone.utc


class TestErrors:
    """Test error messages."""

    def test_unknown_item_message(self):
        error = UnknownItemError("ghost")
        assert str(error) == "Unknown bias id: 'ghost'"
        assert isinstance(error, KeyError)
