"""
Configuration settings for the dailybias learning scheduler.

Uses Pydantic Settings for environment variable management with .env file support.
All variables are prefixed with ``DAILYBIAS_`` (e.g. ``DAILYBIAS_LOG_LEVEL=DEBUG``).
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DAILYBIAS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: str = Field(
        default="WARNING",
        description="Loguru level for the CLI sink",
    )

    # ========================================
    # Daily Selection
    # ========================================
    daily_top_candidates: int = Field(
        default=5,
        ge=1,
        description="Size of the top-scored pool the date hash picks from",
    )
    daily_base_score: float = Field(default=100.0, description="Starting score for every bias")
    daily_unviewed_bonus: float = Field(
        default=500.0,
        description="Bonus for never-viewed biases (must dominate all other factors)",
    )
    daily_unmastered_bonus: float = Field(default=100.0, description="Bonus for viewed, not mastered biases")
    daily_mastered_penalty: float = Field(default=200.0, description="Penalty for mastered biases")
    daily_mastered_revisit_days: float = Field(
        default=14.0,
        description="Days after which a mastered bias is worth revisiting",
    )
    daily_mastered_revisit_bonus: float = Field(default=50.0)
    daily_recent_view_days: float = Field(
        default=1.0,
        description="Views newer than this are penalised",
    )
    daily_recent_view_penalty: float = Field(default=300.0)
    daily_stale_days: float = Field(default=3.0, description="First staleness threshold (days)")
    daily_stale_bonus: float = Field(default=75.0)
    daily_very_stale_days: float = Field(default=7.0, description="Second staleness threshold (days)")
    daily_very_stale_bonus: float = Field(default=150.0)
    daily_heavy_view_threshold: int = Field(
        default=5,
        description="View count above which frequent-view damping applies",
    )
    daily_heavy_view_penalty: float = Field(
        default=10.0,
        description="Penalty per view once over the heavy-view threshold",
    )
    daily_jitter_range: int = Field(
        default=100,
        ge=1,
        description="Width of the date-keyed tie-break jitter (centred on 0)",
    )

    # ========================================
    # Spaced Repetition
    # ========================================
    review_intervals: list[int] = Field(
        default_factory=lambda: [1, 3, 7, 14, 30],
        description="Interval ladder in days",
    )
    review_success_threshold: int = Field(
        default=3,
        ge=1,
        le=5,
        description="Minimum ReviewQuality value that counts as a successful recall",
    )
    review_upcoming_limit: int = Field(default=10, ge=1)

    # ========================================
    # Quiz
    # ========================================
    quiz_questions_per_session: int = Field(default=5, ge=1)

    @field_validator("review_intervals")
    @classmethod
    def _intervals_increasing(cls, value: list[int]) -> list[int]:
        if not value or value[0] < 1 or any(b <= a for a, b in zip(value, value[1:])):
            raise ValueError("review_intervals must be strictly increasing and start at >= 1")
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    def get_selection_weights(self) -> dict[str, float]:
        """Get personalized daily selection weights."""
        return {
            "base_score": self.daily_base_score,
            "unviewed_bonus": self.daily_unviewed_bonus,
            "unmastered_bonus": self.daily_unmastered_bonus,
            "mastered_penalty": self.daily_mastered_penalty,
            "mastered_revisit_days": self.daily_mastered_revisit_days,
            "mastered_revisit_bonus": self.daily_mastered_revisit_bonus,
            "recent_view_days": self.daily_recent_view_days,
            "recent_view_penalty": self.daily_recent_view_penalty,
            "stale_days": self.daily_stale_days,
            "stale_bonus": self.daily_stale_bonus,
            "very_stale_days": self.daily_very_stale_days,
            "very_stale_bonus": self.daily_very_stale_bonus,
            "heavy_view_threshold": self.daily_heavy_view_threshold,
            "heavy_view_penalty": self.daily_heavy_view_penalty,
            "jitter_range": self.daily_jitter_range,
            "top_candidates": self.daily_top_candidates,
        }

    def get_review_config(self) -> dict[str, object]:
        """Get spaced repetition configuration as a dictionary."""
        return {
            "intervals": tuple(self.review_intervals),
            "success_threshold": self.review_success_threshold,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
