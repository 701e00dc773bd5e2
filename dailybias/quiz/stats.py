"""
Quiz statistics and score feedback.

Only completed sessions count towards statistics; active sessions are
ignored wherever they appear in the input.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterable, Sequence

from dailybias.core.models import Bias, QuizQuestion, QuizSession, utcnow


@dataclass(frozen=True)
class BiasAccuracy:
    correct: int = 0
    total: int = 0


@dataclass(frozen=True)
class QuizStats:
    """Aggregates over completed quiz sessions. Scores are percentages."""

    total_quizzes_taken: int = 0
    total_questions_answered: int = 0
    total_correct: int = 0
    average_score: int = 0
    best_score: int = 0
    bias_accuracy: dict[str, BiasAccuracy] = field(default_factory=dict)
    last_quiz_date: str | None = None
    current_quiz_streak: int = 0


@dataclass(frozen=True)
class ScoreFeedback:
    emoji: str
    title: str
    message: str


# (minimum percentage, feedback), best tier first
FEEDBACK_TIERS: tuple[tuple[float, ScoreFeedback], ...] = (
    (100, ScoreFeedback("🏆", "Perfect!", "You got every question right!")),
    (80, ScoreFeedback("🌟", "Excellent!", "You really know your biases!")),
    (60, ScoreFeedback("👍", "Good job!", "You're building solid knowledge.")),
    (40, ScoreFeedback("📚", "Keep learning!", "Review the biases you missed.")),
    (0, ScoreFeedback("💪", "Practice more!", "Try viewing more biases first.")),
)


def _quiz_streak(completed: Iterable[QuizSession], today: date) -> int:
    """Consecutive days, ending today, with at least one completed quiz."""
    days = {session.completed_at.date() for session in completed}
    streak = 0
    while today - timedelta(days=streak) in days:
        streak += 1
    return streak


def calculate_quiz_stats(sessions: Sequence[QuizSession], today: date | None = None) -> QuizStats:
    """
    Aggregate statistics over completed sessions.

    Args:
        sessions: Any mix of active and completed sessions
        today: Reference day for the streak (defaults to the current UTC date)
    """
    completed = [s for s in sessions if s.is_completed]
    if not completed:
        return QuizStats()

    today = today or utcnow().date()
    answered = correct = 0
    best = 0.0
    tallies: dict[str, list[int]] = {}

    for session in completed:
        answered += len(session.attempts)
        correct += session.score
        if session.total_questions:
            best = max(best, session.score / session.total_questions * 100)
        for attempt in session.attempts:
            tally = tallies.setdefault(attempt.bias_id, [0, 0])
            tally[1] += 1
            if attempt.is_correct:
                tally[0] += 1

    last = max(completed, key=lambda s: s.completed_at)
    return QuizStats(
        total_quizzes_taken=len(completed),
        total_questions_answered=answered,
        total_correct=correct,
        average_score=round(correct / answered * 100) if answered else 0,
        best_score=round(best),
        bias_accuracy={bias_id: BiasAccuracy(c, t) for bias_id, (c, t) in tallies.items()},
        last_quiz_date=last.completed_at.date().isoformat(),
        current_quiz_streak=_quiz_streak(completed, today),
    )


def get_score_feedback(score: int, total: int) -> ScoreFeedback:
    """Feedback tier for ``score`` out of ``total``. Higher scores never get a lower tier."""
    percentage = score / total * 100 if total > 0 else 0
    for threshold, feedback in FEEDBACK_TIERS:
        if percentage >= threshold:
            return feedback
    return FEEDBACK_TIERS[-1][1]


def get_correct_answer(question: QuizQuestion, catalog: Sequence[Bias]) -> Bias | None:
    return next((bias for bias in catalog if bias.id == question.bias_id), None)


__all__ = [
    "BiasAccuracy",
    "QuizStats",
    "ScoreFeedback",
    "FEEDBACK_TIERS",
    "calculate_quiz_stats",
    "get_score_feedback",
    "get_correct_answer",
]
