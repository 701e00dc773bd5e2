"""
Quiz session lifecycle.

    active --process_answer--> active (one more attempt)
    active --complete_session--> completed   (all questions answered)
    active --abandon_session--> completed   (attempts so far)

Sessions are immutable; every transition returns a new QuizSession.
Attempts are append-only and each question index is answered at most once.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

from loguru import logger

from dailybias.core.errors import InvalidTransitionError
from dailybias.core.models import QuizAttempt, QuizSession, resolve_now


@dataclass(frozen=True)
class AnswerResult:
    """Outcome of answering one question."""

    session: QuizSession
    is_correct: bool


def _count_correct(session: QuizSession) -> int:
    return sum(1 for attempt in session.attempts if attempt.is_correct)


def process_answer(
    session: QuizSession,
    question_index: int,
    chosen_bias_id: str,
    time_spent_ms: int = 0,
    now: datetime | None = None,
) -> AnswerResult:
    """
    Record an answer to the question at ``question_index``.

    Raises:
        InvalidTransitionError: If the session is completed, the index is out
            of range, or the question already has an attempt.
    """
    if session.is_completed:
        raise InvalidTransitionError(f"Quiz {session.id} is already completed")
    if not 0 <= question_index < session.total_questions:
        raise InvalidTransitionError(
            f"Question index {question_index} out of range (0..{session.total_questions - 1})"
        )
    if question_index in session.answered_indices:
        raise InvalidTransitionError(f"Question {question_index} has already been answered")

    question = session.questions[question_index]
    is_correct = chosen_bias_id == question.bias_id
    attempt = QuizAttempt(
        question_id=question.id,
        question_index=question_index,
        bias_id=question.bias_id,
        selected_bias_id=chosen_bias_id,
        is_correct=is_correct,
        time_spent_ms=max(0, int(time_spent_ms)),
        attempted_at=resolve_now(now),
    )

    updated = replace(
        session,
        attempts=session.attempts + (attempt,),
        score=session.score + 1 if is_correct else session.score,
    )
    return AnswerResult(session=updated, is_correct=is_correct)


def complete_session(session: QuizSession, now: datetime | None = None) -> QuizSession:
    """
    Finalise a fully answered session.

    Completing an already completed session returns it unchanged.

    Raises:
        InvalidTransitionError: If some questions have no attempt yet.
    """
    if session.is_completed:
        return session
    if not session.is_fully_answered:
        missing = session.total_questions - len(session.answered_indices)
        raise InvalidTransitionError(f"Quiz {session.id} has {missing} unanswered question(s)")

    completed = replace(session, completed_at=resolve_now(now), score=_count_correct(session))
    logger.debug(f"Completed quiz {session.id}: {completed.score}/{completed.total_questions}")
    return completed


def abandon_session(session: QuizSession, now: datetime | None = None) -> QuizSession:
    """Finalise a session early, scoring only the attempts recorded so far."""
    if session.is_completed:
        return session

    abandoned = replace(session, completed_at=resolve_now(now), score=_count_correct(session))
    logger.debug(
        f"Abandoned quiz {session.id} after {len(session.attempts)}/{session.total_questions} answers"
    )
    return abandoned


__all__ = [
    "AnswerResult",
    "process_answer",
    "complete_session",
    "abandon_session",
]
