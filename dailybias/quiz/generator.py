"""
Quiz Session Generator.

Builds "which bias is this?" sessions from the catalog:

- answer keys prefer biases the learner has already viewed, topped up with
  unviewed core biases and then unviewed user biases
- every question has exactly four options (the answer plus three distinct
  distractors) in shuffled order
- distractor choice follows question difficulty: hard questions draw from
  the same category, easy questions from other categories, medium mixes

All randomness goes through an injectable ``random.Random`` so sessions are
reproducible under a fixed seed.
"""

from __future__ import annotations

import random
import uuid
from datetime import datetime
from typing import Sequence

from loguru import logger

from dailybias.core.errors import EmptyCatalogError, QuizGenerationError
from dailybias.core.models import (
    Bias,
    BiasProgress,
    BiasSource,
    QuizDifficulty,
    QuizOption,
    QuizQuestion,
    QuizSession,
    resolve_now,
)
from dailybias.core.progress import progress_map

QUESTIONS_PER_QUIZ = 5
OPTIONS_PER_QUESTION = 4

SCENARIO_TEMPLATES = (
    "Someone exhibits this behavior: {summary} Which cognitive bias is this?",
    "A friend describes this pattern: {summary} What bias are they describing?",
    "You notice this in yourself: {summary} Which bias explains this?",
    "In a meeting, you observe: {summary} What cognitive bias is at play?",
    "A study shows people tend to: {summary} What's this bias called?",
)


def _make_id(prefix: str, rng: random.Random) -> str:
    return f"{prefix}-{uuid.UUID(int=rng.getrandbits(128), version=4).hex[:12]}"


def _shuffled(items: Sequence, rng: random.Random) -> list:
    result = list(items)
    rng.shuffle(result)
    return result


def get_question_difficulty(progress: BiasProgress | None) -> QuizDifficulty:
    """Difficulty from familiarity: more reviews or mastery make it harder."""
    if progress is None:
        return QuizDifficulty.EASY
    if progress.review_count >= 3 or progress.mastered:
        return QuizDifficulty.HARD
    if progress.view_count >= 2 or progress.review_count >= 1:
        return QuizDifficulty.MEDIUM
    return QuizDifficulty.EASY


def create_scenario(bias: Bias, rng: random.Random | None = None) -> str:
    """Fill a random template with the first sentence of the bias summary."""
    rng = rng or random.Random()
    template = rng.choice(SCENARIO_TEMPLATES)
    first_sentence = (bias.summary or bias.why or bias.title).split(".")[0].strip()
    return template.replace("{summary}", f'"{first_sentence}."')


def select_distractors(
    correct: Bias,
    catalog: Sequence[Bias],
    difficulty: QuizDifficulty,
    count: int = OPTIONS_PER_QUESTION - 1,
    rng: random.Random | None = None,
) -> list[Bias]:
    """
    Pick ``count`` distinct wrong answers.

    Ids equal to the correct answer are never drawn, and each id is drawn at
    most once even if the catalog repeats it.
    """
    rng = rng or random.Random()

    others: list[Bias] = []
    seen = {correct.id}
    for bias in catalog:
        if bias.id not in seen:
            seen.add(bias.id)
            others.append(bias)

    same = [b for b in others if b.category == correct.category]
    different = [b for b in others if b.category != correct.category]

    if difficulty == QuizDifficulty.HARD:
        # Same category first, the rest only to fill up
        candidates = _shuffled(same, rng) + _shuffled(different, rng)
    elif difficulty == QuizDifficulty.EASY:
        candidates = _shuffled(different, rng) + _shuffled(same, rng)
    else:
        candidates = _shuffled(others, rng)

    return candidates[:count]


def generate_question(
    correct: Bias,
    catalog: Sequence[Bias],
    progress: BiasProgress | None = None,
    rng: random.Random | None = None,
) -> QuizQuestion:
    """
    Build one four-option question for ``correct``.

    Raises:
        QuizGenerationError: If the catalog has fewer than three other biases.
    """
    rng = rng or random.Random()
    difficulty = get_question_difficulty(progress)
    distractors = select_distractors(correct, catalog, difficulty, rng=rng)

    if len(distractors) < OPTIONS_PER_QUESTION - 1:
        raise QuizGenerationError(
            f"Need {OPTIONS_PER_QUESTION} distinct biases for a question, "
            f"only {len(distractors) + 1} available"
        )

    options = [QuizOption(bias_id=correct.id, title=correct.title, is_correct=True)]
    options.extend(QuizOption(bias_id=b.id, title=b.title, is_correct=False) for b in distractors)

    return QuizQuestion(
        id=_make_id("q", rng),
        bias_id=correct.id,
        scenario=create_scenario(correct, rng),
        difficulty=difficulty,
        options=tuple(_shuffled(options, rng)),
    )


def select_quiz_biases(
    catalog: Sequence[Bias],
    progress_list: Sequence[BiasProgress],
    question_count: int,
    rng: random.Random | None = None,
) -> list[Bias]:
    """Distinct answer keys: viewed first, then unviewed core, then unviewed user."""
    rng = rng or random.Random()
    viewed_ids = {p.bias_id for p in progress_list if p.viewed_at is not None}

    unique: list[Bias] = []
    seen: set[str] = set()
    for bias in catalog:
        if bias.id not in seen:
            seen.add(bias.id)
            unique.append(bias)

    viewed = [b for b in unique if b.id in viewed_ids]
    unviewed_core = [b for b in unique if b.id not in viewed_ids and b.source == BiasSource.CORE]
    unviewed_user = [b for b in unique if b.id not in viewed_ids and b.source != BiasSource.CORE]

    pool = _shuffled(viewed, rng) + _shuffled(unviewed_core, rng) + _shuffled(unviewed_user, rng)
    return _shuffled(pool[:question_count], rng)


def generate_quiz_session(
    catalog: Sequence[Bias],
    progress_list: Sequence[BiasProgress],
    question_count: int = QUESTIONS_PER_QUIZ,
    now: datetime | None = None,
    rng: random.Random | None = None,
) -> QuizSession:
    """
    Generate an active quiz session.

    ``question_count`` is clamped to the number of distinct biases in the
    catalog, so no bias is asked twice.

    Args:
        catalog: Available biases
        progress_list: Learner progress (drives selection and difficulty)
        question_count: Requested number of questions
        now: Injected clock value for ``started_at``
        rng: Random source for selection, distractors and shuffling

    Raises:
        EmptyCatalogError: If the catalog is empty.
        QuizGenerationError: If there are fewer than four distinct biases
            or ``question_count`` is not positive.
    """
    if not catalog:
        raise EmptyCatalogError()

    distinct = len({bias.id for bias in catalog})
    if distinct < OPTIONS_PER_QUESTION:
        raise QuizGenerationError(
            f"A quiz needs at least {OPTIONS_PER_QUESTION} biases, catalog has {distinct}"
        )
    if question_count < 1:
        raise QuizGenerationError(f"question_count must be positive, got {question_count}")

    rng = rng or random.Random()
    count = min(question_count, distinct)
    by_id = progress_map(progress_list)

    selected = select_quiz_biases(catalog, progress_list, count, rng)
    questions = tuple(generate_question(bias, catalog, by_id.get(bias.id), rng) for bias in selected)

    session = QuizSession(
        id=_make_id("quiz", rng),
        started_at=resolve_now(now),
        questions=questions,
    )
    logger.debug(f"Generated quiz {session.id} with {len(questions)} questions")
    return session


__all__ = [
    "QUESTIONS_PER_QUIZ",
    "OPTIONS_PER_QUESTION",
    "SCENARIO_TEMPLATES",
    "get_question_difficulty",
    "create_scenario",
    "select_distractors",
    "generate_question",
    "select_quiz_biases",
    "generate_quiz_session",
]
