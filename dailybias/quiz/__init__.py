"""
Quiz Module.

Generation of multiple-choice "which bias is this?" sessions, the session
lifecycle (answer / complete / abandon) and statistics over completed
sessions.
"""

from dailybias.quiz.generator import (
    OPTIONS_PER_QUESTION,
    QUESTIONS_PER_QUIZ,
    SCENARIO_TEMPLATES,
    create_scenario,
    generate_question,
    generate_quiz_session,
    get_question_difficulty,
    select_distractors,
    select_quiz_biases,
)
from dailybias.quiz.session import AnswerResult, abandon_session, complete_session, process_answer
from dailybias.quiz.stats import (
    FEEDBACK_TIERS,
    BiasAccuracy,
    QuizStats,
    ScoreFeedback,
    calculate_quiz_stats,
    get_correct_answer,
    get_score_feedback,
)

__all__ = [
    "OPTIONS_PER_QUESTION",
    "QUESTIONS_PER_QUIZ",
    "SCENARIO_TEMPLATES",
    "FEEDBACK_TIERS",
    "AnswerResult",
    "BiasAccuracy",
    "QuizStats",
    "ScoreFeedback",
    "abandon_session",
    "calculate_quiz_stats",
    "complete_session",
    "create_scenario",
    "generate_question",
    "generate_quiz_session",
    "get_correct_answer",
    "get_question_difficulty",
    "get_score_feedback",
    "process_answer",
    "select_distractors",
    "select_quiz_biases",
]
