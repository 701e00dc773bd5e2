"""
Unit tests for quiz statistics, score feedback and answer lookup.

Run: pytest tests/unit/test_quiz_stats.py -v
"""

from datetime import date, timedelta

import pytest

from dailybias.quiz import (
    FEEDBACK_TIERS,
    BiasAccuracy,
    QuizStats,
    calculate_quiz_stats,
    complete_session,
    generate_quiz_session,
    get_correct_answer,
    get_score_feedback,
    process_answer,
)


@pytest.fixture
def play(quiz_catalog, rng):
    """Play a full session: play(correct_count, completed_at, questions=4)."""

    def _play(correct_count, completed_at, questions=4):
        session = generate_quiz_session(quiz_catalog, [], questions, completed_at, rng)
        for index, question in enumerate(session.questions):
            if index < correct_count:
                choice = question.bias_id
            else:
                choice = next(o.bias_id for o in question.options if not o.is_correct)
            session = process_answer(session, index, choice, 1000, completed_at).session
        return complete_session(session, completed_at)

    return _play


class TestCalculateQuizStats:
    """Test aggregation over completed sessions."""

    def test_no_sessions(self):
        assert calculate_quiz_stats([]) == QuizStats()

    def test_active_sessions_ignored(self, quiz_catalog, now, rng):
        active = generate_quiz_session(quiz_catalog, [], 3, now, rng)
        assert calculate_quiz_stats([active]) == QuizStats()

    def test_aggregates(self, play, now):
        sessions = [play(3, now - timedelta(days=1)), play(4, now)]
        stats = calculate_quiz_stats(sessions, today=now.date())

        assert stats.total_quizzes_taken == 2
        assert stats.total_questions_answered == 8
        assert stats.total_correct == 7
        assert stats.average_score == 88
        assert stats.best_score == 100
        assert stats.last_quiz_date == "2024-01-15"
        assert stats.current_quiz_streak == 2

    def test_bias_accuracy(self, play, now):
        session = play(1, now)
        stats = calculate_quiz_stats([session], today=now.date())

        first, second = session.questions[0].bias_id, session.questions[1].bias_id
        assert stats.bias_accuracy[first] == BiasAccuracy(correct=1, total=1)
        assert stats.bias_accuracy[second] == BiasAccuracy(correct=0, total=1)
        assert sum(a.total for a in stats.bias_accuracy.values()) == 4

    def test_streak_counts_days_not_sessions(self, play, now):
        sessions = [play(2, now), play(2, now - timedelta(hours=3)), play(2, now - timedelta(days=1))]
        assert calculate_quiz_stats(sessions, today=now.date()).current_quiz_streak == 2

    def test_streak_broken_by_gap(self, play, now):
        sessions = [play(2, now), play(2, now - timedelta(days=2))]
        assert calculate_quiz_stats(sessions, today=now.date()).current_quiz_streak == 1

    def test_no_quiz_today_means_no_streak(self, play, now):
        sessions = [play(2, now - timedelta(days=1))]
        stats = calculate_quiz_stats(sessions, today=date(2024, 1, 15))
        assert stats.current_quiz_streak == 0
        assert stats.last_quiz_date == "2024-01-14"


class TestScoreFeedback:
    """Test score feedback tiers."""

    @pytest.mark.parametrize(
        "score,total,title",
        [
            (5, 5, "Perfect!"),
            (4, 5, "Excellent!"),
            (3, 5, "Good job!"),
            (2, 5, "Keep learning!"),
            (1, 5, "Practice more!"),
            (0, 5, "Practice more!"),
            (0, 0, "Practice more!"),
        ],
    )
    def test_tiers(self, score, total, title):
        assert get_score_feedback(score, total).title == title

    def test_perfect_emoji(self):
        feedback = get_score_feedback(10, 10)
        assert feedback.emoji == "🏆"
        assert feedback.message == "You got every question right!"

    def test_monotone(self):
        rank = {feedback.title: i for i, (_, feedback) in enumerate(FEEDBACK_TIERS)}
        ranks = [rank[get_score_feedback(score, 20).title] for score in range(21)]
        # Lower index = better tier
        assert ranks == sorted(ranks, reverse=True)


class TestGetCorrectAnswer:
    """Test answer lookup."""

    def test_found(self, quiz_catalog, now, rng):
        question = generate_quiz_session(quiz_catalog, [], 1, now, rng).questions[0]
        assert get_correct_answer(question, quiz_catalog).id == question.bias_id

    def test_missing(self, quiz_catalog, now, rng):
        question = generate_quiz_session(quiz_catalog, [], 1, now, rng).questions[0]
        assert get_correct_answer(question, []) is None
