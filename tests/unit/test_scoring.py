"""Unit tests for quiz scoring and category labels."""

import pytest

from career_coach.modules.interview import (
    AnswerSheet,
    Question,
    QuestionSet,
    QuizCategory,
    ScoringEngine,
    derive_category_label,
)
from career_coach.shared.exceptions import LengthMismatchError


def build_question_set(categories: list[QuizCategory]) -> QuestionSet:
    return QuestionSet(
        questions=tuple(
            Question(
                text=f"Q{i}",
                options=(f"A{i}", f"B{i}", f"C{i}", f"D{i}"),
                correct_answer=f"A{i}",
                explanation=f"Because A{i}",
                category=category,
            )
            for i, category in enumerate(categories)
        ),
        category=categories[0],
    )


def answered(answers: list[str | None]) -> AnswerSheet:
    return AnswerSheet.from_list(answers)


class TestScoringEngine:
    """Tests for ScoringEngine.score."""

    @pytest.fixture
    def engine(self):
        return ScoringEngine()

    @pytest.mark.parametrize("total,correct", [
        (10, 10), (10, 9), (10, 0), (3, 1), (3, 2), (7, 5), (8, 1), (8, 3), (1, 1), (6, 5),
    ])
    def test_percentage_matches_rounded_ratio(self, engine, total, correct):
        question_set = build_question_set([QuizCategory.TECHNICAL] * total)
        answers = [f"A{i}" if i < correct else f"B{i}" for i in range(total)]

        result = engine.score(question_set, answered(answers))

        assert result.percentage_correct == float(round(100 * correct / total))
        assert isinstance(result.percentage_correct, float)
        assert len(result.per_question) == total
        assert result.correct_count == correct

    def test_half_rounds_to_even(self, engine):
        # 1/8 = 12.5% and 3/8 = 37.5%
        question_set = build_question_set([QuizCategory.TECHNICAL] * 8)

        one = engine.score(question_set, answered(["A0"] + [None] * 7))
        three = engine.score(question_set, answered(["A0", "A1", "A2"] + [None] * 5))

        assert one.percentage_correct == 12.0
        assert three.percentage_correct == 38.0

    def test_per_question_detail(self, engine):
        question_set = build_question_set([QuizCategory.TECHNICAL, QuizCategory.LEADERSHIP])

        result = engine.score(question_set, answered(["A0", "C1"]))

        first, second = result.per_question
        assert first.is_correct and first.selected_answer == "A0"
        assert not second.is_correct
        assert second.selected_answer == "C1"
        assert second.correct_answer == "A1"
        assert second.explanation == "Because A1"
        assert second.category == QuizCategory.LEADERSHIP
        assert second.options == ("A1", "B1", "C1", "D1")
        assert result.incorrect == [second]

    def test_exact_match_is_case_and_whitespace_sensitive(self, engine):
        question_set = build_question_set([QuizCategory.TECHNICAL] * 3)

        result = engine.score(question_set, answered(["a0", "A1 ", "A2"]))

        assert [r.is_correct for r in result.per_question] == [False, False, True]

    def test_unanswered_is_incorrect(self, engine):
        question_set = build_question_set([QuizCategory.TECHNICAL] * 2)

        result = engine.score(question_set, answered(["A0", None]))

        assert result.percentage_correct == 50.0

    @pytest.mark.parametrize("sheet_length", [9, 11])
    def test_length_mismatch(self, engine, sheet_length):
        question_set = build_question_set([QuizCategory.TECHNICAL] * 10)

        with pytest.raises(LengthMismatchError) as exc_info:
            engine.score(question_set, AnswerSheet(sheet_length))

        assert exc_info.value.details == {"question_count": 10, "answer_count": sheet_length}

    def test_category_label(self, engine):
        question_set = build_question_set([QuizCategory.BEHAVIORAL, QuizCategory.BEHAVIORAL])
        assert engine.category_label(question_set) == "Behavioral"


class TestDeriveCategoryLabel:
    """Tests for derive_category_label."""

    def test_single_category(self):
        assert derive_category_label([QuizCategory.TECHNICAL] * 10) == "Technical"

    def test_mixed_categories_in_first_seen_order(self):
        categories = [QuizCategory.TECHNICAL, QuizCategory.LEADERSHIP, QuizCategory.TECHNICAL]
        assert derive_category_label(categories) == "Technical & Leadership"

    def test_order_is_not_sorted(self):
        categories = [
            QuizCategory.LEADERSHIP,
            QuizCategory.TECHNICAL,
            QuizCategory.BEHAVIORAL,
            QuizCategory.LEADERSHIP,
        ]
        assert derive_category_label(categories) == "Leadership & Technical & Behavioral"
