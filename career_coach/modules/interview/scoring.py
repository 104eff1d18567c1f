"""Quiz scoring.

Scores are always derived from a QuestionSet and an AnswerSheet and are never
cached. Answers are compared to the correct option by exact, case-sensitive
string equality with no trimming, so historical scores stay comparable.
"""

from typing import Iterable

from career_coach.modules.interview.interface import (
    AnswerSheet,
    QuestionResult,
    QuestionSet,
    QuizCategory,
    ScoreResult,
)
from career_coach.shared.constants import CATEGORY_LABEL_SEPARATOR
from career_coach.shared.exceptions import LengthMismatchError


def derive_category_label(categories: Iterable[QuizCategory]) -> str:
    """Join distinct category labels in first-seen order.

    >>> derive_category_label([QuizCategory.TECHNICAL, QuizCategory.LEADERSHIP, QuizCategory.TECHNICAL])
    'Technical & Leadership'
    """
    seen: list[QuizCategory] = []
    for category in categories:
        if category not in seen:
            seen.append(category)
    return CATEGORY_LABEL_SEPARATOR.join(c.label for c in seen)


class ScoringEngine:
    """Computes percentage-correct and per-question detail."""

    def score(self, question_set: QuestionSet, answer_sheet: AnswerSheet) -> ScoreResult:
        """Score an answer sheet against its question set.

        ``percentage_correct`` is ``round(100 * correct / total)`` using
        Python's built-in round (half to even), stored as a float.

        Raises:
            LengthMismatchError: If the sheet and the set differ in length
        """
        if len(answer_sheet) != len(question_set):
            raise LengthMismatchError(len(question_set), len(answer_sheet))

        per_question = tuple(
            QuestionResult(
                question=question.text,
                options=question.options,
                selected_answer=selected,
                correct_answer=question.correct_answer,
                is_correct=selected == question.correct_answer,
                explanation=question.explanation,
                category=question.category,
            )
            for question, selected in zip(question_set, answer_sheet)
        )

        correct = sum(1 for r in per_question if r.is_correct)
        return ScoreResult(
            percentage_correct=float(round(100 * correct / len(per_question))),
            per_question=per_question,
        )

    def category_label(self, question_set: QuestionSet) -> str:
        return derive_category_label(q.category for q in question_set)
