"""Improvement tips derived from a user's incorrect answers."""

import logging
from typing import Sequence

from career_coach.modules.interview.interface import QuestionResult
from career_coach.modules.llm import TextCompletionService, get_llm_service, load_prompt_template
from career_coach.shared.constants import EMPHASIS_MARKERS

logger = logging.getLogger(__name__)


def strip_emphasis(text: str) -> str:
    """Remove markdown bold/underline markers and surrounding whitespace."""
    for marker in EMPHASIS_MARKERS:
        text = text.replace(marker, "")
    return text.strip()


def format_incorrect_questions(incorrect: Sequence[QuestionResult]) -> str:
    return "\n\n".join(
        f'Question: "{r.question}"\n'
        f'Correct Answer: "{r.correct_answer}"\n'
        f'Explanation: "{r.explanation}"'
        for r in incorrect
    )


class RemediationAdvisor:
    """Asks the model for a few actionable tips based on missed questions.

    The output is advisory free text; beyond removing emphasis markers it is
    not validated.
    """

    def __init__(self, llm_service: TextCompletionService | None = None) -> None:
        self._llm = llm_service or get_llm_service()

    async def advise(self, industry: str, incorrect: Sequence[QuestionResult]) -> str:
        """Return improvement tips, or "" without calling the model when nothing was missed.

        Raises:
            LLMServiceError: If the completion call fails
        """
        if not incorrect:
            return ""

        template = load_prompt_template("interview/improvement_tips")
        system_prompt, user_prompt = template.format(
            industry=industry,
            incorrect_questions=format_incorrect_questions(incorrect),
        )

        response = await self._llm.complete(prompt=user_prompt, system_prompt=system_prompt)
        logger.debug(f"Generated improvement tips for {len(incorrect)} incorrect answers")
        return strip_emphasis(response.content)
