"""Quiz question generation via the text completion service."""

import json
import logging

from pydantic import ValidationError as PydanticValidationError

from career_coach.modules.interview.interface import QuestionSet, QuizCategory
from career_coach.modules.interview.schemas import GeneratedQuiz
from career_coach.modules.llm import (
    TextCompletionService,
    get_llm_service,
    load_prompt_template,
    parse_json_payload,
)
from career_coach.modules.user.interface import UserProfile
from career_coach.shared.config import get_settings
from career_coach.shared.exceptions import GenerationError

logger = logging.getLogger(__name__)

# Extra instruction appended to the question requirements per category
CATEGORY_INSTRUCTIONS: dict[QuizCategory, str] = {
    QuizCategory.TECHNICAL: "Focus on practical knowledge and problem-solving skills",
    QuizCategory.BEHAVIORAL: "Focus on past experiences and how the candidate handled specific situations",
    QuizCategory.LEADERSHIP: "Focus on team management, decision-making and leading through ambiguity",
}


class QuizGenerator:
    """Turns a user profile and a category into a validated QuestionSet."""

    def __init__(
        self,
        llm_service: TextCompletionService | None = None,
        question_count: int | None = None,
    ) -> None:
        self._llm = llm_service or get_llm_service()
        self._question_count = question_count or get_settings().quiz_question_count

    def build_prompt(self, profile: UserProfile, category: QuizCategory) -> tuple[str, str]:
        """Return the (system, user) prompt pair for a quiz request."""
        focus = f"{category.value} interview questions for a {profile.industry} professional"
        if profile.skills:
            focus += f" with expertise in {', '.join(profile.skills)}"

        template = load_prompt_template("interview/quiz_generation")
        return template.format(
            industry=profile.industry,
            question_count=self._question_count,
            question_focus=focus,
            category_instruction=CATEGORY_INSTRUCTIONS[category],
            category=category.value,
        )

    async def generate(self, profile: UserProfile, category: QuizCategory) -> QuestionSet:
        """Generate a complete question set.

        Either every question is valid or nothing is returned.

        Raises:
            LLMServiceError: If the completion call fails
            GenerationError: If the response is unparseable or any question is malformed
        """
        system_prompt, user_prompt = self.build_prompt(profile, category)
        response = await self._llm.complete(prompt=user_prompt, system_prompt=system_prompt)

        try:
            payload = GeneratedQuiz.model_validate(parse_json_payload(response.content))
        except json.JSONDecodeError as e:
            logger.warning(f"Quiz response is not valid JSON: {e}")
            raise GenerationError("interview questions", "response was not valid JSON") from e
        except PydanticValidationError as e:
            logger.warning(f"Quiz response failed validation: {e}")
            raise GenerationError("interview questions", "response contained malformed questions") from e

        if len(payload.questions) != self._question_count:
            logger.info(
                f"Requested {self._question_count} questions, model returned {len(payload.questions)}"
            )

        return QuestionSet(
            questions=tuple(q.to_question(category) for q in payload.questions),
            category=category,
        )
