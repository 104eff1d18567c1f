"""Industry insight generation via the text completion service."""

import json
import logging

from pydantic import ValidationError as PydanticValidationError

from career_coach.modules.insights.interface import InsightContent
from career_coach.modules.insights.schemas import InsightPayload
from career_coach.modules.llm import (
    TextCompletionService,
    get_llm_service,
    load_prompt_template,
    parse_json_payload,
)
from career_coach.shared.constants import MIN_INSIGHT_LIST_ENTRIES, MIN_INSIGHT_SALARY_RANGES
from career_coach.shared.exceptions import GenerationError

logger = logging.getLogger(__name__)


class InsightGenerator:
    """Asks the model for a structured market analysis of one industry."""

    def __init__(self, llm_service: TextCompletionService | None = None) -> None:
        self._llm = llm_service or get_llm_service()

    async def generate(self, industry: str) -> InsightContent:
        """Generate insight content for an industry.

        Raises:
            LLMServiceError: If the completion call fails
            GenerationError: If the response is not a valid insight object
        """
        template = load_prompt_template("insights/industry_analysis")
        system_prompt, user_prompt = template.format(
            industry=industry,
            min_salary_ranges=MIN_INSIGHT_SALARY_RANGES,
            min_list_entries=MIN_INSIGHT_LIST_ENTRIES,
        )

        response = await self._llm.complete(
            prompt=user_prompt,
            system_prompt=system_prompt,
            temperature=0.3,
        )

        try:
            payload = InsightPayload.model_validate(parse_json_payload(response.content))
        except json.JSONDecodeError as e:
            logger.warning(f"Insight response for {industry!r} is not valid JSON: {e}")
            raise GenerationError("industry insights", "response was not valid JSON") from e
        except PydanticValidationError as e:
            logger.warning(f"Insight response for {industry!r} failed validation: {e}")
            raise GenerationError("industry insights", "response did not match the expected format") from e

        return payload.to_content()
