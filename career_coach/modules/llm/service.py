"""LLM Service - Anthropic Claude API wrapper."""

import logging
from dataclasses import dataclass
from typing import Protocol

import anthropic
from anthropic import AsyncAnthropic

from career_coach.modules.llm.prompts import PromptTemplate, load_prompt_template
from career_coach.shared.config import get_settings
from career_coach.shared.exceptions import LLMServiceError

settings = get_settings()
logger = logging.getLogger(__name__)


@dataclass
class LLMResponse:
    """Response from LLM completion."""

    content: str
    model: str
    usage: dict[str, int]
    stop_reason: str | None = None


class TextCompletionService(Protocol):
    """Anything that turns a prompt into generated text.

    The output carries no structural guarantee; callers that expect JSON
    must run it through ``parse_json_payload`` and validate the result.
    """

    async def complete(
        self,
        prompt: str,
        system_prompt: str | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> LLMResponse:
        ...


class LLMService:
    """Service for interacting with Anthropic Claude API."""

    def __init__(self, client: AsyncAnthropic | None = None) -> None:
        self.client = client or AsyncAnthropic(
            api_key=settings.anthropic_api_key,
            timeout=settings.llm_timeout_seconds,
        )
        self.default_model = settings.default_model
        self.max_tokens = settings.max_tokens

    async def complete(
        self,
        prompt: str,
        system_prompt: str | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> LLMResponse:
        """Generate a completion from the LLM.

        Args:
            prompt: The user prompt
            system_prompt: Optional system prompt
            model: Model to use (defaults to settings.default_model)
            max_tokens: Maximum tokens in response
            temperature: Sampling temperature

        Returns:
            LLMResponse with content and metadata

        Raises:
            LLMServiceError: If the provider call fails
        """
        messages = [{"role": "user", "content": prompt}]

        try:
            response = await self.client.messages.create(
                model=model or self.default_model,
                max_tokens=max_tokens or self.max_tokens,
                temperature=temperature if temperature is not None else settings.temperature,
                system=system_prompt or "",
                messages=messages,
            )
        except anthropic.APIError as e:
            logger.error(f"Completion request failed: {type(e).__name__}: {e}")
            raise LLMServiceError(str(e)) from e

        text = "".join(
            block.text for block in response.content if getattr(block, "type", "text") == "text"
        )

        return LLMResponse(
            content=text,
            model=response.model,
            usage={
                "input_tokens": response.usage.input_tokens,
                "output_tokens": response.usage.output_tokens,
            },
            stop_reason=response.stop_reason,
        )

    def load_prompt_template(self, name: str) -> PromptTemplate:
        """Load a prompt template from the prompts directory."""
        return load_prompt_template(name)


# Singleton instance
_llm_service: LLMService | None = None


def get_llm_service() -> LLMService:
    """Get LLM service singleton."""
    global _llm_service
    if _llm_service is None:
        _llm_service = LLMService()
    return _llm_service
