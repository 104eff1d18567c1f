"""LLM Module - text completion service, prompt templates and output parsing."""

from career_coach.modules.llm.parsing import parse_json_payload, strip_code_fences
from career_coach.modules.llm.prompts import PromptTemplate, load_prompt_template
from career_coach.modules.llm.service import (
    LLMResponse,
    LLMService,
    TextCompletionService,
    get_llm_service,
)

__all__ = [
    "LLMResponse",
    "LLMService",
    "PromptTemplate",
    "TextCompletionService",
    "get_llm_service",
    "load_prompt_template",
    "parse_json_payload",
    "strip_code_fences",
]
