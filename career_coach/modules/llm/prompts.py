"""Prompt template loading.

Templates live in ``career_coach/prompts/<area>/<name>.txt``:

    ---SYSTEM---
    system prompt here
    ---USER---
    user prompt with {{placeholders}}
    ---VARIABLES---
    var1, var2, var3
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

# Go up from llm -> modules -> career_coach
PROMPTS_DIR = Path(__file__).parent.parent.parent / "prompts"

_prompt_cache: dict[str, "PromptTemplate"] = {}


@dataclass
class PromptTemplate:
    """Loaded prompt template."""

    name: str
    system: str
    user: str
    variables: list[str]

    def format(self, **kwargs: Any) -> tuple[str, str]:
        """Format template with variables. Returns (system, user) prompts."""
        system = self.system
        user = self.user
        for key, value in kwargs.items():
            system = system.replace(f"{{{{{key}}}}}", str(value))
            user = user.replace(f"{{{{{key}}}}}", str(value))
        return system, user


def load_prompt_template(name: str) -> PromptTemplate:
    """Load a prompt template by name.

    Args:
        name: Template name (e.g., "interview/quiz_generation")

    Returns:
        PromptTemplate instance

    Raises:
        ValueError: If the name is malformed or escapes the prompts directory
        FileNotFoundError: If no such template exists
    """
    if name in _prompt_cache:
        return _prompt_cache[name]

    # Only alphanumeric, underscores, hyphens, and forward slashes for subdirectories
    if not re.match(r'^[a-zA-Z0-9_/\-]+$', name):
        raise ValueError(f"Invalid template name: {name}. Only alphanumeric, underscore, hyphen, and slash allowed.")

    if '..' in name or name.startswith('/'):
        raise ValueError(f"Invalid template name: {name}. Path traversal not allowed.")

    template_path = PROMPTS_DIR / f"{name}.txt"

    resolved_path = template_path.resolve()
    if not resolved_path.is_relative_to(PROMPTS_DIR.resolve()):
        raise ValueError(f"Invalid template path: {name}. Must be within prompts directory.")

    if not template_path.exists():
        raise FileNotFoundError(f"Prompt template not found: {name}")

    template = parse_prompt_template(name, template_path.read_text(encoding="utf-8"))
    _prompt_cache[name] = template
    return template


def parse_prompt_template(name: str, content: str) -> PromptTemplate:
    """Split raw template text into its SYSTEM / USER / VARIABLES sections."""
    system = ""
    user = ""
    variables: list[str] = []

    current_section = None
    for part in re.split(r"^---([A-Z]+)---\s*$", content, flags=re.MULTILINE):
        marker = part.strip()
        if marker == "SYSTEM":
            current_section = "system"
        elif marker == "USER":
            current_section = "user"
        elif marker == "VARIABLES":
            current_section = "variables"
        elif current_section == "system":
            system = marker
        elif current_section == "user":
            user = marker
        elif current_section == "variables":
            variables = [v.strip() for v in marker.split(",") if v.strip()]

    return PromptTemplate(name=name, system=system, user=user, variables=variables)
