"""Normalization of free-form model output before structured parsing.

Models frequently wrap JSON in markdown code fences even when told not to.
Every caller that expects structured output goes through this module so the
fence handling lives in exactly one place.
"""

import json
import re
from typing import Any

# Fences are only recognized at the edges of the payload or on a line of
# their own. Backticks inside JSON strings (code samples) are content.
_LEADING_FENCE = re.compile(r"^```[\w-]*[ \t]*\n?")
_TRAILING_FENCE = re.compile(r"\n?[ \t]*```$")
_FENCE_LINE = re.compile(r"^```[\w-]*[ \t]*$", re.MULTILINE)


def _is_json(content: str) -> bool:
    try:
        json.loads(content)
    except json.JSONDecodeError:
        return False
    return True


def strip_code_fences(content: str) -> str:
    """Return the payload inside markdown code fences, or the trimmed text.

    Handles ```` ```json\\n...\\n``` ````, ```` ```\\n...\\n``` ````, a fenced block
    preceded or followed by prose, an unterminated opening fence, and bare text.
    Text that already decodes as JSON is returned unchanged.
    """
    content = content.strip()
    if _is_json(content):
        return content

    if not content.startswith("```"):
        opening = _FENCE_LINE.search(content)
        if opening is None:
            return content
        content = content[opening.start():]
        closing = content.rfind("\n```")
        if closing > 0:
            content = content[:closing + len("\n```")]

    content = _LEADING_FENCE.sub("", content, count=1)
    return _TRAILING_FENCE.sub("", content.rstrip()).strip()


def parse_json_payload(content: str) -> Any:
    """Strip code fences and decode the remaining text as JSON.

    Raises:
        json.JSONDecodeError: If the payload is not valid JSON
    """
    return json.loads(strip_code_fences(content))
