"""
Best-effort JSON extraction from free-form model output.

Extraction (finding the candidate substring) and parsing are kept apart so
each can be exercised with adversarial input on its own.
"""

import json
import re
from typing import Any, Dict, Optional

FENCED_BLOCK_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```")


def extract_json_candidate(content: str) -> str:
    """Return the substring most likely to hold a JSON object.

    Order: first fenced code block, then first ``{`` through last ``}``,
    then the trimmed input unchanged.
    """
    trimmed = content.strip()

    match = FENCED_BLOCK_RE.search(trimmed)
    if match:
        return match.group(1).strip()

    start = trimmed.find("{")
    end = trimmed.rfind("}") + 1
    if start != -1 and end > start:
        return trimmed[start:end]

    return trimmed


def parse_json_object(candidate: str) -> Optional[Dict[str, Any]]:
    """Parse ``candidate``; None unless it is a JSON object."""
    try:
        parsed = json.loads(candidate)
    except (TypeError, ValueError):
        return None
    return parsed if isinstance(parsed, dict) else None


def extract_json_object(content: str) -> Optional[Dict[str, Any]]:
    return parse_json_object(extract_json_candidate(content))
