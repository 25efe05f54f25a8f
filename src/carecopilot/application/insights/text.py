"""Shared text normalization and softening helpers."""

import re
from typing import Any

from ...domain.enums import Severity

TRAILING_PERIODS_RE = re.compile(r"\.+\Z")
MULTI_SPACE_RE = re.compile(r"\s{2,}")

SOFTENING_RULES = (
    (re.compile(r"\b(indicates|indicate)\b", re.IGNORECASE), "may suggest"),
    (re.compile(r"\b(confirms|confirm)\b", re.IGNORECASE), "consistent with"),
    (re.compile(r"\b(detected|detect)\b", re.IGNORECASE), "observed"),
)
CERTAINTY_WORDS_RE = re.compile(r"\b(clearly|definitely|certainly)\b", re.IGNORECASE)


def strip_trailing_periods(text: str) -> str:
    return TRAILING_PERIODS_RE.sub("", text)


def normalize_for_compare(text: str) -> str:
    """Lower-case, trim, drop trailing periods."""
    return strip_trailing_periods(text.lower().strip())


def collapse_spaces(text: str) -> str:
    return MULTI_SPACE_RE.sub(" ", text).strip()


def soften_language(text: str) -> str:
    for pattern, replacement in SOFTENING_RULES:
        text = pattern.sub(replacement, text)
    return text


def severity_key(value: Any) -> str:
    """Lower-cased severity text for comparisons; accepts enums and raw strings."""
    if isinstance(value, Severity):
        return value.value
    return value.lower() if isinstance(value, str) else ""


def is_high(value: Any) -> bool:
    return severity_key(value) == "high"


def is_medium(value: Any) -> bool:
    return severity_key(value) in ("medium", "moderate")


def first_sentence(text: str) -> str:
    return text.split(".")[0].strip()
