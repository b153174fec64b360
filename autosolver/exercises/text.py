"""Helpers that turn noisy scraped text into comparable strings."""

import re

from autosolver.core.exceptions import ExerciseInputError
from autosolver.models.enums import Language

OPEN_QUOTE = "“"
CLOSE_QUOTE = "”"

_TRAILING_NUMBERING = re.compile(r"(?<=[^\s\d])\s*\d+$")
_LEADING_NUMBERING = re.compile(r"^\s*\d+[\s.)]*")
_WRITE_THIS_IN = re.compile(r"write\s+this\s+in\s+([A-Za-z]+)", re.IGNORECASE)


def extract_quoted_phrase(prompt: str) -> str:
    """Return the text between the first pair of smart quotes."""
    start = prompt.find(OPEN_QUOTE)
    end = prompt.find(CLOSE_QUOTE, start + 1) if start != -1 else -1
    if start == -1 or end == -1:
        raise ExerciseInputError("Prompt has no quoted phrase", detail=prompt)
    return prompt[start + 1:end].strip()


def strip_trailing_numbering(text: str) -> str:
    """``"hond 2"`` / ``"hond\\n2"`` -> ``"hond"``; digit-only text is kept as is."""
    return _TRAILING_NUMBERING.sub("", text.strip()).strip()


def strip_leading_numbering(text: str) -> str:
    """``"1\\nhond"`` / ``"1. hond"`` -> ``"hond"``."""
    return _LEADING_NUMBERING.sub("", text).strip()


def header_target_language(header: str) -> Language:
    """Language named in a "Write this in <language>" header."""
    match = _WRITE_THIS_IN.search(header or "")
    if not match:
        raise ExerciseInputError("Unrecognized translate header", detail=header)
    return Language.from_name(match.group(1))


def same_text(left: str, right: str) -> bool:
    return left.strip().casefold() == right.strip().casefold()
