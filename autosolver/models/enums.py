"""Centralized enum definitions."""

from enum import Enum

from autosolver.core.exceptions import LanguageDetectionError


class Language(str, Enum):
    """Languages the solver can translate between."""

    EN = "en"
    NL = "nl"

    @property
    def opposite(self) -> "Language":
        return Language.NL if self is Language.EN else Language.EN

    @classmethod
    def from_code(cls, code: str) -> "Language":
        """Map a backend language code (``en``, ``en-US``, ``NL``) onto a member."""
        normalized = (code or "").strip().lower().replace("_", "-").split("-")[0]
        for language in cls:
            if language.value == normalized:
                return language
        raise LanguageDetectionError(
            "Language outside the supported set", detail=repr(code)
        )

    @classmethod
    def from_name(cls, name: str) -> "Language":
        """Map an English language name as shown in exercise headers."""
        language = _LANGUAGE_NAMES.get((name or "").strip().lower())
        if language is None:
            raise LanguageDetectionError(
                "Unknown language name", detail=repr(name)
            )
        return language


_LANGUAGE_NAMES = {
    "english": Language.EN,
    "dutch": Language.NL,
}


class ExerciseVariant(str, Enum):
    """Closed set of exercise types the classifier can return."""

    SELECT = "select"
    TRANSLATE = "translate"
    ASSIST = "assist"
    MATCH = "match"
    PARTIAL_REVERSE_TRANSLATE = "partialReverseTranslate"
    IGNORE = "ignore"
    NAME = "name"
    LISTEN_ONLY = "listen"

    @property
    def is_supported(self) -> bool:
        return self not in (ExerciseVariant.NAME, ExerciseVariant.LISTEN_ONLY)


class ExerciseState(str, Enum):
    """Per-exercise progress through the runner."""

    IDLE = "idle"
    CLASSIFIED = "classified"
    SOLVED = "solved"
    ADVANCED = "advanced"
    FAILED = "failed"


class NoMatchPolicy(str, Enum):
    """What the runner does when a choice solver found no confident match."""

    FALLBACK = "fallback"
    SKIP = "skip"
    ABORT = "abort"
