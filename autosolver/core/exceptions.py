"""Domain-level exceptions raised by the solver core and its collaborators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(eq=False)
class AutosolverError(Exception):
    """Base error raised by autosolver code."""

    message: str
    detail: Optional[str] = None

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message} ({self.detail})"
        return self.message


class ClassificationError(AutosolverError):
    """Raised when input falls outside what the solver was taught to handle."""


class UnknownExerciseError(ClassificationError):
    """Raised for an exercise marker that matches no known token."""


class LanguageDetectionError(ClassificationError):
    """Raised when detection is undecided or returns a language outside the allow-list."""


class UnsupportedExerciseError(AutosolverError):
    """Raised for exercise variants that are recognized but not implemented."""


class TranslationServiceError(AutosolverError):
    """Raised when the external translation or detection backend fails."""


class ExerciseInputError(AutosolverError):
    """Raised when scraped exercise content cannot be interpreted."""


class NoConfidentMatchError(AutosolverError):
    """Raised when no choice matched and the configured policy is to abort."""


class PageElementMissingError(AutosolverError):
    """Raised when a required page element cannot be located."""


class NavigationTimeoutError(AutosolverError):
    """Raised when the page does not reach the expected location in time."""
