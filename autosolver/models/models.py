"""Value objects shared by the cache, the solvers and the runner."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional

from autosolver.models.enums import ExerciseState, ExerciseVariant, Language


def join_words(words: Iterable[str]) -> str:
    """Join words with single spaces, dropping any whitespace inside or around them."""
    return " ".join(part for word in words for part in word.split())


@dataclass(frozen=True)
class TranslationKey:
    """Identifies one cache entry."""

    text: str
    source_language: Language
    target_language: Language

    @classmethod
    def from_words(
        cls, words: Iterable[str], source_language: Language, target_language: Language
    ) -> "TranslationKey":
        """Canonicalize a word list by joining it with single spaces."""
        return cls(join_words(words), source_language, target_language)


@dataclass
class ExerciseContent:
    """Strings scraped from the page for one exercise."""

    prompt: str = ""
    choices: list[str] = field(default_factory=list)
    cards: list[str] = field(default_factory=list)
    header: str = ""
    sentence_tokens: list[str] = field(default_factory=list)
    remainder: str = ""


@dataclass(frozen=True)
class SolvePlan:
    """Base class for the action a solver resolved."""


@dataclass(frozen=True)
class SelectChoicePlan(SolvePlan):
    index: int
    confident: bool = True


@dataclass(frozen=True)
class MatchPairsPlan(SolvePlan):
    pairs: tuple[tuple[int, int], ...] = ()


@dataclass(frozen=True)
class TypeTextPlan(SolvePlan):
    text: str
    keystroke_delay: float = 0.0
    submit: bool = True
    report_reference: bool = False

    def keystrokes(self) -> Iterator[str]:
        """Yield the input events one character at a time."""
        yield from self.text


@dataclass(frozen=True)
class PausePlan(SolvePlan):
    seconds: float


@dataclass
class ExerciseOutcome:
    """What happened to one exercise in the runner."""

    variant: Optional[ExerciseVariant]
    state: ExerciseState = ExerciseState.IDLE
    plan: Optional[SolvePlan] = None
    reference: Optional[str] = None


@dataclass
class LessonResult:
    """Collected outcome of one dispatched lesson."""

    index: int
    outcomes: list[ExerciseOutcome] = field(default_factory=list)
    error: Optional[BaseException] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None
