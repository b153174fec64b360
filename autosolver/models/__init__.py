"""Models package for enums and value objects."""

from .enums import ExerciseState, ExerciseVariant, Language, NoMatchPolicy
from .models import (
    ExerciseContent,
    ExerciseOutcome,
    LessonResult,
    MatchPairsPlan,
    PausePlan,
    SelectChoicePlan,
    SolvePlan,
    TranslationKey,
    TypeTextPlan,
)

__all__ = [
    # Enums
    "ExerciseState",
    "ExerciseVariant",
    "Language",
    "NoMatchPolicy",
    # Cache keys and scraped content
    "TranslationKey",
    "ExerciseContent",
    # Plans
    "SolvePlan",
    "SelectChoicePlan",
    "MatchPairsPlan",
    "TypeTextPlan",
    "PausePlan",
    # Outcomes
    "ExerciseOutcome",
    "LessonResult",
]
