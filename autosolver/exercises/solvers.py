"""Per-variant solving strategies.

Each solver takes already scraped strings plus the shared translation cache
and returns a plan; none of them touches the page.
"""

from typing import Callable, Dict

from autosolver.core.config import Settings, settings
from autosolver.core.exceptions import ExerciseInputError, UnsupportedExerciseError
from autosolver.core.logging import get_logger
from autosolver.exercises.text import (
    extract_quoted_phrase,
    header_target_language,
    same_text,
    strip_leading_numbering,
    strip_trailing_numbering,
)
from autosolver.models.enums import ExerciseVariant
from autosolver.models.models import (
    ExerciseContent,
    MatchPairsPlan,
    PausePlan,
    SelectChoicePlan,
    SolvePlan,
    TypeTextPlan,
    join_words,
)
from autosolver.translation.translation_cache import TranslationCache

logger = get_logger(__name__)

Solver = Callable[[ExerciseContent, TranslationCache, Settings], SolvePlan]


def solve_select(
    content: ExerciseContent, cache: TranslationCache, config: Settings = settings
) -> SelectChoicePlan:
    """Pick the choice whose translation matches the quoted prompt phrase."""
    phrase = extract_quoted_phrase(content.prompt)
    choices = [strip_trailing_numbering(choice) for choice in content.choices]
    if not choices:
        raise ExerciseInputError("Select exercise without choices", detail=content.prompt)

    translated = cache.lookup_many(
        [phrase, *choices], config.native_language, config.learning_language
    )
    target, translated_choices = translated[0], translated[1:]

    for index, candidate in enumerate(translated_choices):
        if same_text(candidate, target):
            return SelectChoicePlan(index)

    logger.warning("Select: no choice matched %r (%r), falling back to 0", phrase, target)
    return SelectChoicePlan(0, confident=False)


def solve_assist(
    content: ExerciseContent, cache: TranslationCache, config: Settings = settings
) -> SelectChoicePlan:
    """Translate the prompt word in whichever direction it needs and pick the exact match."""
    word = content.prompt.strip()
    if not word:
        raise ExerciseInputError("Assist exercise without a prompt word")

    source, translation = cache.translate_auto(word)
    for index, choice in enumerate(content.choices):
        if strip_leading_numbering(choice) == translation:
            return SelectChoicePlan(index)

    logger.warning(
        "Assist: no choice equals %r (%s word %r), falling back to 0",
        translation,
        source.value,
        word,
    )
    return SelectChoicePlan(0, confident=False)


def solve_translate(
    content: ExerciseContent, cache: TranslationCache, config: Settings = settings
) -> TypeTextPlan:
    """Translate the sentence into the language the header asks for."""
    target = header_target_language(content.header)
    if not any(token.strip() for token in content.sentence_tokens):
        raise ExerciseInputError("Translate exercise without a sentence", detail=content.header)

    translation = cache.translate_words(content.sentence_tokens, target.opposite, target)
    return TypeTextPlan(
        translation,
        keystroke_delay=config.keystroke_delay,
        submit=True,
        report_reference=True,
    )


def solve_match(
    content: ExerciseContent, cache: TranslationCache, config: Settings = settings
) -> MatchPairsPlan:
    """Pair each learning-language card with the first card equal to its translation.

    Indices in the plan are positions within each half. A target card can be
    bound more than once and unmatched source cards are left out.
    """
    cards = [card.strip() for card in content.cards]
    if len(cards) % 2:
        raise ExerciseInputError(
            "Match exercise needs an even number of cards", detail=str(len(cards))
        )

    half = len(cards) // 2
    sources, targets = cards[:half], cards[half:]
    translated = cache.lookup_many(sources, config.learning_language, config.native_language)

    pairs = []
    for source_index, translation in enumerate(translated):
        for target_index, target in enumerate(targets):
            if same_text(translation, target):
                pairs.append((source_index, target_index))
                break
        else:
            logger.debug("Match: no card for %r (%r)", sources[source_index], translation)
    return MatchPairsPlan(tuple(pairs))


def solve_partial_reverse_translate(
    content: ExerciseContent, cache: TranslationCache, config: Settings = settings
) -> TypeTextPlan:
    """Warm the cache with the displayed sentence and type the prepared remainder."""
    sentence = join_words(content.sentence_tokens)
    if sentence:
        cache.translate_auto(sentence)
    return TypeTextPlan(
        content.remainder,
        keystroke_delay=config.keystroke_delay,
        submit=True,
    )


def solve_ignore(
    content: ExerciseContent, cache: TranslationCache, config: Settings = settings
) -> PausePlan:
    return PausePlan(config.ignore_pause)


SOLVERS: Dict[ExerciseVariant, Solver] = {
    ExerciseVariant.SELECT: solve_select,
    ExerciseVariant.ASSIST: solve_assist,
    ExerciseVariant.TRANSLATE: solve_translate,
    ExerciseVariant.MATCH: solve_match,
    ExerciseVariant.PARTIAL_REVERSE_TRANSLATE: solve_partial_reverse_translate,
    ExerciseVariant.IGNORE: solve_ignore,
}


def solve(
    variant: ExerciseVariant,
    content: ExerciseContent,
    cache: TranslationCache,
    config: Settings = settings,
) -> SolvePlan:
    """Dispatch to the solver registered for ``variant``."""
    solver = SOLVERS.get(variant)
    if solver is None:
        raise UnsupportedExerciseError("No solver for exercise type", detail=variant.value)
    return solver(content, cache, config)
