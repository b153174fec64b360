"""Map the exercise marker attribute onto an exercise variant."""

from typing import Optional

from autosolver.core.exceptions import UnknownExerciseError, UnsupportedExerciseError
from autosolver.core.logging import get_logger
from autosolver.models.enums import ExerciseVariant

logger = get_logger(__name__)

MARKER_PREFIX = "challenge-"

KNOWN_MARKERS = {
    "select": ExerciseVariant.SELECT,
    "translate": ExerciseVariant.TRANSLATE,
    "assist": ExerciseVariant.ASSIST,
    "match": ExerciseVariant.MATCH,
    "partialReverseTranslate": ExerciseVariant.PARTIAL_REVERSE_TRANSLATE,
    "name": ExerciseVariant.NAME,
    "listen": ExerciseVariant.LISTEN_ONLY,
    "listenTap": ExerciseVariant.LISTEN_ONLY,
}


def parse_marker(marker: str) -> Optional[str]:
    """Return the token after ``challenge-`` in a marker such as ``"challenge challenge-select"``."""
    for part in marker.split():
        if part.startswith(MARKER_PREFIX) and len(part) > len(MARKER_PREFIX):
            return part[len(MARKER_PREFIX):]
    return None


def classify(marker: Optional[str]) -> ExerciseVariant:
    """Classify a marker; a missing marker element means nothing to solve."""
    if marker is None or not marker.strip():
        return ExerciseVariant.IGNORE

    token = parse_marker(marker)
    variant = KNOWN_MARKERS.get(token) if token else None
    if variant is None:
        logger.error("Unknown exercise marker: %r", marker)
        raise UnknownExerciseError("Unknown exercise type", detail=marker)

    logger.debug("Exercise type: %s (%s)", variant.value, token)
    return variant


def require_supported(variant: ExerciseVariant) -> ExerciseVariant:
    """Fail loudly for variants that are recognized but not implemented."""
    if not variant.is_supported:
        logger.error("Unsupported exercise type: %s", variant.value)
        raise UnsupportedExerciseError(
            "Exercise type is not implemented", detail=variant.value
        )
    return variant
