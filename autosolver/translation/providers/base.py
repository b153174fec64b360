"""Translation provider interface."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Sequence, Tuple


class TranslationProvider(ABC):
    """Abstract translation and language-detection backend."""

    @abstractmethod
    def translate(
        self, text: str, source_lang: str, target_lang: str
    ) -> Tuple[str, Dict[str, Any]]:
        """Translate text and return translated string plus metadata."""
        raise NotImplementedError

    @abstractmethod
    def detect_language(self, text: str, allowed_languages: Sequence[str]) -> str:
        """Return the language code of ``text``, restricted to ``allowed_languages``."""
        raise NotImplementedError
