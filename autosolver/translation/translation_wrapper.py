"""Translation service wrapper for provider selection."""

from threading import Lock
from typing import Optional

from autosolver.core.config import Settings, settings
from autosolver.translation.providers.base import TranslationProvider


class TranslationServiceWrapper:
    """Selects and initializes the configured translation provider."""

    def __init__(
        self, provider: Optional[TranslationProvider] = None, config: Settings = settings
    ):
        self._provider: Optional[TranslationProvider] = provider
        self.config = config
        self._lock = Lock()

    def initialize(self):
        with self._lock:
            if self._provider:
                return
            provider = getattr(self.config, "translation_provider", "google").lower()
            if provider == "google":
                from autosolver.translation.providers.google_provider import GoogleTranslateProvider

                self._provider = GoogleTranslateProvider(config=self.config)
            else:
                raise ValueError(f"Unsupported translation provider: {provider}")

    @property
    def provider(self) -> TranslationProvider:
        if not self._provider:
            self.initialize()
        return self._provider
