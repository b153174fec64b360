"""Session-scoped translation and language-detection cache.

One cache instance is created per automation session and shared by every
lesson thread. A single lock guards both maps and the table of in-flight
fetches. By default the provider is called outside the lock: the first
thread to miss a key registers a future for it, and concurrent lookups of
the same key wait on that future instead of calling the provider again.
With ``hold_lock_during_fetch`` the provider call happens while the lock is
held, which serializes every lookup in the session.

Provider failures propagate to the caller (and to every thread waiting on
the same key) and leave nothing behind in the cache.
"""

from __future__ import annotations

from collections import Counter
from concurrent.futures import Future, ThreadPoolExecutor
from threading import Lock
from typing import Callable, Dict, Hashable, Iterable, Optional, Sequence, Tuple, TypeVar

from autosolver.core.config import settings
from autosolver.core.exceptions import LanguageDetectionError
from autosolver.core.logging import get_logger
from autosolver.models.enums import Language
from autosolver.models.models import TranslationKey
from autosolver.translation.translation_wrapper import TranslationServiceWrapper

logger = get_logger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class TranslationCache:
    """Memoizes translations per ``TranslationKey`` and detections per raw text."""

    def __init__(
        self,
        provider_wrapper: Optional[TranslationServiceWrapper] = None,
        max_workers: Optional[int] = None,
        hold_lock_during_fetch: Optional[bool] = None,
        allowed_languages: Optional[Sequence[str]] = None,
    ):
        self.provider_wrapper = provider_wrapper or TranslationServiceWrapper()
        self.hold_lock_during_fetch = (
            settings.hold_lock_during_fetch
            if hold_lock_during_fetch is None
            else hold_lock_during_fetch
        )
        self.allowed_languages = tuple(allowed_languages or settings.supported_languages)

        self._translations: Dict[TranslationKey, str] = {}
        self._languages: Dict[str, Language] = {}
        self._pending_translations: Dict[TranslationKey, Future] = {}
        self._pending_detections: Dict[str, Future] = {}
        self._counters: Counter = Counter()
        self._lock = Lock()

        self._executor = ThreadPoolExecutor(
            max_workers=max_workers or settings.translation_workers,
            thread_name_prefix="translator",
        )
        self._shutdown_lock = Lock()
        self._is_shutdown = False

    def __enter__(self) -> "TranslationCache":
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown()

    # ------------------------------------------------------------------
    # Translations
    # ------------------------------------------------------------------

    def lookup(self, text: str, source: Language, target: Language) -> str:
        """Return the translation of ``text``, calling the provider only on a miss."""
        key = TranslationKey(text, source, target)
        return self._get_or_fetch(
            self._translations,
            self._pending_translations,
            key,
            lambda: self._fetch_translation(key),
            "translation",
        )

    def translate_words(
        self, words: Iterable[str], source: Language, target: Language
    ) -> str:
        """Translate a word list; whitespace differences collapse to one entry."""
        key = TranslationKey.from_words(words, source, target)
        return self.lookup(key.text, key.source_language, key.target_language)

    def lookup_many(
        self, texts: Sequence[str], source: Language, target: Language
    ) -> list[str]:
        """Translate several texts in parallel, preserving order."""
        if len(texts) <= 1:
            return [self.lookup(text, source, target) for text in texts]
        return list(
            self._executor.map(lambda text: self.lookup(text, source, target), texts)
        )

    def insert_translation(
        self, text: str, source: Language, target: Language, value: str
    ) -> None:
        """Store ``value`` for the key, replacing any previous translation."""
        key = TranslationKey(text, source, target)
        with self._lock:
            self._translations[key] = value

    def get_cached(self, text: str, source: Language, target: Language) -> Optional[str]:
        """Peek at a cached translation without calling the provider."""
        with self._lock:
            return self._translations.get(TranslationKey(text, source, target))

    def translate_auto(self, text: str) -> Tuple[Language, str]:
        """Detect the language of ``text`` and translate it into the other one."""
        source = self.detect(text)
        return source, self.lookup(text, source, source.opposite)

    def _fetch_translation(self, key: TranslationKey) -> str:
        logger.debug(
            "Cache miss: translating %r %s->%s",
            key.text,
            key.source_language.value,
            key.target_language.value,
        )
        translated_text, _metadata = self.provider_wrapper.provider.translate(
            key.text, key.source_language.value, key.target_language.value
        )
        return translated_text

    # ------------------------------------------------------------------
    # Language detection
    # ------------------------------------------------------------------

    def detect(self, text: str) -> Language:
        """Return the language of ``text``; the first classification sticks."""
        return self._get_or_fetch(
            self._languages,
            self._pending_detections,
            text,
            lambda: self._fetch_language(text),
            "detection",
        )

    def _fetch_language(self, text: str) -> Language:
        logger.debug("Cache miss: detecting language of %r", text)
        code = self.provider_wrapper.provider.detect_language(text, self.allowed_languages)
        language = Language.from_code(code)
        if language.value not in self.allowed_languages:
            raise LanguageDetectionError(
                "Detected language outside the allow-list", detail=f"{code} for {text!r}"
            )
        return language

    # ------------------------------------------------------------------
    # Shared memoization
    # ------------------------------------------------------------------

    def _get_or_fetch(
        self,
        store: Dict[K, V],
        pending: Dict[K, Future],
        key: K,
        fetch: Callable[[], V],
        kind: str,
    ) -> V:
        if self.hold_lock_during_fetch:
            with self._lock:
                if key in store:
                    self._counters[f"{kind}_hits"] += 1
                    return store[key]
                self._counters[f"{kind}_misses"] += 1
                value = fetch()
                store[key] = value
                return value

        with self._lock:
            if key in store:
                self._counters[f"{kind}_hits"] += 1
                return store[key]
            future = pending.get(key)
            is_owner = future is None
            if is_owner:
                future = Future()
                pending[key] = future
                self._counters[f"{kind}_misses"] += 1
            else:
                self._counters[f"{kind}_deduplicated"] += 1

        if not is_owner:
            return future.result()

        try:
            value = fetch()
        except BaseException as exc:
            with self._lock:
                pending.pop(key, None)
            future.set_exception(exc)
            raise

        with self._lock:
            # An explicit insert made while the fetch was running wins.
            value = store.setdefault(key, value)
            pending.pop(key, None)
        future.set_result(value)
        return value

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def stats(self) -> Dict[str, int]:
        """Snapshot of hit/miss counters and entry counts."""
        with self._lock:
            snapshot = dict(self._counters)
            snapshot["translations"] = len(self._translations)
            snapshot["detections"] = len(self._languages)
        return snapshot

    def clear(self) -> None:
        with self._lock:
            self._translations.clear()
            self._languages.clear()
            self._counters.clear()

    def shutdown(self) -> None:
        with self._shutdown_lock:
            if self._is_shutdown:
                return
            self._is_shutdown = True
        self._executor.shutdown(wait=True)
        logger.info("Translation cache closed: %s", self.stats())
