"""Shared pytest fixtures for the autosolver tests."""

from __future__ import annotations

import time
from threading import Event, Lock
from typing import Callable, Dict, List, Optional

import pytest

from autosolver.core.config import Settings
from autosolver.core.exceptions import LanguageDetectionError, TranslationServiceError
from autosolver.session.page import Page, PageElement
from autosolver.translation.providers.base import TranslationProvider
from autosolver.translation.translation_cache import TranslationCache
from autosolver.translation.translation_wrapper import TranslationServiceWrapper


class FakeTranslationProvider(TranslationProvider):
    """Dictionary-backed provider that records every call."""

    def __init__(
        self,
        translations: Optional[Dict[tuple, str]] = None,
        languages: Optional[Dict[str, str]] = None,
        latency: float = 0.0,
    ):
        self.translations = dict(translations or {})
        self.languages = dict(languages or {})
        self.latency = latency
        self.fail_times = 0
        self.gate: Optional[Event] = None
        self.started = Event()
        self.translate_calls: List[tuple] = []
        self.detect_calls: List[str] = []
        self._lock = Lock()

    def translate(self, text, source_lang, target_lang):
        with self._lock:
            self.translate_calls.append((text, source_lang, target_lang))
            should_fail = self.fail_times > 0
            if should_fail:
                self.fail_times -= 1
        self.started.set()
        if self.gate is not None:
            self.gate.wait(5)
        if self.latency:
            time.sleep(self.latency)
        if should_fail:
            raise TranslationServiceError("Translation request failed", detail="quota")
        try:
            return self.translations[(text, source_lang, target_lang)], {}
        except KeyError:
            raise TranslationServiceError("No fake translation", detail=text)

    def detect_language(self, text, allowed_languages):
        with self._lock:
            self.detect_calls.append(text)
        code = self.languages.get(text)
        if code is None:
            raise LanguageDetectionError("Language could not be decided", detail=text)
        return code


class FakeElement(PageElement):
    """Page element stub capturing clicks and typed keys."""

    def __init__(
        self,
        text: str = "",
        attributes: Optional[Dict[str, str]] = None,
        on_click: Optional[Callable[[], None]] = None,
    ):
        self._text = text
        self.attributes = dict(attributes or {})
        self.on_click = on_click
        self.clicks = 0
        self.keys: List[str] = []
        self.waits: List[float] = []

    def text(self) -> str:
        return self._text

    def attribute(self, name):
        return self.attributes.get(name)

    def click(self) -> None:
        self.clicks += 1
        if self.on_click:
            self.on_click()

    def send_keys(self, keys: str) -> None:
        self.keys.append(keys)

    def wait_clickable(self, timeout: float) -> None:
        self.waits.append(timeout)

    @property
    def typed(self) -> str:
        return "".join(self.keys)


class FakePage(Page):
    """In-memory page keyed by selector."""

    def __init__(self, elements: Optional[Dict[str, List[FakeElement]]] = None, url: str = ""):
        self.elements = dict(elements or {})
        self.url = url
        self.visited: List[str] = []

    def find(self, selector):
        found = self.elements.get(selector) or []
        return found[0] if found else None

    def find_all(self, selector):
        return list(self.elements.get(selector) or [])

    def current_url(self) -> str:
        return self.url

    def goto(self, url: str) -> None:
        self.visited.append(url)
        self.url = url


@pytest.fixture
def config() -> Settings:
    return Settings(
        keystroke_delay=0.0,
        ignore_pause=0.0,
        poll_interval=0.0,
        translation_workers=4,
        email="learner@example.com",
        password="secret",
    )


@pytest.fixture
def provider() -> FakeTranslationProvider:
    return FakeTranslationProvider()


@pytest.fixture
def cache(provider, config):
    translation_cache = TranslationCache(
        TranslationServiceWrapper(provider),
        max_workers=4,
        hold_lock_during_fetch=False,
        allowed_languages=config.supported_languages,
    )
    yield translation_cache
    translation_cache.shutdown()
