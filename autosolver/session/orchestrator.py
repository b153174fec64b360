"""Lesson-level coordination: login, navigation and concurrent lesson dispatch."""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence

from autosolver.core.config import Settings, settings
from autosolver.core.exceptions import NavigationTimeoutError, PageElementMissingError
from autosolver.core.logging import get_logger
from autosolver.models.models import LessonResult
from autosolver.session import selectors
from autosolver.session.exercise_runner import ExerciseRunner
from autosolver.session.page import Page
from autosolver.translation.translation_cache import TranslationCache
from autosolver.translation.translation_wrapper import TranslationServiceWrapper

logger = get_logger(__name__)


class LessonOrchestrator:
    """Runs lessons against pages that share one translation cache."""

    def __init__(
        self,
        cache: Optional[TranslationCache] = None,
        config: Settings = settings,
        runner: Optional[ExerciseRunner] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config
        self.cache = cache or TranslationCache(
            TranslationServiceWrapper(config=config),
            max_workers=config.translation_workers,
            hold_lock_during_fetch=config.hold_lock_during_fetch,
            allowed_languages=config.supported_languages,
        )
        self.runner = runner or ExerciseRunner(self.cache, config, sleep=sleep)
        self._sleep = sleep
        self._clock = clock

    def wait_for_url(self, page: Page, url: str, timeout: Optional[float] = None) -> None:
        """Poll until the page location starts with ``url``."""
        timeout = self.config.navigation_timeout if timeout is None else timeout
        deadline = self._clock() + timeout
        while not page.current_url().startswith(url):
            if self._clock() >= deadline:
                raise NavigationTimeoutError(
                    "Page did not reach expected location",
                    detail=f"{url} (at {page.current_url()})",
                )
            self._sleep(self.config.poll_interval)

    def login(self, page: Page, email: Optional[str] = None, password: Optional[str] = None) -> None:
        """Sign in with the configured credentials and wait for the learn page."""
        email = email or self.config.email
        password = password or self.config.password
        if not email or not password:
            raise ValueError("email and password must be configured to log in")

        page.goto(self.config.base_url)
        self._click(page, selectors.HAVE_ACCOUNT_BUTTON)
        self._find(page, selectors.EMAIL_INPUT).send_keys(email)
        self._find(page, selectors.PASSWORD_INPUT).send_keys(password)
        self._click(page, selectors.LOGIN_BUTTON)
        self.wait_for_url(page, self.config.learn_url)
        logger.info("Logged in as %s", email)

    def lesson_count(self, page: Page) -> int:
        return len(page.find_all(selectors.LESSON_NODE))

    def open_lesson(self, page: Page, index: int) -> None:
        """Start the lesson at ``index`` on the learn page."""
        lessons = page.find_all(selectors.LESSON_NODE)
        if index >= len(lessons):
            raise PageElementMissingError("Lesson not on page", detail=str(index))
        lessons[index].click()
        self._click(page, selectors.START_LESSON_BUTTON)
        self.wait_for_url(page, self.config.lesson_url)
        logger.info("Entered lesson %d", index)

    def run_lesson(self, page: Page, index: int) -> LessonResult:
        """Open and solve one lesson, capturing its failure instead of raising."""
        result = LessonResult(index)
        try:
            if not page.current_url().startswith(self.config.lesson_url):
                self.open_lesson(page, index)
            result.outcomes = self.runner.run_lesson(page)
        except Exception as exc:
            logger.error("Lesson %d failed: %s", index, exc)
            result.error = exc
        return result

    def run_lessons(
        self, pages: Sequence[Page], lesson_indices: Optional[Sequence[int]] = None
    ) -> List[LessonResult]:
        """Run one lesson per page concurrently and collect every outcome."""
        indices = list(lesson_indices) if lesson_indices is not None else list(range(len(pages)))
        if len(indices) != len(pages):
            raise ValueError("lesson_indices must name one lesson per page")

        with ThreadPoolExecutor(
            max_workers=self.config.lesson_workers, thread_name_prefix="lesson"
        ) as executor:
            futures = [
                executor.submit(self.run_lesson, page, index)
                for page, index in zip(pages, indices)
            ]
            results = [future.result() for future in futures]

        self._report(results)
        return results

    def run_session(self, page: Page) -> List[LessonResult]:
        """Log in and work through every lesson on the learn page in order."""
        logger.info("Starting %s %s", self.config.app_name, self.config.app_version)
        self.login(page)
        self._sleep(1.0)

        count = self.lesson_count(page)
        logger.info("Found %d lessons", count)
        results = []
        for index in range(count):
            if not page.current_url().startswith(self.config.learn_url):
                page.goto(self.config.learn_url)
                self.wait_for_url(page, self.config.learn_url)
            result = self.run_lesson(page, index)
            results.append(result)
            if result.error is not None and self.config.fail_fast:
                break

        self._report(results)
        return results

    def shutdown(self) -> None:
        self.cache.shutdown()

    def _report(self, results: List[LessonResult]) -> None:
        failed = [result for result in results if not result.succeeded]
        logger.info(
            "%d lessons run, %d failed; cache stats: %s",
            len(results),
            len(failed),
            self.cache.stats(),
        )
        if failed and self.config.fail_fast:
            raise failed[0].error

    def _find(self, page: Page, selector: str):
        element = page.find(selector)
        if element is None:
            raise PageElementMissingError("Element not found", detail=selector)
        return element

    def _click(self, page: Page, selector: str) -> None:
        element = self._find(page, selector)
        element.wait_clickable(self.config.element_timeout)
        element.click()
