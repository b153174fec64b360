"""Drive one exercise at a time: scrape, classify, solve, apply, advance."""

import time
from typing import Callable, List, Optional

from autosolver.core.config import Settings, settings
from autosolver.core.exceptions import (
    ClassificationError,
    NoConfidentMatchError,
    PageElementMissingError,
    UnsupportedExerciseError,
)
from autosolver.core.logging import get_logger
from autosolver.exercises.classifier import classify, require_supported
from autosolver.exercises.solvers import solve
from autosolver.models.enums import ExerciseState, ExerciseVariant, NoMatchPolicy
from autosolver.models.models import (
    ExerciseContent,
    ExerciseOutcome,
    MatchPairsPlan,
    PausePlan,
    SelectChoicePlan,
    SolvePlan,
    TypeTextPlan,
)
from autosolver.session import selectors
from autosolver.session.page import Page, PageElement
from autosolver.translation.translation_cache import TranslationCache

logger = get_logger(__name__)

INPUT_SELECTORS = {
    ExerciseVariant.TRANSLATE: selectors.TRANSLATE_INPUT,
    ExerciseVariant.PARTIAL_REVERSE_TRANSLATE: selectors.PARTIAL_INPUT,
}


class ExerciseRunner:
    """Applies solver plans to a page, one exercise after another."""

    def __init__(
        self,
        cache: TranslationCache,
        config: Settings = settings,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.cache = cache
        self.config = config
        self._sleep = sleep

    def read_marker(self, page: Page) -> Optional[str]:
        """Return the exercise marker, or None when no exercise is shown."""
        element = page.find(selectors.CHALLENGE)
        if element is None:
            return None
        return element.attribute(selectors.CHALLENGE_MARKER_ATTRIBUTE)

    def scrape(self, page: Page, variant: ExerciseVariant) -> ExerciseContent:
        """Extract the strings the solver for ``variant`` needs."""
        if variant in (ExerciseVariant.SELECT, ExerciseVariant.ASSIST):
            prompt = (
                self._required(page, selectors.CHALLENGE_HEADER).text()
                if variant is ExerciseVariant.SELECT
                else " ".join(self._texts(page, selectors.HINT_TOKEN))
            )
            return ExerciseContent(prompt=prompt, choices=self._texts(page, selectors.CHOICE))
        if variant is ExerciseVariant.TRANSLATE:
            return ExerciseContent(
                header=self._required(page, selectors.CHALLENGE_HEADER).text(),
                sentence_tokens=self._texts(page, selectors.HINT_TOKEN),
            )
        if variant is ExerciseVariant.MATCH:
            return ExerciseContent(cards=self._texts(page, selectors.TAP_TOKEN))
        if variant is ExerciseVariant.PARTIAL_REVERSE_TRANSLATE:
            remainder = page.find(selectors.PARTIAL_REMAINDER)
            return ExerciseContent(
                sentence_tokens=self._texts(page, selectors.HINT_TOKEN),
                remainder=remainder.text() if remainder else "",
            )
        return ExerciseContent()

    def apply(self, page: Page, variant: ExerciseVariant, plan: SolvePlan) -> Optional[str]:
        """Perform the plan's UI actions; returns a reference solution when one was shown."""
        if isinstance(plan, PausePlan):
            self._sleep(plan.seconds)
        elif isinstance(plan, SelectChoicePlan):
            self._apply_choice(page, plan)
        elif isinstance(plan, MatchPairsPlan):
            self._apply_pairs(page, plan)
        elif isinstance(plan, TypeTextPlan):
            return self._apply_typing(page, variant, plan)
        else:
            raise TypeError(f"Unknown plan type: {type(plan).__name__}")
        return None

    def advance(self, page: Page) -> None:
        """Continue to the next exercise when the next button is shown."""
        button = page.find(selectors.NEXT_BUTTON)
        if button is None:
            return
        button.wait_clickable(self.config.element_timeout)
        button.click()

    def skip(self, page: Page) -> None:
        button = self._required(page, selectors.SKIP_BUTTON)
        button.wait_clickable(self.config.element_timeout)
        button.click()

    def run_exercise(self, page: Page) -> ExerciseOutcome:
        """Run the idle -> classified -> solved -> advanced cycle once."""
        variant = None
        try:
            variant = classify(self.read_marker(page))
            require_supported(variant)
        except (ClassificationError, UnsupportedExerciseError) as exc:
            if not self.config.skip_unsupported:
                raise
            logger.warning("Skipping exercise: %s", exc)
            self.skip(page)
            self.advance(page)
            return ExerciseOutcome(variant, state=ExerciseState.FAILED)

        outcome = ExerciseOutcome(variant, state=ExerciseState.CLASSIFIED)
        plan = solve(variant, self.scrape(page, variant), self.cache, self.config)
        outcome.plan = plan

        if variant is not ExerciseVariant.IGNORE:
            outcome.state = ExerciseState.SOLVED
            if self._should_skip(plan):
                self.skip(page)
            else:
                outcome.reference = self.apply(page, variant, plan)
        else:
            self.apply(page, variant, plan)

        self.advance(page)
        outcome.state = ExerciseState.ADVANCED
        logger.info("Exercise %s done", variant.value)
        return outcome

    def run_lesson(self, page: Page) -> List[ExerciseOutcome]:
        """Solve exercises until the page leaves the lesson."""
        outcomes = []
        while page.current_url().startswith(self.config.lesson_url):
            outcomes.append(self.run_exercise(page))
        logger.info("Lesson finished after %d exercises", len(outcomes))
        return outcomes

    def _should_skip(self, plan: SolvePlan) -> bool:
        if not isinstance(plan, SelectChoicePlan) or plan.confident:
            return False
        policy = self.config.no_match_policy
        if policy is NoMatchPolicy.ABORT:
            raise NoConfidentMatchError("No choice matched the translation")
        return policy is NoMatchPolicy.SKIP

    def _apply_choice(self, page: Page, plan: SelectChoicePlan) -> None:
        choices = page.find_all(selectors.CHOICE)
        if plan.index >= len(choices):
            raise PageElementMissingError("Choice not on page", detail=str(plan.index))
        choices[plan.index].click()
        self._submit(page)

    def _apply_pairs(self, page: Page, plan: MatchPairsPlan) -> None:
        cards = page.find_all(selectors.TAP_TOKEN)
        half = len(cards) // 2
        for source_index, target_index in plan.pairs:
            cards[source_index].click()
            cards[half + target_index].click()

    def _apply_typing(
        self, page: Page, variant: ExerciseVariant, plan: TypeTextPlan
    ) -> Optional[str]:
        field = self._required(page, INPUT_SELECTORS[variant])
        for key in plan.keystrokes():
            field.send_keys(key)
            if plan.keystroke_delay:
                self._sleep(plan.keystroke_delay)
        if plan.submit:
            self._submit(page)
        if plan.report_reference:
            return self._reference_solution(page)
        return None

    def _reference_solution(self, page: Page) -> Optional[str]:
        if page.find(selectors.INCORRECT_BANNER) is None:
            return None
        element = page.find(selectors.REFERENCE_SOLUTION)
        reference = element.text() if element else None
        logger.warning("Answer marked incorrect; reference solution: %r", reference)
        return reference

    def _submit(self, page: Page) -> None:
        button = self._required(page, selectors.NEXT_BUTTON)
        button.wait_clickable(self.config.element_timeout)
        button.click()

    @staticmethod
    def _required(page: Page, selector: str) -> PageElement:
        element = page.find(selector)
        if element is None:
            raise PageElementMissingError("Element not found", detail=selector)
        return element

    @staticmethod
    def _texts(page: Page, selector: str) -> List[str]:
        return [element.text() for element in page.find_all(selector)]
