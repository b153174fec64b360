"""Tests for the exercise runner against an in-memory page."""

import pytest

from autosolver.core.exceptions import (
    NoConfidentMatchError,
    PageElementMissingError,
    UnknownExerciseError,
    UnsupportedExerciseError,
)
from autosolver.models.enums import ExerciseState, ExerciseVariant, NoMatchPolicy
from autosolver.models.models import SelectChoicePlan, TypeTextPlan
from autosolver.session import selectors
from autosolver.session.exercise_runner import ExerciseRunner
from tests.conftest import FakeElement, FakePage

LESSON_URL = "https://www.duolingo.com/lesson"


def marker(value):
    return FakeElement(attributes={"data-test": value})


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def runner(cache, config, sleeps):
    return ExerciseRunner(cache, config, sleep=sleeps.append)


@pytest.fixture
def select_page(provider):
    provider.translations.update(
        {
            ("dog", "en", "nl"): "hond",
            ("kat", "en", "nl"): "kat",
            ("hond", "en", "nl"): "hond",
        }
    )
    return FakePage(
        {
            selectors.CHALLENGE: [marker("challenge challenge-select")],
            selectors.CHALLENGE_HEADER: [FakeElement("Which one of these is “dog”?")],
            selectors.CHOICE: [FakeElement("kat 1"), FakeElement("hond 2")],
            selectors.NEXT_BUTTON: [FakeElement()],
            selectors.SKIP_BUTTON: [FakeElement()],
        },
        url=LESSON_URL,
    )


class TestRunExercise:
    def test_select_exercise_is_answered_and_advanced(self, runner, select_page):
        outcome = runner.run_exercise(select_page)

        choices = select_page.elements[selectors.CHOICE]
        assert outcome.variant is ExerciseVariant.SELECT
        assert outcome.state is ExerciseState.ADVANCED
        assert outcome.plan == SelectChoicePlan(1)
        assert [choice.clicks for choice in choices] == [0, 1]
        # submit + continue
        assert select_page.elements[selectors.NEXT_BUTTON][0].clicks == 2

    def test_missing_marker_pauses_without_solving(self, runner, config, sleeps):
        page = FakePage({selectors.NEXT_BUTTON: [FakeElement()]}, url=LESSON_URL)

        outcome = runner.run_exercise(page)

        assert outcome.variant is ExerciseVariant.IGNORE
        assert outcome.state is ExerciseState.ADVANCED
        assert sleeps == [config.ignore_pause]
        assert page.elements[selectors.NEXT_BUTTON][0].clicks == 1

    def test_unknown_marker_stops_the_lesson(self, runner):
        page = FakePage({selectors.CHALLENGE: [marker("challenge challenge-speak")]})

        with pytest.raises(UnknownExerciseError):
            runner.run_exercise(page)

    def test_unsupported_marker_stops_the_lesson(self, runner):
        page = FakePage({selectors.CHALLENGE: [marker("challenge challenge-name")]})

        with pytest.raises(UnsupportedExerciseError):
            runner.run_exercise(page)

    def test_unsupported_marker_can_be_skipped(self, cache, config):
        runner = ExerciseRunner(cache, config.model_copy(update={"skip_unsupported": True}))
        skip = FakeElement()
        page = FakePage(
            {
                selectors.CHALLENGE: [marker("challenge challenge-listen")],
                selectors.SKIP_BUTTON: [skip],
            }
        )

        outcome = runner.run_exercise(page)

        assert outcome.variant is ExerciseVariant.LISTEN_ONLY
        assert outcome.state is ExerciseState.FAILED
        assert skip.clicks == 1

    def test_no_match_fallback_clicks_first_choice(self, runner, select_page):
        select_page.elements[selectors.CHOICE] = [FakeElement("kat"), FakeElement("kat")]

        outcome = runner.run_exercise(select_page)

        assert outcome.plan == SelectChoicePlan(0, confident=False)
        assert select_page.elements[selectors.CHOICE][0].clicks == 1

    def test_no_match_skip_policy(self, cache, config, select_page):
        runner = ExerciseRunner(
            cache, config.model_copy(update={"no_match_policy": NoMatchPolicy.SKIP})
        )
        select_page.elements[selectors.CHOICE] = [FakeElement("kat")]

        runner.run_exercise(select_page)

        assert select_page.elements[selectors.CHOICE][0].clicks == 0
        assert select_page.elements[selectors.SKIP_BUTTON][0].clicks == 1

    def test_no_match_abort_policy(self, cache, config, select_page):
        runner = ExerciseRunner(
            cache, config.model_copy(update={"no_match_policy": NoMatchPolicy.ABORT})
        )
        select_page.elements[selectors.CHOICE] = [FakeElement("kat")]

        with pytest.raises(NoConfidentMatchError):
            runner.run_exercise(select_page)

    def test_match_clicks_pairs_across_halves(self, runner, provider):
        provider.translations.update({("hond", "nl", "en"): "dog", ("kat", "nl", "en"): "cat"})
        cards = [FakeElement(text) for text in ["hond", "kat", "cat", "dog"]]
        clicked = []
        for card in cards:
            card.on_click = lambda card=card: clicked.append(card.text())
        page = FakePage(
            {
                selectors.CHALLENGE: [marker("challenge challenge-match")],
                selectors.TAP_TOKEN: cards,
            }
        )

        outcome = runner.run_exercise(page)

        assert outcome.plan.pairs == ((0, 1), (1, 0))
        assert clicked == ["hond", "dog", "kat", "cat"]


class TestTyping:
    @pytest.fixture
    def translate_page(self, provider):
        provider.translations[("Goede nacht", "nl", "en")] = "Good night"
        return FakePage(
            {
                selectors.CHALLENGE: [marker("challenge challenge-translate")],
                selectors.CHALLENGE_HEADER: [FakeElement("Write this in English")],
                selectors.HINT_TOKEN: [FakeElement("Goede"), FakeElement("nacht")],
                selectors.TRANSLATE_INPUT: [FakeElement()],
                selectors.NEXT_BUTTON: [FakeElement()],
            }
        )

    def test_types_one_character_at_a_time(self, cache, config, sleeps, translate_page):
        runner = ExerciseRunner(
            cache, config.model_copy(update={"keystroke_delay": 0.01}), sleep=sleeps.append
        )

        outcome = runner.run_exercise(translate_page)

        field = translate_page.elements[selectors.TRANSLATE_INPUT][0]
        assert field.keys == list("Good night")
        assert sleeps == [0.01] * len("Good night")
        assert outcome.reference is None

    def test_reads_reference_after_incorrect_answer(self, runner, translate_page):
        translate_page.elements[selectors.INCORRECT_BANNER] = [FakeElement()]
        translate_page.elements[selectors.REFERENCE_SOLUTION] = [FakeElement("Good night!")]

        outcome = runner.run_exercise(translate_page)

        assert outcome.reference == "Good night!"
        assert outcome.state is ExerciseState.ADVANCED

    def test_partial_reverse_translate_types_remainder(self, runner, provider):
        provider.languages["Ik ben blij"] = "nl"
        provider.translations[("Ik ben blij", "nl", "en")] = "I am happy"
        field = FakeElement()
        page = FakePage(
            {
                selectors.CHALLENGE: [marker("challenge challenge-partialReverseTranslate")],
                selectors.HINT_TOKEN: [FakeElement(word) for word in ["Ik", "ben", "blij"]],
                selectors.PARTIAL_REMAINDER: [FakeElement("am happy")],
                selectors.PARTIAL_INPUT: [field],
                selectors.NEXT_BUTTON: [FakeElement()],
            }
        )

        outcome = runner.run_exercise(page)

        assert field.typed == "am happy"
        assert isinstance(outcome.plan, TypeTextPlan)

    def test_missing_input_field(self, runner, translate_page):
        del translate_page.elements[selectors.TRANSLATE_INPUT]

        with pytest.raises(PageElementMissingError):
            runner.run_exercise(translate_page)


def test_run_lesson_stops_when_page_leaves_lesson(runner, select_page):
    button = select_page.elements[selectors.NEXT_BUTTON][0]

    def on_next():
        # submit + continue per exercise; leave after the third exercise
        if button.clicks == 6:
            select_page.url = "https://www.duolingo.com/learn"

    button.on_click = on_next

    outcomes = runner.run_lesson(select_page)

    assert len(outcomes) == 3
    assert all(outcome.state is ExerciseState.ADVANCED for outcome in outcomes)
