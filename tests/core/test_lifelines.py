"""
Unit Tests for lifeline availability and effects.
"""

import random

import pytest

from conftest import make_question
from quiz_master.core.models import LifelineKind
from quiz_master.core.services.lifelines import (
    ALL_OPTIONS,
    ActiveQuestion,
    LifelineService,
    LifelineState,
    LifelineStatus,
    whole_seconds,
)
from quiz_master.core.services.question_repository import QuestionRepository


@pytest.fixture
def state():
    return LifelineState()


@pytest.fixture
def service(state, repository, rng):
    return LifelineService(state, repository, rng)


class TestLifelineState:
    """Tests for LifelineState."""

    def test_init_when_new_then_all_available(self, state):
        assert state.available_kinds() == list(LifelineKind)

    def test_consume_when_called_then_only_that_kind_unavailable(self, state):
        state.consume(LifelineKind.SKIP)
        assert not state.is_available(LifelineKind.SKIP)
        assert state.is_available(LifelineKind.FILTER_OPTIONS)

    def test_reset_when_called_then_all_available_again(self, state):
        for kind in LifelineKind:
            state.consume(kind)
        state.reset()
        assert state.to_flags() == [True, True, True, True]

    def test_from_flags_when_restored_then_matches(self):
        restored = LifelineState.from_flags([True, False, True, False])
        assert restored.available_kinds() == [LifelineKind.FILTER_OPTIONS, LifelineKind.REPLACE_QUESTION]


class TestFilterOptions:
    """Tests for the 50/50 lifeline."""

    def test_filter_when_applied_then_correct_and_one_wrong_visible(self, repository):
        for seed in range(50):
            active = ActiveQuestion(make_question(correct_index=seed % 4))
            service = LifelineService(LifelineState(), repository, random.Random(seed))

            result = service.invoke(LifelineKind.FILTER_OPTIONS, active)

            assert result.applied
            assert len(active.visible_options) == 2
            assert active.question.correct_index in active.visible_options

    def test_filter_when_applied_then_lifeline_consumed(self, service, state):
        service.invoke(LifelineKind.FILTER_OPTIONS, ActiveQuestion(make_question()))
        assert not state.is_available(LifelineKind.FILTER_OPTIONS)

    def test_filter_when_used_twice_then_second_rejected_without_effect(self, service):
        first = ActiveQuestion(make_question())
        service.invoke(LifelineKind.FILTER_OPTIONS, first)
        second = ActiveQuestion(make_question())

        result = service.invoke(LifelineKind.FILTER_OPTIONS, second)

        assert result.status is LifelineStatus.ALREADY_USED
        assert "already used" in result.message
        assert second.visible_options == ALL_OPTIONS


class TestReplaceQuestion:
    """Tests for the replace lifeline."""

    def test_replace_when_applied_then_different_question_and_all_visible(self, service, repository):
        current = repository.get_question_at_index(0)
        active = ActiveQuestion(current, visible_options=(0, 1), remaining_seconds=6.5)

        result = service.invoke(LifelineKind.REPLACE_QUESTION, active)

        assert result.applied
        assert active.question.text != current.text
        assert active.visible_options == ALL_OPTIONS
        assert active.remaining_seconds == 6.5

    def test_replace_when_applied_then_correct_index_tracks_new_options(self, service, repository):
        active = ActiveQuestion(repository.get_question_at_index(0))
        service.invoke(LifelineKind.REPLACE_QUESTION, active)

        original = repository.get_question_at_index(active.question.source_index)
        assert active.question.correct_option_text == original.options[original.original_correct_index]

    def test_replace_when_only_same_text_available_then_rejected_and_unchanged(self, state, rng):
        question = make_question()
        service = LifelineService(state, QuestionRepository([question]), rng)
        active = ActiveQuestion(question, visible_options=(1, 3))

        result = service.invoke(LifelineKind.REPLACE_QUESTION, active)

        assert result.status is LifelineStatus.REJECTED
        assert result.message == "No replacement found."
        assert active.question is question
        assert active.visible_options == (1, 3)
        assert not state.is_available(LifelineKind.REPLACE_QUESTION)


class TestExtraTime:
    """Tests for the extra time lifeline."""

    def test_extra_time_when_time_left_then_adds_bonus(self, service):
        active = ActiveQuestion(make_question(), remaining_seconds=4.0)
        result = service.invoke(LifelineKind.EXTRA_TIME, active)
        assert result.applied
        assert active.remaining_seconds == 14.0

    def test_extra_time_when_expired_then_rejected_and_still_available(self, service, state):
        active = ActiveQuestion(make_question(), remaining_seconds=0.0)

        result = service.invoke(LifelineKind.EXTRA_TIME, active)

        assert result.status is LifelineStatus.REJECTED
        assert active.remaining_seconds == 0.0
        assert state.is_available(LifelineKind.EXTRA_TIME)

    def test_extra_time_when_displayed_countdown_is_zero_then_rejected(self, service, state):
        """A sliver of time that the countdown shows as 0 counts as expired."""
        active = ActiveQuestion(make_question(), remaining_seconds=0.0004)

        result = service.invoke(LifelineKind.EXTRA_TIME, active)

        assert whole_seconds(active.remaining_seconds) == 0
        assert result.status is LifelineStatus.REJECTED
        assert state.is_available(LifelineKind.EXTRA_TIME)

    @pytest.mark.parametrize(
        "seconds, shown",
        [(-1.0, 0), (0.0, 0), (0.0004, 0), (0.2, 1), (6.9999999, 7), (7.0000001, 7), (7.01, 8)],
    )
    def test_whole_seconds_when_rounded_then_matches_countdown(self, seconds, shown):
        assert whole_seconds(seconds) == shown

    def test_extra_time_when_used_twice_then_second_adds_nothing(self, service):
        active = ActiveQuestion(make_question(), remaining_seconds=3.0)
        service.invoke(LifelineKind.EXTRA_TIME, active)
        result = service.invoke(LifelineKind.EXTRA_TIME, active)
        assert result.status is LifelineStatus.ALREADY_USED
        assert active.remaining_seconds == 13.0


class TestSkip:
    """Tests for the skip lifeline."""

    def test_skip_when_used_twice_then_second_rejected(self, service, state):
        active = ActiveQuestion(make_question())
        assert service.invoke(LifelineKind.SKIP, active).applied
        assert service.invoke(LifelineKind.SKIP, active).status is LifelineStatus.ALREADY_USED
        assert state.available_kinds() == [
            LifelineKind.FILTER_OPTIONS,
            LifelineKind.REPLACE_QUESTION,
            LifelineKind.EXTRA_TIME,
        ]
