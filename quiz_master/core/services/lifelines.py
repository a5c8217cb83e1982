"""Lifeline availability tracking and the four lifeline operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
import logging
import math
import random
from typing import Sequence

from quiz_master.constants.quiz_constants import EXTRA_TIME_SECONDS, OPTION_COUNT
from quiz_master.core.models import LifelineKind, Question
from quiz_master.core.services.question_repository import QuestionRepository
from quiz_master.core.services.question_selector import shuffle_options

logger = logging.getLogger(__name__)

ALL_OPTIONS: tuple[int, ...] = tuple(range(OPTION_COUNT))


def whole_seconds(seconds: float) -> int:
    """Seconds as shown to the player: rounded up, never negative."""
    # Millisecond rounding first, so 6.9999999 and 7.0000001 both read as 7.
    return math.ceil(round(max(0.0, seconds), 3))


class LifelineStatus(Enum):
    APPLIED = auto()
    ALREADY_USED = auto()
    REJECTED = auto()


@dataclass(frozen=True, slots=True)
class LifelineResult:
    """Outcome of one lifeline invocation, with a message for the player."""

    kind: LifelineKind
    status: LifelineStatus
    message: str

    @property
    def applied(self) -> bool:
        return self.status is LifelineStatus.APPLIED


@dataclass(slots=True)
class LifelineState:
    """Per-session availability flags. A consumed lifeline never comes back."""

    _available: dict[LifelineKind, bool] = field(
        default_factory=lambda: {kind: True for kind in LifelineKind}
    )

    def is_available(self, kind: LifelineKind) -> bool:
        return self._available[kind]

    def consume(self, kind: LifelineKind) -> None:
        self._available[kind] = False

    def available_kinds(self) -> list[LifelineKind]:
        return [kind for kind in LifelineKind if self._available[kind]]

    def reset(self) -> None:
        for kind in LifelineKind:
            self._available[kind] = True

    def to_flags(self) -> list[bool]:
        return [self._available[kind] for kind in LifelineKind]

    @classmethod
    def from_flags(cls, flags: Sequence[bool]) -> "LifelineState":
        state = cls()
        for kind, available in zip(LifelineKind, flags):
            if not available:
                state.consume(kind)
        return state


@dataclass(slots=True)
class ActiveQuestion:
    """The in-flight question of a session slot.

    ``remaining_seconds`` holds the countdown captured when the timer paused;
    the timer rebuilds its deadline from it when play resumes.
    """

    question: Question
    visible_options: tuple[int, ...] = ALL_OPTIONS
    remaining_seconds: float = 0.0


class LifelineService:
    """Applies lifelines to the active question of a session."""

    def __init__(
        self,
        state: LifelineState,
        repository: QuestionRepository,
        rng: random.Random | None = None,
        extra_time_seconds: int = EXTRA_TIME_SECONDS,
    ) -> None:
        self._state = state
        self._repository = repository
        self._rng = rng or random.Random()
        self._extra_time_seconds = extra_time_seconds

    @property
    def state(self) -> LifelineState:
        return self._state

    def invoke(self, kind: LifelineKind, active: ActiveQuestion) -> LifelineResult:
        if not self._state.is_available(kind):
            return LifelineResult(kind, LifelineStatus.ALREADY_USED, f"{kind.label} already used.")
        handler = {
            LifelineKind.FILTER_OPTIONS: self._filter_options,
            LifelineKind.SKIP: self._skip,
            LifelineKind.REPLACE_QUESTION: self._replace_question,
            LifelineKind.EXTRA_TIME: self._extra_time,
        }[kind]
        result = handler(active)
        logger.info("Lifeline %s: %s", kind.name, result.status.name)
        return result

    def _filter_options(self, active: ActiveQuestion) -> LifelineResult:
        self._state.consume(LifelineKind.FILTER_OPTIONS)
        correct = active.question.correct_index
        wrong = [index for index in ALL_OPTIONS if index != correct]
        active.visible_options = tuple(sorted((correct, self._rng.choice(wrong))))
        return LifelineResult(
            LifelineKind.FILTER_OPTIONS,
            LifelineStatus.APPLIED,
            "50/50 used. Two wrong options removed.",
        )

    def _skip(self, active: ActiveQuestion) -> LifelineResult:
        self._state.consume(LifelineKind.SKIP)
        return LifelineResult(
            LifelineKind.SKIP, LifelineStatus.APPLIED, "Question skipped. Moving to next question."
        )

    def _replace_question(self, active: ActiveQuestion) -> LifelineResult:
        # Consumed even when no replacement turns up.
        self._state.consume(LifelineKind.REPLACE_QUESTION)
        for _ in range(self._repository.get_question_count()):
            candidate = self._repository.random_question(self._rng)
            if candidate.text != active.question.text:
                active.question = shuffle_options(candidate, self._rng)
                active.visible_options = ALL_OPTIONS
                return LifelineResult(
                    LifelineKind.REPLACE_QUESTION,
                    LifelineStatus.APPLIED,
                    "Question replaced. Remaining time preserved.",
                )
        return LifelineResult(
            LifelineKind.REPLACE_QUESTION, LifelineStatus.REJECTED, "No replacement found."
        )

    def _extra_time(self, active: ActiveQuestion) -> LifelineResult:
        if whole_seconds(active.remaining_seconds) <= 0:
            return LifelineResult(
                LifelineKind.EXTRA_TIME,
                LifelineStatus.REJECTED,
                "Cannot use Extra Time: question already expired.",
            )
        self._state.consume(LifelineKind.EXTRA_TIME)
        active.remaining_seconds += self._extra_time_seconds
        return LifelineResult(
            LifelineKind.EXTRA_TIME,
            LifelineStatus.APPLIED,
            f"Extra Time applied. +{self._extra_time_seconds}s added.",
        )
