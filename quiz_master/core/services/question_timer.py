"""Countdown state machine for a single question.

A question moves through ``PRESENTING -> AWAITING_INPUT <-> LIFELINE_MENU ->
RESOLVED``. While awaiting input the countdown runs against a monotonic
deadline; opening the lifeline menu captures the remaining time and stops the
clock, and leaving the menu rebuilds the deadline from the captured value.
The timer only records the outcome. Grading and scoring belong to the
session coordinator.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
import logging
import time
from typing import Callable, Protocol

from quiz_master.constants.quiz_constants import (
    DEFAULT_TIME_LIMIT_SECONDS,
    OPTION_COUNT,
    POLL_INTERVAL_SECONDS,
)
from quiz_master.constants.ui_constants import LIFELINE_CANCELLED_MESSAGE
from quiz_master.core.models import LifelineKind, Question
from quiz_master.core.services.lifelines import (
    ActiveQuestion,
    LifelineResult,
    LifelineService,
    whole_seconds,
)

logger = logging.getLogger(__name__)

UNANSWERED: int = 0

_ANSWER_KEYS = {str(number): number for number in range(1, OPTION_COUNT + 1)}
_LIFELINE_KEYS = {"l", "L"}
_SKIP_KEYS = {"s", "S"}


class TimerState(Enum):
    PRESENTING = auto()
    AWAITING_INPUT = auto()
    LIFELINE_MENU = auto()
    RESOLVED = auto()


class Resolution(Enum):
    ANSWERED = auto()
    TIMED_OUT = auto()
    SKIPPED = auto()


@dataclass(frozen=True, slots=True)
class QuestionOutcome:
    """Terminal result of one question. ``question`` is the one finally shown."""

    resolution: Resolution
    answer_code: int
    question: Question


class KeySource(Protocol):
    def read_key(self, timeout: float) -> str | None:
        """Wait up to ``timeout`` seconds for one key press."""


class QuestionView(Protocol):
    def show_question(
        self, number: int, active: ActiveQuestion, available: list[LifelineKind]
    ) -> None: ...

    def show_remaining(self, seconds: int) -> None: ...

    def show_message(self, message: str) -> None: ...

    def show_timeout(self, correct_option_text: str) -> None: ...

    def prompt_lifeline(self, available: list[LifelineKind]) -> LifelineKind | None: ...


class QuestionTimer:
    """Drives one question to exactly one :class:`QuestionOutcome`."""

    def __init__(
        self,
        active: ActiveQuestion,
        lifelines: LifelineService,
        *,
        clock: Callable[[], float] = time.monotonic,
        on_checkpoint: Callable[[int], None] | None = None,
    ) -> None:
        self._active = active
        self._lifelines = lifelines
        self._clock = clock
        self._on_checkpoint = on_checkpoint
        self._state = TimerState.PRESENTING
        self._deadline: float = 0.0
        self._outcome: QuestionOutcome | None = None

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def outcome(self) -> QuestionOutcome | None:
        return self._outcome

    def start(self, remaining_seconds: float = DEFAULT_TIME_LIMIT_SECONDS) -> None:
        if self._state is not TimerState.PRESENTING:
            raise RuntimeError("Question timer already started.")
        self._active.remaining_seconds = float(remaining_seconds)
        self._resume_countdown()

    def remaining_seconds(self) -> int:
        """Whole seconds left, rounded up and never negative."""
        if self._state is TimerState.AWAITING_INPUT:
            return whole_seconds(self._deadline - self._clock())
        if self._state is TimerState.RESOLVED:
            return 0
        return whole_seconds(self._active.remaining_seconds)

    def poll(self) -> bool:
        """Resolve as timed out once the deadline has passed. Returns True when resolved."""
        if self._state is TimerState.AWAITING_INPUT and self._clock() >= self._deadline:
            self._resolve(Resolution.TIMED_OUT, UNANSWERED)
        return self._state is TimerState.RESOLVED

    def handle_key(self, key: str) -> LifelineResult | None:
        if self._state is not TimerState.AWAITING_INPUT:
            return None
        if key in _ANSWER_KEYS:
            self._resolve(Resolution.ANSWERED, _ANSWER_KEYS[key])
        elif key in _LIFELINE_KEYS:
            self._pause()
        elif key in _SKIP_KEYS:
            result = self._lifelines.invoke(LifelineKind.SKIP, self._active)
            if result.applied:
                self._resolve(Resolution.SKIPPED, UNANSWERED)
            return result
        return None

    def choose_lifeline(self, kind: LifelineKind | None) -> LifelineResult | None:
        """Apply the lifeline picked from the menu, or cancel with ``None``."""
        if self._state is not TimerState.LIFELINE_MENU:
            raise RuntimeError("Lifeline menu is not open.")
        result = None
        if kind is not None:
            result = self._lifelines.invoke(kind, self._active)
            if kind is LifelineKind.SKIP and result.applied:
                self._resolve(Resolution.SKIPPED, UNANSWERED)
                return result
        self._resume_countdown()
        self._checkpoint()
        return result

    def run(
        self,
        keys: KeySource,
        view: QuestionView,
        number: int,
        poll_interval: float = POLL_INTERVAL_SECONDS,
    ) -> QuestionOutcome:
        """Present the question and poll input against the deadline until resolved."""
        if self._state is TimerState.PRESENTING:
            self.start()
        view.show_question(number, self._active, self._lifelines.state.available_kinds())
        while not self.poll():
            view.show_remaining(self.remaining_seconds())
            key = keys.read_key(poll_interval)
            # Expiry takes priority over a key read in the same iteration.
            if key is None or self.poll():
                continue
            result = self.handle_key(key)
            if result is not None:
                view.show_message(result.message)
            if self._state is TimerState.LIFELINE_MENU:
                choice = view.prompt_lifeline(self._lifelines.state.available_kinds())
                result = self.choose_lifeline(choice)
                view.show_message(result.message if result else LIFELINE_CANCELLED_MESSAGE)
                if self._state is not TimerState.RESOLVED:
                    view.show_question(
                        number, self._active, self._lifelines.state.available_kinds()
                    )

        assert self._outcome is not None
        if self._outcome.resolution is Resolution.TIMED_OUT:
            view.show_timeout(self._outcome.question.correct_option_text)
        return self._outcome

    def _pause(self) -> None:
        self._active.remaining_seconds = max(0.0, self._deadline - self._clock())
        self._state = TimerState.LIFELINE_MENU
        self._checkpoint()

    def _resume_countdown(self) -> None:
        self._deadline = self._clock() + self._active.remaining_seconds
        self._state = TimerState.AWAITING_INPUT

    def _checkpoint(self) -> None:
        if self._on_checkpoint is not None:
            self._on_checkpoint(self.remaining_seconds())

    def _resolve(self, resolution: Resolution, answer_code: int) -> None:
        self._active.remaining_seconds = 0.0
        self._state = TimerState.RESOLVED
        self._outcome = QuestionOutcome(resolution, answer_code, self._active.question)
        logger.debug("Question resolved: %s (answer %d)", resolution.name, answer_code)
