"""Service coordinating one quiz session from first question to final score."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import random
import time
from typing import Callable, Protocol

from quiz_master.constants.quiz_constants import DEFAULT_TIME_LIMIT_SECONDS, SESSION_QUESTION_COUNT
from quiz_master.core.models import Difficulty, Question, ScoreEntry, SessionTally
from quiz_master.core.progress_store import ProgressStore, SessionProgress
from quiz_master.core.services.lifelines import ALL_OPTIONS, ActiveQuestion, LifelineService, LifelineState
from quiz_master.core.services.question_repository import QuestionRepository
from quiz_master.core.services.question_selector import (
    arrange_options,
    restore_questions,
    select_questions,
)
from quiz_master.core.services.question_timer import KeySource, QuestionTimer, QuestionView
from quiz_master.core.services.scoreboard import Scoreboard
from quiz_master.core.services.scoring import ScoreChange, apply_outcome
from quiz_master.core.services.session_log import SessionLog

logger = logging.getLogger(__name__)

# Placeholder in ``question_order`` for slots played before an order was recorded.
UNKNOWN_QUESTION: int = -1


class SessionView(QuestionView, Protocol):
    def show_score_change(self, change: ScoreChange, question: Question, streak: int) -> None: ...


@dataclass(frozen=True, slots=True)
class SessionSummary:
    player_name: str
    display_score: int
    correct_count: int
    wrong_count: int
    entry: ScoreEntry


class GameSession:
    """Owns the state of an active quiz: questions, tally, lifelines and snapshot."""

    def __init__(
        self,
        repository: QuestionRepository,
        progress_store: ProgressStore,
        scoreboard: Scoreboard,
        session_log: SessionLog,
        *,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.monotonic,
        wall_clock: Callable[[], float] = time.time,
    ) -> None:
        self._repository = repository
        self._progress_store = progress_store
        self._scoreboard = scoreboard
        self._session_log = session_log
        self._rng = rng or random.Random()
        self._clock = clock
        self._wall_clock = wall_clock

        self._active: bool = False
        self._progress: SessionProgress | None = None
        self._tally = SessionTally()
        self._lifeline_state = LifelineState()
        self._lifelines = LifelineService(self._lifeline_state, repository, self._rng)
        self._queue: list[tuple[int, Question]] = []
        self._current: ActiveQuestion | None = None
        self._current_position: int = -1
        self._pending_time_limit: int = DEFAULT_TIME_LIMIT_SECONDS
        self._pending_visible_options: tuple[int, ...] = ALL_OPTIONS

    # --- Lifecycle ---

    def start_session(
        self,
        player_name: str,
        difficulty: Difficulty,
        category_key: str | None = None,
        session_size: int = SESSION_QUESTION_COUNT,
    ) -> None:
        questions = select_questions(self._repository, difficulty, session_size, self._rng)
        self._lifeline_state.reset()
        self._tally = SessionTally()
        self._queue = list(enumerate(questions))
        self._pending_time_limit = DEFAULT_TIME_LIMIT_SECONDS
        self._pending_visible_options = ALL_OPTIONS
        self._progress = SessionProgress(
            player_name=player_name,
            category=category_key,
            difficulty=difficulty,
            question_order=[question.source_index for question in questions],
        )
        self._active = True
        logger.info(
            "Session started for %s: %d %s questions",
            player_name,
            len(questions),
            difficulty.label,
        )
        self._write_snapshot()

    def resume_session(
        self,
        progress: SessionProgress,
        difficulty: Difficulty | None = None,
        session_size: int = SESSION_QUESTION_COUNT,
    ) -> None:
        """Continue a saved session at its first unattempted position.

        The saved question order is replayed when the snapshot carries one,
        and it fixes the round length: once every recorded slot has been
        attempted nothing more is queued. Without an order the remaining slots
        are filled with a fresh selection.
        """
        done = progress.attempt_count
        saved_order = progress.question_order
        visible_options = ALL_OPTIONS
        layout_restored = False
        if saved_order and UNKNOWN_QUESTION not in saved_order[done:]:
            upcoming = restore_questions(self._repository, saved_order[done:], self._rng)
            order = list(saved_order)
            if upcoming and progress.current_option_order:
                # The question paused in the lifeline menu comes back as it was shown.
                upcoming[0] = arrange_options(
                    self._repository.get_question_at_index(saved_order[done]),
                    progress.current_option_order,
                )
                visible_options = tuple(progress.current_visible_options) or ALL_OPTIONS
                layout_restored = True
        else:
            level = difficulty or progress.difficulty or Difficulty.EASY
            remaining_slots = max(0, session_size - done)
            upcoming = (
                select_questions(self._repository, level, remaining_slots, self._rng)
                if remaining_slots
                else []
            )
            order = [UNKNOWN_QUESTION] * done + [question.source_index for question in upcoming]

        update: dict[str, object] = {"question_order": order}
        if not layout_restored:
            update.update(current_option_order=[], current_visible_options=[])
        self._progress = progress.model_copy(update=update, deep=True)
        self._tally = progress.to_tally()
        self._lifeline_state = LifelineState.from_flags(progress.lifelines_available)
        self._lifelines = LifelineService(self._lifeline_state, self._repository, self._rng)
        self._queue = [(done + offset, question) for offset, question in enumerate(upcoming)]
        self._pending_time_limit = progress.remaining_seconds_for_current or DEFAULT_TIME_LIMIT_SECONDS
        self._pending_visible_options = visible_options
        self._active = True
        logger.info(
            "Session resumed for %s at question %d with %ds on the clock",
            progress.player_name,
            done + 1,
            self._pending_time_limit,
        )
        self._write_snapshot()

    def play(self, keys: KeySource, view: SessionView) -> SessionSummary:
        while self.has_next_question():
            self.play_next_question(keys, view)
        return self.finish_session()

    def play_next_question(self, keys: KeySource, view: SessionView) -> ScoreChange:
        if not self._active or not self._queue:
            raise RuntimeError("No question left to play.")
        position, question = self._queue.pop(0)
        # A carried-over time limit and option filter apply to the first question after resume only.
        time_limit, self._pending_time_limit = self._pending_time_limit, DEFAULT_TIME_LIMIT_SECONDS
        visible_options, self._pending_visible_options = self._pending_visible_options, ALL_OPTIONS
        self._current = ActiveQuestion(question, visible_options=visible_options)
        self._current_position = position

        timer = QuestionTimer(
            self._current, self._lifelines, clock=self._clock, on_checkpoint=self._checkpoint
        )
        timer.start(time_limit)
        outcome = timer.run(keys, view, number=position + 1)

        change = apply_outcome(self._tally, outcome)
        assert self._progress is not None
        self._progress.record_attempt(position, outcome.answer_code)
        self._progress.clear_current_question()
        self._current = None
        self._write_snapshot()
        view.show_score_change(change, outcome.question, self._tally.streak)
        return change

    def finish_session(self) -> SessionSummary:
        if not self._active or self._progress is None:
            raise RuntimeError("No active session.")
        display_score = self._tally.display_score
        entry = self._scoreboard.record_score(self._progress.player_name, display_score)
        self._session_log.append(self._progress)
        self._progress_store.delete()
        self._active = False
        logger.info("Session finished for %s with %d points", self._progress.player_name, display_score)
        return SessionSummary(
            player_name=self._progress.player_name,
            display_score=display_score,
            correct_count=self._tally.correct_count,
            wrong_count=self._tally.wrong_count,
            entry=entry,
        )

    # --- Queries ---

    def is_active(self) -> bool:
        return self._active

    def has_next_question(self) -> bool:
        return self._active and bool(self._queue)

    def get_remaining_question_count(self) -> int:
        return len(self._queue)

    def get_tally(self) -> SessionTally:
        return self._tally

    def get_progress(self) -> SessionProgress | None:
        return self._progress

    def get_lifeline_state(self) -> LifelineState:
        return self._lifeline_state

    def get_upcoming_questions(self) -> list[Question]:
        return [question for _, question in self._queue]

    # --- Persistence ---

    def _checkpoint(self, remaining_seconds: int) -> None:
        assert self._progress is not None and self._current is not None
        self._progress.remaining_seconds_for_current = remaining_seconds
        self._progress.current_option_order = list(self._current.question.option_order)
        self._progress.current_visible_options = list(self._current.visible_options)
        # A replaced question is what a resume should bring back.
        order = list(self._progress.question_order)
        if 0 <= self._current_position < len(order):
            order[self._current_position] = self._current.question.source_index
            self._progress.question_order = order
        self._write_snapshot()

    def _write_snapshot(self) -> None:
        assert self._progress is not None
        self._progress.apply_tally(self._tally)
        self._progress.lifelines_available = self._lifeline_state.to_flags()
        self._progress.timestamp = int(self._wall_clock())
        self._progress_store.save(self._progress)
