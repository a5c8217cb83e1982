"""Business logic behind the main menu: starting, resuming and scoring quizzes."""

from __future__ import annotations

import logging
import random
import time
from typing import Callable

from quiz_master.constants.file_constants import AppPaths, Category, find_category
from quiz_master.core.models import Difficulty, ScoreEntry
from quiz_master.core.progress_store import ProgressStore, SessionProgress
from quiz_master.core.question_importer import load_questions_from_file
from quiz_master.core.services.game_session import GameSession
from quiz_master.core.services.question_repository import QuestionRepository
from quiz_master.core.services.scoreboard import Scoreboard
from quiz_master.core.services.session_log import SessionLog

logger = logging.getLogger(__name__)


class QuizManager:
    """Facade for quiz services: question files, sessions, save file and scores."""

    def __init__(
        self,
        paths: AppPaths,
        *,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._paths = paths
        self._rng = rng or random.Random()
        self._clock = clock

        # Services
        self._progress_store = ProgressStore(paths.save_file)
        self._scoreboard = Scoreboard(paths.high_score_file)
        self._session_log = SessionLog(paths.session_log_file)

    # --- Question Repository ---

    def load_repository(self, category: Category) -> QuestionRepository:
        """Parse the category file; raises ``QuestionImportError`` when it is unusable."""
        imported = load_questions_from_file(self._paths.category_file(category))
        return QuestionRepository(imported.questions)

    # --- Sessions ---

    def start_quiz(
        self,
        repository: QuestionRepository,
        category: Category,
        player_name: str,
        difficulty: Difficulty,
    ) -> GameSession:
        session = self._new_session(repository)
        session.start_session(player_name, difficulty, category_key=category.key)
        return session

    def load_saved_progress(self) -> SessionProgress | None:
        """Return the saved snapshot, ``None`` if there is none; raises ``CorruptSaveError``."""
        return self._progress_store.load()

    def saved_category(self, progress: SessionProgress) -> Category | None:
        return find_category(progress.category) if progress.category else None

    def resume_quiz(
        self,
        repository: QuestionRepository,
        progress: SessionProgress,
        category: Category,
        difficulty: Difficulty | None = None,
    ) -> GameSession:
        session = self._new_session(repository)
        if progress.category is None:
            progress = progress.model_copy(update={"category": category.key})
        session.resume_session(progress, difficulty=difficulty)
        return session

    # --- Scoreboard ---

    def get_top_scorers(self) -> list[ScoreEntry]:
        return self._scoreboard.get_top_scorers()

    def _new_session(self, repository: QuestionRepository) -> GameSession:
        return GameSession(
            repository,
            self._progress_store,
            self._scoreboard,
            self._session_log,
            rng=self._rng,
            clock=self._clock,
        )
