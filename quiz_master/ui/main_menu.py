"""Main menu loop tying the console view to the quiz manager."""

from __future__ import annotations

import logging

from quiz_master.constants.ui_constants import (
    CORRUPT_SAVE_MESSAGE,
    MENU_EXIT,
    MENU_HIGH_SCORES,
    MENU_RESUME_QUIZ,
    MENU_START_QUIZ,
    NO_SAVED_PROGRESS_MESSAGE,
    RETURN_TO_MENU_PROMPT,
    START_QUIZ_PROMPT,
)
from quiz_master.core.errors import CorruptSaveError, QuizMasterError
from quiz_master.core.quiz_manager import QuizManager
from quiz_master.core.services.game_session import GameSession
from quiz_master.ui.console import ConsoleView
from quiz_master.ui.keyboard import TerminalKeyboard

logger = logging.getLogger(__name__)


class MainMenu:
    """Start, resume, high scores and exit, until the player leaves."""

    def __init__(self, quiz_manager: QuizManager, view: ConsoleView, keyboard: TerminalKeyboard) -> None:
        self.quiz_manager = quiz_manager
        self._view = view
        self._keyboard = keyboard

    def run(self) -> None:
        while True:
            choice = self._view.prompt_main_menu()
            if choice == MENU_START_QUIZ:
                self._handle_start_quiz()
            elif choice == MENU_HIGH_SCORES:
                self._handle_high_scores()
            elif choice == MENU_RESUME_QUIZ:
                self._handle_resume_quiz()
            elif choice == MENU_EXIT and self._view.confirm_exit():
                self._view.write("Goodbye!")
                return

    def _handle_start_quiz(self) -> None:
        category = self._view.prompt_category()
        try:
            repository = self.quiz_manager.load_repository(category)
            player_name = self._view.prompt_player_name()
            difficulty = self._view.prompt_difficulty()
            session = self.quiz_manager.start_quiz(repository, category, player_name, difficulty)
        except QuizMasterError as exc:
            logger.warning("Could not start quiz: %s", exc)
            self._view.show_error(f"{exc}\nCheck the question file and its format.")
            self._view.wait_for_enter(RETURN_TO_MENU_PROMPT)
            return
        self._play(session)

    def _handle_high_scores(self) -> None:
        self._view.show_high_scores(self.quiz_manager.get_top_scorers())
        self._view.wait_for_enter(f"\n{RETURN_TO_MENU_PROMPT}")

    def _handle_resume_quiz(self) -> None:
        try:
            progress = self.quiz_manager.load_saved_progress()
        except CorruptSaveError as exc:
            logger.warning("Ignoring unreadable save file: %s", exc)
            self._view.show_error(CORRUPT_SAVE_MESSAGE)
            progress = None
        if progress is None:
            self._view.show_message(NO_SAVED_PROGRESS_MESSAGE)
            self._view.wait_for_enter(RETURN_TO_MENU_PROMPT)
            return

        self._view.show_resume_info(progress)
        category = self.quiz_manager.saved_category(progress)
        if category is None:
            self._view.show_message("Pick the category you were playing.")
            category = self._view.prompt_category()
        difficulty = progress.difficulty
        try:
            repository = self.quiz_manager.load_repository(category)
            if difficulty is None and not progress.question_order:
                difficulty = self._view.prompt_difficulty()
            session = self.quiz_manager.resume_quiz(repository, progress, category, difficulty)
        except QuizMasterError as exc:
            logger.warning("Could not resume quiz: %s", exc)
            self._view.show_error(str(exc))
            self._view.wait_for_enter(RETURN_TO_MENU_PROMPT)
            return
        self._play(session)

    def _play(self, session: GameSession) -> None:
        self._view.wait_for_enter(f"\n{START_QUIZ_PROMPT}")
        with self._keyboard.capture():
            summary = session.play(self._keyboard, self._view)
        self._view.show_summary(summary)
        self._view.wait_for_enter(RETURN_TO_MENU_PROMPT)
