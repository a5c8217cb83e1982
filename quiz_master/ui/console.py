"""Plain-text rendering and prompts for the terminal game."""

from __future__ import annotations

from contextlib import nullcontext
import sys
from typing import Callable, ContextManager, TextIO

from quiz_master.constants.file_constants import CATEGORIES, Category
from quiz_master.constants.quiz_constants import DEFAULT_PLAYER_NAME
from quiz_master.constants.ui_constants import (
    BANNER_RULE,
    HIDDEN_OPTION_TEXT,
    HIGH_SCORES_TITLE,
    LIFELINE_DESCRIPTIONS,
    LIFELINE_MENU_TITLE,
    MAIN_MENU_OPTIONS,
    NO_HIGH_SCORES_MESSAGE,
    QUESTION_HINT,
    WELCOME_TITLE,
)
from quiz_master.core.models import Difficulty, LifelineKind, Question, ScoreEntry
from quiz_master.core.progress_store import SessionProgress
from quiz_master.core.services.game_session import SessionSummary
from quiz_master.core.services.lifelines import ActiveQuestion
from quiz_master.core.services.scoring import Grade, ScoreChange


class ConsoleView:
    """Writes the game to a text stream and reads numbered choices from another.

    ``release_keys`` wraps every line-based prompt so a keyboard in cbreak
    mode hands the terminal back while the player types a full line.
    """

    def __init__(
        self,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        release_keys: Callable[[], ContextManager[None]] | None = None,
    ) -> None:
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._release_keys = release_keys or nullcontext
        self._countdown_shown = False

    # --- Low-level I/O ---

    def write(self, text: str = "", end: str = "\n") -> None:
        if self._countdown_shown:
            # Finish the countdown line before printing anything else.
            self._stdout.write("\n")
            self._countdown_shown = False
        self._stdout.write(text + end)
        self._stdout.flush()

    def read_line(self, prompt: str = "") -> str:
        with self._release_keys():
            if prompt:
                self.write(prompt, end="")
            line = self._stdin.readline()
        if not line:
            raise EOFError("Input closed.")
        return line.rstrip("\r\n")

    def prompt_int(self, prompt: str, min_value: int, max_value: int) -> int:
        """Ask until the player enters an integer within ``[min_value, max_value]``."""
        raw = self.read_line(prompt)
        while True:
            try:
                value = int(raw.strip())
            except ValueError:
                value = None
            if value is not None and min_value <= value <= max_value:
                return value
            raw = self.read_line(f"Please enter a number between {min_value} and {max_value}: ")

    def wait_for_enter(self, prompt: str) -> None:
        self.read_line(prompt)

    # --- Menus ---

    def prompt_main_menu(self) -> int:
        self.write(f"{BANNER_RULE}\n{WELCOME_TITLE}\n{BANNER_RULE}\n")
        for number, label in enumerate(MAIN_MENU_OPTIONS, start=1):
            self.write(f"{number}. {label}")
        return self.prompt_int(
            f"\nPlease select an option (1-{len(MAIN_MENU_OPTIONS)}): ", 1, len(MAIN_MENU_OPTIONS)
        )

    def prompt_player_name(self) -> str:
        name = self.read_line("Enter your name: ").strip()
        return name or DEFAULT_PLAYER_NAME

    def prompt_category(self) -> Category:
        self.write("\nSelect Category:")
        for number, category in enumerate(CATEGORIES, start=1):
            self.write(f"{number}. {category.title}")
        choice = self.prompt_int(f"Enter (1-{len(CATEGORIES)}): ", 1, len(CATEGORIES))
        return CATEGORIES[choice - 1]

    def prompt_difficulty(self) -> Difficulty:
        levels = " ".join(f"{level.value}. {level.label}" for level in Difficulty)
        self.write(f"\nChoose difficulty: {levels}")
        return Difficulty(self.prompt_int(f"Enter (1-{len(Difficulty)}): ", 1, len(Difficulty)))

    def confirm_exit(self) -> bool:
        answer = self.read_line("Are you sure you want to exit? (Y/N): ").strip()
        return answer[:1] in ("Y", "y")

    def show_message(self, message: str) -> None:
        self.write(message)

    def show_error(self, message: str) -> None:
        self.write(f"\n{message}")

    def show_high_scores(self, entries: list[ScoreEntry]) -> None:
        if not entries:
            self.write(f"\n{NO_HIGH_SCORES_MESSAGE}")
            return
        self.write(f"\n{BANNER_RULE}\n{HIGH_SCORES_TITLE}\n{BANNER_RULE}\n")
        for rank, entry in enumerate(entries, start=1):
            self.write(f"{rank}. {entry.name} - {entry.score} points ({entry.datetime})")

    def show_resume_info(self, progress: SessionProgress) -> None:
        self.write(
            f"\nFound saved progress for player: {progress.player_name} | "
            f"Score so far: {progress.score} | Answered: {progress.attempt_count}"
        )
        if progress.remaining_seconds_for_current:
            self.write(
                f"Remaining seconds saved: {progress.remaining_seconds_for_current}s "
                "(used for the next question)."
            )

    # --- Question play ---

    def show_question(
        self, number: int, active: ActiveQuestion, available: list[LifelineKind]
    ) -> None:
        question = active.question
        self.write(f"\n{BANNER_RULE}")
        self.write(f"Question {number} ({question.difficulty.label})")
        self.write(f"\n{question.text}")
        for index, option in enumerate(question.options):
            shown = option if index in active.visible_options else HIDDEN_OPTION_TEXT
            self.write(f"{index + 1}. {shown}")
        lifelines = " ".join(f"[{kind.value}]{kind.label}" for kind in available) or "none"
        self.write(f"\nLifelines: {lifelines}")
        self.write(QUESTION_HINT)

    def show_remaining(self, seconds: int) -> None:
        self._stdout.write(f"\rTime Remaining: {seconds:02d}s  ")
        self._stdout.flush()
        self._countdown_shown = True

    def show_timeout(self, correct_option_text: str) -> None:
        self.write(f"Time's up! Correct answer: {correct_option_text}")

    def prompt_lifeline(self, available: list[LifelineKind]) -> LifelineKind | None:
        self.write(f"\n{LIFELINE_MENU_TITLE}")
        for kind in LifelineKind:
            marker = "" if kind in available else " [used]"
            self.write(f"{kind.value} = {LIFELINE_DESCRIPTIONS[kind.value]}{marker}")
        choice = self.prompt_int(
            f"Enter your choice (1-{len(LifelineKind)}) or 0 to cancel: ", 0, len(LifelineKind)
        )
        return LifelineKind(choice) if choice else None

    def show_score_change(self, change: ScoreChange, question: Question, streak: int) -> None:
        self.write("")
        if change.grade is Grade.CORRECT:
            self.write("Correct!")
            if change.streak_bonus:
                self.write(f"Streak of {streak}! +{change.streak_bonus} bonus")
            self.write(f"Earned {change.points} points.")
        elif change.grade is Grade.WRONG:
            self.write(f"Wrong! Correct answer: {question.correct_option_text}")
            self.write(f"Lost {-change.points} points.")
        elif change.grade is Grade.TIMED_OUT:
            self.write(f"Question not answered. Lost {-change.points} points.")
        else:
            self.write("Question skipped. No points lost.")

    def show_summary(self, summary: SessionSummary) -> None:
        self.write(f"\n{BANNER_RULE}\nQuiz Completed!")
        self.write(f"Your Final Score: {summary.display_score}")
        self.write(f"Correct: {summary.correct_count} Wrong: {summary.wrong_count}")
