from contextlib import contextmanager
from io import StringIO
import random

import pytest

from conftest import ScriptedKeys, write_question_file
from quiz_master.constants.file_constants import find_category
from quiz_master.core.models import Difficulty
from quiz_master.core.progress_store import ProgressStore, SessionProgress
from quiz_master.core.quiz_manager import QuizManager
from quiz_master.ui.console import ConsoleView
from quiz_master.ui.main_menu import MainMenu


class FakeKeyboard:
    """Keyboard double that replays scripted keys on the shared fake clock."""

    def __init__(self, keys):
        self.keys = keys
        self.captures = 0

    def read_key(self, timeout):
        return self.keys.read_key(timeout)

    @contextmanager
    def capture(self):
        self.captures += 1
        yield self


@pytest.fixture
def manager(app_paths, sample_questions, clock):
    write_question_file(app_paths.category_file(find_category("science")), sample_questions)
    return QuizManager(app_paths, rng=random.Random(7), clock=clock)


def run_menu(manager, clock, text, script=None):
    stdout = StringIO()
    view = ConsoleView(stdin=StringIO(text), stdout=stdout)
    keyboard = FakeKeyboard(ScriptedKeys(clock, script))
    MainMenu(manager, view, keyboard).run()
    return stdout.getvalue(), keyboard


class TestMainMenu:
    def test_exit_when_declined_then_menu_shown_again(self, manager, clock):
        output, _ = run_menu(manager, clock, "4\nn\n4\ny\n")

        assert output.count("Welcome to QuizMaster!") == 2
        assert output.rstrip().endswith("Goodbye!")

    def test_exit_when_input_closed_then_eof_propagates(self, manager, clock):
        with pytest.raises(EOFError):
            run_menu(manager, clock, "2\n")

    def test_high_scores_when_none_then_placeholder(self, manager, clock):
        output, _ = run_menu(manager, clock, "2\n\n4\ny\n")

        assert "No high scores yet." in output

    def test_resume_when_nothing_saved_then_message(self, manager, clock):
        output, _ = run_menu(manager, clock, "3\n\n4\ny\n")

        assert "No saved progress found." in output

    def test_resume_when_save_corrupt_then_reported_as_missing(self, manager, clock, app_paths):
        app_paths.save_file.parent.mkdir(parents=True, exist_ok=True)
        app_paths.save_file.write_text("only one line\n", encoding="utf-8")

        output, _ = run_menu(manager, clock, "3\n\n4\ny\n")

        assert "Saved progress is unreadable and cannot be resumed." in output
        assert "No saved progress found." in output

    def test_start_when_category_file_missing_then_error_and_back_to_menu(self, manager, clock):
        output, keyboard = run_menu(manager, clock, "1\n2\n\n4\ny\n")

        assert "Could not read questions from" in output
        assert keyboard.captures == 0

    def test_start_when_played_through_then_summary_and_score_recorded(self, manager, clock, app_paths):
        output, keyboard = run_menu(manager, clock, "1\n1\nAda\n1\n\n\n4\ny\n", script=[(1.0, "s")])

        assert keyboard.captures == 1
        assert "Quiz Completed!" in output
        assert "Your Final Score: 0" in output
        assert "Correct: 0 Wrong: 9" in output
        assert "Question skipped. No points lost." in output
        assert [entry.name for entry in manager.get_top_scorers()] == ["Ada"]
        assert not app_paths.save_file.exists()

    def test_resume_when_progress_saved_then_last_question_played(self, manager, clock, app_paths):
        progress = SessionProgress(
            player_name="Bob",
            score=40,
            correct_count=4,
            category="science",
            difficulty=Difficulty.EASY,
            remaining_seconds_for_current=3,
        )
        for position in range(9):
            progress.record_attempt(position, 0)
        ProgressStore(app_paths.save_file).save(progress)

        output, _ = run_menu(manager, clock, "3\n\n\n4\ny\n")

        assert "Found saved progress for player: Bob | Score so far: 40 | Answered: 9" in output
        assert "Remaining seconds saved: 3s" in output
        assert "Question 10 (" in output
        assert "Time Remaining: 03s" in output
        assert "Correct: 4 Wrong: 1" in output
        assert [entry.name for entry in manager.get_top_scorers()] == ["Bob"]
