import pytest

from conftest import RecordingView, ScriptedKeys, write_question_file
from quiz_master.constants.file_constants import CATEGORIES, find_category
from quiz_master.core.errors import QuestionImportError
from quiz_master.core.models import Difficulty
from quiz_master.core.progress_store import SessionProgress
from quiz_master.core.quiz_manager import QuizManager

SCIENCE = find_category("science")


@pytest.fixture
def manager(app_paths, sample_questions, rng, clock):
    write_question_file(app_paths.category_file(SCIENCE), sample_questions)
    return QuizManager(app_paths, rng=rng, clock=clock)


class TestQuizManager:
    def test_load_repository_when_file_present_then_all_questions(self, manager):
        repository = manager.load_repository(SCIENCE)

        assert repository.get_question_count() == 12
        assert repository.get_question_at_index(5).text == "Question 5?"

    def test_load_repository_when_file_missing_then_import_error(self, manager):
        with pytest.raises(QuestionImportError):
            manager.load_repository(find_category("sports"))

    def test_start_quiz_when_started_then_save_file_in_state_dir(self, manager, app_paths):
        repository = manager.load_repository(SCIENCE)

        session = manager.start_quiz(repository, SCIENCE, "Ada", Difficulty.MEDIUM)

        assert session.is_active()
        assert app_paths.save_file.exists()
        progress = manager.load_saved_progress()
        assert progress.category == "science"
        assert manager.saved_category(progress) == SCIENCE

    def test_load_saved_progress_when_nothing_saved_then_none(self, manager):
        assert manager.load_saved_progress() is None

    def test_resume_quiz_when_category_unknown_then_chosen_category_saved(self, manager):
        repository = manager.load_repository(SCIENCE)
        progress = SessionProgress(player_name="Ada")
        progress.record_attempt(0, 2)

        session = manager.resume_quiz(repository, progress, SCIENCE, Difficulty.EASY)

        assert session.get_progress().category == "science"
        assert manager.load_saved_progress().category == "science"
        assert progress.category is None

    def test_top_scorers_when_session_finished_then_listed(self, manager, clock):
        repository = manager.load_repository(SCIENCE)
        session = manager.start_quiz(repository, SCIENCE, "Ada", Difficulty.EASY)

        session.play(ScriptedKeys(clock, [(1.0, "s")]), RecordingView())

        assert [entry.name for entry in manager.get_top_scorers()] == ["Ada"]
        assert manager.load_saved_progress() is None

    def test_categories_when_listed_then_keys_unique(self):
        assert len({category.key for category in CATEGORIES}) == len(CATEGORIES)
        assert find_category("astrology") is None
