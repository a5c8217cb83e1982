import random
import sys
from pathlib import Path

import pytest

# Add the project root to sys.path so quiz_master imports without installation
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if PROJECT_ROOT.as_posix() not in sys.path:
    sys.path.insert(0, PROJECT_ROOT.as_posix())

from quiz_master.constants.file_constants import AppPaths  # noqa: E402
from quiz_master.core.models import Difficulty, LifelineKind, Question  # noqa: E402
from quiz_master.core.services.question_repository import QuestionRepository  # noqa: E402


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ScriptedKeys:
    """Key source replaying ``(wait_seconds, key)`` pairs against a fake clock.

    Each pair waits ``wait_seconds`` of clock time before delivering ``key``.
    Once the script runs out the keyboard stays idle, so the clock simply
    advances by every timeout.
    """

    def __init__(self, clock: FakeClock, script: list[tuple[float, str]] | None = None) -> None:
        self.clock = clock
        self.script = list(script or [])
        self._target: float | None = None

    def read_key(self, timeout: float) -> str | None:
        if not self.script:
            self.clock.advance(timeout)
            return None
        wait, key = self.script[0]
        if self._target is None:
            self._target = self.clock.now + wait
        if self.clock.now + timeout >= self._target:
            # Land exactly on the scripted moment to keep float arithmetic out of assertions.
            self.clock.now = self._target
            self._target = None
            self.script.pop(0)
            return key
        self.clock.advance(timeout)
        return None


class RecordingView:
    """Question/session view that records calls and answers lifeline prompts from a queue."""

    def __init__(self, lifeline_choices: list[LifelineKind | None] | None = None) -> None:
        self.lifeline_choices = list(lifeline_choices or [])
        self.questions: list[tuple[int, tuple[int, ...], str]] = []
        self.remaining: list[int] = []
        self.messages: list[str] = []
        self.timeouts: list[str] = []
        self.score_changes: list = []
        self.lifeline_prompts = 0

    def show_question(self, number, active, available):
        self.questions.append((number, active.visible_options, active.question.text))

    def show_remaining(self, seconds):
        self.remaining.append(seconds)

    def show_message(self, message):
        self.messages.append(message)

    def show_timeout(self, correct_option_text):
        self.timeouts.append(correct_option_text)

    def prompt_lifeline(self, available):
        self.lifeline_prompts += 1
        return self.lifeline_choices.pop(0) if self.lifeline_choices else None

    def show_score_change(self, change, question, streak):
        self.score_changes.append(change)


def make_question(
    text: str = "What is 2 + 2?",
    options: tuple[str, str, str, str] = ("3", "4", "5", "22"),
    correct_index: int = 1,
    difficulty: Difficulty = Difficulty.EASY,
    source_index: int = 0,
) -> Question:
    return Question(
        text=text,
        options=options,
        original_correct_index=correct_index,
        correct_index=correct_index,
        difficulty=difficulty,
        source_index=source_index,
    )


def make_questions(count: int, difficulty: Difficulty = Difficulty.EASY, start: int = 0) -> list[Question]:
    return [
        make_question(
            text=f"Question {start + i}?",
            options=(f"A{start + i}", f"B{start + i}", f"C{start + i}", f"D{start + i}"),
            correct_index=(start + i) % 4,
            difficulty=difficulty,
            source_index=start + i,
        )
        for i in range(count)
    ]


def write_question_file(path: Path, questions: list[Question]) -> Path:
    blocks = []
    for question in questions:
        lines = [question.text, *question.options, str(question.correct_index + 1), str(int(question.difficulty))]
        blocks.append("\n".join(lines))
    path.write_text("\n\n".join(blocks) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def sample_questions():
    """Twelve questions: four easy, four medium, four hard."""
    return (
        make_questions(4, Difficulty.EASY, start=0)
        + make_questions(4, Difficulty.MEDIUM, start=4)
        + make_questions(4, Difficulty.HARD, start=8)
    )


@pytest.fixture
def repository(sample_questions):
    return QuestionRepository(sample_questions)


@pytest.fixture
def app_paths(tmp_path: Path):
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    return AppPaths(data_dir=data_dir, state_dir=tmp_path / "state")
