"""Service holding the questions of one loaded category."""

from __future__ import annotations

from collections import defaultdict
import random

from quiz_master.core.models import Difficulty, Question


class QuestionRepository:
    """Read-only collection of the questions parsed from a category file."""

    def __init__(self, questions: list[Question] | None = None) -> None:
        self._questions: list[Question] = []
        self._by_difficulty: dict[Difficulty, list[Question]] = defaultdict(list)
        if questions:
            self.load_questions(questions)

    def load_questions(self, questions: list[Question]) -> None:
        """Replace the current contents with a new list of questions."""
        self._questions = list(questions)
        self._by_difficulty = defaultdict(list)
        for question in self._questions:
            self._by_difficulty[question.difficulty].append(question)

    def get_questions(self) -> list[Question]:
        """Return a copy of all loaded questions."""
        return list(self._questions)

    def get_questions_by_difficulty(self, difficulty: Difficulty) -> list[Question]:
        return list(self._by_difficulty.get(difficulty, []))

    def has_questions(self) -> bool:
        return bool(self._questions)

    def get_question_count(self) -> int:
        return len(self._questions)

    def get_question_at_index(self, index: int) -> Question:
        if not 0 <= index < len(self._questions):
            raise IndexError(f"Question index {index} out of range")
        return self._questions[index]

    def random_question(self, rng: random.Random) -> Question:
        if not self._questions:
            raise IndexError("Repository is empty")
        return self._questions[rng.randrange(len(self._questions))]
