"""Builds the ordered question list for one session."""

from __future__ import annotations

import dataclasses
import logging
import random
from typing import Sequence

from quiz_master.constants.quiz_constants import MIN_DIFFICULTY_POOL_SIZE, SESSION_QUESTION_COUNT
from quiz_master.core.errors import EmptyRepositoryError
from quiz_master.core.models import Difficulty, Question
from quiz_master.core.services.question_repository import QuestionRepository

logger = logging.getLogger(__name__)


def select_questions(
    repository: QuestionRepository,
    difficulty: Difficulty,
    session_size: int = SESSION_QUESTION_COUNT,
    rng: random.Random | None = None,
) -> list[Question]:
    """Pick up to ``session_size`` questions, each with freshly shuffled options.

    When fewer than ten questions match ``difficulty`` the whole repository
    becomes the pool.
    """
    if not repository.has_questions():
        raise EmptyRepositoryError("The question repository is empty.")
    rng = rng or random.Random()

    pool = repository.get_questions_by_difficulty(difficulty)
    if len(pool) < MIN_DIFFICULTY_POOL_SIZE:
        logger.info(
            "Only %d %s questions; widening pool to all %d questions",
            len(pool),
            difficulty.label,
            repository.get_question_count(),
        )
        pool = repository.get_questions()

    rng.shuffle(pool)
    return [shuffle_options(question, rng) for question in pool[:session_size]]


def restore_questions(
    repository: QuestionRepository,
    source_indices: Sequence[int],
    rng: random.Random | None = None,
) -> list[Question]:
    """Rebuild a stored session order from repository positions."""
    rng = rng or random.Random()
    try:
        return [
            shuffle_options(repository.get_question_at_index(index), rng)
            for index in source_indices
        ]
    except IndexError as exc:
        raise EmptyRepositoryError("Saved questions are no longer in the category file.") from exc


def shuffle_options(question: Question, rng: random.Random) -> Question:
    """Return a working copy with permuted options and a recomputed correct index."""
    combined = list(zip(question.options, range(len(question.options))))
    rng.shuffle(combined)

    options = tuple(item[0] for item in combined)
    order = [item[1] for item in combined]
    return dataclasses.replace(
        question,
        options=options,
        correct_index=order.index(question.correct_index),
        option_order=tuple(question.option_order[index] for index in order),
    )


def arrange_options(question: Question, option_order: Sequence[int]) -> Question:
    """Lay out an authored question's options in a recorded display order."""
    order = list(option_order)
    if sorted(order) != list(range(len(question.options))):
        raise ValueError(f"Not an option permutation: {order}")
    return dataclasses.replace(
        question,
        options=tuple(question.options[index] for index in order),
        correct_index=order.index(question.original_correct_index),
        option_order=tuple(order),
    )
