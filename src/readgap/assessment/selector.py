"""
Difficulty Selector

Picks the next question by stepping difficulty up after a correct answer
and down after an incorrect one, then choosing the nearest-difficulty
unused question in the same language.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Collection, Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID

    from readgap.core.models import Question

    from .catalog import QuestionCatalog

logger = logging.getLogger(__name__)

MIN_DIFFICULTY = 1.0
MAX_DIFFICULTY = 5.0
DIFFICULTY_STEP = 0.5
STARTING_DIFFICULTY = 2.5


def target_difficulty(previous_difficulty: float, was_correct: bool) -> float:
    """Step difficulty by half a point and clamp to [1, 5].

    Examples:
        >>> target_difficulty(3, True)
        3.5
        >>> target_difficulty(5, True)
        5.0
        >>> target_difficulty(1, False)
        1.0
    """
    step = DIFFICULTY_STEP if was_correct else -DIFFICULTY_STEP
    return max(MIN_DIFFICULTY, min(MAX_DIFFICULTY, previous_difficulty + step))


def nearest_candidates(questions: Sequence[Question], target: float) -> list[Question]:
    """Return every question tied for the smallest |difficulty - target|."""
    if not questions:
        return []

    best = min(abs(q.difficulty - target) for q in questions)
    return [q for q in questions if abs(q.difficulty - target) == best]


class DifficultySelector:
    """Selects adaptive questions from a QuestionCatalog.

    Ties between equally-near questions are broken with the injected random
    source, so a seeded random.Random makes selection reproducible.
    """

    def __init__(self, catalog: QuestionCatalog, rng: random.Random | None = None):
        self.catalog = catalog
        self.rng = rng or random.Random()

    async def select_next(
        self,
        previous_question: Question,
        was_correct: bool,
        used_question_ids: Collection[UUID],
    ) -> Question | None:
        """Choose the question to ask after previous_question.

        Args:
            previous_question: Question just answered (sets language and base difficulty)
            was_correct: Whether it was answered correctly
            used_question_ids: Questions already asked in this attempt

        Returns:
            Next question, or None if the language has no questions at all
        """
        target = target_difficulty(previous_question.difficulty, was_correct)
        return await self.select_for_target(
            previous_question.language, target, used_question_ids
        )

    async def select_for_target(
        self,
        language: str,
        target: float,
        used_question_ids: Collection[UUID] = (),
    ) -> Question | None:
        """Choose the nearest-difficulty question for an explicit target."""
        questions = await self.catalog.fetch_by_language(language)
        if not questions:
            logger.warning(f"No questions in catalog for language '{language}'")
            return None

        used = set(used_question_ids)
        candidates = [q for q in questions if q.id not in used]
        if not candidates:
            # Every question already asked: allow repeats rather than stall
            logger.info(f"All '{language}' questions used, allowing repeats")
            candidates = list(questions)

        return self.rng.choice(nearest_candidates(candidates, target))

    async def starting_question(
        self, language: str, difficulty: float = STARTING_DIFFICULTY
    ) -> Question | None:
        """First question of a language block."""
        return await self.select_for_target(language, difficulty)

    async def has_unused(self, language: str, used_question_ids: Collection[UUID]) -> bool:
        """True while the language still has questions outside used_question_ids.

        Once this is False the selector issues repeats.
        """
        used = set(used_question_ids)
        questions = await self.catalog.fetch_by_language(language)
        return any(q.id not in used for q in questions)
