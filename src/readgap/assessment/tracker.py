"""
Attempt Tracker

Phase state machine for a single attempt:

    english --(15 English answers, home language known)--> l1
    english --(15 English answers, no home language)-----> completed
    l1      --(3 home-language answers)-------------------> completed

After each recorded answer the tracker asks the DifficultySelector for the
next question, or runs the Scorer once the attempt is complete.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from readgap.core.exceptions import (
    AttemptCompletedError,
    CatalogEmptyError,
    InvalidPhaseTransitionError,
    QuestionOutOfPhaseError,
)
from readgap.core.models import ENGLISH

from .scorer import QuestionResult

if TYPE_CHECKING:
    from uuid import UUID

    from readgap.core.models import Question

    from .scorer import Scorer, ScoreResult
    from .selector import DifficultySelector

logger = logging.getLogger(__name__)


class Phase(StrEnum):
    ENGLISH = "english"
    L1 = "l1"
    COMPLETED = "completed"


ALLOWED_TRANSITIONS: dict[Phase, frozenset[Phase]] = {
    Phase.ENGLISH: frozenset({Phase.L1, Phase.COMPLETED}),
    Phase.L1: frozenset({Phase.COMPLETED}),
    Phase.COMPLETED: frozenset(),
}


@dataclass(frozen=True)
class AnsweredQuestion:
    question: Question
    is_correct: bool


@dataclass(frozen=True)
class StepOutcome:
    """What happens after an answer: the new phase plus a next question or final scores."""

    phase: Phase
    next_question: Question | None = None
    result: ScoreResult | None = None

    @property
    def completed(self) -> bool:
        return self.phase is Phase.COMPLETED


class AttemptTracker:
    """Tracks one attempt's answers and drives it through its phases.

    A tracker is rebuilt for every request from the persisted phase and the
    attempt's answer history. If advance() raises, discard the tracker along
    with the database transaction.
    """

    def __init__(
        self,
        selector: DifficultySelector,
        scorer: Scorer,
        *,
        home_language: str | None,
        phase: Phase = Phase.ENGLISH,
        history: Iterable[AnsweredQuestion] = (),
        english_block: int | None = None,
        l1_block: int | None = None,
        l1_start_difficulty: float | None = None,
    ):
        from readgap.config import settings

        self.selector = selector
        self.scorer = scorer
        self.home_language = home_language
        self.phase = Phase(phase)
        self.history: list[AnsweredQuestion] = list(history)
        self.english_block = english_block or settings.ENGLISH_BLOCK_SIZE
        self.l1_block = l1_block or settings.L1_BLOCK_SIZE
        self.l1_start_difficulty = l1_start_difficulty or settings.L1_START_DIFFICULTY

    # ------------------------------------------------------------------
    # Counters
    # ------------------------------------------------------------------

    @property
    def english_answers(self) -> list[AnsweredQuestion]:
        return [a for a in self.history if a.question.language == ENGLISH]

    @property
    def l1_answers(self) -> list[AnsweredQuestion]:
        return [a for a in self.history if a.question.language != ENGLISH]

    @property
    def english_count(self) -> int:
        return len(self.english_answers)

    @property
    def l1_count(self) -> int:
        return len(self.l1_answers)

    def used_question_ids(self, language: str) -> set[UUID]:
        """IDs of questions in `language` already asked in this attempt."""
        return {a.question.id for a in self.history if a.question.language == language}

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    def transition(self, to: Phase) -> None:
        """Move to another phase, enforcing the allowed transitions."""
        if to not in ALLOWED_TRANSITIONS[self.phase]:
            raise InvalidPhaseTransitionError(f"Cannot move from {self.phase} to {to}")

        logger.info(
            f"Attempt phase {self.phase} -> {to} "
            f"(english={self.english_count}, l1={self.l1_count})"
        )
        self.phase = to

    def _check_in_phase(self, question: Question) -> None:
        if self.phase is Phase.ENGLISH and question.language != ENGLISH:
            raise QuestionOutOfPhaseError(
                f"Expected an English question, got '{question.language}'"
            )
        if self.phase is Phase.L1 and question.language != self.home_language:
            raise QuestionOutOfPhaseError(
                f"Expected a '{self.home_language}' question, got '{question.language}'"
            )

    async def advance(self, question: Question, is_correct: bool) -> StepOutcome:
        """Record an answer and decide the next step.

        Raises:
            AttemptCompletedError: The attempt already finished
            QuestionOutOfPhaseError: The question's language doesn't match the phase
            CatalogEmptyError: No next question could be found
        """
        if self.phase is Phase.COMPLETED:
            raise AttemptCompletedError("Attempt is already completed")

        self._check_in_phase(question)
        self.history.append(AnsweredQuestion(question=question, is_correct=is_correct))

        if self.phase is Phase.ENGLISH:
            return await self._after_english_answer(question, is_correct)
        return await self._after_l1_answer(question, is_correct)

    async def _after_english_answer(self, question: Question, is_correct: bool) -> StepOutcome:
        if self.english_count < self.english_block:
            next_question = await self.selector.select_next(
                question, is_correct, self.used_question_ids(ENGLISH)
            )
            return self._continue_with(next_question, ENGLISH)

        # English block finished
        if not self.home_language:
            logger.info("Student has no home language, completing with English results only")
            return await self._complete()

        next_question = await self.selector.starting_question(
            self.home_language, self.l1_start_difficulty
        )
        if next_question is None:
            raise CatalogEmptyError(self.home_language)

        self.transition(Phase.L1)
        return StepOutcome(phase=self.phase, next_question=next_question)

    async def _after_l1_answer(self, question: Question, is_correct: bool) -> StepOutcome:
        if self.l1_count < self.l1_block:
            next_question = await self.selector.select_next(
                question, is_correct, self.used_question_ids(question.language)
            )
            return self._continue_with(next_question, question.language)

        return await self._complete()

    def _continue_with(self, next_question: Question | None, language: str) -> StepOutcome:
        if next_question is None:
            raise CatalogEmptyError(language)
        return StepOutcome(phase=self.phase, next_question=next_question)

    async def _complete(self) -> StepOutcome:
        self.transition(Phase.COMPLETED)

        english_results = [
            QuestionResult(difficulty=a.question.difficulty, correct=a.is_correct)
            for a in self.english_answers
        ]
        l1_results = [
            QuestionResult(difficulty=a.question.difficulty, correct=a.is_correct)
            for a in self.l1_answers
        ]

        result = await self.scorer.score(english_results, l1_results)
        logger.info(
            f"Attempt scored: english={result.english_score} l1={result.l1_score} "
            f"gap={result.gap} band={result.band}"
        )
        return StepOutcome(phase=self.phase, result=result)
