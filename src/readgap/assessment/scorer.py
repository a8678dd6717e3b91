"""
Attempt Scoring

Difficulty-weighted accuracy per language, the signed English/home-language
gap, and its colour band. Numeric results are always computed here; only
the free-text summary is delegated to a SummaryService.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from readgap.ai.scoring import SummaryService

logger = logging.getLogger(__name__)

FALLBACK_SUMMARY = "Assessment completed. Detailed analysis temporarily unavailable."

# Band thresholds on gap = l1_score - english_score
GREEN_MAX_GAP = 0.5
AMBER_MAX_GAP = 1.5


class Band(StrEnum):
    GREEN = "green"
    AMBER = "amber"
    RED = "red"


@dataclass(frozen=True)
class QuestionResult:
    """Difficulty of an answered question and whether it was correct."""

    difficulty: float
    correct: bool


@dataclass(frozen=True)
class ScoreResult:
    english_score: float
    l1_score: float
    gap: float
    band: Band
    summary: str


def weighted_accuracy(results: Sequence[QuestionResult]) -> float:
    """Score 0-100: correct difficulty over total difficulty, rounded half-up.

    Examples:
        >>> weighted_accuracy([QuestionResult(2, True), QuestionResult(4, False)])
        33.0
        >>> weighted_accuracy([])
        0.0
    """
    total = sum(r.difficulty for r in results)
    if total <= 0:
        return 0.0

    correct = sum(r.difficulty for r in results if r.correct)
    return float(math.floor(correct / total * 100 + 0.5))


def band_for_gap(gap: float) -> Band:
    """Classify a gap: green up to 0.5, amber up to 1.5, red above."""
    if gap <= GREEN_MAX_GAP:
        return Band.GREEN
    if gap <= AMBER_MAX_GAP:
        return Band.AMBER
    return Band.RED


class Scorer:
    """Computes final attempt scores.

    Args:
        summary_service: Produces the narrative summary. Defaults to the
            deterministic rule-based service.
    """

    def __init__(self, summary_service: SummaryService | None = None):
        if summary_service is None:
            from readgap.ai.scoring import DeterministicSummaryService

            summary_service = DeterministicSummaryService()
        self.summary_service = summary_service

    async def score(
        self,
        english_results: Sequence[QuestionResult],
        l1_results: Sequence[QuestionResult],
    ) -> ScoreResult:
        english_score = weighted_accuracy(english_results)
        l1_score = weighted_accuracy(l1_results)
        gap = l1_score - english_score

        summary = await self._summarize(english_results, l1_results)

        return ScoreResult(
            english_score=english_score,
            l1_score=l1_score,
            gap=gap,
            band=band_for_gap(gap),
            summary=summary,
        )

    async def _summarize(
        self,
        english_results: Sequence[QuestionResult],
        l1_results: Sequence[QuestionResult],
    ) -> str:
        """Ask the summary service for text, substituting the fallback on any failure."""
        try:
            report = await self.summary_service.summarize(english_results, l1_results)
        except Exception as e:
            logger.warning(f"Summary service failed, using fallback summary: {e}")
            return FALLBACK_SUMMARY

        if report is None or not report.summary.strip():
            logger.warning("Summary service returned no usable report, using fallback summary")
            return FALLBACK_SUMMARY

        return report.summary.strip()
