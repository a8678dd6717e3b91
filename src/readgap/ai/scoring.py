"""
Attempt Summary Services

Narrative summaries for a scored attempt. Two implementations share the
SummaryService protocol:

- LLMSummaryService: asks a generative model for a JSON report
- DeterministicSummaryService: rule-based text from the weighted scores

The Scorer treats any exception or None from a service as "use the
fallback summary".
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
from collections.abc import Sequence
from dataclasses import asdict
from typing import TYPE_CHECKING, Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from readgap.assessment.scorer import Band, QuestionResult, band_for_gap, weighted_accuracy

if TYPE_CHECKING:
    from .client import AIClient

logger = logging.getLogger(__name__)


SCORING_SYSTEM_PROMPT = (
    "You are a precise educational assessment tool. "
    "Return ONLY valid JSON without any markdown formatting or code blocks."
)

SCORING_USER_TEMPLATE = """You are a reading-assessment engine. Given arrays of \
(difficulty, correct/incorrect) for English and home-language (L1) reading assessments, \
calculate scores and provide a summary.

English results: {english_json}
L1 results: {l1_json}

Return ONLY valid JSON with:
- englishScore: 0-100 (weighted by difficulty)
- l1Score: 0-100 (weighted by difficulty)
- summary: <=40 words describing the student's reading gap and strengths

Example: {{"englishScore": 75, "l1Score": 82, "summary": "Strong L1 skills with moderate \
English gap. Focus on vocabulary building."}}"""


class ScoringReport(BaseModel):
    """Structured report returned by a summary service."""

    model_config = ConfigDict(populate_by_name=True)

    english_score: float = Field(alias="englishScore", ge=0, le=100, strict=True)
    l1_score: float = Field(alias="l1Score", ge=0, le=100, strict=True)
    summary: str = Field(min_length=1)


class SummaryService(Protocol):
    async def summarize(
        self,
        english_results: Sequence[QuestionResult],
        l1_results: Sequence[QuestionResult],
    ) -> ScoringReport | None: ...


_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$")


def strip_code_fences(content: str) -> str:
    """Remove a surrounding ``` or ```json fence that models sometimes add."""
    return _CODE_FENCE.sub("", content.strip()).strip()


def parse_scoring_report(content: str) -> ScoringReport | None:
    """Parse model output into a ScoringReport, or None if it doesn't conform."""
    cleaned = strip_code_fences(content)
    try:
        return ScoringReport.model_validate_json(cleaned)
    except ValidationError as e:
        logger.warning(f"Non-conforming scoring report: {e.error_count()} error(s)")
        return None


def build_scoring_prompt(
    english_results: Sequence[QuestionResult], l1_results: Sequence[QuestionResult]
) -> str:
    return SCORING_USER_TEMPLATE.format(
        english_json=json.dumps([asdict(r) for r in english_results]),
        l1_json=json.dumps([asdict(r) for r in l1_results]),
    )


class LLMSummaryService:
    """Summary service backed by a generative model via AIClient."""

    MAX_TOKENS = 150
    TEMPERATURE = 0.1

    def __init__(self, ai_client: AIClient):
        self.ai_client = ai_client

    async def summarize(
        self,
        english_results: Sequence[QuestionResult],
        l1_results: Sequence[QuestionResult],
    ) -> ScoringReport | None:
        prompt = build_scoring_prompt(english_results, l1_results)

        # Provider SDK calls are blocking
        content = await asyncio.to_thread(
            self.ai_client.generate_completion,
            system=SCORING_SYSTEM_PROMPT,
            messages=[{"role": "user", "content": prompt}],
            max_tokens=self.MAX_TOKENS,
            temperature=self.TEMPERATURE,
        )
        if content is None:
            return None

        return parse_scoring_report(content)


def describe_strengths(english_score: float, l1_score: float, *, has_l1: bool) -> str:
    """Short rule-based description of relative reading strengths."""
    if not has_l1:
        return (
            f"English reading score {english_score:.0f}/100. "
            "No home-language reading data was collected."
        )

    band = band_for_gap(l1_score - english_score)
    if band is Band.RED:
        return (
            f"Home-language reading ({l1_score:.0f}) is clearly stronger than English "
            f"({english_score:.0f}). Focus on English vocabulary and comprehension."
        )
    if band is Band.AMBER:
        return (
            f"Home-language reading ({l1_score:.0f}) is slightly ahead of English "
            f"({english_score:.0f}). Keep building English vocabulary."
        )
    return (
        f"English reading ({english_score:.0f}) is at or above home-language reading "
        f"({l1_score:.0f}). Reading skills are well balanced."
    )


class DeterministicSummaryService:
    """Rule-based summary service; never calls out and never fails."""

    async def summarize(
        self,
        english_results: Sequence[QuestionResult],
        l1_results: Sequence[QuestionResult],
    ) -> ScoringReport:
        english_score = weighted_accuracy(english_results)
        l1_score = weighted_accuracy(l1_results)
        return ScoringReport(
            english_score=english_score,
            l1_score=l1_score,
            summary=describe_strengths(english_score, l1_score, has_l1=bool(l1_results)),
        )


def get_summary_service() -> SummaryService:
    """Live LLM service when a provider key is configured, else rule-based."""
    from readgap.config import settings

    if settings.ai_enabled:
        from .client import get_ai_client

        return LLMSummaryService(get_ai_client())

    logger.info("No AI provider configured, using deterministic summaries")
    return DeterministicSummaryService()
