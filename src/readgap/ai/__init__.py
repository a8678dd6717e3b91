"""
AI Services

Generative summaries for completed attempts, with rule-based fallback.
"""

from .client import AIClient, get_ai_client
from .scoring import (
    DeterministicSummaryService,
    LLMSummaryService,
    ScoringReport,
    SummaryService,
    get_summary_service,
)

__all__ = [
    "AIClient",
    "get_ai_client",
    "DeterministicSummaryService",
    "LLMSummaryService",
    "ScoringReport",
    "SummaryService",
    "get_summary_service",
]
