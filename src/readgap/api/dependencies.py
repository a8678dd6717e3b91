"""
Shared FastAPI dependencies for the assessment engine.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from readgap.ai import SummaryService, get_summary_service
from readgap.assessment import DatabaseQuestionCatalog, DifficultySelector, Scorer
from readgap.core.database import get_db


def get_selector(db: AsyncSession = Depends(get_db)) -> DifficultySelector:
    """Difficulty selector reading the question catalog from the request's session."""
    return DifficultySelector(DatabaseQuestionCatalog(db))


def get_scorer(summary_service: SummaryService = Depends(get_summary_service)) -> Scorer:
    return Scorer(summary_service)
