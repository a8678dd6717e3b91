"""
Question Catalog API Endpoints

Available home languages and starting questions.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from readgap.api.dependencies import get_selector
from readgap.assessment import DifficultySelector
from readgap.assessment.catalog import available_languages
from readgap.core.database import get_db
from readgap.core.models import Question
from readgap.core.schemas import LanguageSchema, QuestionSchema, StartingQuestionRequest

router = APIRouter()


@router.get("/languages", response_model=list[LanguageSchema])
async def list_languages(db: AsyncSession = Depends(get_db)) -> list[dict[str, str]]:
    """Home languages that have questions in the catalog."""
    return await available_languages(db)


@router.post("/start", response_model=QuestionSchema)
async def get_starting_question(
    request: StartingQuestionRequest,
    selector: DifficultySelector = Depends(get_selector),
) -> Question:
    """Starting question (difficulty 2.5) for a language."""
    question = await selector.starting_question(request.language.strip().lower())

    if question is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No questions available for language: {request.language}",
        )

    return question
