"""
Attempt API Endpoints

Starting attempts, adaptive answer submission, results and resources.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from readgap.api.dependencies import get_scorer, get_selector
from readgap.assessment import AnsweredQuestion, AttemptTracker, DifficultySelector, Phase, Scorer
from readgap.core.database import get_db
from readgap.core.exceptions import (
    AttemptCompletedError,
    CatalogEmptyError,
    QuestionOutOfPhaseError,
)
from readgap.core.models import ENGLISH, Attempt, Question, Resource, Response, Student
from readgap.core.schemas import (
    AnswerResponse,
    AnswerSubmit,
    AttemptCreate,
    AttemptSchema,
    AttemptStartResponse,
    QuestionSchema,
    ResourceSchema,
    ScoreSchema,
)

logger = logging.getLogger(__name__)

router = APIRouter()

CANNOT_CONTINUE = "No more questions are available right now. Please ask your teacher for help."


async def _get_attempt_or_404(db: AsyncSession, attempt_id: UUID) -> Attempt:
    result = await db.execute(select(Attempt).where(Attempt.id == attempt_id))
    attempt = result.scalar_one_or_none()

    if not attempt:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Attempt not found with ID: {attempt_id}",
        )

    return attempt


async def _load_history(db: AsyncSession, attempt_id: UUID) -> list[AnsweredQuestion]:
    """Answered questions for an attempt in the order they were asked."""
    result = await db.execute(
        select(Response, Question)
        .join(Question, Response.question_id == Question.id)
        .where(Response.attempt_id == attempt_id)
        .order_by(Response.question_order)
    )
    return [
        AnsweredQuestion(question=question, is_correct=response.is_correct)
        for response, question in result.all()
    ]


@router.post("", response_model=AttemptStartResponse, status_code=status.HTTP_201_CREATED)
async def start_attempt(
    attempt_data: AttemptCreate,
    db: AsyncSession = Depends(get_db),
    selector: DifficultySelector = Depends(get_selector),
) -> AttemptStartResponse:
    """Start an attempt and return the first English question."""
    result = await db.execute(select(Student).where(Student.id == attempt_data.student_id))
    student = result.scalar_one_or_none()

    if not student:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Student not found with ID: {attempt_data.student_id}",
        )

    question = await selector.starting_question(ENGLISH)
    if question is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=CANNOT_CONTINUE)

    attempt = Attempt(
        student_id=student.id,
        session_code=attempt_data.session_code,
        phase=Phase.ENGLISH.value,
    )
    db.add(attempt)
    await db.commit()
    await db.refresh(attempt)

    logger.info(f"Started attempt {attempt.id} for session {attempt.session_code}")

    return AttemptStartResponse(
        attempt=AttemptSchema.model_validate(attempt),
        question=QuestionSchema.model_validate(question),
    )


@router.get("/{attempt_id}", response_model=AttemptSchema)
async def get_attempt(attempt_id: UUID, db: AsyncSession = Depends(get_db)) -> Attempt:
    """Get attempt details (including scores once completed)."""
    return await _get_attempt_or_404(db, attempt_id)


@router.post(
    "/{attempt_id}/answers",
    response_model=AnswerResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_answer(
    attempt_id: UUID,
    answer_data: AnswerSubmit,
    db: AsyncSession = Depends(get_db),
    selector: DifficultySelector = Depends(get_selector),
    scorer: Scorer = Depends(get_scorer),
) -> AnswerResponse:
    """Record an answer and return the next question or the final scores."""
    attempt = await _get_attempt_or_404(db, attempt_id)

    if attempt.is_completed:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot submit answers to a completed attempt",
        )

    result = await db.execute(select(Question).where(Question.id == answer_data.question_id))
    question = result.scalar_one_or_none()

    if not question:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Question not found with ID: {answer_data.question_id}",
        )

    if answer_data.selected_index >= len(question.choices):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"selected_index must be below {len(question.choices)}",
        )

    student_result = await db.execute(select(Student).where(Student.id == attempt.student_id))
    student = student_result.scalar_one()

    history = await _load_history(db, attempt.id)

    answered = {a.question.id for a in history if a.question.language == question.language}
    if question.id in answered and await selector.has_unused(question.language, answered):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Question {question.id} was already answered in this attempt",
        )

    tracker = AttemptTracker(
        selector,
        scorer,
        home_language=student.home_language,
        phase=Phase(attempt.phase),
        history=history,
    )

    is_correct = question.is_correct_choice(answer_data.selected_index)

    try:
        outcome = await tracker.advance(question, is_correct)
    except CatalogEmptyError as e:
        logger.error(f"Attempt {attempt.id} cannot continue: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=CANNOT_CONTINUE
        ) from e
    except (AttemptCompletedError, QuestionOutOfPhaseError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    db.add(
        Response(
            attempt_id=attempt.id,
            question_id=question.id,
            question_order=len(history) + 1,
            selected_index=answer_data.selected_index,
            is_correct=is_correct,
            time_ms=answer_data.time_ms,
        )
    )
    attempt.phase = outcome.phase.value

    score = None
    if outcome.result is not None:
        attempt.complete(outcome.result)
        score = ScoreSchema(
            english_score=outcome.result.english_score,
            l1_score=outcome.result.l1_score,
            gap=outcome.result.gap,
            colour_band=str(outcome.result.band),
            summary=outcome.result.summary,
        )

    try:
        await db.commit()
    except IntegrityError as e:
        # Another submission for this attempt took the same question_order first
        await db.rollback()
        logger.warning(f"Conflicting answer submission for attempt {attempt_id}: {e.orig}")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="This answer conflicts with another submission. Please reload and try again.",
        ) from e

    return AnswerResponse(
        is_correct=is_correct,
        phase=outcome.phase.value,
        completed=outcome.completed,
        next_question=(
            QuestionSchema.model_validate(outcome.next_question)
            if outcome.next_question is not None
            else None
        ),
        result=score,
    )


@router.get("/{attempt_id}/resources", response_model=list[ResourceSchema])
async def get_attempt_resources(
    attempt_id: UUID, db: AsyncSession = Depends(get_db)
) -> list[Resource]:
    """Reading resources matching a completed attempt's band and home language."""
    attempt = await _get_attempt_or_404(db, attempt_id)

    if not attempt.is_completed:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Attempt is not completed yet (phase: {attempt.phase})",
        )

    student_result = await db.execute(select(Student).where(Student.id == attempt.student_id))
    student = student_result.scalar_one()

    languages = ["general"]
    if student.home_language:
        languages.insert(0, student.home_language)

    result = await db.execute(
        select(Resource).where(
            Resource.gap_band == attempt.colour_band, Resource.language.in_(languages)
        )
    )
    resources = result.scalars().all()

    # Home-language resources first
    return sorted(resources, key=lambda r: languages.index(r.language))
