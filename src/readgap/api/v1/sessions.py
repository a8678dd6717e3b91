"""
Class Session API Endpoints

Session code creation and the teacher's results view and CSV export.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from readgap.assessment.export import results_to_csv, session_results
from readgap.assessment.session_codes import create_unique_session_code
from readgap.core.database import get_db
from readgap.core.exceptions import SessionCodeError
from readgap.core.models import ClassSession
from readgap.core.schemas import ClassSessionCreate, ClassSessionSchema, SessionResultRow
from readgap.core.validation import ValidationError, validate_session_code

logger = logging.getLogger(__name__)

router = APIRouter()


def _checked_code(code: str) -> str:
    try:
        return validate_session_code(code)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.post("", response_model=ClassSessionSchema, status_code=status.HTTP_201_CREATED)
async def create_class_session(
    session_data: ClassSessionCreate, db: AsyncSession = Depends(get_db)
) -> ClassSession:
    """Create a class session with a fresh six-digit code."""
    try:
        code = await create_unique_session_code(db)
    except SessionCodeError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)
        ) from e

    class_session = ClassSession(code=code, teacher_name=session_data.teacher_name)
    db.add(class_session)
    await db.commit()
    await db.refresh(class_session)

    logger.info(f"Created session {code} for teacher {session_data.teacher_name!r}")
    return class_session


@router.get("/{code}/results", response_model=list[SessionResultRow])
async def get_session_results(
    code: str, db: AsyncSession = Depends(get_db)
) -> list[SessionResultRow]:
    """Completed attempts for a session code, newest first."""
    rows = await session_results(db, _checked_code(code))

    return [
        SessionResultRow(
            student_name=student.name,
            year_group=student.year_group,
            home_language=student.home_language,
            attempt_id=attempt.id,
            completed_at=attempt.completed_at,
            english_score=attempt.english_score,
            l1_score=attempt.l1_score,
            gap=attempt.gap,
            colour_band=attempt.colour_band,
            summary=attempt.summary,
        )
        for student, attempt in rows
    ]


@router.get("/{code}/export", response_class=PlainTextResponse)
async def export_session_results(
    code: str, db: AsyncSession = Depends(get_db)
) -> PlainTextResponse:
    """Download completed results for a session as CSV."""
    code = _checked_code(code)
    rows = await session_results(db, code)

    return PlainTextResponse(
        content=results_to_csv(rows),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="session-{code}-results.csv"'},
    )
