"""
Student API Endpoints
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from readgap.core.database import get_db
from readgap.core.models import Attempt, Student
from readgap.core.schemas import AttemptSchema, StudentCreate, StudentSchema

router = APIRouter()


@router.post("", response_model=StudentSchema, status_code=status.HTTP_201_CREATED)
async def create_student(
    student_data: StudentCreate, db: AsyncSession = Depends(get_db)
) -> Student:
    """Register a student before their first attempt."""
    student = Student(
        name=student_data.name,
        year_group=student_data.year_group,
        home_language=student_data.home_language,
    )
    db.add(student)
    await db.commit()
    await db.refresh(student)

    return student


@router.get("/{student_id}", response_model=StudentSchema)
async def get_student(student_id: UUID, db: AsyncSession = Depends(get_db)) -> Student:
    """Get student by ID."""
    result = await db.execute(select(Student).where(Student.id == student_id))
    student = result.scalar_one_or_none()

    if not student:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Student not found with ID: {student_id}",
        )

    return student


@router.get("/{student_id}/attempts", response_model=list[AttemptSchema])
async def list_student_attempts(
    student_id: UUID, db: AsyncSession = Depends(get_db)
) -> list[Attempt]:
    """List a student's attempts, most recent first."""
    result = await db.execute(
        select(Attempt).where(Attempt.student_id == student_id).order_by(desc(Attempt.started_at))
    )
    return list(result.scalars().all())
