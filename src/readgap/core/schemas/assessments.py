"""
Assessment Pydantic Schemas

Request/response models for sessions, students, attempts and answers.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from readgap.core.validation import (
    validate_language_code,
    validate_session_code,
    validate_student_name,
    validate_year_group,
)


# Request schemas
class ClassSessionCreate(BaseModel):
    """Request schema for creating a class session."""

    teacher_name: str | None = Field(default=None, max_length=100)

    @field_validator("teacher_name")
    @classmethod
    def strip_teacher_name(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


class StudentCreate(BaseModel):
    """Request schema for registering a student."""

    name: str
    year_group: str
    home_language: str | None = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return validate_student_name(v)

    @field_validator("year_group")
    @classmethod
    def check_year_group(cls, v: str) -> str:
        return validate_year_group(v)

    @field_validator("home_language")
    @classmethod
    def check_home_language(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return validate_language_code(v)


class AttemptCreate(BaseModel):
    """Request schema for starting an attempt."""

    student_id: UUID
    session_code: str

    @field_validator("session_code")
    @classmethod
    def check_session_code(cls, v: str) -> str:
        return validate_session_code(v)


class AnswerSubmit(BaseModel):
    """Request schema for submitting an answer."""

    question_id: UUID
    selected_index: int = Field(ge=0)
    time_ms: int = Field(default=0, ge=0)


class StartingQuestionRequest(BaseModel):
    """Request schema for fetching a language's starting question."""

    language: str = Field(min_length=1)


# Response schemas
class ClassSessionSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    code: str
    teacher_name: str | None = None
    created_at: datetime


class StudentSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    year_group: str
    home_language: str | None = None
    created_at: datetime


class QuestionSchema(BaseModel):
    """Question as shown to a student (no answer key)."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    language: str
    text: str
    choices: list[str]
    difficulty: float
    skill_tag: str


class AttemptSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    student_id: UUID
    session_code: str
    phase: str
    started_at: datetime
    completed_at: datetime | None = None
    english_score: float | None = None
    l1_score: float | None = None
    gap: float | None = None
    colour_band: str | None = None
    summary: str | None = None


class AttemptStartResponse(BaseModel):
    attempt: AttemptSchema
    question: QuestionSchema


class ScoreSchema(BaseModel):
    english_score: float
    l1_score: float
    gap: float
    colour_band: str
    summary: str


class AnswerResponse(BaseModel):
    """Response after submitting an answer."""

    is_correct: bool
    phase: str
    completed: bool = False
    next_question: QuestionSchema | None = None
    result: ScoreSchema | None = None


class SessionResultRow(BaseModel):
    student_name: str
    year_group: str
    home_language: str | None = None
    attempt_id: UUID
    completed_at: datetime
    english_score: float | None = None
    l1_score: float | None = None
    gap: float | None = None
    colour_band: str | None = None
    summary: str | None = None


class ResourceSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    language: str
    gap_band: str
    url: str
    description: str


class LanguageSchema(BaseModel):
    code: str
    name: str
