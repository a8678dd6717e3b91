"""Pydantic schemas for API validation."""

from .assessments import (
    AnswerResponse,
    AnswerSubmit,
    AttemptCreate,
    AttemptSchema,
    AttemptStartResponse,
    ClassSessionCreate,
    ClassSessionSchema,
    LanguageSchema,
    QuestionSchema,
    ResourceSchema,
    ScoreSchema,
    SessionResultRow,
    StartingQuestionRequest,
    StudentCreate,
    StudentSchema,
)

__all__ = [
    # Sessions
    "ClassSessionCreate",
    "ClassSessionSchema",
    "SessionResultRow",
    # Students
    "StudentCreate",
    "StudentSchema",
    # Attempts
    "AttemptCreate",
    "AttemptSchema",
    "AttemptStartResponse",
    "AnswerSubmit",
    "AnswerResponse",
    "ScoreSchema",
    # Catalog
    "QuestionSchema",
    "StartingQuestionRequest",
    "LanguageSchema",
    "ResourceSchema",
]
