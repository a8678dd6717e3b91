"""
Attempt Models

One assessment attempt per student sitting, and the append-only responses
recorded against it.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from readgap.core.exceptions import AttemptCompletedError

from .base import Base, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from readgap.assessment.scorer import ScoreResult

    from .questions import Question
    from .students import Student


class Attempt(Base, UUIDPrimaryKeyMixin):
    """A single English + home-language assessment for one student.

    Mutates only when completed; score fields are written together with
    completed_at by complete().
    """

    __tablename__ = "attempts"
    __table_args__ = (
        CheckConstraint("phase IN ('english', 'l1', 'completed')", name="check_attempt_phase"),
        CheckConstraint(
            "colour_band IS NULL OR colour_band IN ('green', 'amber', 'red')",
            name="check_attempt_colour_band",
        ),
        Index("idx_attempts_student", "student_id"),
        Index("idx_attempts_session_code", "session_code"),
    )

    student_id: Mapped[UUID] = mapped_column(
        ForeignKey("students.id", ondelete="CASCADE"), nullable=False
    )
    session_code: Mapped[str] = mapped_column(String(6), nullable=False)
    phase: Mapped[str] = mapped_column(String(15), nullable=False, default="english")

    started_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Results (populated at completion)
    english_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    l1_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    gap: Mapped[float | None] = mapped_column(Float, nullable=True, comment="l1_score - english")
    colour_band: Mapped[str | None] = mapped_column(String(10), nullable=True)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    student: Mapped[Student] = relationship(back_populates="attempts")
    responses: Mapped[list[Response]] = relationship(
        back_populates="attempt",
        cascade="all, delete-orphan",
        order_by="Response.question_order",
    )

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None

    def complete(self, result: ScoreResult, *, completed_at: datetime | None = None) -> None:
        """Attach final scores and mark the attempt completed.

        Raises:
            AttemptCompletedError: If the attempt was already completed
        """
        if self.is_completed:
            raise AttemptCompletedError(f"Attempt {self.id} is already completed")

        self.completed_at = completed_at or datetime.now(UTC)
        self.phase = "completed"
        self.english_score = result.english_score
        self.l1_score = result.l1_score
        self.gap = result.gap
        self.colour_band = str(result.band)
        self.summary = result.summary


class Response(Base, UUIDPrimaryKeyMixin):
    """A student's answer to one question within an attempt. Never mutated."""

    __tablename__ = "responses"
    __table_args__ = (
        UniqueConstraint("attempt_id", "question_order", name="uq_response_attempt_order"),
        CheckConstraint("selected_index >= 0", name="check_response_selected_index"),
        CheckConstraint("time_ms >= 0", name="check_response_time"),
    )

    attempt_id: Mapped[UUID] = mapped_column(
        ForeignKey("attempts.id", ondelete="CASCADE"), nullable=False
    )
    question_id: Mapped[UUID] = mapped_column(ForeignKey("questions.id"), nullable=False)
    question_order: Mapped[int] = mapped_column(
        SmallInteger, nullable=False, comment="1-based position within the attempt"
    )
    selected_index: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    is_correct: Mapped[bool] = mapped_column(nullable=False)
    time_ms: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    answered_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )

    attempt: Mapped[Attempt] = relationship(back_populates="responses")
    question: Mapped[Question] = relationship()
