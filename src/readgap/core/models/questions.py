"""
Question Catalog Models

Multiple-choice reading questions and the reading resources recommended
after an assessment.
"""

from __future__ import annotations

from sqlalchemy import JSON, CheckConstraint, Float, Index, SmallInteger, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, CreatedAtMixin, UUIDPrimaryKeyMixin

ENGLISH = "en"


class Question(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    """A multiple-choice reading question in one language.

    Immutable once loaded; the catalog is read-only during assessments.
    """

    __tablename__ = "questions"
    __table_args__ = (
        CheckConstraint("difficulty > 0", name="check_question_difficulty_positive"),
        CheckConstraint("correct_index >= 0", name="check_question_correct_index"),
        Index("idx_questions_language", "language"),
        Index("idx_questions_language_difficulty", "language", "difficulty"),
    )

    language: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        comment="'en' for English, otherwise a home-language code (e.g. 'spanish')",
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    choices: Mapped[list[str]] = mapped_column(JSON, nullable=False, comment="Ordered choices")
    correct_index: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    difficulty: Mapped[float] = mapped_column(
        Float, nullable=False, comment="Continuous difficulty, typically 1-5"
    )
    skill_tag: Mapped[str] = mapped_column(
        String(50), nullable=False, comment="e.g. decoding, vocabulary, inference"
    )

    @property
    def is_english(self) -> bool:
        return self.language == ENGLISH

    def is_correct_choice(self, selected_index: int) -> bool:
        """Check a selected choice index against the answer key."""
        return selected_index == self.correct_index

    def __repr__(self) -> str:
        return f"<Question {self.language} d={self.difficulty} {self.skill_tag}>"


class Resource(Base, UUIDPrimaryKeyMixin):
    """A recommended reading resource for a home language and colour band."""

    __tablename__ = "resources"
    __table_args__ = (
        CheckConstraint("gap_band IN ('green', 'amber', 'red')", name="check_resource_band"),
        Index("idx_resources_language_band", "language", "gap_band"),
    )

    language: Mapped[str] = mapped_column(
        String(30), nullable=False, comment="Home-language code, or 'general'"
    )
    gap_band: Mapped[str] = mapped_column(String(10), nullable=False)
    url: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
