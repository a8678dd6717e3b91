"""
Student Models

Minimal student profile captured at the start of an assessment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, CreatedAtMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from .attempts import Attempt


class Student(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    """A student taking reading assessments. Immutable after creation."""

    __tablename__ = "students"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    year_group: Mapped[str] = mapped_column(String(20), nullable=False, comment="e.g. 'Year 7'")

    # Language context (drives the L1 phase)
    home_language: Mapped[str | None] = mapped_column(
        String(30),
        nullable=True,
        comment="Home-language code; NULL means English-only assessment",
    )

    attempts: Mapped[list[Attempt]] = relationship(
        back_populates="student", cascade="all, delete-orphan"
    )
