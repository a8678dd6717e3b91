"""
Class Session Models

Six-digit codes teachers hand to a class so attempts can be grouped.
"""

from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, CreatedAtMixin, UUIDPrimaryKeyMixin


class ClassSession(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    """A teacher-created assessment session identified by a six-digit code."""

    __tablename__ = "class_sessions"

    code: Mapped[str] = mapped_column(String(6), nullable=False, unique=True, index=True)
    teacher_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
