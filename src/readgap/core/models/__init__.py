"""
ReadGap SQLAlchemy Models
"""

from .attempts import Attempt, Response
from .base import Base, CreatedAtMixin, UUIDPrimaryKeyMixin
from .questions import ENGLISH, Question, Resource
from .sessions import ClassSession
from .students import Student

__all__ = [
    # Base
    "Base",
    "UUIDPrimaryKeyMixin",
    "CreatedAtMixin",
    # Catalog
    "ENGLISH",
    "Question",
    "Resource",
    # Sessions
    "ClassSession",
    # Students
    "Student",
    # Attempts
    "Attempt",
    "Response",
]
