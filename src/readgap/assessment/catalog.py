"""
Question Catalog

Read-only access to questions by language. The selector depends on the
QuestionCatalog protocol only, so tests can substitute an in-memory catalog.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

from sqlalchemy import select

from readgap.core.models import ENGLISH, Question

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


class QuestionCatalog(Protocol):
    """Anything that can list the questions for a language."""

    async def fetch_by_language(self, language: str) -> Sequence[Question]: ...


class DatabaseQuestionCatalog:
    """QuestionCatalog backed by the questions table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def fetch_by_language(self, language: str) -> Sequence[Question]:
        result = await self.db.execute(select(Question).where(Question.language == language))
        return result.scalars().all()


# Display names for the home languages shipped in the seed bank
LANGUAGE_NAMES = {
    "spanish": "Spanish (Español)",
    "french": "French (Français)",
    "arabic": "Arabic (العربية)",
    "polish": "Polish (Polski)",
    "portuguese": "Portuguese (Português)",
    "urdu": "Urdu (اردو)",
    "bengali": "Bengali (বাংলা)",
    "punjabi": "Punjabi (ਪੰਜਾਬੀ)",
    "turkish": "Turkish (Türkçe)",
    "somali": "Somali (Soomaali)",
}


def language_display_name(code: str) -> str:
    """Human-readable name for a language code; unknown codes are capitalized."""
    return LANGUAGE_NAMES.get(code, code[:1].upper() + code[1:])


async def available_languages(db: AsyncSession) -> list[dict[str, str]]:
    """List home languages that have at least one question, sorted by display name."""
    result = await db.execute(
        select(Question.language).where(Question.language != ENGLISH).distinct()
    )
    codes = result.scalars().all()

    languages = [{"code": code, "name": language_display_name(code)} for code in codes]
    return sorted(languages, key=lambda lang: lang["name"])
