"""
Question Bank Loader

Validates a JSON question bank (questions + reading resources) and writes
it into the catalog tables.

Expected structure:
    {
        "version": "1.0",
        "questions": [{"language", "text", "choices", "correct_index", "difficulty", "skill_tag"}],
        "resources": [{"language", "gap_band", "url", "description"}]
    }
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, Field, model_validator

from readgap.core.models import Question, Resource

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class QuestionSeed(BaseModel):
    language: str = Field(min_length=2, max_length=30)
    text: str = Field(min_length=1)
    choices: list[str] = Field(min_length=2)
    correct_index: int = Field(ge=0)
    difficulty: float = Field(gt=0, le=5)
    skill_tag: str = Field(min_length=1, max_length=50)

    @model_validator(mode="after")
    def check_answer_key(self) -> QuestionSeed:
        if self.correct_index >= len(self.choices):
            raise ValueError(
                f"correct_index {self.correct_index} out of range for {len(self.choices)} choices"
            )
        return self


class ResourceSeed(BaseModel):
    language: str = Field(min_length=2, max_length=30)
    gap_band: Literal["green", "amber", "red"]
    url: str = Field(pattern=r"^https?://")
    description: str


class QuestionBank(BaseModel):
    version: str = "unknown"
    questions: list[QuestionSeed] = Field(default_factory=list)
    resources: list[ResourceSeed] = Field(default_factory=list)


def parse_question_bank(data: dict[str, Any]) -> QuestionBank:
    """Validate raw question bank JSON.

    Raises:
        pydantic.ValidationError: If any question or resource is malformed
    """
    return QuestionBank.model_validate(data)


def read_question_bank(path: Path) -> QuestionBank:
    """Read and validate a question bank file."""
    if not path.exists():
        raise FileNotFoundError(f"Question bank not found: {path}")

    with open(path, encoding="utf-8") as f:
        return parse_question_bank(json.load(f))


async def load_question_bank(
    db: AsyncSession, bank: QuestionBank, *, reload: bool = False
) -> tuple[int, int]:
    """Insert a question bank into the catalog.

    Args:
        db: Database session (committed here)
        bank: Validated question bank
        reload: Delete existing questions and resources first

    Returns:
        (questions added, resources added)
    """
    if reload:
        await db.execute(Resource.__table__.delete())
        await db.execute(Question.__table__.delete())
        logger.info("Cleared existing questions and resources")

    db.add_all(Question(**seed.model_dump()) for seed in bank.questions)
    db.add_all(Resource(**seed.model_dump()) for seed in bank.resources)
    await db.commit()

    logger.info(
        f"Loaded question bank v{bank.version}: "
        f"{len(bank.questions)} questions, {len(bank.resources)} resources"
    )
    return len(bank.questions), len(bank.resources)
