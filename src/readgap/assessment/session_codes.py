"""
Class session code generation.

Session codes are six-digit numbers (100000-999999) that a teacher reads
out to a class; students enter them when starting an attempt.
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from sqlalchemy import select

from readgap.core.exceptions import SessionCodeError
from readgap.core.models import ClassSession

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


def generate_session_code(rng: random.Random | None = None) -> str:
    """Generate a random six-digit session code.

    Examples:
        >>> len(generate_session_code())
        6
    """
    rng = rng or random.Random()
    return str(rng.randint(100000, 999999))


async def create_unique_session_code(
    db: AsyncSession, max_retries: int = 10, rng: random.Random | None = None
) -> str:
    """Generate a session code not already used by another class session.

    Args:
        db: Database session
        max_retries: Maximum attempts to generate unique code
        rng: Random source (for reproducible tests)

    Returns:
        Unused six-digit code

    Raises:
        SessionCodeError: If unable to generate unique code
    """
    for _attempt in range(max_retries):
        code = generate_session_code(rng)

        result = await db.execute(select(ClassSession.id).where(ClassSession.code == code))
        if result.scalar_one_or_none() is None:
            return code

        logger.info(f"Session code collision on {code}, retrying")

    raise SessionCodeError(f"Could not generate unique session code after {max_retries} attempts")
