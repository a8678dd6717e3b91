#!/usr/bin/env python3
"""
Question Bank Loader: JSON → database

Reads the question bank JSON (questions + reading resources) and loads it
into the catalog tables.

Usage:
    python scripts/load_questions.py              # Load from default path
    python scripts/load_questions.py --reload     # Clear and reload
    python scripts/load_questions.py --path=/custom/bank.json
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from readgap.assessment.question_bank import load_question_bank, read_question_bank
from readgap.config import settings
from readgap.core.models import Base

logger = logging.getLogger("load_questions")


async def main(db_url: str, bank_path: Path, reload: bool) -> int:
    try:
        bank = read_question_bank(bank_path)
    except (FileNotFoundError, ValidationError) as e:
        logger.error(f"Invalid question bank {bank_path}: {e}")
        return 1

    engine = create_async_engine(db_url, echo=False)
    SessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created/verified")

        async with SessionLocal() as session:
            questions, resources = await load_question_bank(session, bank, reload=reload)
    finally:
        await engine.dispose()

    logger.info(f"Done: {questions} questions, {resources} resources")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Load the reading question bank")
    parser.add_argument("--path", type=Path, default=settings.QUESTION_BANK_PATH)
    parser.add_argument("--db-url", default=settings.DATABASE_URL)
    parser.add_argument("--reload", action="store_true", help="Clear existing questions first")
    args = parser.parse_args()

    logging.basicConfig(level=settings.LOG_LEVEL, format="%(levelname)s %(message)s")
    sys.exit(asyncio.run(main(args.db_url, args.path, args.reload)))
