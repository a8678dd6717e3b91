"""
Session Results and CSV Export

Completed attempts for a class session, as rows for the teacher view and
as a downloadable CSV.
"""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable
from typing import TYPE_CHECKING

from sqlalchemy import desc, select

from readgap.core.models import Attempt, Student

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

CSV_HEADER = [
    "Name",
    "Year Group",
    "Home Language",
    "English Score",
    "L1 Score",
    "Gap",
    "Colour Band",
    "Summary",
]


async def session_results(db: AsyncSession, code: str) -> list[tuple[Student, Attempt]]:
    """Completed attempts for a session code with their students, newest first."""
    result = await db.execute(
        select(Student, Attempt)
        .join(Attempt, Attempt.student_id == Student.id)
        .where(Attempt.session_code == code, Attempt.completed_at.is_not(None))
        .order_by(desc(Attempt.completed_at))
    )
    return [(student, attempt) for student, attempt in result.all()]


def _number(value: float | None) -> str:
    if value is None:
        return "0"
    return f"{value:g}"


def results_to_csv(rows: Iterable[tuple[Student, Attempt]]) -> str:
    """Render session results as CSV text with a header row."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)

    for student, attempt in rows:
        writer.writerow(
            [
                student.name,
                student.year_group,
                student.home_language or "",
                _number(attempt.english_score),
                _number(attempt.l1_score),
                _number(attempt.gap),
                attempt.colour_band or "unknown",
                attempt.summary or "",
            ]
        )

    return buffer.getvalue()
