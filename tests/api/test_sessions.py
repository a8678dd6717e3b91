"""
Tests for Class Session API Endpoints

Session code creation, teacher results view and CSV export.
"""

import csv
import io

from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from readgap.assessment.export import CSV_HEADER
from readgap.assessment.scorer import Band, ScoreResult
from readgap.core.models import Attempt, ClassSession, Student

SESSION_CODE = "482913"


async def add_completed_attempt(
    db_session: AsyncSession, name: str, *, code: str = SESSION_CODE, summary: str = "Balanced."
) -> Attempt:
    student = Student(name=name, year_group="Year 7", home_language="spanish")
    attempt = Attempt(student=student, session_code=code, phase="l1")
    attempt.complete(
        ScoreResult(english_score=52, l1_score=54, gap=2, band=Band.RED, summary=summary)
    )
    db_session.add(student)
    await db_session.commit()
    return attempt


class TestCreateSession:
    async def test_create_session(self, client: AsyncClient, db_session: AsyncSession):
        response = await client.post("/api/v1/sessions", json={"teacher_name": "  Ms Patel "})

        assert response.status_code == 201
        data = response.json()
        assert len(data["code"]) == 6
        assert data["code"].isdigit()
        assert data["teacher_name"] == "Ms Patel"

        stored = (await db_session.execute(select(ClassSession))).scalar_one()
        assert stored.code == data["code"]

    async def test_teacher_name_optional(self, client: AsyncClient):
        response = await client.post("/api/v1/sessions", json={})

        assert response.status_code == 201
        assert response.json()["teacher_name"] is None

    async def test_codes_are_distinct(self, client: AsyncClient):
        codes = set()
        for _ in range(5):
            codes.add((await client.post("/api/v1/sessions", json={})).json()["code"])

        assert len(codes) == 5


class TestSessionResults:
    async def test_results_list_completed_attempts(
        self, client: AsyncClient, db_session: AsyncSession
    ):
        await add_completed_attempt(db_session, "Lucia Garcia")
        await add_completed_attempt(db_session, "Other Class", code="111111")

        response = await client.get(f"/api/v1/sessions/{SESSION_CODE}/results")

        assert response.status_code == 200
        rows = response.json()
        assert len(rows) == 1
        assert rows[0]["student_name"] == "Lucia Garcia"
        assert rows[0]["colour_band"] == "red"
        assert rows[0]["gap"] == 2

    async def test_unknown_code_has_no_results(self, client: AsyncClient):
        response = await client.get("/api/v1/sessions/999999/results")

        assert response.status_code == 200
        assert response.json() == []

    async def test_malformed_code_returns_400(self, client: AsyncClient):
        response = await client.get("/api/v1/sessions/12ab56/results")

        assert response.status_code == 400
        assert "digits" in response.json()["detail"]


class TestSessionExport:
    async def test_export_csv(self, client: AsyncClient, db_session: AsyncSession):
        await add_completed_attempt(db_session, "Lucia Garcia", summary="Good, keep reading.")

        response = await client.get(f"/api/v1/sessions/{SESSION_CODE}/export")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert (
            response.headers["content-disposition"]
            == f'attachment; filename="session-{SESSION_CODE}-results.csv"'
        )
        rows = list(csv.reader(io.StringIO(response.text)))
        assert rows[0] == CSV_HEADER
        assert rows[1] == [
            "Lucia Garcia",
            "Year 7",
            "spanish",
            "52",
            "54",
            "2",
            "red",
            "Good, keep reading.",
        ]

    async def test_export_empty_session_is_header_only(self, client: AsyncClient):
        response = await client.get(f"/api/v1/sessions/{SESSION_CODE}/export")

        assert response.status_code == 200
        assert response.text == ",".join(CSV_HEADER) + "\n"

    async def test_export_malformed_code_returns_400(self, client: AsyncClient):
        response = await client.get("/api/v1/sessions/123/export")

        assert response.status_code == 400
