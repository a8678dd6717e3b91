"""
Tests for Student API Endpoints
"""

import uuid

import pytest
from httpx import AsyncClient


class TestCreateStudent:
    async def test_create_student_normalizes_fields(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/students",
            json={"name": "  Lucia   Garcia ", "year_group": "y7", "home_language": "Spanish"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Lucia Garcia"
        assert data["year_group"] == "Year 7"
        assert data["home_language"] == "spanish"
        assert "id" in data

    async def test_blank_home_language_means_english_only(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/students",
            json={"name": "Tom Baker", "year_group": "Year 8", "home_language": "  "},
        )

        assert response.status_code == 201
        assert response.json()["home_language"] is None

    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "T", "year_group": "Year 8"},
            {"name": "Tom99", "year_group": "Year 8"},
            {"name": "Tom Baker", "year_group": "Grade 8"},
            {"name": "Tom Baker", "year_group": "Year 8", "home_language": "en"},
            {"year_group": "Year 8"},
        ],
    )
    async def test_invalid_payload_returns_422(self, client: AsyncClient, payload):
        response = await client.post("/api/v1/students", json=payload)

        assert response.status_code == 422


class TestGetStudent:
    async def test_get_student(self, client: AsyncClient, spanish_student):
        response = await client.get(f"/api/v1/students/{spanish_student.id}")

        assert response.status_code == 200
        assert response.json()["name"] == "Lucia Garcia"

    async def test_get_unknown_student_returns_404(self, client: AsyncClient):
        response = await client.get(f"/api/v1/students/{uuid.uuid4()}")

        assert response.status_code == 404

    async def test_list_attempts(self, client: AsyncClient, seeded_catalog, spanish_student):
        await client.post(
            "/api/v1/attempts",
            json={"student_id": str(spanish_student.id), "session_code": "482913"},
        )

        response = await client.get(f"/api/v1/students/{spanish_student.id}/attempts")

        assert response.status_code == 200
        attempts = response.json()
        assert len(attempts) == 1
        assert attempts[0]["phase"] == "english"
