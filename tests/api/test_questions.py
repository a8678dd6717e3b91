"""
Tests for Question Catalog API Endpoints
"""

from httpx import AsyncClient


class TestLanguages:
    async def test_lists_home_languages_with_questions(self, client: AsyncClient, seeded_catalog):
        response = await client.get("/api/v1/questions/languages")

        assert response.status_code == 200
        assert response.json() == [{"code": "spanish", "name": "Spanish (Español)"}]

    async def test_empty_catalog(self, client: AsyncClient):
        response = await client.get("/api/v1/questions/languages")

        assert response.json() == []


class TestStartingQuestion:
    async def test_home_language_starting_question(self, client: AsyncClient, seeded_catalog):
        response = await client.post("/api/v1/questions/start", json={"language": " Spanish"})

        assert response.status_code == 200
        data = response.json()
        assert data["language"] == "spanish"
        assert data["difficulty"] == 2.5
        assert len(data["choices"]) == 4
        assert "correct_index" not in data

    async def test_unknown_language_returns_404(self, client: AsyncClient, seeded_catalog):
        response = await client.post("/api/v1/questions/start", json={"language": "klingon"})

        assert response.status_code == 404

    async def test_empty_language_returns_422(self, client: AsyncClient):
        response = await client.post("/api/v1/questions/start", json={"language": ""})

        assert response.status_code == 422
