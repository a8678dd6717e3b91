"""
Pytest Configuration and Fixtures

Shared test fixtures for unit, API and integration tests.
"""

import os

# Must be set before readgap.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("OPENAI_API_KEY", "")
os.environ.setdefault("ANTHROPIC_API_KEY", "")

from collections.abc import Sequence  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.orm import configure_mappers  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from readgap.ai import DeterministicSummaryService, get_summary_service  # noqa: E402
from readgap.core.database import get_db  # noqa: E402
from readgap.core.models import Base, Question, Student  # noqa: E402
from readgap.main import app  # noqa: E402

# Ensure all mappers are configured
configure_mappers()


class InMemoryCatalog:
    """QuestionCatalog test double holding questions in a list."""

    def __init__(self, questions: Sequence[Question] = ()):
        self.questions = list(questions)
        self.requests: list[str] = []

    async def fetch_by_language(self, language: str) -> list[Question]:
        self.requests.append(language)
        return [q for q in self.questions if q.language == language]


def build_question(
    language: str = "en",
    difficulty: float = 2.5,
    *,
    correct_index: int = 0,
    skill_tag: str = "inference",
    text: str | None = None,
) -> Question:
    """Create a transient Question (not added to any session)."""
    return Question(
        language=language,
        text=text or f"{language} question at {difficulty}",
        choices=["a", "b", "c", "d"],
        correct_index=correct_index,
        difficulty=difficulty,
        skill_tag=skill_tag,
    )


@pytest.fixture
def make_question():
    """Factory for transient questions."""
    return build_question


@pytest.fixture
def make_catalog():
    """Factory for in-memory question catalogs."""
    return InMemoryCatalog


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine with all tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(async_engine) -> AsyncSession:
    """Create database session for testing."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session() as session:
        yield session


@pytest.fixture
async def seeded_catalog(db_session):
    """Persist a small catalog: 4 English questions per difficulty 1-5, 3 Spanish.

    Every question's correct answer is choice 1.
    """
    questions = [
        build_question("en", float(difficulty), correct_index=1, text=f"en {difficulty}.{i}")
        for difficulty in range(1, 6)
        for i in range(4)
    ]
    questions += [
        build_question("spanish", difficulty, correct_index=1, text=f"es {difficulty}")
        for difficulty in (1.5, 2.5, 3.5)
    ]
    db_session.add_all(questions)
    await db_session.commit()
    return questions


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncClient:
    """Create test client with database and summary-service overrides."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_summary_service] = DeterministicSummaryService
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def spanish_student(db_session: AsyncSession) -> Student:
    student = Student(name="Lucia Garcia", year_group="Year 7", home_language="spanish")
    db_session.add(student)
    await db_session.commit()
    await db_session.refresh(student)
    return student


@pytest.fixture
async def english_only_student(db_session: AsyncSession) -> Student:
    student = Student(name="Tom Baker", year_group="Year 8")
    db_session.add(student)
    await db_session.commit()
    await db_session.refresh(student)
    return student
