"""
Shared fixtures for Inkwell backend tests.

Each test gets a fresh SQLite database file (via aiosqlite) with all tables
created from SQLModel metadata.  The FastAPI app is driven in-process through
httpx's ASGITransport with the DB session, the current user and the document
pipeline overridden.  No test talks to a real AI provider.
"""
from __future__ import annotations

import os
from typing import AsyncGenerator

os.environ.setdefault("MODE", "testing")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402
from sqlmodel.ext.asyncio.session import AsyncSession  # noqa: E402

from app.api.deps import get_current_user, get_db, get_pipeline  # noqa: E402
from app.core.document_pipeline import DocumentPipeline  # noqa: E402
from app.db.database import build_engine, build_sessionmaker  # noqa: E402
from app.main import app  # noqa: E402
from app.models import User  # noqa: E402

from tests.fakes import RecordingImageGenerator, ScriptedTextGenerator  # noqa: E402


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def db_session(tmp_path) -> AsyncGenerator[AsyncSession, None]:
    """A session on a throwaway SQLite database with every table created."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'inkwell.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    session_factory = build_sessionmaker(engine)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture
async def user(db_session: AsyncSession) -> User:
    user = User(email="ada@example.com", username="ada", display_name="Ada")
    db_session.add(user)
    await db_session.flush()
    return user


@pytest_asyncio.fixture
async def other_user(db_session: AsyncSession) -> User:
    user = User(email="grace@example.com", username="grace")
    db_session.add(user)
    await db_session.flush()
    return user


# ---------------------------------------------------------------------------
# Provider stubs
# ---------------------------------------------------------------------------

@pytest.fixture
def text_generator() -> ScriptedTextGenerator:
    return ScriptedTextGenerator()


@pytest.fixture
def image_generator() -> RecordingImageGenerator:
    return RecordingImageGenerator()


@pytest.fixture
def pipeline(text_generator, image_generator) -> DocumentPipeline:
    return DocumentPipeline(text_generator=text_generator, image_generator=image_generator)


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def client(
    db_session: AsyncSession,
    user: User,
    pipeline: DocumentPipeline,
) -> AsyncGenerator[AsyncClient, None]:
    """
    httpx AsyncClient wired to the FastAPI app with the DB session, current
    user and pipeline overridden for the test.
    """

    async def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_current_user] = lambda: user
    app.dependency_overrides[get_pipeline] = lambda: pipeline

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
