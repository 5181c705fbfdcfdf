"""Pytest configuration and shared fixtures.

Organization:
    - Settings Fixtures: isolation of the process-wide pagination settings
    - Database Fixtures: SQLAlchemy engine and session over the test models
    - Data Fixtures: seeded posts and their expected orderings

When adding new features:
    1. Add fixtures to the appropriate section below
    2. Use @pytest.fixture with clear docstrings
    3. Make fixtures composable (fixtures can depend on other fixtures)
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator, Iterator
from typing import TYPE_CHECKING

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from cursor_pager.core.settings import reset_pagination_settings
from tests.models import AUTHORS, EXAMPLE_AUTHORS, Base, Post, created_at_for

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

# Keep developer environments from leaking into the defaults under test
for _name in list(os.environ):
    if _name.startswith("CURSOR_PAGINATION_"):
        del os.environ[_name]


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def pagination_settings() -> Iterator[None]:
    """Reset the process-wide pagination settings around every test."""
    reset_pagination_settings()
    yield
    reset_pagination_settings()


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """Create async SQLAlchemy engine with in-memory SQLite.

    Yields:
        Async SQLAlchemy engine connected to in-memory SQLite.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
    )

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Create async database session with the test tables.

    Args:
        db_engine: Async SQLAlchemy engine fixture.

    Yields:
        Async database session for testing.
    """
    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(db_engine, expire_on_commit=False)

    async with session_maker() as session:
        try:
            yield session
        finally:
            await session.rollback()

    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def _seed(session: AsyncSession, authors: list[str]) -> list[Post]:
    posts = [
        Post(
            id=index,
            author=author,
            content=f"Post {index}",
            created_at=created_at_for(index),
        )
        for index, author in enumerate(authors, start=1)
    ]
    session.add_all(posts)
    await session.commit()
    return posts


# ============================================================================
# Data Fixtures
# ============================================================================


@pytest.fixture
async def posts(db_session: AsyncSession) -> list[Post]:
    """Thirteen posts by Jane, Jess and John, ordered by id."""
    return await _seed(db_session, AUTHORS)


@pytest.fixture
async def example_posts(db_session: AsyncSession) -> list[Post]:
    """Seven posts by Jane and John, ordered by id."""
    return await _seed(db_session, EXAMPLE_AUTHORS)
