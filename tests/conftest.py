"""Pytest fixtures for Searchable tests."""

from collections.abc import AsyncGenerator, Generator
from unittest.mock import patch

import pytest
import pytest_asyncio
import structlog
from sqlalchemy import ForeignKey, String, Table, Text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import Mapped, mapped_column, relationship

from searchable.config.settings import Settings
from searchable.db.mixins import SearchableMixin
from searchable.db.models.base import Base


# =============================================================================
# Structlog Configuration Fixture
# =============================================================================


@pytest.fixture(scope="function", autouse=True)
def reset_structlog_after_test():
    """Reset structlog configuration after each test.

    This ensures tests that modify structlog global state
    don't affect other tests.
    """
    yield
    structlog.reset_defaults()
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


# =============================================================================
# Models
# =============================================================================


class Post(Base, SearchableMixin):
    """Searchable post with weighted title and body."""

    __tablename__ = "posts"
    __searchable__ = {"columns": {"posts.title": 10, "posts.body": 2}}

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(200))
    body: Mapped[str] = mapped_column(Text, default="")
    published: Mapped[bool] = mapped_column(default=True)

    comments: Mapped[list["Comment"]] = relationship(back_populates="post")


class Comment(Base):
    """Comment on a post, used for joined searches."""

    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(primary_key=True)
    post_id: Mapped[int] = mapped_column(ForeignKey("posts.id"))
    body: Mapped[str] = mapped_column(Text)

    post: Mapped[Post] = relationship(back_populates="comments")


class Tag(Base, SearchableMixin):
    """Searchable model without configuration (all columns, weight 1)."""

    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(50))


@pytest.fixture
def post_model() -> type[Post]:
    """The searchable Post model."""
    return Post


@pytest.fixture
def tag_model() -> type[Tag]:
    """The Tag model without search configuration."""
    return Tag


@pytest.fixture
def posts() -> Table:

    """The posts table."""
    return Post.__table__


@pytest.fixture
def tags() -> Table:
    """The tags table."""
    return Tag.__table__


# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture
def mock_settings() -> Settings:
    """Create mock settings for testing."""
    return Settings(
        DATABASE_URL="sqlite:///:memory:",
        ENVIRONMENT="test",
        log_level="DEBUG",
    )


@pytest.fixture
def patch_settings(mock_settings: Settings) -> Generator[Settings, None, None]:
    """Patch get_settings wherever it is looked up to return mock settings."""
    with (
        patch("searchable.config.settings.get_settings", return_value=mock_settings),
        patch("searchable.core.logging.get_settings", return_value=mock_settings),
        patch("searchable.db.dialects.get_settings", return_value=mock_settings),
        patch("searchable.search.relevance.get_settings", return_value=mock_settings),
    ):
        yield mock_settings


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create an in-memory SQLite engine with all tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def seeded_session(db_session: AsyncSession) -> AsyncSession:
    """Session with posts, comments and tags loaded."""
    db_session.add_all(
        [
            Post(id=1, title="Hello world", body="greeting text"),
            Post(id=2, title="Something else", body="say hello"),
            Post(id=3, title="Unrelated", body="nothing here"),
            Post(id=4, title="Hello", body="draft", published=False),
            Comment(id=1, post_id=2, body="hello there"),
            Comment(id=2, post_id=3, body="nothing"),
            Tag(id=1, name="Red"),
            Tag(id=2, name="Green"),
            Tag(id=3, name="Dark red"),
        ]
    )
    await db_session.commit()
    return db_session
