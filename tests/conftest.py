"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator
from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from library_catalog.core.database import Base, enable_sqlite_foreign_keys, get_db
from library_catalog.main import app
from library_catalog.models import Author, Book, BookAuthor, BookGenre, Genre

# Use an in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def test_engine():
    """Create a test database engine with foreign keys enforced."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with async_session() as session:
        yield session


@pytest.fixture
async def override_get_db(test_session: AsyncSession):
    """Override the get_db dependency for testing."""

    async def _override_get_db():
        yield test_session

    return _override_get_db


@pytest.fixture
async def client(override_get_db) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client."""
    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def sample_author(test_session: AsyncSession) -> Author:
    """Create a sample author for testing."""
    author = Author(
        first_name="Frank",
        last_name="Herbert",
        birth_date=date(1920, 10, 8),
        country="USA",
    )
    test_session.add(author)
    await test_session.flush()
    return author


@pytest.fixture
async def second_author(test_session: AsyncSession) -> Author:
    author = Author(
        first_name="Brian",
        last_name="Herbert",
        birth_date=date(1947, 6, 29),
    )
    test_session.add(author)
    await test_session.flush()
    return author


@pytest.fixture
async def sample_genre(test_session: AsyncSession) -> Genre:
    """Create a sample genre for testing."""
    genre = Genre(name="Science Fiction", description="Speculative futures")
    test_session.add(genre)
    await test_session.flush()
    return genre


@pytest.fixture
async def second_genre(test_session: AsyncSession) -> Genre:
    genre = Genre(name="Adventure")
    test_session.add(genre)
    await test_session.flush()
    return genre


@pytest.fixture
async def sample_book(test_session: AsyncSession, sample_author, sample_genre) -> Book:
    """Create a sample book linked to the sample author and genre."""
    book = Book(
        title="Dune",
        isbn="9780441013593",
        publish_year=1965,
        quantity_in_stock=5,
        author_links=[BookAuthor(author_id=sample_author.id)],
        genre_links=[BookGenre(genre_id=sample_genre.id)],
    )
    test_session.add(book)
    await test_session.flush()
    return book


@pytest.fixture
def book_payload():
    """Factory for valid book request bodies."""

    def _build(**overrides) -> dict:
        payload = {
            "title": "Dune",
            "isbn": "9780441013593",
            "authorIds": [1],
            "genreIds": [1],
            "publishYear": 1965,
            "quantityInStock": 5,
        }
        payload.update(overrides)
        return payload

    return _build
