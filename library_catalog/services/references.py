"""Existence and uniqueness checks run before any write.

All checks here are read-only. They are not atomic with the write that
follows, so two concurrent requests can still both pass a duplicate check.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from library_catalog.core.errors import ConflictError, UnknownReferenceError
from library_catalog.models import Author, Book, Genre
from library_catalog.services.validation import dedupe_ids

logger = logging.getLogger(__name__)


def normalize_name(value: str) -> str:
    """Normalize a name for case-insensitive comparison."""
    return value.strip().casefold()


class ReferenceChecker:
    """Checks referenced ids exist and new values don't collide."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _missing_ids(self, model, ids: list[int]) -> list[int]:
        requested = dedupe_ids(ids)
        if not requested:
            return []

        count_query = select(func.count(model.id)).where(model.id.in_(requested))
        matched = (await self.db.execute(count_query)).scalar() or 0
        if matched == len(requested):
            return []

        found_query = select(model.id).where(model.id.in_(requested))
        found = set((await self.db.execute(found_query)).scalars().all())
        return [value for value in requested if value not in found]

    async def ensure_authors_exist(self, author_ids: list[int]) -> None:
        """Raise if any requested author id has no matching author."""
        missing = await self._missing_ids(Author, author_ids)
        if missing:
            logger.info("Rejected unknown author ids %s", missing)
            raise UnknownReferenceError(
                f"One or more authors do not exist: {', '.join(map(str, missing))}.",
                missing_ids=missing,
            )

    async def ensure_genres_exist(self, genre_ids: list[int]) -> None:
        """Raise if any requested genre id has no matching genre."""
        missing = await self._missing_ids(Genre, genre_ids)
        if missing:
            logger.info("Rejected unknown genre ids %s", missing)
            raise UnknownReferenceError(
                f"One or more genres do not exist: {', '.join(map(str, missing))}.",
                missing_ids=missing,
            )

    async def ensure_author_unique(
        self, first_name: str, last_name: str, exclude_id: int | None = None
    ) -> None:
        """Raise if another author has the same name, ignoring case."""
        query = select(Author.first_name, Author.last_name)
        if exclude_id is not None:
            query = query.where(Author.id != exclude_id)

        wanted = (normalize_name(first_name), normalize_name(last_name))
        result = await self.db.execute(query)
        for existing_first, existing_last in result.all():
            if (normalize_name(existing_first), normalize_name(existing_last)) == wanted:
                raise ConflictError(f"Author '{first_name} {last_name}' already exists.")

    async def ensure_genre_unique(self, name: str, exclude_id: int | None = None) -> None:
        """Raise if another genre has the same name, ignoring case."""
        query = select(Genre.name)
        if exclude_id is not None:
            query = query.where(Genre.id != exclude_id)

        wanted = normalize_name(name)
        result = await self.db.execute(query)
        if any(normalize_name(existing) == wanted for existing in result.scalars().all()):
            raise ConflictError(f"Genre '{name}' already exists.")

    async def ensure_isbn_unique(self, isbn: str, exclude_id: int | None = None) -> None:
        """Raise if another book already uses this ISBN."""
        query = select(func.count(Book.id)).where(Book.isbn == isbn)
        if exclude_id is not None:
            query = query.where(Book.id != exclude_id)

        if ((await self.db.execute(query)).scalar() or 0) > 0:
            raise ConflictError(f"Book with ISBN '{isbn}' already exists.")
