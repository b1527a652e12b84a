"""Synchronization of book-author and book-genre link rows."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from library_catalog.core.tracing import get_tracer
from library_catalog.models import Book, BookAuthor, BookGenre
from library_catalog.services.validation import dedupe_ids

logger = logging.getLogger(__name__)

tracer = get_tracer(__name__)


class AssociationSynchronizer:
    """Makes a book's link rows match the requested author and genre ids.

    Ids must already be existence-checked. Empty id lists are not rejected
    here; they leave the book without links of that kind.

    Every change goes through the caller's session, so the links are
    committed or rolled back together with the book's scalar fields.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def link_new_book(self, book: Book, author_ids: list[int], genre_ids: list[int]) -> None:
        """Insert links for a book that has none yet."""
        with tracer.start_as_current_span("associations.link_new_book") as span:
            authors = dedupe_ids(author_ids)
            genres = dedupe_ids(genre_ids)
            span.set_attribute("associations.author_count", len(authors))
            span.set_attribute("associations.genre_count", len(genres))

            self._append_links(book, authors, genres)
            await self.db.flush()

    async def sync_book_links(
        self, book: Book, author_ids: list[int], genre_ids: list[int]
    ) -> None:
        """Replace all links of a loaded book with the requested ones.

        The current collections are cleared and flushed before the new rows
        are added, so a kept id is deleted and re-inserted rather than
        colliding on the composite key.
        """
        with tracer.start_as_current_span("associations.sync_book_links") as span:
            authors = dedupe_ids(author_ids)
            genres = dedupe_ids(genre_ids)
            span.set_attribute("associations.book_id", book.id)
            span.set_attribute("associations.removed_authors", len(book.author_links))
            span.set_attribute("associations.removed_genres", len(book.genre_links))
            span.set_attribute("associations.author_count", len(authors))
            span.set_attribute("associations.genre_count", len(genres))

            book.author_links.clear()
            book.genre_links.clear()
            await self.db.flush()

            self._append_links(book, authors, genres)
            await self.db.flush()

            logger.debug(
                "Book %s now linked to authors %s and genres %s", book.id, authors, genres
            )

    @staticmethod
    def _append_links(book: Book, author_ids: list[int], genre_ids: list[int]) -> None:
        book.author_links.extend(BookAuthor(author_id=author_id) for author_id in author_ids)
        book.genre_links.extend(BookGenre(genre_id=genre_id) for genre_id in genre_ids)
