"""Book service: validation, reference checks, persistence and links."""

import logging

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from library_catalog.api.schemas import BookRequest, BookResponse
from library_catalog.core.database import get_db
from library_catalog.core.errors import CatalogValidationError, NotFoundError
from library_catalog.models import Book, BookAuthor, BookGenre
from library_catalog.services.associations import AssociationSynchronizer
from library_catalog.services.projection import BookProjector
from library_catalog.services.references import ReferenceChecker
from library_catalog.services.validation import validate_book

logger = logging.getLogger(__name__)


class BookService:
    """Service for reading and writing books.

    Writes follow one order: validate the payload, check referenced ids,
    check ISBN uniqueness, then persist the book and its links. Nothing is
    written until every check has passed.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self.references = ReferenceChecker(db)
        self.associations = AssociationSynchronizer(db)
        self.projector = BookProjector(db)

    async def _get(self, book_id: int) -> Book:
        """Load a book with fresh link collections."""
        query = (
            select(Book)
            .where(Book.id == book_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(query)
        book = result.scalar_one_or_none()
        if book is None:
            raise NotFoundError.for_entity("Book", book_id)
        return book

    async def list_books(
        self,
        search: str | None = None,
        author_id: int | None = None,
        genre_id: int | None = None,
    ) -> list[BookResponse]:
        """List books by title, optionally filtered.

        Args:
            search: Case-insensitive substring of the title. Blank is ignored.
            author_id: Only books linked to this author.
            genre_id: Only books linked to this genre.
        """
        if author_id is not None and author_id <= 0:
            raise CatalogValidationError("authorId must be greater than zero.")
        if genre_id is not None and genre_id <= 0:
            raise CatalogValidationError("genreId must be greater than zero.")

        query = select(Book)

        if search and search.strip():
            query = query.where(Book.title.icontains(search.strip(), autoescape=True))

        if author_id is not None:
            query = query.where(Book.author_links.any(BookAuthor.author_id == author_id))

        if genre_id is not None:
            query = query.where(Book.genre_links.any(BookGenre.genre_id == genre_id))

        result = await self.db.execute(query.order_by(Book.title, Book.id))
        return await self.projector.project_many(result.scalars().all())

    async def get_book(self, book_id: int) -> BookResponse:
        return await self.projector.project(await self._get(book_id))

    async def create_book(self, request: BookRequest) -> BookResponse:
        """Create a book and link it to its authors and genres."""
        fields = validate_book(request)
        await self.references.ensure_authors_exist(fields.author_ids)
        await self.references.ensure_genres_exist(fields.genre_ids)
        await self.references.ensure_isbn_unique(fields.isbn)

        book = Book(
            title=fields.title,
            isbn=fields.isbn,
            publish_year=fields.publish_year,
            quantity_in_stock=fields.quantity_in_stock,
        )
        self.db.add(book)
        await self.associations.link_new_book(book, fields.author_ids, fields.genre_ids)

        logger.info("Created book %s (%s)", book.id, book.title)
        return await self.projector.project(book)

    async def update_book(self, book_id: int, request: BookRequest) -> BookResponse:
        """Replace every field and every link of a book."""
        fields = validate_book(request)
        book = await self._get(book_id)
        await self.references.ensure_authors_exist(fields.author_ids)
        await self.references.ensure_genres_exist(fields.genre_ids)
        await self.references.ensure_isbn_unique(fields.isbn, exclude_id=book_id)

        book.title = fields.title
        book.isbn = fields.isbn
        book.publish_year = fields.publish_year
        book.quantity_in_stock = fields.quantity_in_stock
        await self.associations.sync_book_links(book, fields.author_ids, fields.genre_ids)

        logger.info("Updated book %s", book_id)
        return await self.projector.project(book)

    async def delete_book(self, book_id: int) -> None:
        """Delete a book together with its links."""
        book = await self._get(book_id)
        await self.db.delete(book)
        await self.db.flush()
        logger.info("Deleted book %s", book_id)


async def get_book_service(db: AsyncSession = Depends(get_db)) -> BookService:
    """Dependency that provides the book service."""
    return BookService(db)
