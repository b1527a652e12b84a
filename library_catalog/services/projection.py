"""Flattening of persisted entities into response shapes."""

from collections import defaultdict
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from library_catalog.api.schemas import AuthorResponse, BookResponse, GenreResponse
from library_catalog.models import Author, Book, BookAuthor, BookGenre, Genre


def project_author(author: Author) -> AuthorResponse:
    return AuthorResponse.model_validate(author)


def project_genre(genre: Genre) -> GenreResponse:
    return GenreResponse.model_validate(genre)


class BookProjector:
    """Builds book responses by re-reading link rows from the store.

    Author and genre lists are ordered by id within each book.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def project(self, book: Book) -> BookResponse:
        """Project a single book."""
        responses = await self.project_many([book])
        return responses[0]

    async def project_many(self, books: Sequence[Book]) -> list[BookResponse]:
        """Project books, keeping the given order."""
        book_ids = [book.id for book in books]
        if not book_ids:
            return []

        author_query = (
            select(BookAuthor.book_id, Author.id, Author.first_name, Author.last_name)
            .join(Author, Author.id == BookAuthor.author_id)
            .where(BookAuthor.book_id.in_(book_ids))
            .order_by(BookAuthor.book_id, BookAuthor.author_id)
        )
        genre_query = (
            select(BookGenre.book_id, Genre.id, Genre.name)
            .join(Genre, Genre.id == BookGenre.genre_id)
            .where(BookGenre.book_id.in_(book_ids))
            .order_by(BookGenre.book_id, BookGenre.genre_id)
        )

        authors: dict[int, list[tuple[int, str]]] = defaultdict(list)
        for book_id, author_id, first_name, last_name in (await self.db.execute(author_query)).all():
            authors[book_id].append((author_id, f"{first_name} {last_name}".strip()))

        genres: dict[int, list[tuple[int, str]]] = defaultdict(list)
        for book_id, genre_id, name in (await self.db.execute(genre_query)).all():
            genres[book_id].append((genre_id, name))

        return [
            BookResponse(
                id=book.id,
                title=book.title,
                author_ids=[author_id for author_id, _ in authors[book.id]],
                author_names=[name for _, name in authors[book.id]],
                genre_ids=[genre_id for genre_id, _ in genres[book.id]],
                genre_names=[name for _, name in genres[book.id]],
                publish_year=book.publish_year,
                isbn=book.isbn,
                quantity_in_stock=book.quantity_in_stock,
            )
            for book in books
        ]
