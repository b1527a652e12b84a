"""Client-side state for the catalog: lists, filters and the last error."""

import logging
from collections.abc import Awaitable

from catalog_client.api_client import APIError, CatalogAPIClient
from catalog_client.models import (
    Author,
    AuthorRequest,
    Book,
    BookRequest,
    Genre,
    GenreRequest,
)

logger = logging.getLogger(__name__)


class LibraryStore:
    """Holds what the client shows and performs the calls behind it.

    Mutations return True on success. On failure they return False and
    keep the error text in ``error_message`` for display.
    """

    def __init__(self, api_client: CatalogAPIClient | None = None) -> None:
        self.api_client = api_client or CatalogAPIClient()

        self.books: list[Book] = []
        self.authors: list[Author] = []
        self.genres: list[Genre] = []

        self.search_text = ""
        self.selected_author_id: int | None = None
        self.selected_genre_id: int | None = None

        self.is_books_loading = False
        self.error_message: str | None = None

    async def load_initial_data(self) -> None:
        await self.refresh_references()
        await self.load_books()

    async def refresh_references(self) -> None:
        """Reload authors and genres used by filters and forms."""
        try:
            authors = await self.api_client.get("/api/authors", list[Author])
            genres = await self.api_client.get("/api/genres", list[Genre])
        except APIError as e:
            self._handle(e)
            return
        self.authors = authors
        self.genres = genres

    def book_query(self) -> dict[str, str]:
        """Query parameters for the current filters."""
        params: dict[str, str] = {}
        search = self.search_text.strip()
        if search:
            params["search"] = search
        if self.selected_author_id is not None:
            params["authorId"] = str(self.selected_author_id)
        if self.selected_genre_id is not None:
            params["genreId"] = str(self.selected_genre_id)
        return params

    async def load_books(self) -> None:
        self.is_books_loading = True
        try:
            self.books = await self.api_client.get(
                "/api/books", list[Book], params=self.book_query()
            )
        except APIError as e:
            self._handle(e)
        finally:
            self.is_books_loading = False

    def reset_book_filters(self) -> None:
        self.search_text = ""
        self.selected_author_id = None
        self.selected_genre_id = None

    # Books

    async def create_book(self, request: BookRequest) -> bool:
        return await self._mutate(self.api_client.post("/api/books", Book, request))

    async def update_book(self, book_id: int, request: BookRequest) -> bool:
        return await self._mutate(self.api_client.put(f"/api/books/{book_id}", Book, request))

    async def delete_book(self, book_id: int) -> bool:
        return await self._mutate(self.api_client.delete(f"/api/books/{book_id}"))

    # Authors

    async def create_author(self, request: AuthorRequest) -> bool:
        return await self._mutate(
            self.api_client.post("/api/authors", Author, request), references=True
        )

    async def update_author(self, author_id: int, request: AuthorRequest) -> bool:
        return await self._mutate(
            self.api_client.put(f"/api/authors/{author_id}", Author, request), references=True
        )

    async def delete_author(self, author_id: int) -> bool:
        return await self._mutate(
            self.api_client.delete(f"/api/authors/{author_id}"), references=True
        )

    # Genres

    async def create_genre(self, request: GenreRequest) -> bool:
        return await self._mutate(
            self.api_client.post("/api/genres", Genre, request), references=True
        )

    async def update_genre(self, genre_id: int, request: GenreRequest) -> bool:
        return await self._mutate(
            self.api_client.put(f"/api/genres/{genre_id}", Genre, request), references=True
        )

    async def delete_genre(self, genre_id: int) -> bool:
        return await self._mutate(
            self.api_client.delete(f"/api/genres/{genre_id}"), references=True
        )

    def clear_error(self) -> None:
        self.error_message = None

    async def _mutate(self, call: Awaitable, references: bool = False) -> bool:
        """Await a write, then reload what it may have changed."""
        try:
            await call
        except APIError as e:
            self._handle(e)
            return False

        # Author and genre changes can rename or unlink book entries too
        if references:
            await self.refresh_references()
        await self.load_books()
        return True

    def _handle(self, error: APIError) -> None:
        logger.debug("Store error: %s", error.message)
        self.error_message = error.message
