"""Book API routes."""

from fastapi import APIRouter, Depends, Request, Response, status

from library_catalog.api.schemas import (
    AuthorFilter,
    BookRequest,
    BookResponse,
    EntityId,
    ErrorResponse,
    GenreFilter,
)
from library_catalog.services.books import BookService, get_book_service

router = APIRouter(
    prefix="/api/books",
    tags=["books"],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        status.HTTP_409_CONFLICT: {"model": ErrorResponse},
    },
)


@router.get("", response_model=list[BookResponse])
async def list_books(
    search: str | None = None,
    author_id: AuthorFilter = None,
    genre_id: GenreFilter = None,
    service: BookService = Depends(get_book_service),
) -> list[BookResponse]:
    """List books ordered by title, filtered by title, author and genre."""
    return await service.list_books(search=search, author_id=author_id, genre_id=genre_id)


@router.get("/{book_id}", response_model=BookResponse)
async def get_book(
    book_id: EntityId,
    service: BookService = Depends(get_book_service),
) -> BookResponse:
    """Get a specific book by ID."""
    return await service.get_book(book_id)


@router.post("", response_model=BookResponse, status_code=status.HTTP_201_CREATED)
async def create_book(
    book_data: BookRequest,
    request: Request,
    response: Response,
    service: BookService = Depends(get_book_service),
) -> BookResponse:
    """Create a new book with its authors and genres."""
    book = await service.create_book(book_data)
    response.headers["Location"] = str(request.url_for("get_book", book_id=book.id))
    return book


@router.put("/{book_id}", response_model=BookResponse)
async def update_book(
    book_id: EntityId,
    book_data: BookRequest,
    service: BookService = Depends(get_book_service),
) -> BookResponse:
    """Replace a book, including all of its author and genre links."""
    return await service.update_book(book_id, book_data)


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_book(
    book_id: EntityId,
    service: BookService = Depends(get_book_service),
) -> None:
    """Delete a book and its links."""
    await service.delete_book(book_id)
