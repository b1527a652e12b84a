"""Author API routes."""

from fastapi import APIRouter, Depends, Request, Response, status

from library_catalog.api.schemas import AuthorRequest, AuthorResponse, EntityId, ErrorResponse
from library_catalog.services.authors import AuthorService, get_author_service

router = APIRouter(
    prefix="/api/authors",
    tags=["authors"],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        status.HTTP_409_CONFLICT: {"model": ErrorResponse},
    },
)


@router.get("", response_model=list[AuthorResponse])
async def list_authors(
    service: AuthorService = Depends(get_author_service),
) -> list[AuthorResponse]:
    """List all authors ordered by last name, then first name."""
    return await service.list_authors()


@router.get("/{author_id}", response_model=AuthorResponse)
async def get_author(
    author_id: EntityId,
    service: AuthorService = Depends(get_author_service),
) -> AuthorResponse:
    """Get a specific author by ID."""
    return await service.get_author(author_id)


@router.post("", response_model=AuthorResponse, status_code=status.HTTP_201_CREATED)
async def create_author(
    author_data: AuthorRequest,
    request: Request,
    response: Response,
    service: AuthorService = Depends(get_author_service),
) -> AuthorResponse:
    """Create a new author."""
    author = await service.create_author(author_data)
    response.headers["Location"] = str(request.url_for("get_author", author_id=author.id))
    return author


@router.put("/{author_id}", response_model=AuthorResponse)
async def update_author(
    author_id: EntityId,
    author_data: AuthorRequest,
    service: AuthorService = Depends(get_author_service),
) -> AuthorResponse:
    """Replace an author."""
    return await service.update_author(author_id, author_data)


@router.delete("/{author_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_author(
    author_id: EntityId,
    service: AuthorService = Depends(get_author_service),
) -> None:
    """Delete an author and unlink it from its books."""
    await service.delete_author(author_id)
