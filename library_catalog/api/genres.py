"""Genre API routes."""

from fastapi import APIRouter, Depends, Request, Response, status

from library_catalog.api.schemas import EntityId, ErrorResponse, GenreRequest, GenreResponse
from library_catalog.services.genres import GenreService, get_genre_service

router = APIRouter(
    prefix="/api/genres",
    tags=["genres"],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        status.HTTP_409_CONFLICT: {"model": ErrorResponse},
    },
)


@router.get("", response_model=list[GenreResponse])
async def list_genres(
    service: GenreService = Depends(get_genre_service),
) -> list[GenreResponse]:
    """List all genres ordered by name."""
    return await service.list_genres()


@router.get("/{genre_id}", response_model=GenreResponse)
async def get_genre(
    genre_id: EntityId,
    service: GenreService = Depends(get_genre_service),
) -> GenreResponse:
    """Get a specific genre by ID."""
    return await service.get_genre(genre_id)


@router.post("", response_model=GenreResponse, status_code=status.HTTP_201_CREATED)
async def create_genre(
    genre_data: GenreRequest,
    request: Request,
    response: Response,
    service: GenreService = Depends(get_genre_service),
) -> GenreResponse:
    """Create a new genre."""
    genre = await service.create_genre(genre_data)
    response.headers["Location"] = str(request.url_for("get_genre", genre_id=genre.id))
    return genre


@router.put("/{genre_id}", response_model=GenreResponse)
async def update_genre(
    genre_id: EntityId,
    genre_data: GenreRequest,
    service: GenreService = Depends(get_genre_service),
) -> GenreResponse:
    """Replace a genre."""
    return await service.update_genre(genre_id, genre_data)


@router.delete("/{genre_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_genre(
    genre_id: EntityId,
    service: GenreService = Depends(get_genre_service),
) -> None:
    """Delete a genre and unlink it from its books."""
    await service.delete_genre(genre_id)
