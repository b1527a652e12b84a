"""Genre service."""

import logging

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from library_catalog.api.schemas import GenreRequest, GenreResponse
from library_catalog.core.database import get_db
from library_catalog.core.errors import NotFoundError
from library_catalog.models import Genre
from library_catalog.services.projection import project_genre
from library_catalog.services.references import ReferenceChecker
from library_catalog.services.validation import validate_genre

logger = logging.getLogger(__name__)


class GenreService:
    """Service for reading and writing genres."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self.references = ReferenceChecker(db)

    async def _get(self, genre_id: int) -> Genre:
        genre = await self.db.get(Genre, genre_id)
        if genre is None:
            raise NotFoundError.for_entity("Genre", genre_id)
        return genre

    async def list_genres(self) -> list[GenreResponse]:
        query = select(Genre).order_by(Genre.name, Genre.id)
        result = await self.db.execute(query)
        return [project_genre(genre) for genre in result.scalars().all()]

    async def get_genre(self, genre_id: int) -> GenreResponse:
        return project_genre(await self._get(genre_id))

    async def create_genre(self, request: GenreRequest) -> GenreResponse:
        fields = validate_genre(request)
        await self.references.ensure_genre_unique(fields.name)

        genre = Genre(name=fields.name, description=fields.description)
        self.db.add(genre)
        await self.db.flush()

        logger.info("Created genre %s (%s)", genre.id, genre.name)
        return project_genre(genre)

    async def update_genre(self, genre_id: int, request: GenreRequest) -> GenreResponse:
        fields = validate_genre(request)
        genre = await self._get(genre_id)
        await self.references.ensure_genre_unique(fields.name, exclude_id=genre_id)

        genre.name = fields.name
        genre.description = fields.description
        await self.db.flush()

        logger.info("Updated genre %s", genre_id)
        return project_genre(genre)

    async def delete_genre(self, genre_id: int) -> None:
        genre = await self._get(genre_id)
        await self.db.delete(genre)
        await self.db.flush()
        logger.info("Deleted genre %s", genre_id)


async def get_genre_service(db: AsyncSession = Depends(get_db)) -> GenreService:
    """Dependency that provides the genre service."""
    return GenreService(db)
