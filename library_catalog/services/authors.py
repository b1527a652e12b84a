"""Author service."""

import logging

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from library_catalog.api.schemas import AuthorRequest, AuthorResponse
from library_catalog.core.database import get_db
from library_catalog.core.errors import NotFoundError
from library_catalog.models import Author
from library_catalog.services.projection import project_author
from library_catalog.services.references import ReferenceChecker
from library_catalog.services.validation import validate_author

logger = logging.getLogger(__name__)


class AuthorService:
    """Service for reading and writing authors."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self.references = ReferenceChecker(db)

    async def _get(self, author_id: int) -> Author:
        author = await self.db.get(Author, author_id)
        if author is None:
            raise NotFoundError.for_entity("Author", author_id)
        return author

    async def list_authors(self) -> list[AuthorResponse]:
        """List authors ordered by last name, then first name."""
        query = select(Author).order_by(Author.last_name, Author.first_name, Author.id)
        result = await self.db.execute(query)
        return [project_author(author) for author in result.scalars().all()]

    async def get_author(self, author_id: int) -> AuthorResponse:
        return project_author(await self._get(author_id))

    async def create_author(self, request: AuthorRequest) -> AuthorResponse:
        """Create an author after validation and the duplicate-name check."""
        fields = validate_author(request)
        await self.references.ensure_author_unique(fields.first_name, fields.last_name)

        author = Author(
            first_name=fields.first_name,
            last_name=fields.last_name,
            birth_date=fields.birth_date,
            country=fields.country,
        )
        self.db.add(author)
        await self.db.flush()

        logger.info("Created author %s (%s)", author.id, author.full_name)
        return project_author(author)

    async def update_author(self, author_id: int, request: AuthorRequest) -> AuthorResponse:
        """Replace every field of an author."""
        fields = validate_author(request)
        author = await self._get(author_id)
        await self.references.ensure_author_unique(
            fields.first_name, fields.last_name, exclude_id=author_id
        )

        author.first_name = fields.first_name
        author.last_name = fields.last_name
        author.birth_date = fields.birth_date
        author.country = fields.country
        await self.db.flush()

        logger.info("Updated author %s", author_id)
        return project_author(author)

    async def delete_author(self, author_id: int) -> None:
        """Delete an author; its book links go with it."""
        author = await self._get(author_id)
        await self.db.delete(author)
        await self.db.flush()
        logger.info("Deleted author %s", author_id)


async def get_author_service(db: AsyncSession = Depends(get_db)) -> AuthorService:
    """Dependency that provides the author service."""
    return AuthorService(db)
