"""Genre model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_catalog.core.database import Base

if TYPE_CHECKING:
    from library_catalog.models.links import BookGenre


class Genre(Base):
    """Model representing a genre."""

    __tablename__ = "genres"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)

    book_links: Mapped[list[BookGenre]] = relationship(
        "BookGenre",
        back_populates="genre",
        cascade="all",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Genre(id={self.id}, name='{self.name}')>"
