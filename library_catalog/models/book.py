"""Book model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_catalog.core.database import Base

if TYPE_CHECKING:
    from library_catalog.models.links import BookAuthor, BookGenre


class Book(Base):
    """Model representing a book in the catalog."""

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    isbn: Mapped[str] = mapped_column(String(13), nullable=False)
    publish_year: Mapped[int] = mapped_column(nullable=False)
    quantity_in_stock: Mapped[int] = mapped_column(default=0, server_default="0", nullable=False)

    # Relationships
    author_links: Mapped[list[BookAuthor]] = relationship(
        "BookAuthor",
        back_populates="book",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )
    genre_links: Mapped[list[BookGenre]] = relationship(
        "BookGenre",
        back_populates="book",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Book(id={self.id}, title='{self.title}', isbn='{self.isbn}')>"
