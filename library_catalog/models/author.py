"""Author model."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Date, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_catalog.core.database import Base

if TYPE_CHECKING:
    from library_catalog.models.links import BookAuthor


class Author(Base):
    """Model representing a book author."""

    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    birth_date: Mapped[date] = mapped_column(Date, nullable=False)
    country: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Link rows are removed by the database cascade
    book_links: Mapped[list[BookAuthor]] = relationship(
        "BookAuthor",
        back_populates="author",
        cascade="all",
        passive_deletes=True,
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self) -> str:
        return f"<Author(id={self.id}, name='{self.full_name}')>"
