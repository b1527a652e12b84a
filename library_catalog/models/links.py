"""Junction models linking books to authors and genres."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_catalog.core.database import Base

if TYPE_CHECKING:
    from library_catalog.models.author import Author
    from library_catalog.models.book import Book
    from library_catalog.models.genre import Genre


class BookAuthor(Base):
    """A book-author association, keyed by both ids."""

    __tablename__ = "book_authors"

    book_id: Mapped[int] = mapped_column(
        ForeignKey("books.id", ondelete="CASCADE"), primary_key=True
    )
    author_id: Mapped[int] = mapped_column(
        ForeignKey("authors.id", ondelete="CASCADE"), primary_key=True, index=True
    )

    book: Mapped[Book] = relationship("Book", back_populates="author_links")
    author: Mapped[Author] = relationship("Author", back_populates="book_links")

    def __repr__(self) -> str:
        return f"<BookAuthor(book_id={self.book_id}, author_id={self.author_id})>"


class BookGenre(Base):
    """A book-genre association, keyed by both ids."""

    __tablename__ = "book_genres"

    book_id: Mapped[int] = mapped_column(
        ForeignKey("books.id", ondelete="CASCADE"), primary_key=True
    )
    genre_id: Mapped[int] = mapped_column(
        ForeignKey("genres.id", ondelete="CASCADE"), primary_key=True, index=True
    )

    book: Mapped[Book] = relationship("Book", back_populates="genre_links")
    genre: Mapped[Genre] = relationship("Genre", back_populates="book_links")

    def __repr__(self) -> str:
        return f"<BookGenre(book_id={self.book_id}, genre_id={self.genre_id})>"
