"""Database models."""

from library_catalog.models.author import Author
from library_catalog.models.book import Book
from library_catalog.models.genre import Genre
from library_catalog.models.links import BookAuthor, BookGenre

__all__ = ["Author", "Book", "BookAuthor", "BookGenre", "Genre"]
