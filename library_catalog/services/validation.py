"""Request validation for authors, genres and books.

Each ``validate_*`` function checks its rules in a fixed order and raises
``CatalogValidationError`` with the message of the first failing rule. On
success it returns the trimmed values ready to be persisted.
"""

import re
from dataclasses import dataclass
from datetime import date

from library_catalog.api.schemas import AuthorRequest, BookRequest, GenreRequest
from library_catalog.core.errors import CatalogValidationError

NAME_MAX_LENGTH = 100
COUNTRY_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500
TITLE_MAX_LENGTH = 200
MIN_PUBLISH_YEAR = 1
MAX_PUBLISH_YEAR = 9999

ISBN_PATTERN = re.compile(r"^\d{1,13}$", re.ASCII)


@dataclass(frozen=True)
class AuthorFields:
    first_name: str
    last_name: str
    birth_date: date
    country: str | None


@dataclass(frozen=True)
class GenreFields:
    name: str
    description: str | None


@dataclass(frozen=True)
class BookFields:
    title: str
    isbn: str
    author_ids: list[int]
    genre_ids: list[int]
    publish_year: int
    quantity_in_stock: int


def _trim(value: str | None) -> str:
    return value.strip() if value else ""


def _trim_optional(value: str | None) -> str | None:
    """Trim an optional string, mapping blank to None."""
    trimmed = _trim(value)
    return trimmed or None


def _require_text(value: str | None, field: str, max_length: int) -> str:
    trimmed = _trim(value)
    if not trimmed:
        raise CatalogValidationError(f"{field} is required.")
    if len(trimmed) > max_length:
        raise CatalogValidationError(f"{field} must be at most {max_length} characters.")
    return trimmed


def _optional_text(value: str | None, field: str, max_length: int) -> str | None:
    trimmed = _trim_optional(value)
    if trimmed is not None and len(trimmed) > max_length:
        raise CatalogValidationError(f"{field} must be at most {max_length} characters.")
    return trimmed


def _require_ids(ids: list[int], single: int | None, field: str, label: str) -> list[int]:
    """Merge the single-id variant into the list and check every id is positive."""
    requested = list(ids)
    if single is not None:
        requested.append(single)
    if not requested:
        raise CatalogValidationError(f"At least one {label} is required.")
    if any(value <= 0 for value in requested):
        raise CatalogValidationError(f"{field} must contain only positive integers.")
    return dedupe_ids(requested)


def dedupe_ids(ids: list[int]) -> list[int]:
    """Drop repeated ids, keeping first-seen order."""
    return list(dict.fromkeys(ids))


def validate_author(request: AuthorRequest) -> AuthorFields:
    """Validate an author payload."""
    first_name = _require_text(request.first_name, "FirstName", NAME_MAX_LENGTH)
    last_name = _require_text(request.last_name, "LastName", NAME_MAX_LENGTH)

    # date.min is the zero value some clients send for an unset date
    if request.birth_date is None or request.birth_date == date.min:
        raise CatalogValidationError("BirthDate is required.")

    country = _optional_text(request.country, "Country", COUNTRY_MAX_LENGTH)

    return AuthorFields(
        first_name=first_name,
        last_name=last_name,
        birth_date=request.birth_date,
        country=country,
    )


def validate_genre(request: GenreRequest) -> GenreFields:
    """Validate a genre payload."""
    name = _require_text(request.name, "Name", NAME_MAX_LENGTH)
    description = _optional_text(request.description, "Description", DESCRIPTION_MAX_LENGTH)
    return GenreFields(name=name, description=description)


def validate_book(request: BookRequest) -> BookFields:
    """Validate a book payload."""
    title = _require_text(request.title, "Title", TITLE_MAX_LENGTH)

    isbn = _trim(request.isbn)
    if not isbn:
        raise CatalogValidationError("ISBN is required.")
    if not ISBN_PATTERN.match(isbn):
        raise CatalogValidationError("ISBN must contain only digits (1-13 characters).")

    author_ids = _require_ids(request.author_ids, request.author_id, "AuthorIds", "author")
    genre_ids = _require_ids(request.genre_ids, request.genre_id, "GenreIds", "genre")

    year = request.publish_year
    if year is None or not MIN_PUBLISH_YEAR <= year <= MAX_PUBLISH_YEAR:
        raise CatalogValidationError(
            f"PublishYear must be between {MIN_PUBLISH_YEAR} and {MAX_PUBLISH_YEAR}."
        )

    if request.quantity_in_stock < 0:
        raise CatalogValidationError("QuantityInStock cannot be negative.")

    return BookFields(
        title=title,
        isbn=isbn,
        author_ids=author_ids,
        genre_ids=genre_ids,
        publish_year=year,
        quantity_in_stock=request.quantity_in_stock,
    )
