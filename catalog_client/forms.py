"""Form input checks run before a request is sent.

Each builder takes raw text as typed by the user, trims it and either
returns a request model or raises ``FormError`` with a message to show.
"""

from datetime import date

from catalog_client.models import AuthorRequest, BookRequest, GenreRequest


class FormError(ValueError):
    """Invalid form input."""


def _optional(value: str | None) -> str | None:
    trimmed = (value or "").strip()
    return trimmed or None


def build_author_request(
    first_name: str, last_name: str, birth_date: date | str, country: str | None = None
) -> AuthorRequest:
    first = first_name.strip()
    last = last_name.strip()
    if not first:
        raise FormError("First name is required.")
    if not last:
        raise FormError("Last name is required.")

    if isinstance(birth_date, str):
        try:
            birth_date = date.fromisoformat(birth_date.strip())
        except ValueError as e:
            raise FormError("Birth date must be in YYYY-MM-DD format.") from e

    return AuthorRequest(
        first_name=first,
        last_name=last,
        birth_date=birth_date.isoformat(),
        country=_optional(country),
    )


def build_genre_request(name: str, description: str | None = None) -> GenreRequest:
    trimmed = name.strip()
    if not trimmed:
        raise FormError("Name is required.")
    return GenreRequest(name=trimmed, description=_optional(description))


def build_book_request(
    title: str,
    isbn: str,
    publish_year: str,
    quantity_in_stock: str,
    author_ids: list[int],
    genre_ids: list[int],
) -> BookRequest:
    """Build a book request from form text and the selected ids."""
    normalized_title = title.strip()
    normalized_isbn = isbn.strip()

    if not normalized_title:
        raise FormError("Title is required.")
    if not normalized_isbn:
        raise FormError("ISBN is required.")

    try:
        year = int(publish_year.strip())
    except ValueError:
        year = 0
    if not 1 <= year <= 9999:
        raise FormError("Publish year must be a number between 1 and 9999.")

    try:
        quantity = int(quantity_in_stock.strip())
    except ValueError:
        quantity = -1
    if quantity < 0:
        raise FormError("Quantity in stock cannot be negative.")

    selected_authors = [value for value in author_ids if value > 0]
    if not selected_authors:
        raise FormError("Select at least one author.")
    selected_genres = [value for value in genre_ids if value > 0]
    if not selected_genres:
        raise FormError("Select at least one genre.")

    return BookRequest(
        title=normalized_title,
        isbn=normalized_isbn,
        publish_year=year,
        quantity_in_stock=quantity,
        author_ids=selected_authors,
        genre_ids=selected_genres,
    )
