"""Pydantic schemas for API request/response shapes.

JSON keys are camelCase on the wire; Python attributes stay snake_case.
Request schemas are deliberately permissive about missing values so the
validation service can report the first failing rule in a fixed order.
"""

from datetime import date
from typing import Annotated

from fastapi import Path, Query
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Ids and counts are 32-bit signed integers in the store
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

Int32 = Annotated[int, Field(ge=INT32_MIN, le=INT32_MAX)]
EntityId = Annotated[int, Path(ge=INT32_MIN, le=INT32_MAX)]
AuthorFilter = Annotated[int | None, Query(alias="authorId", ge=INT32_MIN, le=INT32_MAX)]
GenreFilter = Annotated[int | None, Query(alias="genreId", ge=INT32_MIN, le=INT32_MAX)]


class CamelModel(BaseModel):
    """Base schema using camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Author schemas
class AuthorRequest(CamelModel):
    """Schema for creating or replacing an author."""

    first_name: str | None = None
    last_name: str | None = None
    birth_date: date | None = None
    country: str | None = None


class AuthorResponse(CamelModel):
    """Schema for author response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    birth_date: date
    country: str | None


# Genre schemas
class GenreRequest(CamelModel):
    """Schema for creating or replacing a genre."""

    name: str | None = None
    description: str | None = None


class GenreResponse(CamelModel):
    """Schema for genre response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None


# Book schemas
class BookRequest(CamelModel):
    """Schema for creating or replacing a book.

    ``authorId``/``genreId`` are accepted for clients that still send a
    single author or genre; they are merged into the id lists.
    """

    title: str | None = None
    isbn: str | None = None
    author_ids: list[Int32] = Field(default_factory=list)
    genre_ids: list[Int32] = Field(default_factory=list)
    author_id: Int32 | None = None
    genre_id: Int32 | None = None
    publish_year: Int32 | None = None
    quantity_in_stock: Int32 = 0


class BookResponse(CamelModel):
    """Schema for book response with flattened associations."""

    id: int
    title: str
    author_ids: list[int]
    author_names: list[str]
    genre_ids: list[int]
    genre_names: list[str]
    publish_year: int
    isbn: str
    quantity_in_stock: int


# Errors
class ErrorResponse(BaseModel):
    """Schema for error bodies."""

    message: str


class HealthResponse(BaseModel):
    """Schema for the health check."""

    status: str
