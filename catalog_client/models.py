"""Client-side models mirroring the API's JSON shapes."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self) -> dict:
        """Dump with camelCase keys, as the API expects."""
        return self.model_dump(mode="json", by_alias=True)


class Author(CamelModel):
    id: int
    first_name: str
    last_name: str
    birth_date: str
    country: str | None = None

    @property
    def full_name(self) -> str:
        value = f"{self.first_name} {self.last_name}".strip()
        return value or "Unknown author"


class AuthorRequest(CamelModel):
    first_name: str
    last_name: str
    birth_date: str
    country: str | None = None


class Genre(CamelModel):
    id: int
    name: str
    description: str | None = None


class GenreRequest(CamelModel):
    name: str
    description: str | None = None


class Book(CamelModel):
    id: int
    title: str
    author_ids: list[int] = Field(default_factory=list)
    author_names: list[str] = Field(default_factory=list)
    genre_ids: list[int] = Field(default_factory=list)
    genre_names: list[str] = Field(default_factory=list)
    publish_year: int
    isbn: str
    quantity_in_stock: int


class BookRequest(CamelModel):
    title: str
    author_ids: list[int]
    genre_ids: list[int]
    publish_year: int
    isbn: str
    quantity_in_stock: int = 0
