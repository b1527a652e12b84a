"""Unit tests for Pydantic schemas."""

from datetime import date

import pytest
from pydantic import ValidationError

from library_catalog.api.schemas import (
    AuthorRequest,
    AuthorResponse,
    BookRequest,
    BookResponse,
)


class TestBookSchemas:
    """Tests for Book schemas."""

    def test_book_request_reads_camel_case(self):
        request = BookRequest.model_validate(
            {
                "title": "Dune",
                "isbn": "9780441013593",
                "authorIds": [1, 3],
                "genreIds": [2],
                "publishYear": 1965,
                "quantityInStock": 5,
            }
        )
        assert request.author_ids == [1, 3]
        assert request.genre_ids == [2]
        assert request.publish_year == 1965
        assert request.quantity_in_stock == 5

    def test_book_request_missing_fields_default(self):
        request = BookRequest.model_validate({})
        assert request.title is None
        assert request.author_ids == []
        assert request.publish_year is None
        assert request.quantity_in_stock == 0

    def test_book_request_rejects_non_integer_ids(self):
        with pytest.raises(ValidationError):
            BookRequest.model_validate({"authorIds": ["one"]})

    def test_book_response_dumps_camel_case(self):
        response = BookResponse(
            id=1,
            title="Dune",
            author_ids=[1],
            author_names=["Frank Herbert"],
            genre_ids=[2],
            genre_names=["Science Fiction"],
            publish_year=1965,
            isbn="9780441013593",
            quantity_in_stock=5,
        )
        data = response.model_dump(by_alias=True)
        assert data["authorIds"] == [1]
        assert data["authorNames"] == ["Frank Herbert"]
        assert data["isbn"] == "9780441013593"
        assert data["quantityInStock"] == 5


class TestAuthorSchemas:
    """Tests for Author schemas."""

    def test_author_request_parses_date(self):
        request = AuthorRequest.model_validate(
            {"firstName": "Frank", "lastName": "Herbert", "birthDate": "1920-10-08"}
        )
        assert request.birth_date == date(1920, 10, 8)
        assert request.country is None

    def test_author_request_rejects_bad_date(self):
        with pytest.raises(ValidationError):
            AuthorRequest.model_validate({"birthDate": "not-a-date"})

    def test_author_response_serializes_date(self):
        response = AuthorResponse(
            id=1,
            first_name="Frank",
            last_name="Herbert",
            birth_date=date(1920, 10, 8),
            country=None,
        )
        data = response.model_dump(mode="json", by_alias=True)
        assert data == {
            "id": 1,
            "firstName": "Frank",
            "lastName": "Herbert",
            "birthDate": "1920-10-08",
            "country": None,
        }
