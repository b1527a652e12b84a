"""Integration tests for the Books API."""

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select

from library_catalog.models import Book, BookAuthor


@pytest.fixture
async def catalog(client: AsyncClient) -> dict:
    """Create three authors and two genres through the API."""
    authors = []
    for first, last in [("Frank", "Herbert"), ("Isaac", "Asimov"), ("Kevin", "Anderson")]:
        response = await client.post(
            "/api/authors",
            json={"firstName": first, "lastName": last, "birthDate": "1940-01-01"},
        )
        authors.append(response.json()["id"])

    genres = []
    for name in ["Adventure", "Science Fiction"]:
        response = await client.post("/api/genres", json={"name": name})
        genres.append(response.json()["id"])

    return {"authors": authors, "genres": genres}


async def _author_links(session, book_id: int) -> set[int]:
    result = await session.execute(
        select(BookAuthor.author_id).where(BookAuthor.book_id == book_id)
    )
    return set(result.scalars().all())


class TestBooksAPI:
    """Integration tests for the Books API endpoints."""

    async def test_list_books_empty(self, client: AsyncClient):
        response = await client.get("/api/books")
        assert response.status_code == 200
        assert response.json() == []

    async def test_create_book(self, client: AsyncClient, catalog, book_payload):
        response = await client.post(
            "/api/books",
            json=book_payload(title="  Dune ", authorIds=[1], genreIds=[2]),
        )
        assert response.status_code == 201
        data = response.json()
        assert data["title"] == "Dune"
        assert data["authorIds"] == [1]
        assert data["authorNames"] == ["Frank Herbert"]
        assert data["genreIds"] == [2]
        assert data["genreNames"] == ["Science Fiction"]
        assert data["publishYear"] == 1965
        assert data["isbn"] == "9780441013593"
        assert data["quantityInStock"] == 5
        assert response.headers["location"].endswith(f"/api/books/{data['id']}")

    async def test_create_book_with_single_ids(self, client: AsyncClient, catalog, book_payload):
        payload = book_payload(authorIds=[], genreIds=[])
        payload.update(authorId=2, genreId=1)

        response = await client.post("/api/books", json=payload)
        assert response.status_code == 201
        assert response.json()["authorIds"] == [2]
        assert response.json()["genreIds"] == [1]

    async def test_create_book_quantity_defaults_to_zero(
        self, client: AsyncClient, catalog, book_payload
    ):
        payload = book_payload()
        del payload["quantityInStock"]

        response = await client.post("/api/books", json=payload)
        assert response.status_code == 201
        assert response.json()["quantityInStock"] == 0

    async def test_create_book_deduplicates_links(
        self, client: AsyncClient, catalog, book_payload, test_session
    ):
        response = await client.post(
            "/api/books", json=book_payload(authorIds=[3, 1, 3], genreIds=[2, 2, 1])
        )
        assert response.status_code == 201
        data = response.json()
        assert data["authorIds"] == [1, 3]
        assert data["genreIds"] == [1, 2]
        assert await _author_links(test_session, data["id"]) == {1, 3}

    async def test_create_book_invalid_isbn(self, client: AsyncClient, catalog, book_payload):
        response = await client.post("/api/books", json=book_payload(isbn="978-0441013593"))
        assert response.status_code == 400
        assert response.json() == {"message": "ISBN must contain only digits (1-13 characters)."}

    async def test_create_book_without_authors(self, client: AsyncClient, catalog, book_payload):
        response = await client.post("/api/books", json=book_payload(authorIds=[]))
        assert response.status_code == 400
        assert response.json()["message"] == "At least one author is required."

    async def test_create_book_wrong_json_type(self, client: AsyncClient, catalog, book_payload):
        response = await client.post("/api/books", json=book_payload(publishYear="soon"))
        assert response.status_code == 400
        assert "publishYear" in response.json()["errors"]

    async def test_create_book_unknown_genre_persists_nothing(
        self, client: AsyncClient, catalog, book_payload, test_session
    ):
        response = await client.post("/api/books", json=book_payload(genreIds=[2, 99]))
        assert response.status_code == 400
        assert response.json()["message"] == "One or more genres do not exist: 99."

        count = (await test_session.execute(select(func.count(Book.id)))).scalar_one()
        assert count == 0

    async def test_create_book_unknown_author(self, client: AsyncClient, catalog, book_payload):
        response = await client.post("/api/books", json=book_payload(authorIds=[42]))
        assert response.status_code == 400
        assert "authors do not exist" in response.json()["message"]

    async def test_create_book_duplicate_isbn(self, client: AsyncClient, catalog, book_payload):
        await client.post("/api/books", json=book_payload())

        response = await client.post(
            "/api/books", json=book_payload(title="Dune (reprint)", isbn=" 9780441013593 ")
        )
        assert response.status_code == 409
        assert response.json()["message"] == "Book with ISBN '9780441013593' already exists."

    async def test_get_book(self, client: AsyncClient, sample_book):
        response = await client.get(f"/api/books/{sample_book.id}")
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == sample_book.id
        assert data["authorNames"] == ["Frank Herbert"]

    async def test_get_book_not_found(self, client: AsyncClient):
        response = await client.get("/api/books/99999")
        assert response.status_code == 404
        assert response.json() == {"message": "Book with id 99999 was not found."}

    async def test_update_replaces_links(
        self, client: AsyncClient, catalog, book_payload, test_session
    ):
        created = await client.post("/api/books", json=book_payload(authorIds=[1], genreIds=[2]))
        book_id = created.json()["id"]

        response = await client.put(
            f"/api/books/{book_id}",
            json=book_payload(authorIds=[1, 3], genreIds=[1], quantityInStock=2),
        )
        assert response.status_code == 200
        data = response.json()
        assert data["authorIds"] == [1, 3]
        assert data["authorNames"] == ["Frank Herbert", "Kevin Anderson"]
        assert data["genreIds"] == [1]
        assert data["quantityInStock"] == 2
        assert await _author_links(test_session, book_id) == {1, 3}

    async def test_update_drops_removed_authors(
        self, client: AsyncClient, catalog, book_payload, test_session
    ):
        created = await client.post("/api/books", json=book_payload(authorIds=[1, 2]))
        book_id = created.json()["id"]

        response = await client.put(f"/api/books/{book_id}", json=book_payload(authorIds=[2]))
        assert response.json()["authorIds"] == [2]
        assert await _author_links(test_session, book_id) == {2}

    async def test_update_is_idempotent(self, client: AsyncClient, catalog, book_payload):
        created = await client.post("/api/books", json=book_payload())
        book_id = created.json()["id"]
        payload = book_payload(authorIds=[3, 2], genreIds=[1, 2])

        first = await client.put(f"/api/books/{book_id}", json=payload)
        second = await client.put(f"/api/books/{book_id}", json=payload)

        assert first.status_code == second.status_code == 200
        assert first.json() == second.json()

    async def test_update_keeps_own_isbn(self, client: AsyncClient, catalog, book_payload):
        created = await client.post("/api/books", json=book_payload())
        response = await client.put(
            f"/api/books/{created.json()['id']}", json=book_payload(title="Dune Messiah")
        )
        assert response.status_code == 200
        assert response.json()["title"] == "Dune Messiah"

    async def test_update_to_other_books_isbn(self, client: AsyncClient, catalog, book_payload):
        await client.post("/api/books", json=book_payload(isbn="111"))
        created = await client.post("/api/books", json=book_payload(isbn="222"))

        response = await client.put(
            f"/api/books/{created.json()['id']}", json=book_payload(isbn="111")
        )
        assert response.status_code == 409

    async def test_update_book_not_found(self, client: AsyncClient, catalog, book_payload):
        response = await client.put("/api/books/99999", json=book_payload())
        assert response.status_code == 404

    async def test_failed_update_leaves_links(
        self, client: AsyncClient, catalog, book_payload, test_session
    ):
        created = await client.post("/api/books", json=book_payload(authorIds=[1, 2]))
        book_id = created.json()["id"]

        response = await client.put(f"/api/books/{book_id}", json=book_payload(authorIds=[1, 77]))
        assert response.status_code == 400
        assert await _author_links(test_session, book_id) == {1, 2}

    async def test_delete_book(self, client: AsyncClient, sample_book, test_session):
        response = await client.delete(f"/api/books/{sample_book.id}")
        assert response.status_code == 204

        response = await client.get(f"/api/books/{sample_book.id}")
        assert response.status_code == 404
        assert await _author_links(test_session, sample_book.id) == set()

    async def test_delete_book_not_found(self, client: AsyncClient):
        response = await client.delete("/api/books/99999")
        assert response.status_code == 404

    async def test_deleting_author_unlinks_book(
        self, client: AsyncClient, catalog, book_payload
    ):
        created = await client.post("/api/books", json=book_payload(authorIds=[1, 2]))
        book_id = created.json()["id"]

        response = await client.delete("/api/authors/1")
        assert response.status_code == 204

        response = await client.get(f"/api/books/{book_id}")
        assert response.status_code == 200
        data = response.json()
        assert data["authorIds"] == [2]
        assert data["genreIds"] == [1]

        # The book can still be replaced and deleted afterwards
        response = await client.put(f"/api/books/{book_id}", json=book_payload(authorIds=[3]))
        assert response.json()["authorIds"] == [3]
        assert (await client.delete(f"/api/books/{book_id}")).status_code == 204


class TestBookFilters:
    """Tests for list filtering and ordering."""

    @pytest.fixture
    async def shelf(self, client: AsyncClient, catalog, book_payload):
        books = [
            ("Dune", "1", [1], [2]),
            ("Dune Messiah", "2", [1, 3], [2]),
            ("Foundation", "3", [2], [2]),
            ("The Dungeon", "4", [2], [1]),
            ("100%_Dun", "5", [3], [1]),
        ]
        for title, isbn, author_ids, genre_ids in books:
            response = await client.post(
                "/api/books",
                json=book_payload(title=title, isbn=isbn, authorIds=author_ids, genreIds=genre_ids),
            )
            assert response.status_code == 201

    async def test_ordered_by_title(self, client: AsyncClient, shelf):
        response = await client.get("/api/books")
        titles = [b["title"] for b in response.json()]
        assert titles == ["100%_Dun", "Dune", "Dune Messiah", "Foundation", "The Dungeon"]

    async def test_search_is_case_insensitive_substring(self, client: AsyncClient, shelf):
        response = await client.get("/api/books", params={"search": "DUN"})
        titles = [b["title"] for b in response.json()]
        assert titles == ["100%_Dun", "Dune", "Dune Messiah", "The Dungeon"]

    async def test_search_and_author_combined(self, client: AsyncClient, shelf):
        response = await client.get("/api/books", params={"search": "dun", "authorId": 1})
        assert [b["title"] for b in response.json()] == ["Dune", "Dune Messiah"]

    async def test_filter_by_genre(self, client: AsyncClient, shelf):
        response = await client.get("/api/books", params={"genreId": 1})
        assert [b["title"] for b in response.json()] == ["100%_Dun", "The Dungeon"]

    async def test_all_filters_combined(self, client: AsyncClient, shelf):
        response = await client.get(
            "/api/books", params={"search": "dune", "authorId": 3, "genreId": 2}
        )
        assert [b["title"] for b in response.json()] == ["Dune Messiah"]

    async def test_search_wildcards_are_literal(self, client: AsyncClient, shelf):
        response = await client.get("/api/books", params={"search": "%_"})
        assert [b["title"] for b in response.json()] == ["100%_Dun"]

    async def test_blank_search_is_ignored(self, client: AsyncClient, shelf):
        response = await client.get("/api/books", params={"search": "   "})
        assert len(response.json()) == 5

    async def test_non_positive_author_id(self, client: AsyncClient):
        response = await client.get("/api/books", params={"authorId": 0})
        assert response.status_code == 400
        assert response.json() == {"message": "authorId must be greater than zero."}

    async def test_non_positive_genre_id(self, client: AsyncClient):
        response = await client.get("/api/books", params={"genreId": -4})
        assert response.status_code == 400
        assert response.json() == {"message": "genreId must be greater than zero."}

    async def test_non_integer_author_id(self, client: AsyncClient):
        response = await client.get("/api/books", params={"authorId": "abc"})
        assert response.status_code == 400


TOO_BIG = 2**63


class TestIntegerBounds:
    """Ids and counts outside the 32-bit range are rejected before the store."""

    @pytest.mark.parametrize(
        ("overrides", "field"),
        [
            ({"authorIds": [1, TOO_BIG]}, "authorIds.1"),
            ({"genreIds": [TOO_BIG]}, "genreIds.0"),
            ({"authorIds": [], "authorId": TOO_BIG}, "authorId"),
            ({"genreIds": [], "genreId": TOO_BIG}, "genreId"),
            ({"quantityInStock": TOO_BIG}, "quantityInStock"),
            ({"publishYear": -TOO_BIG}, "publishYear"),
        ],
    )
    async def test_create_book_rejects_out_of_range(
        self, client: AsyncClient, catalog, book_payload, test_session, overrides, field
    ):
        response = await client.post("/api/books", json=book_payload(**overrides))

        assert response.status_code == 400
        assert field in response.json()["errors"]
        assert await test_session.scalar(select(func.count()).select_from(Book)) == 0

    async def test_update_book_rejects_out_of_range(
        self, client: AsyncClient, sample_book, book_payload
    ):
        response = await client.put(
            f"/api/books/{sample_book.id}", json=book_payload(authorIds=[TOO_BIG])
        )
        assert response.status_code == 400

    @pytest.mark.parametrize("path", ["/api/books", "/api/authors", "/api/genres"])
    @pytest.mark.parametrize("method", ["GET", "PUT", "DELETE"])
    async def test_path_id_out_of_range(self, client: AsyncClient, path, method):
        response = await client.request(method, f"{path}/{TOO_BIG}", json={})
        assert response.status_code == 400

    @pytest.mark.parametrize("param", ["authorId", "genreId"])
    async def test_filter_out_of_range(self, client: AsyncClient, param):
        response = await client.get("/api/books", params={param: TOO_BIG})
        assert response.status_code == 400
        assert param in response.json()["errors"]

    async def test_largest_id_is_not_found(self, client: AsyncClient):
        response = await client.get(f"/api/books/{2**31 - 1}")
        assert response.status_code == 404


async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
