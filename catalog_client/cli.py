#!/usr/bin/env python3
"""Command-line client for the library catalog."""

import argparse
import asyncio
import sys

from catalog_client.api_client import APIError, CatalogAPIClient
from catalog_client.forms import (
    FormError,
    build_author_request,
    build_book_request,
    build_genre_request,
)
from catalog_client.models import Author, Book, Genre
from catalog_client.store import LibraryStore


def format_author(author: Author) -> str:
    country = f" ({author.country})" if author.country else ""
    return f"{author.id:>4}  {author.full_name}, born {author.birth_date}{country}"


def format_genre(genre: Genre) -> str:
    description = f" - {genre.description}" if genre.description else ""
    return f"{genre.id:>4}  {genre.name}{description}"


def format_book(book: Book) -> str:
    return (
        f"{book.id:>4}  {book.title}\n"
        f"      Authors: {', '.join(book.author_names) or '-'} | "
        f"Genres: {', '.join(book.genre_names) or '-'}\n"
        f"      Year: {book.publish_year} | ISBN: {book.isbn} | "
        f"In stock: {book.quantity_in_stock}"
    )


def _ids(value: str) -> list[int]:
    """Parse a comma separated id list."""
    try:
        return [int(part) for part in value.split(",") if part.strip()]
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid id list: {value!r}") from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Manage authors, genres and books in the library catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List books by an author whose title contains "dun"
  catalog-client books list --search dun --author-id 1

  # Add a book written by authors 1 and 3
  catalog-client books add --title Dune --isbn 9780441013593 --year 1965 \\
      --authors 1,3 --genres 2 --quantity 5
        """,
    )
    parser.add_argument("--api-url", default=None, help="Base URL of the catalog API")

    entities = parser.add_subparsers(dest="entity", required=True)

    # Authors
    authors = entities.add_parser("authors", help="Manage authors")
    author_actions = authors.add_subparsers(dest="action", required=True)
    author_actions.add_parser("list", help="List authors")
    author_actions.add_parser("show", help="Show one author").add_argument("id", type=int)
    for name in ("add", "edit"):
        sub = author_actions.add_parser(name, help=f"{name.capitalize()} an author")
        if name == "edit":
            sub.add_argument("id", type=int)
        sub.add_argument("--first-name", required=True)
        sub.add_argument("--last-name", required=True)
        sub.add_argument("--birth-date", required=True, help="YYYY-MM-DD")
        sub.add_argument("--country", default=None)
    author_actions.add_parser("delete", help="Delete an author").add_argument("id", type=int)

    # Genres
    genres = entities.add_parser("genres", help="Manage genres")
    genre_actions = genres.add_subparsers(dest="action", required=True)
    genre_actions.add_parser("list", help="List genres")
    genre_actions.add_parser("show", help="Show one genre").add_argument("id", type=int)
    for name in ("add", "edit"):
        sub = genre_actions.add_parser(name, help=f"{name.capitalize()} a genre")
        if name == "edit":
            sub.add_argument("id", type=int)
        sub.add_argument("--name", required=True)
        sub.add_argument("--description", default=None)
    genre_actions.add_parser("delete", help="Delete a genre").add_argument("id", type=int)

    # Books
    books = entities.add_parser("books", help="Manage books")
    book_actions = books.add_subparsers(dest="action", required=True)
    book_list = book_actions.add_parser("list", help="List books")
    book_list.add_argument("--search", default="", help="Title substring")
    book_list.add_argument("--author-id", type=int, default=None)
    book_list.add_argument("--genre-id", type=int, default=None)
    book_actions.add_parser("show", help="Show one book").add_argument("id", type=int)
    for name in ("add", "edit"):
        sub = book_actions.add_parser(name, help=f"{name.capitalize()} a book")
        if name == "edit":
            sub.add_argument("id", type=int)
        sub.add_argument("--title", required=True)
        sub.add_argument("--isbn", required=True)
        sub.add_argument("--year", required=True)
        sub.add_argument("--quantity", default="0")
        sub.add_argument("--authors", type=_ids, required=True, help="Comma separated ids")
        sub.add_argument("--genres", type=_ids, required=True, help="Comma separated ids")
    book_actions.add_parser("delete", help="Delete a book").add_argument("id", type=int)

    return parser


async def _run_authors(store: LibraryStore, args: argparse.Namespace) -> bool:
    if args.action == "list":
        await store.refresh_references()
        for author in store.authors:
            print(format_author(author))
        return store.error_message is None

    if args.action == "show":
        author = await store.api_client.get(f"/api/authors/{args.id}", Author)
        print(format_author(author))
        return True

    if args.action == "delete":
        return await store.delete_author(args.id)

    request = build_author_request(args.first_name, args.last_name, args.birth_date, args.country)
    if args.action == "add":
        return await store.create_author(request)
    return await store.update_author(args.id, request)


async def _run_genres(store: LibraryStore, args: argparse.Namespace) -> bool:
    if args.action == "list":
        await store.refresh_references()
        for genre in store.genres:
            print(format_genre(genre))
        return store.error_message is None

    if args.action == "show":
        genre = await store.api_client.get(f"/api/genres/{args.id}", Genre)
        print(format_genre(genre))
        return True

    if args.action == "delete":
        return await store.delete_genre(args.id)

    request = build_genre_request(args.name, args.description)
    if args.action == "add":
        return await store.create_genre(request)
    return await store.update_genre(args.id, request)


async def _run_books(store: LibraryStore, args: argparse.Namespace) -> bool:
    if args.action == "list":
        store.search_text = args.search
        store.selected_author_id = args.author_id
        store.selected_genre_id = args.genre_id
        await store.load_books()
        for book in store.books:
            print(format_book(book))
        return store.error_message is None

    if args.action == "show":
        book = await store.api_client.get(f"/api/books/{args.id}", Book)
        print(format_book(book))
        return True

    if args.action == "delete":
        return await store.delete_book(args.id)

    request = build_book_request(
        args.title, args.isbn, args.year, args.quantity, args.authors, args.genres
    )
    if args.action == "add":
        return await store.create_book(request)
    return await store.update_book(args.id, request)


HANDLERS = {
    "authors": _run_authors,
    "genres": _run_genres,
    "books": _run_books,
}


async def run(args: argparse.Namespace) -> int:
    async with CatalogAPIClient(base_url=args.api_url) as api_client:
        store = LibraryStore(api_client)
        try:
            ok = await HANDLERS[args.entity](store, args)
        except (FormError, APIError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        if not ok:
            print(f"Error: {store.error_message}", file=sys.stderr)
            return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the catalog CLI."""
    args = build_parser().parse_args(argv)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
