"""Storage of the book catalogue."""

from __future__ import annotations

from typing import Any

from .models import Book, BookInput
from .rest import RepositoryError, RestClient

_MIN_PREFIX = 6


def _decode(records: list[dict[str, Any]]) -> list[Book]:
    try:
        return [Book.from_dict(record) for record in records]
    except (TypeError, ValueError, AttributeError) as exc:
        raise RepositoryError(f"failed to unmarshal response: {exc}") from exc


class BooksRepository:
    """Create, read, update and delete books."""

    def __init__(self, client: RestClient) -> None:
        self.client = client

    def create(self, book: BookInput) -> Book:
        records = self.client.request(
            "POST", "books", "create book", book.to_dict(), (201,), True
        )
        books = _decode(records or [])
        if not books:
            raise RepositoryError("no book returned from API")
        return books[0]

    def get_all(self) -> list[Book]:
        records = self.client.request(
            "GET", "books?select=*&order=created_at.desc", "get books"
        )
        return _decode(records or [])

    def get_by_id(self, book_id: str) -> Book:
        records = self.client.request(
            "GET", f"books?id=eq.{book_id}&select=*", "get book"
        )
        books = _decode(records or [])
        if not books:
            raise RepositoryError("book not found")
        return books[0]

    def update(self, book_id: str, book: BookInput) -> Book:
        records = self.client.request(
            "PATCH", f"books?id=eq.{book_id}", "update book", book.to_dict(), (200,), True
        )
        books = _decode(records or [])
        if not books:
            raise RepositoryError("no book returned from API")
        return books[0]

    def get_by_id_prefix(self, prefix: str) -> Book:
        """Find the one book whose ID starts with ``prefix`` (6 characters at least)."""
        if len(prefix) < _MIN_PREFIX:
            raise ValueError(
                f"ID prefix too short: must be at least {_MIN_PREFIX} characters "
                f"(got {len(prefix)})"
            )
        records = self.client.request(
            "GET", f"books?id=like.{prefix}*&select=*", "get book"
        )
        books = _decode(records or [])
        if not books:
            raise RepositoryError(f"no book found with ID prefix {prefix!r}")
        if len(books) > 1:
            listing = "\n".join(f"  {b.id} ({b.title})" for b in books)
            raise RepositoryError(
                f"multiple books match prefix {prefix!r}:\n{listing}\n"
                "Please use a longer prefix to disambiguate"
            )
        return books[0]

    def delete(self, book_id: str) -> None:
        self.client.request(
            "DELETE", f"books?id=eq.{book_id}", "delete book", expected=(204, 200)
        )