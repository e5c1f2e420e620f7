"""Storage of daily book sales."""

from __future__ import annotations

import datetime as _dt
from typing import Any

from .dates import format_date
from .models import BookSale, BookSaleInput
from .rest import RepositoryError, RestClient


def _decode(records: list[dict[str, Any]] | None) -> list[BookSale]:
    try:
        return [BookSale.from_dict(record) for record in records or []]
    except (TypeError, ValueError, AttributeError) as exc:
        raise RepositoryError(f"failed to unmarshal response: {exc}") from exc


def _range_filter(start: _dt.date | None, end: _dt.date | None) -> str:
    text = ""
    if start is not None:
        text += f"&sale_date=gte.{format_date(start)}"
    if end is not None:
        text += f"&sale_date=lte.{format_date(end)}"
    return text


class SalesRepository:
    """Record and list daily sales."""

    def __init__(self, client: RestClient) -> None:
        self.client = client

    def create_sale(self, sale: BookSaleInput) -> BookSale:
        records = self.client.request(
            "POST", "book_sales", "create sale", sale.to_dict(), (201,), True
        )
        sales = _decode(records)
        if not sales:
            raise RepositoryError("no sale returned from API")
        return sales[0]

    def get_sales_by_book(
        self,
        book_id: str,
        start: _dt.date | None = None,
        end: _dt.date | None = None,
    ) -> list[BookSale]:
        """List one book's sales, oldest first, optionally within a date range."""
        path = f"book_sales?book_id=eq.{book_id}&order=sale_date.asc"
        path += _range_filter(start, end)
        records = self.client.request("GET", path, "get sales")
        return _decode(records)

    def get_all_sales(
        self,
        start: _dt.date | None = None,
        end: _dt.date | None = None,
    ) -> list[BookSale]:
        """List all sales, newest first, optionally within a date range."""
        path = "book_sales?select=*&order=sale_date.desc" + _range_filter(start, end)
        records = self.client.request("GET", path, "get sales")
        return _decode(records)