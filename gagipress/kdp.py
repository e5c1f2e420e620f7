"""Reading sales reports exported as CSV from the publishing dashboard."""

from __future__ import annotations

import csv
import datetime as _dt
import re
from collections.abc import Iterable, Iterator

from .models import KDPReportRow

_DATE_FORMATS: tuple[tuple[re.Pattern[str], tuple[str, str, str]], ...] = (
    (re.compile(r"(\d{4})-(\d{2})-(\d{2})"), ("year", "month", "day")),
    (re.compile(r"(\d{2})/(\d{2})/(\d{4})"), ("month", "day", "year")),
    (re.compile(r"(\d{2})/(\d{2})/(\d{4})"), ("day", "month", "year")),
    (re.compile(r"(\d{4})/(\d{2})/(\d{2})"), ("year", "month", "day")),
)

_INTEGER = re.compile(r"[+-]?\d+")

_TITLE_NAMES = ("title", "book title", "product")
_ASIN_NAMES = ("asin", "asin/isbn")
_DATE_NAMES = ("date", "order date", "transaction date", "sale date")
_UNITS_NAMES = ("units sold", "units", "quantity")
_ROYALTY_NAMES = ("royalty", "net units sold", "earnings")
_PAGE_READS_NAMES = ("kenp read", "pages read", "page reads")


def _find_column(columns: dict[str, int], names: Iterable[str]) -> int | None:
    for name in names:
        index = columns.get(name.lower())
        if index is not None:
            return index
    return None


def _cell(record: list[str], index: int | None) -> str | None:
    if index is None or index >= len(record):
        return None
    return record[index].strip()


def _parse_date(text: str) -> _dt.datetime | None:
    for pattern, order in _DATE_FORMATS:
        match = pattern.fullmatch(text)
        if match is None:
            continue
        parts = dict(zip(order, (int(group) for group in match.groups())))
        try:
            return _dt.datetime(tzinfo=_dt.timezone.utc, **parts)
        except ValueError:
            continue
    return None


def _parse_int(text: str) -> int | None:
    if _INTEGER.fullmatch(text):
        return int(text)
    return None


def _parse_float(text: str) -> float | None:
    if not text or "_" in text or text != text.strip():
        return None
    try:
        return float(text)
    except ValueError:
        return None


def _records(reader: Iterator[list[str]]) -> Iterator[list[str] | csv.Error]:
    """Yield non-empty records, or the error a malformed one raised."""
    while True:
        try:
            record = next(reader)
        except StopIteration:
            return
        except csv.Error as exc:
            yield exc
            continue
        if record:
            yield record


def parse_kdp_csv(stream: Iterable[str]) -> list[KDPReportRow]:
    """Parse a sales report; ``stream`` yields lines of CSV text.

    Raises ``ValueError`` when the header cannot be read or lacks a title or
    date column. Malformed rows and rows with an unreadable date are skipped
    with a warning on standard output.
    """
    reader = csv.reader(stream, skipinitialspace=True, strict=True)
    records = _records(reader)

    header = next(records, None)
    if header is None:
        raise ValueError("failed to read CSV header: EOF")
    if isinstance(header, csv.Error):
        raise ValueError(f"failed to read CSV header: {header}") from header

    columns = {name.strip().lower(): index for index, name in enumerate(header)}
    width = len(header)

    title_col = _find_column(columns, _TITLE_NAMES)
    asin_col = _find_column(columns, _ASIN_NAMES)
    date_col = _find_column(columns, _DATE_NAMES)
    units_col = _find_column(columns, _UNITS_NAMES)
    royalty_col = _find_column(columns, _ROYALTY_NAMES)
    page_reads_col = _find_column(columns, _PAGE_READS_NAMES)

    if title_col is None or date_col is None:
        raise ValueError("required columns not found (need at least: title, date)")

    rows: list[KDPReportRow] = []
    for record in records:
        if isinstance(record, csv.Error):
            print(f"Warning: skipping malformed row: {record}")
            continue
        if len(record) != width:
            print(
                f"Warning: skipping malformed row: record on line {reader.line_num}: "
                "wrong number of fields"
            )
            continue

        row = KDPReportRow()

        title = _cell(record, title_col)
        if title is not None:
            row.title = title

        asin = _cell(record, asin_col)
        if asin is not None:
            row.asin = asin

        date_text = _cell(record, date_col)
        if date_text is not None:
            order_date = _parse_date(date_text)
            if order_date is None:
                print(f"Warning: could not parse date '{date_text}', skipping row")
                continue
            row.order_date = order_date

        units_text = _cell(record, units_col)
        if units_text is not None:
            units = _parse_int(units_text)
            if units is not None:
                row.units_sold = units

        royalty_text = _cell(record, royalty_col)
        if royalty_text is not None:
            for symbol in ("$", "€", ","):
                royalty_text = royalty_text.replace(symbol, "")
            royalty = _parse_float(royalty_text)
            if royalty is not None:
                row.royalty = royalty

        page_reads_text = _cell(record, page_reads_col)
        if page_reads_text is not None:
            page_reads = _parse_int(page_reads_text.replace(",", ""))
            if page_reads is not None:
                row.page_reads = page_reads

        rows.append(row)

    return rows