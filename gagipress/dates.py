"""Calendar dates exchanged as JSON ``"YYYY-MM-DD"`` strings."""

from __future__ import annotations

import datetime as _dt
import re

DATE_FORMAT = "%Y-%m-%d"

_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


def _to_text(data: str | bytes) -> str:
    if isinstance(data, (bytes, bytearray)):
        return bytes(data).decode("utf-8")
    return data


def parse_json_date(data: str | bytes) -> _dt.date | None:
    """Parse a JSON date value.

    ``null`` and the empty string give ``None``. Anything other than a
    strict ``YYYY-MM-DD`` date raises ``ValueError``.
    """
    text = _to_text(data)
    if text == "null":
        return None
    if len(text) >= 2 and text[0] == '"' and text[-1] == '"':
        text = text[1:-1]
    if text == "":
        return None
    if not _DATE_PATTERN.fullmatch(text):
        raise ValueError(f"cannot parse {text!r} as a YYYY-MM-DD date")
    try:
        return _dt.date.fromisoformat(text)
    except ValueError as exc:
        raise ValueError(f"invalid date {text!r}: {exc}") from exc


def format_date(value: _dt.date | None) -> str:
    """Return the date as ``YYYY-MM-DD``, or an empty string for ``None``."""
    if value is None:
        return ""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def dump_json_date(value: _dt.date | None) -> str:
    """Encode a date as JSON text: a quoted ``YYYY-MM-DD`` string or ``null``."""
    if value is None:
        return "null"
    return f'"{format_date(value)}"'