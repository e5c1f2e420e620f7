"""Records and input payloads stored in the content database."""

from __future__ import annotations

import datetime as _dt
import json
import re
from dataclasses import dataclass, field
from typing import Any

from .dates import format_date, parse_json_date

_IDEA_TYPES = frozenset({"educational", "entertainment", "bts", "ugc", "trend"})
_PLATFORMS = frozenset({"instagram", "tiktok"})

_FRACTION = re.compile(r"\.(\d+)")
_SHORT_OFFSET = re.compile(r"([+-]\d{2})$")


class InvalidInputError(ValueError):
    """An input record failed validation."""

    def __init__(self, field_name: str, message: str) -> None:
        super().__init__(message)
        self.field = field_name
        self.message = message

    def __str__(self) -> str:
        return self.message


def _parse_timestamp(value: Any) -> _dt.datetime | None:
    if not value:
        return None
    text = str(value).strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(lambda m: "." + (m.group(1) + "000000")[:6], text, count=1)
    text = _SHORT_OFFSET.sub(r"\1:00", text)
    return _dt.datetime.fromisoformat(text)


def _format_timestamp(value: _dt.datetime | None) -> str | None:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.astimezone()
    text = value.isoformat()
    if text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text


def _parse_date(value: Any) -> _dt.date | None:
    if value is None:
        return None
    return parse_json_date(json.dumps(value))


def _check_platform(platform: str) -> None:
    if platform not in _PLATFORMS:
        raise InvalidInputError("platform", "platform must be 'instagram' or 'tiktok'")


@dataclass
class Book:
    """A book in the catalogue."""

    id: str
    title: str
    genre: str
    target_audience: str = ""
    kdp_asin: str = ""
    cover_image_url: str = ""
    publication_date: _dt.date | None = None
    current_rank: int | None = None
    total_sales: int = 0
    created_at: _dt.datetime | None = None
    updated_at: _dt.datetime | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Book:
        return cls(
            id=data.get("id") or "",
            title=data.get("title") or "",
            genre=data.get("genre") or "",
            target_audience=data.get("target_audience") or "",
            kdp_asin=data.get("kdp_asin") or "",
            cover_image_url=data.get("cover_image_url") or "",
            publication_date=_parse_date(data.get("publication_date")),
            current_rank=data.get("current_rank"),
            total_sales=data.get("total_sales") or 0,
            created_at=_parse_timestamp(data.get("created_at")),
            updated_at=_parse_timestamp(data.get("updated_at")),
        )


@dataclass
class BookInput:
    """Fields for creating or updating a book."""

    title: str = ""
    genre: str = ""
    target_audience: str = ""
    kdp_asin: str = ""
    cover_image_url: str = ""
    publication_date: _dt.date | None = None

    def validate(self) -> None:
        if not self.title:
            raise InvalidInputError("title", "title is required")
        if not self.genre:
            raise InvalidInputError("genre", "genre is required")

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"title": self.title, "genre": self.genre}
        for key in ("target_audience", "kdp_asin", "cover_image_url"):
            value = getattr(self, key)
            if value:
                data[key] = value
        if self.publication_date is not None:
            data["publication_date"] = format_date(self.publication_date)
        return data


@dataclass
class ContentIdea:
    """A content idea."""

    id: str
    type: str
    brief_description: str
    relevance_score: int | None = None
    book_id: str | None = None
    status: str = ""
    generated_at: _dt.datetime | None = None
    metadata: Any = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ContentIdea:
        return cls(
            id=data.get("id") or "",
            type=data.get("type") or "",
            brief_description=data.get("brief_description") or "",
            relevance_score=data.get("relevance_score"),
            book_id=data.get("book_id"),
            status=data.get("status") or "",
            generated_at=_parse_timestamp(data.get("generated_at")),
            metadata=data.get("metadata"),
        )


@dataclass
class ContentIdeaInput:
    """Fields for creating a content idea."""

    type: str = ""
    brief_description: str = ""
    relevance_score: int | None = None
    book_id: str | None = None
    metadata: Any = None

    def validate(self) -> None:
        if not self.type:
            raise InvalidInputError("type", "type is required")
        if self.type not in _IDEA_TYPES:
            raise InvalidInputError("type", "invalid type")
        if not self.brief_description:
            raise InvalidInputError("brief_description", "brief description is required")

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.type,
            "brief_description": self.brief_description,
        }
        for key in ("relevance_score", "book_id", "metadata"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data


@dataclass
class ContentScript:
    """A generated script."""

    id: str
    idea_id: str
    hook: str
    main_content: str
    cta: str
    hashtags: list[str] = field(default_factory=list)
    estimated_length: int = 0
    format: str = ""
    scripted_at: _dt.datetime | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ContentScript:
        return cls(
            id=data.get("id") or "",
            idea_id=data.get("idea_id") or "",
            hook=data.get("hook") or "",
            main_content=data.get("main_content") or "",
            cta=data.get("cta") or "",
            hashtags=list(data.get("hashtags") or []),
            estimated_length=data.get("estimated_length") or 0,
            format=data.get("format") or "",
            scripted_at=_parse_timestamp(data.get("scripted_at")),
        )


@dataclass
class ContentScriptInput:
    """Fields for creating a script."""

    idea_id: str = ""
    hook: str = ""
    main_content: str = ""
    cta: str = ""
    hashtags: list[str] = field(default_factory=list)
    estimated_length: int = 0
    format: str = ""

    def validate(self) -> None:
        if not self.idea_id:
            raise InvalidInputError("idea_id", "idea ID is required")
        if not self.hook:
            raise InvalidInputError("hook", "hook is required")
        if not self.main_content:
            raise InvalidInputError("main_content", "main content is required")
        if not self.cta:
            raise InvalidInputError("cta", "CTA is required")

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "idea_id": self.idea_id,
            "hook": self.hook,
            "main_content": self.main_content,
            "cta": self.cta,
        }
        if self.hashtags:
            data["hashtags"] = list(self.hashtags)
        data["estimated_length"] = self.estimated_length
        data["format"] = self.format
        return data


@dataclass
class ContentCalendar:
    """A scheduled post."""

    id: str
    scheduled_for: _dt.datetime | None
    platform: str
    status: str = ""
    script_id: str | None = None
    published_at: _dt.datetime | None = None
    error_message: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ContentCalendar:
        return cls(
            id=data.get("id") or "",
            scheduled_for=_parse_timestamp(data.get("scheduled_for")),
            platform=data.get("platform") or "",
            status=data.get("status") or "",
            script_id=data.get("script_id"),
            published_at=_parse_timestamp(data.get("published_at")),
            error_message=data.get("error_message"),
        )


@dataclass
class ContentCalendarInput:
    """Fields for creating a calendar entry."""

    scheduled_for: _dt.datetime | None = None
    platform: str = ""
    script_id: str | None = None

    def validate(self) -> None:
        if self.scheduled_for is None:
            raise InvalidInputError("scheduled_for", "scheduled time is required")
        _check_platform(self.platform)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.script_id is not None:
            data["script_id"] = self.script_id
        data["scheduled_for"] = _format_timestamp(self.scheduled_for)
        data["platform"] = self.platform
        return data


@dataclass
class PostMetric:
    """Performance metrics for a published post."""

    id: str
    calendar_id: str
    platform: str
    views: int = 0
    likes: int = 0
    comments: int = 0
    shares: int = 0
    saves: int = 0
    engagement_rate: float = 0.0
    collected_at: _dt.datetime | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PostMetric:
        return cls(
            id=data.get("id") or "",
            calendar_id=data.get("calendar_id") or "",
            platform=data.get("platform") or "",
            views=data.get("views") or 0,
            likes=data.get("likes") or 0,
            comments=data.get("comments") or 0,
            shares=data.get("shares") or 0,
            saves=data.get("saves") or 0,
            engagement_rate=float(data.get("engagement_rate") or 0.0),
            collected_at=_parse_timestamp(data.get("collected_at")),
        )


@dataclass
class PostMetricInput:
    """Fields for recording a post's metrics."""

    calendar_id: str = ""
    platform: str = ""
    views: int = 0
    likes: int = 0
    comments: int = 0
    shares: int = 0
    saves: int = 0

    def validate(self) -> None:
        if not self.calendar_id:
            raise InvalidInputError("calendar_id", "calendar ID is required")
        _check_platform(self.platform)

    def engagement_rate(self) -> float:
        """Interactions as a percentage of views; zero when there are no views."""
        if self.views == 0:
            return 0.0
        total = self.likes + self.comments + self.shares + self.saves
        return float(total) / float(self.views) * 100.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "calendar_id": self.calendar_id,
            "platform": self.platform,
            "views": self.views,
            "likes": self.likes,
            "comments": self.comments,
            "shares": self.shares,
            "saves": self.saves,
        }


@dataclass
class AggregateMetrics:
    """Metrics summed over a period."""

    total_posts: int = 0
    total_views: int = 0
    total_likes: int = 0
    total_comments: int = 0
    total_shares: int = 0
    avg_engagement: float = 0.0
    top_post: str = ""
    top_engagement: float = 0.0


@dataclass
class CorrelationPoint:
    """One day of social and sales figures, for correlation analysis."""

    date: _dt.datetime
    views: int = 0
    engagement: float = 0.0
    units_sold: int = 0
    royalty: float = 0.0


@dataclass
class BookSale:
    """A daily sales record for a book."""

    id: str
    book_id: str
    sale_date: _dt.date | None
    units_sold: int = 0
    royalty: float = 0.0
    page_reads: int = 0
    created_at: _dt.datetime | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BookSale:
        return cls(
            id=data.get("id") or "",
            book_id=data.get("book_id") or "",
            sale_date=_parse_date(data.get("date")),
            units_sold=data.get("units_sold") or 0,
            royalty=float(data.get("royalty") or 0.0),
            page_reads=data.get("page_reads") or 0,
            created_at=_parse_timestamp(data.get("created_at")),
        )


@dataclass
class BookSaleInput:
    """Fields for recording a book sale."""

    book_id: str = ""
    sale_date: _dt.date | None = None
    units_sold: int = 0
    royalty: float = 0.0
    page_reads: int = 0

    def validate(self) -> None:
        if not self.book_id:
            raise InvalidInputError("book_id", "book ID is required")
        if self.sale_date is None:
            raise InvalidInputError("sale_date", "sale date is required")
        if self.units_sold < 0:
            raise InvalidInputError("units_sold", "units sold cannot be negative")
        if self.royalty < 0:
            raise InvalidInputError("royalty", "royalty cannot be negative")

    def to_dict(self) -> dict[str, Any]:
        return {
            "book_id": self.book_id,
            "date": format_date(self.sale_date) if self.sale_date is not None else None,
            "units_sold": self.units_sold,
            "royalty": self.royalty,
            "page_reads": self.page_reads,
        }


@dataclass
class KDPReportRow:
    """One row of a sales report."""

    title: str = ""
    asin: str = ""
    order_date: _dt.datetime | None = None
    units_sold: int = 0
    royalty: float = 0.0
    page_reads: int = 0
    marketplace: str = ""