"""Shared base fields for all models."""

from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel
from ulid import ULID


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_id() -> str:
    """ULID string: unique and lexicographically sortable by creation time."""
    return str(ULID())


def to_naive_utc(value: datetime) -> datetime:
    """Normalize to the naive-UTC form stored in the database."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def isoformat_utc(value: datetime) -> str:
    """Render as ``2025-06-01T10:00:00.000Z``. Naive values are taken as UTC."""
    return to_naive_utc(value).isoformat(timespec="milliseconds") + "Z"


class TimestampMixin(SQLModel):
    """Created / updated timestamps injected into every table.

    Stored as naive UTC (``DateTime`` without time zone).
    """

    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime, nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime, nullable=False)
