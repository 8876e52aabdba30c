"""Schedule model — a time-boxed ordering window with embedded item snapshots."""

from datetime import datetime
from enum import StrEnum

from sqlalchemy import JSON, DateTime, Index, Text
from sqlmodel import Column, Field, SQLModel

from fooder.models.base import TimestampMixin, isoformat_utc, new_id


class ScheduleStatus(StrEnum):
    DRAFT = "draft"
    ACTIVE = "active"
    CLOSED = "closed"


def status_sort_key(status: ScheduleStatus, start_time: datetime) -> str:
    """Composite ``{status}#{startTime}`` key backing range queries by status."""
    return f"{status}#{isoformat_utc(start_time)}"


class Schedule(TimestampMixin, SQLModel, table=True):
    __tablename__ = "schedules"
    __table_args__ = (
        Index("ix_schedules_tenant_status_start", "tenant_id", "status_start_time"),
    )

    tenant_id: str = Field(primary_key=True, max_length=64)
    schedule_id: str = Field(default_factory=new_id, primary_key=True, max_length=26)

    title: str = Field(max_length=255, nullable=False)
    description: str = Field(default="", sa_column=Column(Text, nullable=False, server_default=""))
    pickup_instructions: str = Field(
        default="", sa_column=Column(Text, nullable=False, server_default=""),
    )

    # Naive UTC
    start_time: datetime = Field(sa_type=DateTime, nullable=False)
    end_time: datetime = Field(sa_type=DateTime, nullable=False)

    status: ScheduleStatus = Field(default=ScheduleStatus.DRAFT)
    status_start_time: str = Field(max_length=64, nullable=False)

    # Snapshots frozen at creation:
    # [{"menuItemId", "name", "price", "totalQuantity", "remainingQuantity"}, ...]
    items: list[dict] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
