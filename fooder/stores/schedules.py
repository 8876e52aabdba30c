"""Schedule persistence — primary key lookups plus the status/start-time index."""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from fooder.models.base import utcnow
from fooder.models.schedule import Schedule, ScheduleStatus


class ScheduleStore:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, tenant_id: str, schedule_id: str) -> Schedule | None:
        stmt = select(Schedule).where(
            Schedule.tenant_id == tenant_id,
            Schedule.schedule_id == schedule_id,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def query_all(self, tenant_id: str) -> list[Schedule]:
        stmt = (
            select(Schedule)
            .where(Schedule.tenant_id == tenant_id)
            .order_by(
                Schedule.status_start_time.asc(),  # type: ignore[union-attr]
                Schedule.schedule_id.asc(),  # type: ignore[union-attr]
            )
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def query_status_prefix(self, tenant_id: str, status: ScheduleStatus) -> list[Schedule]:
        """Range scan over ``status_start_time`` for one status, ordered by start time."""
        stmt = (
            select(Schedule)
            .where(
                Schedule.tenant_id == tenant_id,
                Schedule.status_start_time.startswith(f"{status}#"),  # type: ignore[union-attr]
            )
            .order_by(Schedule.status_start_time.asc())  # type: ignore[union-attr]
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def put(self, schedule: Schedule) -> Schedule:
        self._session.add(schedule)
        await self._session.commit()
        await self._session.refresh(schedule)
        return schedule

    async def apply_patch(self, schedule: Schedule, fields: dict[str, Any]) -> Schedule:
        """Overwrite the given columns and refresh ``updated_at``."""
        for field, value in fields.items():
            setattr(schedule, field, value)
        schedule.updated_at = utcnow()
        return await self.put(schedule)

    async def delete(self, schedule: Schedule) -> None:
        await self._session.delete(schedule)
        await self._session.commit()
