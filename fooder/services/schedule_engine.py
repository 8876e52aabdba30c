"""Schedule engine — snapshot assembly, status transitions and visibility.

A schedule captures name and price of each referenced menu item at creation
time, so later catalog edits never leak into an existing schedule. Status
moves strictly forward (draft → active → closed). Customer visibility is a
separate, time-based axis: an ``active`` schedule is only listed for
customers while ``start_time <= now <= end_time``; nothing closes a schedule
automatically when its window ends.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from fooder.core.errors import NotFoundError, ValidationError
from fooder.models.base import to_naive_utc, utcnow
from fooder.models.schedule import Schedule, ScheduleStatus, status_sort_key
from fooder.schemas.schedule import ScheduleCreate, ScheduleItem, SchedulePatch
from fooder.schemas.user import Identity
from fooder.stores.menu_items import MenuItemStore
from fooder.stores.schedules import ScheduleStore

logger = logging.getLogger(__name__)

TRANSITIONS: dict[ScheduleStatus, frozenset[ScheduleStatus]] = {
    ScheduleStatus.DRAFT: frozenset({ScheduleStatus.ACTIVE}),
    ScheduleStatus.ACTIVE: frozenset({ScheduleStatus.CLOSED}),
    ScheduleStatus.CLOSED: frozenset(),
}


def check_transition(current: ScheduleStatus, requested: ScheduleStatus) -> None:
    """Reject anything but a single forward step, including same-state requests."""
    if requested not in TRANSITIONS[current]:
        raise ValidationError(f"Cannot transition from '{current}' to '{requested}'")


def check_window(start_time: datetime, end_time: datetime) -> None:
    if end_time <= start_time:
        raise ValidationError("endTime must be after startTime")


def is_visible_at(schedule: Schedule, now: datetime) -> bool:
    """Customer visibility: active and ``now`` inside the inclusive window."""
    return (
        schedule.status == ScheduleStatus.ACTIVE
        and schedule.start_time <= now <= schedule.end_time
    )


class ScheduleEngine:
    def __init__(
        self,
        schedules: ScheduleStore,
        menu_items: MenuItemStore,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._schedules = schedules
        self._menu_items = menu_items
        self._clock = clock

    async def create(self, identity: Identity, body: ScheduleCreate) -> Schedule:
        start_time = to_naive_utc(body.start_time)
        end_time = to_naive_utc(body.end_time)
        check_window(start_time, end_time)
        if not body.items:
            raise ValidationError("At least one item is required")

        fetched = await self._menu_items.batch_get(
            identity.tenant_id, [item.menu_item_id for item in body.items]
        )
        # Every reference must pass before anything is written
        for requested in body.items:
            menu_item = fetched.get(requested.menu_item_id)
            if menu_item is None:
                raise ValidationError(f"Menu item not found: {requested.menu_item_id}")
            if not menu_item.is_active:
                raise ValidationError(f"Menu item is inactive: {requested.menu_item_id}")

        snapshots = [
            ScheduleItem.snapshot(
                menu_item_id=requested.menu_item_id,
                name=fetched[requested.menu_item_id].name,
                price=fetched[requested.menu_item_id].price,
                quantity=requested.total_quantity,
            )
            for requested in body.items
        ]

        schedule = Schedule(
            tenant_id=identity.tenant_id,
            title=body.title,
            description=body.description,
            pickup_instructions=body.pickup_instructions,
            start_time=start_time,
            end_time=end_time,
            status=ScheduleStatus.DRAFT,
            status_start_time=status_sort_key(ScheduleStatus.DRAFT, start_time),
            items=[s.model_dump(mode="json", by_alias=True) for s in snapshots],
        )
        schedule = await self._schedules.put(schedule)
        logger.info(
            "Created schedule %s with %d items in tenant %s",
            schedule.schedule_id, len(snapshots), identity.tenant_id,
        )
        return schedule

    async def get(self, identity: Identity, schedule_id: str) -> Schedule:
        schedule = await self._schedules.get(identity.tenant_id, schedule_id)
        if schedule is None:
            raise NotFoundError("Schedule not found")
        return schedule

    async def list_schedules(self, identity: Identity) -> list[Schedule]:
        """Admins see everything; customers only what is open for ordering right now."""
        if identity.is_admin:
            return await self._schedules.query_all(identity.tenant_id)

        active = await self._schedules.query_status_prefix(identity.tenant_id, ScheduleStatus.ACTIVE)
        now = self._clock()
        return [s for s in active if is_visible_at(s, now)]

    async def update(self, identity: Identity, schedule_id: str, patch: SchedulePatch) -> Schedule:
        schedule = await self.get(identity, schedule_id)
        fields = patch.model_dump(exclude_unset=True, exclude_none=True)

        if "status" in fields:
            check_transition(schedule.status, fields["status"])
        for key in ("start_time", "end_time"):
            if key in fields:
                fields[key] = to_naive_utc(fields[key])

        start_time = fields.get("start_time", schedule.start_time)
        if "start_time" in fields or "end_time" in fields:
            check_window(start_time, fields.get("end_time", schedule.end_time))

        if "status" in fields or "start_time" in fields:
            status = fields.get("status", schedule.status)
            fields["status_start_time"] = status_sort_key(status, start_time)

        previous = schedule.status
        schedule = await self._schedules.apply_patch(schedule, fields)
        if schedule.status != previous:
            logger.info(
                "Schedule %s moved from %s to %s", schedule_id, previous, schedule.status,
            )
        return schedule

    async def delete(self, identity: Identity, schedule_id: str) -> None:
        schedule = await self.get(identity, schedule_id)
        if schedule.status != ScheduleStatus.DRAFT:
            raise ValidationError("Only draft schedules can be deleted")
        await self._schedules.delete(schedule)
        logger.info("Deleted draft schedule %s in tenant %s", schedule_id, identity.tenant_id)
