"""Schedule endpoints — customers read open schedules, admins manage the lifecycle."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from fooder.api.deps import AdminIdentity, CurrentIdentity, Engine
from fooder.core.responses import success
from fooder.schemas.base import Message
from fooder.schemas.schedule import ScheduleCreate, SchedulePatch, ScheduleRead

router = APIRouter(prefix="/schedules", tags=["schedules"])


@router.get("")
async def list_schedules(identity: CurrentIdentity, engine: Engine) -> JSONResponse:
    schedules = await engine.list_schedules(identity)
    return success([ScheduleRead.model_validate(s) for s in schedules])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_schedule(
    body: ScheduleCreate,
    identity: AdminIdentity,
    engine: Engine,
) -> JSONResponse:
    schedule = await engine.create(identity, body)
    return success(ScheduleRead.model_validate(schedule), status.HTTP_201_CREATED)


@router.get("/{schedule_id}")
async def get_schedule(
    schedule_id: str,
    identity: CurrentIdentity,
    engine: Engine,
) -> JSONResponse:
    schedule = await engine.get(identity, schedule_id)
    return success(ScheduleRead.model_validate(schedule))


@router.put("/{schedule_id}")
async def update_schedule(
    schedule_id: str,
    body: SchedulePatch,
    identity: AdminIdentity,
    engine: Engine,
) -> JSONResponse:
    schedule = await engine.update(identity, schedule_id, body)
    return success(ScheduleRead.model_validate(schedule))


@router.delete("/{schedule_id}")
async def delete_schedule(
    schedule_id: str,
    identity: AdminIdentity,
    engine: Engine,
) -> JSONResponse:
    """Only draft schedules can be deleted."""
    await engine.delete(identity, schedule_id)
    return success(Message(message="Schedule deleted"))
