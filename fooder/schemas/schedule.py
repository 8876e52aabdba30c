"""Schedule API schemas, including the embedded item snapshot."""

from decimal import Decimal

from pydantic import AwareDatetime, Field, model_validator

from fooder.models.schedule import ScheduleStatus
from fooder.schemas.base import CamelModel, Price, UtcDatetime


class ScheduleItemRequest(CamelModel):
    menu_item_id: str = Field(min_length=1)
    total_quantity: int = Field(gt=0, strict=True)


class ScheduleCreate(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = ""
    pickup_instructions: str = ""
    start_time: AwareDatetime
    end_time: AwareDatetime
    items: list[ScheduleItemRequest] = Field(min_length=1)


class SchedulePatch(CamelModel):
    """Settable fields for a partial update. Items are frozen at creation."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    pickup_instructions: str | None = None
    start_time: AwareDatetime | None = None
    end_time: AwareDatetime | None = None
    status: ScheduleStatus | None = None


class ScheduleItem(CamelModel):
    """Snapshot of a menu item taken when the schedule was created."""

    menu_item_id: str
    name: str
    price: Price
    total_quantity: int = Field(gt=0)
    remaining_quantity: int = Field(ge=0)

    @model_validator(mode="after")
    def _remaining_within_total(self) -> "ScheduleItem":
        if self.remaining_quantity > self.total_quantity:
            raise ValueError("remainingQuantity cannot exceed totalQuantity")
        return self

    @classmethod
    def snapshot(cls, menu_item_id: str, name: str, price: Decimal, quantity: int) -> "ScheduleItem":
        return cls(
            menu_item_id=menu_item_id,
            name=name,
            price=price,
            total_quantity=quantity,
            remaining_quantity=quantity,
        )


class ScheduleRead(CamelModel):
    tenant_id: str
    schedule_id: str
    title: str
    description: str
    pickup_instructions: str
    start_time: UtcDatetime
    end_time: UtcDatetime
    status: ScheduleStatus
    status_start_time: str
    items: list[ScheduleItem]
    created_at: UtcDatetime
    updated_at: UtcDatetime
