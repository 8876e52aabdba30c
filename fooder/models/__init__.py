"""Import all models so SQLModel.metadata picks them up."""

from fooder.models.menu_item import MenuItem
from fooder.models.schedule import Schedule, ScheduleStatus, status_sort_key
from fooder.models.user import User, UserRole

__all__ = [
    "MenuItem",
    "Schedule",
    "ScheduleStatus",
    "User",
    "UserRole",
    "status_sort_key",
]
