"""Menu item persistence — every query scoped to a tenant."""

from collections.abc import Iterable
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from fooder.models.base import utcnow
from fooder.models.menu_item import MenuItem


class MenuItemStore:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, tenant_id: str, menu_item_id: str) -> MenuItem | None:
        stmt = select(MenuItem).where(
            MenuItem.tenant_id == tenant_id,
            MenuItem.menu_item_id == menu_item_id,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def batch_get(self, tenant_id: str, menu_item_ids: Iterable[str]) -> dict[str, MenuItem]:
        """Fetch several items in one round trip, keyed by id. Missing ids are absent."""
        ids = set(menu_item_ids)
        if not ids:
            return {}
        stmt = select(MenuItem).where(
            MenuItem.tenant_id == tenant_id,
            MenuItem.menu_item_id.in_(ids),  # type: ignore[union-attr]
        )
        result = await self._session.execute(stmt)
        return {item.menu_item_id: item for item in result.scalars().all()}

    async def query(self, tenant_id: str, include_inactive: bool = False) -> list[MenuItem]:
        stmt = select(MenuItem).where(MenuItem.tenant_id == tenant_id)
        if not include_inactive:
            stmt = stmt.where(MenuItem.is_active == True)  # noqa: E712
        stmt = stmt.order_by(MenuItem.menu_item_id.asc())  # type: ignore[union-attr]
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def put(self, item: MenuItem) -> MenuItem:
        self._session.add(item)
        await self._session.commit()
        await self._session.refresh(item)
        return item

    async def apply_patch(self, item: MenuItem, fields: dict[str, Any]) -> MenuItem:
        """Overwrite the given columns and refresh ``updated_at``."""
        for field, value in fields.items():
            setattr(item, field, value)
        item.updated_at = utcnow()
        return await self.put(item)
