"""Menu catalog — CRUD over a tenant's menu items with soft delete."""

import logging

from fooder.core.errors import NotFoundError
from fooder.models.menu_item import MenuItem
from fooder.schemas.menu import MenuItemCreate, MenuItemPatch
from fooder.schemas.user import Identity
from fooder.stores.menu_items import MenuItemStore

logger = logging.getLogger(__name__)


class MenuCatalog:
    def __init__(self, items: MenuItemStore) -> None:
        self._items = items

    async def create(self, identity: Identity, body: MenuItemCreate) -> MenuItem:
        item = MenuItem(
            tenant_id=identity.tenant_id,
            name=body.name,
            description=body.description,
            price=body.price,
            image_url=body.image_url,
            category=body.category,
            is_active=True,
        )
        return await self._items.put(item)

    async def get(self, identity: Identity, menu_item_id: str) -> MenuItem:
        item = await self._items.get(identity.tenant_id, menu_item_id)
        if item is None:
            raise NotFoundError("Menu item not found")
        return item

    async def list_items(self, identity: Identity, include_inactive: bool = False) -> list[MenuItem]:
        # Inactive items are an admin-only view
        if not identity.is_admin:
            include_inactive = False
        return await self._items.query(identity.tenant_id, include_inactive=include_inactive)

    async def update(self, identity: Identity, menu_item_id: str, patch: MenuItemPatch) -> MenuItem:
        item = await self.get(identity, menu_item_id)
        fields = patch.model_dump(exclude_unset=True, exclude_none=True)
        return await self._items.apply_patch(item, fields)

    async def soft_delete(self, identity: Identity, menu_item_id: str) -> None:
        item = await self.get(identity, menu_item_id)
        await self._items.apply_patch(item, {"is_active": False})
        logger.info("Deactivated menu item %s in tenant %s", menu_item_id, identity.tenant_id)
