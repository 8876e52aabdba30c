"""Menu item CRUD — reads for any caller, writes for admins only."""

from typing import Annotated

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from fooder.api.deps import AdminIdentity, Catalog, CurrentIdentity
from fooder.core.responses import success
from fooder.schemas.base import Message
from fooder.schemas.menu import MenuItemCreate, MenuItemPatch, MenuItemRead

router = APIRouter(prefix="/menu-items", tags=["menu"])


@router.get("")
async def list_menu_items(
    identity: CurrentIdentity,
    catalog: Catalog,
    include_inactive: Annotated[bool, Query(alias="includeInactive")] = False,
) -> JSONResponse:
    items = await catalog.list_items(identity, include_inactive=include_inactive)
    return success([MenuItemRead.model_validate(i) for i in items])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_menu_item(
    body: MenuItemCreate,
    identity: AdminIdentity,
    catalog: Catalog,
) -> JSONResponse:
    item = await catalog.create(identity, body)
    return success(MenuItemRead.model_validate(item), status.HTTP_201_CREATED)


@router.get("/{menu_item_id}")
async def get_menu_item(
    menu_item_id: str,
    identity: CurrentIdentity,
    catalog: Catalog,
) -> JSONResponse:
    item = await catalog.get(identity, menu_item_id)
    return success(MenuItemRead.model_validate(item))


@router.put("/{menu_item_id}")
async def update_menu_item(
    menu_item_id: str,
    body: MenuItemPatch,
    identity: AdminIdentity,
    catalog: Catalog,
) -> JSONResponse:
    item = await catalog.update(identity, menu_item_id, body)
    return success(MenuItemRead.model_validate(item))


@router.delete("/{menu_item_id}")
async def delete_menu_item(
    menu_item_id: str,
    identity: AdminIdentity,
    catalog: Catalog,
) -> JSONResponse:
    """Soft delete: the item is deactivated, never removed."""
    await catalog.soft_delete(identity, menu_item_id)
    return success(Message(message="Menu item deleted"))
