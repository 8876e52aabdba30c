"""API router aggregation."""

from fastapi import APIRouter

from fooder.api.routes.hooks import router as hooks_router
from fooder.api.routes.me import router as me_router
from fooder.api.routes.menu_items import router as menu_items_router
from fooder.api.routes.schedules import router as schedules_router

api_router = APIRouter()
api_router.include_router(me_router)
api_router.include_router(menu_items_router)
api_router.include_router(schedules_router)
api_router.include_router(hooks_router)
