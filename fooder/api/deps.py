"""FastAPI dependencies: identity gate, injected stores, codec and services."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from fooder.core.config import Settings, get_settings
from fooder.core.database import get_session
from fooder.core.errors import UnauthorizedError
from fooder.core.security import PIICodec, decode_jwt, get_pii_codec
from fooder.models.user import UserRole
from fooder.schemas.user import Identity
from fooder.services.identity import require_role, resolve_identity
from fooder.services.menu_catalog import MenuCatalog
from fooder.services.schedule_engine import ScheduleEngine
from fooder.stores.menu_items import MenuItemStore
from fooder.stores.schedules import ScheduleStore
from fooder.stores.users import UserStore

bearer_scheme = HTTPBearer(auto_error=False)

Session = Annotated[AsyncSession, Depends(get_session)]
AppSettings = Annotated[Settings, Depends(get_settings)]
Codec = Annotated[PIICodec, Depends(get_pii_codec)]


async def get_claims(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    settings: AppSettings,
) -> dict:
    """Verify the identity provider's bearer token and return its claims."""
    if credentials is None:
        raise UnauthorizedError("Missing authentication")
    try:
        return decode_jwt(credentials.credentials, settings)
    except JWTError as exc:
        raise UnauthorizedError("Missing authentication") from exc


async def get_identity(
    claims: Annotated[dict, Depends(get_claims)],
    session: Session,
    settings: AppSettings,
) -> Identity:
    return await resolve_identity(claims, UserStore(session), settings.tenant_id)


async def get_admin_identity(
    identity: Annotated[Identity, Depends(get_identity)],
) -> Identity:
    require_role(identity, UserRole.ADMIN)
    return identity


def get_user_store(session: Session) -> UserStore:
    return UserStore(session)


def get_menu_catalog(session: Session) -> MenuCatalog:
    return MenuCatalog(MenuItemStore(session))


def get_schedule_engine(session: Session) -> ScheduleEngine:
    return ScheduleEngine(ScheduleStore(session), MenuItemStore(session))


# Typed shorthand for use in route signatures
CurrentIdentity = Annotated[Identity, Depends(get_identity)]
AdminIdentity = Annotated[Identity, Depends(get_admin_identity)]
Users = Annotated[UserStore, Depends(get_user_store)]
Catalog = Annotated[MenuCatalog, Depends(get_menu_catalog)]
Engine = Annotated[ScheduleEngine, Depends(get_schedule_engine)]
