"""Identity resolution and role gating.

Both steps are plain functions so they can be composed explicitly in front of
a domain call: ``resolve_identity`` turns verified claims into an
:class:`Identity`, ``require_role`` rejects callers without the needed role.
"""

import logging

from fooder.core.errors import ForbiddenError, NotFoundError, UnauthorizedError
from fooder.core.security import PIICodec
from fooder.models.user import UserRole
from fooder.schemas.user import Identity, UserProfile
from fooder.stores.users import UserStore

logger = logging.getLogger(__name__)


def subject_from_claims(claims: dict | None) -> str:
    subject = (claims or {}).get("sub")
    if not subject or not isinstance(subject, str):
        raise UnauthorizedError("Missing authentication")
    return subject


async def resolve_identity(claims: dict | None, users: UserStore, tenant_id: str) -> Identity:
    """Look up the stored user behind the token's subject.

    An unknown subject is reported exactly like a missing token so callers
    cannot probe which users exist.
    """
    user_id = subject_from_claims(claims)
    user = await users.get(tenant_id, user_id)
    if user is None:
        logger.info("Rejected token for unknown subject in tenant %s", tenant_id)
        raise UnauthorizedError("User not found")
    return Identity(user_id=user.user_id, tenant_id=user.tenant_id, role=user.role)


def require_role(identity: Identity, role: UserRole) -> None:
    if identity.role != role:
        raise ForbiddenError(f"{role.capitalize()} access required")


async def load_profile(identity: Identity, users: UserStore, codec: PIICodec) -> UserProfile:
    """Return the caller's profile with PII unsealed."""
    user = await users.get(identity.tenant_id, identity.user_id)
    if user is None:
        raise NotFoundError("User not found")
    return UserProfile(
        user_id=user.user_id,
        email=codec.unseal(user.encrypted_email),
        display_name=codec.unseal(user.encrypted_display_name),
        role=user.role,
        tenant_id=user.tenant_id,
    )
