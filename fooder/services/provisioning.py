"""User provisioning from the identity provider's post-confirmation callback."""

import logging

from fooder.core.security import PIICodec
from fooder.models.user import User, UserRole
from fooder.schemas.user import PostConfirmation
from fooder.stores.users import UserStore

logger = logging.getLogger(__name__)


def role_for(email_hash: str, admin_fingerprints: frozenset[str]) -> UserRole:
    return UserRole.ADMIN if email_hash in admin_fingerprints else UserRole.CUSTOMER


async def provision_user(
    event: PostConfirmation,
    users: UserStore,
    codec: PIICodec,
    tenant_id: str,
    admin_fingerprints: frozenset[str],
) -> User:
    """Create the user on first confirmation; refresh PII and role on later ones."""
    email_hash = codec.fingerprint(event.email)
    role = role_for(email_hash, admin_fingerprints)

    user = await users.upsert(
        tenant_id=tenant_id,
        user_id=event.subject_id,
        email_hash=email_hash,
        encrypted_email=codec.seal(event.email),
        encrypted_display_name=codec.seal(event.display_name),
        role=role,
    )
    logger.info("Provisioned user %s in tenant %s as %s", user.user_id, tenant_id, role)
    return user
