"""User API schemas."""

from pydantic import EmailStr, Field

from fooder.models.user import UserRole
from fooder.schemas.base import CamelModel


class Identity(CamelModel):
    """Resolved caller, attached to every authenticated request."""

    user_id: str
    tenant_id: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class UserProfile(CamelModel):
    user_id: str
    email: str
    display_name: str
    role: UserRole
    tenant_id: str


class PostConfirmation(CamelModel):
    """Payload the identity provider sends once a sign-up is confirmed."""

    subject_id: str = Field(min_length=1, max_length=128)
    email: EmailStr
    display_name: str = Field(default="", max_length=255)


class ProvisionedUser(CamelModel):
    user_id: str
    role: UserRole
