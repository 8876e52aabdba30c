"""User model — one authenticated principal within a tenant."""

from enum import StrEnum

from sqlalchemy import Text
from sqlmodel import Column, Field, SQLModel

from fooder.models.base import TimestampMixin


class UserRole(StrEnum):
    ADMIN = "admin"
    CUSTOMER = "customer"


class User(TimestampMixin, SQLModel, table=True):
    __tablename__ = "users"

    tenant_id: str = Field(primary_key=True, max_length=64)
    # Subject claim issued by the identity provider
    user_id: str = Field(primary_key=True, max_length=128)

    # SHA-256 fingerprint of the normalized email, for allow-list matching
    email_hash: str = Field(max_length=64, nullable=False, index=True)

    # Fernet ciphertexts
    encrypted_email: str = Field(sa_column=Column(Text, nullable=False))
    encrypted_display_name: str = Field(sa_column=Column(Text, nullable=False))

    role: UserRole = Field(default=UserRole.CUSTOMER)
