"""MenuItem model — a purchasable catalog entry."""

from decimal import Decimal

from sqlalchemy import Numeric, Text
from sqlmodel import Column, Field, SQLModel

from fooder.models.base import TimestampMixin, new_id


class MenuItem(TimestampMixin, SQLModel, table=True):
    __tablename__ = "menu_items"

    tenant_id: str = Field(primary_key=True, max_length=64)
    menu_item_id: str = Field(default_factory=new_id, primary_key=True, max_length=26)

    name: str = Field(max_length=255, nullable=False)
    description: str = Field(default="", sa_column=Column(Text, nullable=False, server_default=""))
    # Unscaled: any positive price is stored as sent
    price: Decimal = Field(sa_column=Column(Numeric(asdecimal=True), nullable=False))
    image_url: str | None = Field(default=None, max_length=2048)
    category: str = Field(max_length=100, nullable=False)

    # Soft-delete flag — rows are never removed
    is_active: bool = Field(default=True)
