"""Menu catalog API schemas."""

from decimal import Decimal
from typing import Annotated

from pydantic import AfterValidator, Field, HttpUrl, TypeAdapter

from fooder.schemas.base import CamelModel, Price, UtcDatetime

_http_url = TypeAdapter(HttpUrl)


def _check_http_url(value: str) -> str:
    """Validate as an http(s) URL but keep the string exactly as sent."""
    try:
        _http_url.validate_python(value)
    except ValueError:
        raise ValueError("must be a valid http(s) URL") from None
    return value


ImageUrl = Annotated[str, Field(max_length=2048), AfterValidator(_check_http_url)]


class MenuItemCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    description: str = Field(default="", max_length=2000)
    price: Decimal = Field(gt=0)
    image_url: ImageUrl | None = None
    category: str = Field(min_length=1, max_length=100)


class MenuItemPatch(CamelModel):
    """Settable fields for a partial update. Omitted fields stay untouched."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=2000)
    price: Decimal | None = Field(default=None, gt=0)
    image_url: ImageUrl | None = None
    category: str | None = Field(default=None, min_length=1, max_length=100)
    is_active: bool | None = None


class MenuItemRead(CamelModel):
    tenant_id: str
    menu_item_id: str
    name: str
    description: str
    price: Price
    image_url: str | None = None
    category: str
    is_active: bool
    created_at: UtcDatetime
    updated_at: UtcDatetime
