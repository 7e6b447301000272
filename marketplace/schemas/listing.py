"""Listing request/response schemas - REST API contract."""

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from marketplace.schemas.fields import MAX_DB_INT

MAX_PHOTOS = 10

Delivery = Literal["pickup", "shipping", "both"]


def _normalize_category(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip().lower()
    return value or None


class ListingBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field("", max_length=5000)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    quantity: int = Field(1, ge=0, le=MAX_DB_INT)
    category: str | None = None
    location: str | None = None
    color: str | None = None
    condition: str | None = None
    delivery: Delivery = "pickup"
    handmade: bool = False
    photos: list[str] = Field(default_factory=list, max_length=MAX_PHOTOS)
    is_draft: bool = False
    event_id: int | None = Field(None, ge=1, le=MAX_DB_INT)

    @field_validator("category")
    @classmethod
    def normalize_category(cls, value: str | None) -> str | None:
        return _normalize_category(value)


class ListingCreate(ListingBase):
    pass


class ListingUpdate(BaseModel):
    """Partial update. `photos`, when given, replaces the ordered photo list."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=5000)
    price: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    quantity: int | None = Field(None, ge=0, le=MAX_DB_INT)
    category: str | None = None
    location: str | None = None
    color: str | None = None
    condition: str | None = None
    delivery: Delivery | None = None
    handmade: bool | None = None
    photos: list[str] | None = Field(None, max_length=MAX_PHOTOS)
    is_draft: bool | None = None
    event_id: int | None = Field(None, ge=1, le=MAX_DB_INT)

    @field_validator("category")
    @classmethod
    def normalize_category(cls, value: str | None) -> str | None:
        return _normalize_category(value)


class ListingResponse(ListingBase):
    id: int
    owner_id: int
    created_at: datetime
    updated_at: datetime
    owner_name: str | None = None  # Populated by service layer

    model_config = {"from_attributes": True}


class CategoryPage(BaseModel):
    category_name: str
    listings: list[ListingResponse]
