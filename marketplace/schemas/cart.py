"""
Cart request/response schemas.
Bodies use camelCase on the wire (`listingId`, `cartCount`); snake_case names are accepted too.
Money is kept unrounded inside the service and rounded once here, at presentation.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

from marketplace.schemas.fields import DbInt

CENTS = Decimal("0.01")

Money = Annotated[
    Decimal,
    PlainSerializer(lambda v: str(v.quantize(CENTS, rounding=ROUND_HALF_UP)), return_type=str),
]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CartAddRequest(CamelModel):
    listing_id: DbInt
    quantity: DbInt


class CartUpdateRequest(CamelModel):
    listing_id: DbInt
    quantity: DbInt


class CartRemoveRequest(CamelModel):
    listing_id: DbInt


class CartMutationResponse(CamelModel):
    cart_count: int
    message: str
    listing_name: str | None = None


class CartListing(CamelModel):
    id: int
    title: str
    price: Money
    quantity: int
    photos: list[str] = []

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class CartLine(CamelModel):
    listing: CartListing
    quantity: int
    subtotal: Money


class CartView(CamelModel):
    items: list[CartLine]
    total_items: int
    total: Money
    notice: str | None = None
