"""Offer request/response schemas."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class OfferCreate(BaseModel):
    message: str = Field(..., min_length=1, max_length=2000)

    @field_validator("message")
    @classmethod
    def strip_message(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("message must not be blank")
        return value


class OfferResponse(BaseModel):
    id: int
    listing_id: int
    sender_id: int
    message: str
    created_at: datetime

    model_config = {"from_attributes": True}
