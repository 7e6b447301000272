"""Event (seasonal banner) response schemas."""

from datetime import datetime

from pydantic import BaseModel

from marketplace.schemas.listing import ListingResponse


class EventResponse(BaseModel):
    id: int
    name: str
    slug: str
    image: str
    description: str
    button_text: str
    target_url: str
    starts_at: datetime
    ends_at: datetime

    model_config = {"from_attributes": True}


class EventPage(BaseModel):
    event: EventResponse
    listings: list[ListingResponse]
