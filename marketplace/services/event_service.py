"""
Event service - the home-page banner and per-event listing pages.
An event page only exists while its window is open.
"""

from datetime import datetime, timezone

from marketplace.core.errors import NotFoundError
from marketplace.db.repositories.event_repository import EventRepository
from marketplace.db.repositories.listing_repository import ListingFilter, ListingRepository
from marketplace.schemas.event import EventPage, EventResponse
from marketplace.services.listing_service import listing_to_response


def _now() -> datetime:
    return datetime.now(timezone.utc)


class EventService:
    def __init__(self, event_repo: EventRepository, listing_repo: ListingRepository):
        self.event_repo = event_repo
        self.listing_repo = listing_repo

    async def active(self) -> EventResponse | None:
        """The banner to show now; with overlapping windows the earliest start wins."""
        events = await self.event_repo.active_at(_now())
        if not events:
            return None
        return EventResponse.model_validate(events[0])

    async def page(self, slug: str, filters: ListingFilter) -> EventPage:
        if await self.event_repo.get_by_slug(slug) is None:
            raise NotFoundError("event")
        active = await self.event_repo.active_at(_now(), slug=slug)
        if not active:
            raise NotFoundError("event", "This event is not currently active.")
        event = active[0]
        listings = await self.listing_repo.browse(filters, event_id=event.id)
        return EventPage(
            event=EventResponse.model_validate(event),
            listings=[listing_to_response(item) for item in listings],
        )
