"""
Event endpoints - the active seasonal banner and event listing pages.
"""

from fastapi import APIRouter

from marketplace.core.dependencies import ListingFilters
from marketplace.db.repositories.event_repository import EventRepository
from marketplace.db.repositories.listing_repository import ListingRepository
from marketplace.db.session import DbSession
from marketplace.schemas.event import EventPage, EventResponse
from marketplace.services.event_service import EventService

router = APIRouter()


def _get_event_service(session: DbSession) -> EventService:
    return EventService(EventRepository(session), ListingRepository(session))


@router.get("/active", response_model=EventResponse | None)
async def active_event(session: DbSession):
    """Banner for the home page; null when no event is running."""
    return await _get_event_service(session).active()


@router.get("/{slug}", response_model=EventPage)
async def event_page(session: DbSession, slug: str, filters: ListingFilters):
    return await _get_event_service(session).page(slug, filters)
