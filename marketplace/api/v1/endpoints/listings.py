"""
Listing CRUD endpoints.
Thin controller; ListingService holds ownership checks, caching and indexing.
"""

from fastapi import APIRouter, HTTPException, Query, status

from marketplace.config import get_settings
from marketplace.core.dependencies import CurrentUserId, ListingFilters, ListingId, OptionalUserId
from marketplace.db.repositories.listing_repository import ListingRepository
from marketplace.db.repositories.offer_repository import OfferRepository
from marketplace.db.session import DbSession
from marketplace.schemas.fields import MAX_DB_INT
from marketplace.schemas.listing import ListingCreate, ListingResponse, ListingUpdate
from marketplace.schemas.offer import OfferCreate, OfferResponse
from marketplace.services.listing_service import ListingService
from marketplace.services.offer_service import OfferService

router = APIRouter()
settings = get_settings()


def _get_listing_service(session: DbSession) -> ListingService:
    return ListingService(ListingRepository(session))


@router.get("", response_model=list[ListingResponse])
async def list_listings(session: DbSession, filters: ListingFilters):
    """Published listings, filtered and paginated."""
    return await _get_listing_service(session).browse(filters)


@router.get("/mine", response_model=list[ListingResponse])
async def my_listings(session: DbSession, filters: ListingFilters, user_id: CurrentUserId):
    """The caller's listings, drafts included."""
    return await _get_listing_service(session).owned_by(user_id, filters)


@router.get("/{listing_id}", response_model=ListingResponse)
async def get_listing(session: DbSession, listing_id: ListingId, viewer_id: OptionalUserId):
    listing = await _get_listing_service(session).get_by_id(listing_id, viewer_id=viewer_id)
    if not listing:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Listing not found")
    return listing


@router.post("", response_model=ListingResponse, status_code=status.HTTP_201_CREATED)
async def create_listing(session: DbSession, data: ListingCreate, user_id: CurrentUserId):
    """Create a listing owned by the caller."""
    return await _get_listing_service(session).create(user_id, data)


@router.put("/{listing_id}", response_model=ListingResponse)
async def update_listing(session: DbSession, listing_id: ListingId, data: ListingUpdate, user_id: CurrentUserId):
    """Owner-only partial update. Invalidates cache and re-indexes."""
    listing = await _get_listing_service(session).update(listing_id, user_id, data)
    if not listing:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Listing not found")
    return listing


@router.delete("/{listing_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_listing(session: DbSession, listing_id: ListingId, user_id: CurrentUserId):
    """Owner-only delete. Removes from DB, cache and search index."""
    ok = await _get_listing_service(session).delete(listing_id, user_id)
    if not ok:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Listing not found")


def _get_offer_service(session: DbSession) -> OfferService:
    return OfferService(OfferRepository(session), ListingRepository(session))


@router.post("/{listing_id}/offers", response_model=OfferResponse, status_code=status.HTTP_201_CREATED)
async def send_offer(session: DbSession, listing_id: ListingId, data: OfferCreate, user_id: CurrentUserId):
    """Leave an offer message for the listing's seller."""
    return await _get_offer_service(session).send(user_id, listing_id, data)


@router.get("/{listing_id}/offers", response_model=list[OfferResponse])
async def list_offers(
    session: DbSession,
    listing_id: ListingId,
    user_id: CurrentUserId,
    skip: int = Query(0, ge=0, le=MAX_DB_INT),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
):
    """Owner-only: offers received on the listing, newest first."""
    return await _get_offer_service(session).for_listing(listing_id, user_id, skip=skip, limit=limit)
