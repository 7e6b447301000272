"""
Listing service - listing CRUD, browsing, caching and search indexing.
Endpoints stay thin; ownership checks and draft visibility live here.
"""

import json
import logging

from kombu.exceptions import OperationalError

from marketplace.cache.redis_client import cache_delete, cache_get, cache_set, listing_key
from marketplace.config import get_settings
from marketplace.core.errors import ForbiddenError, NotFoundError
from marketplace.db.models.listing import Listing
from marketplace.db.repositories.event_repository import EventRepository
from marketplace.db.repositories.listing_repository import ListingFilter, ListingRepository
from marketplace.queue.tasks import index_listing_task, remove_listing_task
from marketplace.schemas.listing import CategoryPage, ListingCreate, ListingResponse, ListingUpdate

logger = logging.getLogger(__name__)

settings = get_settings()

_REQUIRED_FIELDS = {"title", "description", "price", "quantity", "delivery", "handmade", "photos", "is_draft"}


def _listing_to_doc(listing: Listing) -> dict:
    """Search document for Elasticsearch."""
    return {
        "id": listing.id,
        "title": listing.title,
        "description": listing.description or "",
        "category": listing.category,
        "color": listing.color,
        "price": float(listing.price),
        "owner_id": listing.owner_id,
        "created_at": listing.created_at.isoformat() if listing.created_at else None,
    }


def listing_to_response(listing: Listing) -> ListingResponse:
    response = ListingResponse.model_validate(listing)
    owner = listing.__dict__.get("owner")  # only when eagerly loaded
    if owner is not None:
        response.owner_name = owner.full_name
    return response


def _enqueue(task, *args) -> None:
    """Publish a search-index task; a down broker only delays indexing."""
    try:
        task.delay(*args)
    except OperationalError as e:
        logger.warning("could not enqueue %s%r: %s", task.name, args, e)


def category_display_name(category: str) -> str:
    if category == "all":
        return "All Listings"
    return category[:1].upper() + category[1:]


class ListingService:
    """Handles listing use cases: CRUD, browse, cache, search indexing."""

    def __init__(self, listing_repo: ListingRepository):
        self.listing_repo = listing_repo
        self.event_repo = EventRepository(listing_repo.session)

    async def _check_event(self, event_id: int | None) -> None:
        if event_id is not None and await self.event_repo.get_by_id(event_id) is None:
            raise NotFoundError("event")

    async def create(self, owner_id: int, data: ListingCreate) -> ListingResponse:
        await self._check_event(data.event_id)
        listing = Listing(owner_id=owner_id, **data.model_dump())
        listing = await self.listing_repo.add(listing)
        if not listing.is_draft:
            _enqueue(index_listing_task, _listing_to_doc(listing))
        listing = await self.listing_repo.get_by_id_with_owner(listing.id)
        logger.info("listing created: id=%s owner=%s draft=%s", listing.id, owner_id, listing.is_draft)
        return listing_to_response(listing)

    async def get_by_id(self, id: int, viewer_id: int | None = None) -> ListingResponse | None:
        """Published listings are cached; drafts are visible to their owner only."""
        cached = await cache_get(listing_key(id))
        if cached:
            return ListingResponse(**json.loads(cached))
        listing = await self.listing_repo.get_by_id_with_owner(id)
        if not listing:
            return None
        if listing.is_draft and listing.owner_id != viewer_id:
            return None
        resp = listing_to_response(listing)
        if not listing.is_draft:
            await cache_set(listing_key(id), resp.model_dump(mode="json"), settings.listing_cache_ttl)
        return resp

    async def browse(self, filters: ListingFilter) -> list[ListingResponse]:
        listings = await self.listing_repo.browse(filters)
        return [listing_to_response(item) for item in listings]

    async def owned_by(self, owner_id: int, filters: ListingFilter) -> list[ListingResponse]:
        """The owner's own listings, drafts included."""
        listings = await self.listing_repo.browse(filters, owner_id=owner_id, include_drafts=True)
        return [listing_to_response(item) for item in listings]

    async def category_page(self, category: str, filters: ListingFilter) -> CategoryPage:
        category = category.lower()
        if category != "all":
            filters.categories = [category]
        listings = await self.listing_repo.browse(filters)
        return CategoryPage(
            category_name=category_display_name(category),
            listings=[listing_to_response(item) for item in listings],
        )

    async def update(self, id: int, user_id: int, data: ListingUpdate) -> ListingResponse | None:
        listing = await self.listing_repo.get_by_id_with_owner(id)
        if not listing:
            return None
        if listing.owner_id != user_id:
            raise ForbiddenError("You can only edit your own listings.")
        changes = data.model_dump(exclude_unset=True)
        await self._check_event(changes.get("event_id"))
        for field, value in changes.items():
            if value is None and field in _REQUIRED_FIELDS:
                continue  # required columns: explicit null means "leave as is"
            setattr(listing, field, value)
        await self.listing_repo.session.flush()
        listing = await self.listing_repo.get_by_id_with_owner(id)
        await cache_delete(listing_key(id))
        if listing.is_draft:
            _enqueue(remove_listing_task, id)
        else:
            _enqueue(index_listing_task, _listing_to_doc(listing))
        logger.info("listing updated: id=%s fields=%s", id, sorted(changes))
        return listing_to_response(listing)

    async def delete(self, id: int, user_id: int) -> bool:
        """Delete listing; carts still pointing at it are healed on their next read."""
        listing = await self.listing_repo.get_by_id(id)
        if not listing:
            return False
        if listing.owner_id != user_id:
            raise ForbiddenError("You can only delete your own listings.")
        await self.listing_repo.delete(listing)
        await cache_delete(listing_key(id))
        _enqueue(remove_listing_task, id)
        logger.info("listing deleted: id=%s", id)
        return True
