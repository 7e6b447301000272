"""
Favorite service - saved listings per user.
"""

import logging

from marketplace.core.errors import ConflictError, NotFoundError
from marketplace.db.repositories.listing_repository import ListingFilter, ListingRepository
from marketplace.db.repositories.user_repository import UserRepository
from marketplace.schemas.listing import ListingResponse
from marketplace.services.listing_service import listing_to_response

logger = logging.getLogger(__name__)


class FavoriteService:
    def __init__(self, user_repo: UserRepository, listing_repo: ListingRepository):
        self.user_repo = user_repo
        self.listing_repo = listing_repo

    async def add(self, user_id: int, listing_id: int) -> None:
        listing = await self.listing_repo.get_by_id(listing_id)
        if listing is None or (listing.is_draft and listing.owner_id != user_id):
            raise NotFoundError("listing")
        if await self.user_repo.has_favorite(user_id, listing_id):
            raise ConflictError("Listing is already in your favorites.")
        await self.user_repo.add_favorite(user_id, listing_id)
        logger.info("favorite added: user=%s listing=%s", user_id, listing_id)

    async def remove(self, user_id: int, listing_id: int) -> None:
        if not await self.user_repo.remove_favorite(user_id, listing_id):
            raise NotFoundError("favorite", "Listing is not in your favorites.")
        logger.info("favorite removed: user=%s listing=%s", user_id, listing_id)

    async def list_for_user(self, user_id: int, filters: ListingFilter) -> list[ListingResponse]:
        listings = await self.user_repo.list_favorites(user_id, filters)
        return [listing_to_response(item) for item in listings]
