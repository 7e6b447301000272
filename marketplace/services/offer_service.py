"""
Offer service - buyers message sellers about a listing; sellers read them.
"""

import logging

from marketplace.core.errors import ForbiddenError, NotFoundError, ValidationError
from marketplace.db.models.offer import Offer
from marketplace.db.repositories.listing_repository import ListingRepository
from marketplace.db.repositories.offer_repository import OfferRepository
from marketplace.schemas.offer import OfferCreate, OfferResponse

logger = logging.getLogger(__name__)


class OfferService:
    def __init__(self, offer_repo: OfferRepository, listing_repo: ListingRepository):
        self.offer_repo = offer_repo
        self.listing_repo = listing_repo

    async def send(self, sender_id: int, listing_id: int, data: OfferCreate) -> OfferResponse:
        listing = await self.listing_repo.get_by_id(listing_id)
        if listing is None or listing.is_draft:
            raise NotFoundError("listing")
        if listing.owner_id == sender_id:
            raise ValidationError("You cannot make an offer on your own listing.")
        offer = await self.offer_repo.add(Offer(listing_id=listing_id, sender_id=sender_id, message=data.message))
        logger.info("offer sent: id=%s listing=%s sender=%s", offer.id, listing_id, sender_id)
        return OfferResponse.model_validate(offer)

    async def for_listing(self, listing_id: int, user_id: int, *, skip: int = 0, limit: int = 20) -> list[OfferResponse]:
        """Offers on a listing, visible to its owner only."""
        listing = await self.listing_repo.get_by_id(listing_id)
        if listing is None:
            raise NotFoundError("listing")
        if listing.owner_id != user_id:
            raise ForbiddenError("You can only view offers on your own listings.")
        offers = await self.offer_repo.for_listing(listing_id, skip=skip, limit=limit)
        return [OfferResponse.model_validate(offer) for offer in offers]
