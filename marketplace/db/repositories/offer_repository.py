"""
Offer repository - messages left on a listing, newest first.
"""

from sqlalchemy import select

from marketplace.db.models.offer import Offer
from marketplace.db.repositories.base_repository import BaseRepository


class OfferRepository(BaseRepository[Offer]):
    def __init__(self, session):
        super().__init__(session, Offer)

    async def for_listing(self, listing_id: int, *, skip: int = 0, limit: int = 20) -> list[Offer]:
        result = await self.session.execute(
            select(Offer)
            .where(Offer.listing_id == listing_id)
            .order_by(Offer.created_at.desc(), Offer.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all())
