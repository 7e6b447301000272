"""
User repository - user lookups and the favorites a user keeps.
"""

from sqlalchemy import delete, select
from sqlalchemy.orm import selectinload

from marketplace.db.models.favorite import Favorite
from marketplace.db.models.listing import Listing
from marketplace.db.models.user import User
from marketplace.db.repositories.base_repository import BaseRepository
from marketplace.db.repositories.listing_repository import ListingFilter, apply_listing_filter


class UserRepository(BaseRepository[User]):
    """User-specific queries. Extends base CRUD with domain logic."""

    def __init__(self, session):
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> User | None:
        """Find user by email - used for authentication."""
        result = await self.session.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def has_favorite(self, user_id: int, listing_id: int) -> bool:
        result = await self.session.execute(
            select(Favorite.listing_id).where(
                Favorite.user_id == user_id, Favorite.listing_id == listing_id
            )
        )
        return result.first() is not None

    async def add_favorite(self, user_id: int, listing_id: int) -> None:
        self.session.add(Favorite(user_id=user_id, listing_id=listing_id))
        await self.session.flush()

    async def remove_favorite(self, user_id: int, listing_id: int) -> bool:
        result = await self.session.execute(
            delete(Favorite).where(Favorite.user_id == user_id, Favorite.listing_id == listing_id)
        )
        return result.rowcount > 0

    async def list_favorites(self, user_id: int, filters: ListingFilter) -> list[Listing]:
        """Favorited listings with owner loaded, narrowed by the same filters as browsing."""
        stmt = (
            select(Listing)
            .join(Favorite, Favorite.listing_id == Listing.id)
            .where(Favorite.user_id == user_id)
            .options(selectinload(Listing.owner))
        )
        stmt = apply_listing_filter(stmt, filters, default_order=Favorite.created_at.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
