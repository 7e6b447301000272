"""
Cart repository - cart line storage for the reconciliation service.
Line writes are single statements (upsert-increment, compare-and-set,
compare-and-delete) so a double-submitted request cannot lose an update.
"""

from sqlalchemy import delete, func, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import contains_eager

from marketplace.db.models.cart_item import CartItem
from marketplace.db.models.listing import Listing
from marketplace.db.repositories.base_repository import BaseRepository

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class CartRepository(BaseRepository[CartItem]):
    def __init__(self, session):
        super().__init__(session, CartItem)

    async def get_line(self, user_id: int, listing_id: int) -> CartItem | None:
        result = await self.session.execute(
            select(CartItem)
            .where(CartItem.user_id == user_id, CartItem.listing_id == listing_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def lines_with_listings(self, user_id: int) -> list[CartItem]:
        """All lines of a cart, each joined with its listing (None when the listing is gone)."""
        result = await self.session.execute(
            select(CartItem)
            .outerjoin(Listing, CartItem.listing_id == Listing.id)
            .options(contains_eager(CartItem.listing))
            .where(CartItem.user_id == user_id)
            .order_by(CartItem.id)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().unique().all())

    async def count(self, user_id: int) -> int:
        """Total units across all lines (cart badge)."""
        result = await self.session.execute(
            select(func.coalesce(func.sum(CartItem.quantity), 0)).where(CartItem.user_id == user_id)
        )
        return int(result.scalar_one())

    async def add_or_increment(self, user_id: int, listing_id: int, quantity: int) -> None:
        """Create the line or add to its quantity in one statement."""
        insert = _UPSERT_DIALECTS.get(self.dialect_name)
        if insert is None:
            await self._add_or_increment_fallback(user_id, listing_id, quantity)
            return
        stmt = insert(CartItem.__table__).values(
            user_id=user_id, listing_id=listing_id, quantity=quantity
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "listing_id"],
            set_={"quantity": CartItem.__table__.c.quantity + stmt.excluded.quantity},
        )
        await self.session.execute(stmt)

    async def _add_or_increment_fallback(self, user_id: int, listing_id: int, quantity: int) -> None:
        result = await self.session.execute(
            update(CartItem)
            .where(CartItem.user_id == user_id, CartItem.listing_id == listing_id)
            .values(quantity=CartItem.quantity + quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            self.session.add(CartItem(user_id=user_id, listing_id=listing_id, quantity=quantity))
            await self.session.flush()

    async def compare_and_set(self, user_id: int, listing_id: int, expected: int, quantity: int) -> bool:
        """Set the line quantity only if it still holds `expected`."""
        result = await self.session.execute(
            update(CartItem)
            .where(
                CartItem.user_id == user_id,
                CartItem.listing_id == listing_id,
                CartItem.quantity == expected,
            )
            .values(quantity=quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def compare_and_delete(self, user_id: int, listing_id: int, expected: int) -> bool:
        result = await self.session.execute(
            delete(CartItem)
            .where(
                CartItem.user_id == user_id,
                CartItem.listing_id == listing_id,
                CartItem.quantity == expected,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def delete_lines(self, line_ids: list[int]) -> int:
        if not line_ids:
            return 0
        result = await self.session.execute(
            delete(CartItem).where(CartItem.id.in_(line_ids)).execution_options(synchronize_session=False)
        )
        return result.rowcount
