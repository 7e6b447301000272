"""
Listing repository - listing queries and the atomic stock counters.
Stock changes are single conditional UPDATE statements; the modified-row
count tells the caller whether the condition held.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from sqlalchemy import Select, or_, select, update
from sqlalchemy.orm import selectinload

from marketplace.db.models.listing import Listing
from marketplace.db.repositories.base_repository import BaseRepository

PRICE_BUCKETS: dict[str, tuple[Decimal | None, Decimal | None, bool]] = {
    # name: (low, high, strict) - strict buckets exclude their bounds
    "under25": (None, Decimal("25"), True),
    "25-50": (Decimal("25"), Decimal("50"), False),
    "50-75": (Decimal("50"), Decimal("75"), False),
    "100+": (Decimal("100"), None, True),
}

SORT_OPTIONS = {
    "price-asc": (Listing.price.asc(), Listing.id.asc()),
    "price-desc": (Listing.price.desc(), Listing.id.asc()),
    "date-newest": (Listing.created_at.desc(), Listing.id.desc()),
    "date-oldest": (Listing.created_at.asc(), Listing.id.asc()),
}


@dataclass
class ListingFilter:
    """Browse/favorites filters, already parsed from the query string."""

    search: str | None = None
    categories: list[str] = field(default_factory=list)
    colors: list[str] = field(default_factory=list)
    price: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    sort: str | None = None
    skip: int = 0
    limit: int = 20


def apply_listing_filter(stmt: Select, filters: ListingFilter, default_order=None) -> Select:
    """Narrow, order and paginate a select over Listing."""
    if filters.search:
        pattern = f"%{filters.search.lower()}%"
        stmt = stmt.where(
            or_(
                Listing.title.ilike(pattern),
                Listing.category.ilike(pattern),
                Listing.description.ilike(pattern),
            )
        )
    if filters.categories:
        stmt = stmt.where(Listing.category.in_([c.lower() for c in filters.categories]))
    if filters.colors:
        stmt = stmt.where(Listing.color.in_(filters.colors))
    if filters.price in PRICE_BUCKETS:
        low, high, strict = PRICE_BUCKETS[filters.price]
        if low is not None:
            stmt = stmt.where(Listing.price > low if strict else Listing.price >= low)
        if high is not None:
            stmt = stmt.where(Listing.price < high if strict else Listing.price <= high)
    if filters.min_price is not None:
        stmt = stmt.where(Listing.price >= filters.min_price)
    if filters.max_price is not None:
        stmt = stmt.where(Listing.price <= filters.max_price)

    if filters.sort in SORT_OPTIONS:
        stmt = stmt.order_by(*SORT_OPTIONS[filters.sort])
    elif default_order is not None:
        stmt = stmt.order_by(default_order, Listing.id.desc())
    else:
        stmt = stmt.order_by(*SORT_OPTIONS["date-newest"])
    return stmt.offset(filters.skip).limit(filters.limit)


class ListingRepository(BaseRepository[Listing]):
    """Listing-specific queries. Uses selectinload to avoid N+1 when loading owner."""

    def __init__(self, session):
        super().__init__(session, Listing)

    async def get_fresh(self, id: int) -> Listing | None:
        """Re-read a listing, overwriting any stale copy held by the session."""
        result = await self.session.execute(
            select(Listing).where(Listing.id == id).execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_by_id_with_owner(self, id: int) -> Listing | None:
        result = await self.session.execute(
            select(Listing)
            .where(Listing.id == id)
            .options(selectinload(Listing.owner))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def browse(
        self,
        filters: ListingFilter,
        *,
        owner_id: int | None = None,
        event_id: int | None = None,
        include_drafts: bool = False,
    ) -> list[Listing]:
        """Filtered, paginated listings with owner loaded in one extra query."""
        stmt = select(Listing).options(selectinload(Listing.owner))
        if owner_id is not None:
            stmt = stmt.where(Listing.owner_id == owner_id)
        if event_id is not None:
            stmt = stmt.where(Listing.event_id == event_id)
        if not include_drafts:
            stmt = stmt.where(Listing.is_draft.is_(False))
        result = await self.session.execute(apply_listing_filter(stmt, filters))
        return list(result.scalars().all())

    async def reserve_stock(self, listing_id: int, quantity: int) -> bool:
        """Decrement stock only if at least `quantity` is available on a published listing."""
        result = await self.session.execute(
            update(Listing)
            .where(
                Listing.id == listing_id,
                Listing.quantity >= quantity,
                Listing.is_draft.is_(False),
            )
            .values(quantity=Listing.quantity - quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def release_stock(self, listing_id: int, quantity: int) -> bool:
        """Return reserved units to stock. False when the listing no longer exists."""
        result = await self.session.execute(
            update(Listing)
            .where(Listing.id == listing_id)
            .values(quantity=Listing.quantity + quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
