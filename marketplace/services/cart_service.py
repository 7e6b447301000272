"""
Cart service - moves quantity between a listing's stock and a user's cart.

For every listing L:  stock(L) + sum(cart lines on L) == stock L was listed with.

Reservations always hit the listing first with a conditional decrement
(only succeeds while enough stock is left), then write the cart line. When the
cart write fails after stock was taken, the stock is handed back before the
request fails with ConsistencyError. Releases go the other way round: the cart
line changes first, then stock is returned, so a partial failure can strand
stock but never oversell it.

Reads heal the cart: lines whose listing is gone (or has no valid price) are
deleted from storage and the caller gets a one-time notice.
"""

import functools
import logging
from decimal import Decimal

from prometheus_client import Counter
from sqlalchemy.exc import SQLAlchemyError

from marketplace.cache.redis_client import cache_delete, listing_key
from marketplace.core.errors import (
    AppError,
    ConsistencyError,
    InsufficientStockError,
    InvalidQuantityError,
    NotFoundError,
)
from marketplace.db.models.cart_item import CartItem
from marketplace.db.repositories.cart_repository import CartRepository
from marketplace.db.repositories.listing_repository import ListingRepository
from marketplace.schemas.cart import CartLine, CartListing, CartMutationResponse, CartView

logger = logging.getLogger(__name__)

CART_OPERATIONS = Counter(
    "cart_operations_total",
    "Cart operations by outcome",
    ["operation", "outcome"],
)

STALE_ITEMS_NOTICE = "Some items in your cart are no longer available and have been removed."


def _observed(operation: str):
    """Count each call by outcome: `ok` or the error class name."""

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                result = await func(*args, **kwargs)
            except AppError as exc:
                CART_OPERATIONS.labels(operation=operation, outcome=type(exc).__name__).inc()
                raise
            CART_OPERATIONS.labels(operation=operation, outcome="ok").inc()
            return result

        return wrapper

    return decorator


def _is_purchasable(line: CartItem) -> bool:
    listing = line.listing
    return listing is not None and listing.price is not None and listing.price >= 0


class CartService:
    """Add / update / remove / view for one user's cart."""

    def __init__(self, cart_repo: CartRepository, listing_repo: ListingRepository):
        self.cart_repo = cart_repo
        self.listing_repo = listing_repo

    @_observed("add")
    async def add(self, user_id: int, listing_id: int, quantity: int) -> CartMutationResponse:
        """Reserve `quantity` units and merge them into the user's line for the listing."""
        if quantity < 1:
            raise InvalidQuantityError(quantity)
        await self._reserve(listing_id, quantity)
        try:
            async with self.cart_repo.savepoint():
                await self.cart_repo.add_or_increment(user_id, listing_id, quantity)
        except SQLAlchemyError as exc:
            await self._compensate(user_id, listing_id, quantity, exc)
        await cache_delete(listing_key(listing_id))
        logger.info("cart add: user=%s listing=%s quantity=%s", user_id, listing_id, quantity)
        return CartMutationResponse(
            cart_count=await self.cart_repo.count(user_id),
            message="Item added to cart successfully.",
        )

    @_observed("update")
    async def update(self, user_id: int, listing_id: int, quantity: int) -> CartMutationResponse:
        """Set a line to `quantity`, moving only the difference to or from stock.

        Zero is not a removal here; callers wanting removal use `remove`.
        """
        if quantity < 1:
            raise InvalidQuantityError(quantity)
        line = await self.cart_repo.get_line(user_id, listing_id)
        if line is None:
            raise NotFoundError("cart item", "Item not found in cart.")
        current = line.quantity
        delta = quantity - current

        if delta == 0:
            return CartMutationResponse(
                cart_count=await self.cart_repo.count(user_id),
                message="Quantity remains unchanged.",
            )

        if delta > 0:
            await self._reserve(listing_id, delta, additional=True)
            try:
                async with self.cart_repo.savepoint():
                    updated = await self.cart_repo.compare_and_set(user_id, listing_id, current, quantity)
            except SQLAlchemyError as exc:
                await self._compensate(user_id, listing_id, delta, exc)
            if not updated:
                await self._compensate(user_id, listing_id, delta)
        else:
            if not await self.cart_repo.compare_and_set(user_id, listing_id, current, quantity):
                raise ConsistencyError()
            await self.listing_repo.release_stock(listing_id, -delta)

        await cache_delete(listing_key(listing_id))
        logger.info(
            "cart update: user=%s listing=%s quantity=%s->%s", user_id, listing_id, current, quantity
        )
        return CartMutationResponse(
            cart_count=await self.cart_repo.count(user_id),
            message="Cart updated successfully.",
        )

    @_observed("remove")
    async def remove(self, user_id: int, listing_id: int) -> CartMutationResponse:
        """Drop the line and give its units back to the listing."""
        line = await self.cart_repo.get_line(user_id, listing_id)
        if line is None:
            raise NotFoundError("cart item", "Item not found in cart.")
        listing = await self.listing_repo.get_fresh(listing_id)
        if not await self.cart_repo.compare_and_delete(user_id, listing_id, line.quantity):
            raise ConsistencyError()
        if listing is not None:
            await self.listing_repo.release_stock(listing_id, line.quantity)
            await cache_delete(listing_key(listing_id))
        logger.info("cart remove: user=%s listing=%s quantity=%s", user_id, listing_id, line.quantity)
        return CartMutationResponse(
            cart_count=await self.cart_repo.count(user_id),
            message="Item removed from cart successfully.",
            listing_name=listing.title if listing is not None else None,
        )

    async def view(self, user_id: int) -> CartView:
        """Cart lines with subtotals and total; heals lines that point nowhere."""
        lines = await self.cart_repo.lines_with_listings(user_id)
        valid = [line for line in lines if _is_purchasable(line)]
        stale = [line.id for line in lines if not _is_purchasable(line)]

        notice = None
        if stale:
            await self.cart_repo.delete_lines(stale)
            logger.info("cart healed: user=%s removed %d stale line(s)", user_id, len(stale))
            notice = STALE_ITEMS_NOTICE

        items = [
            CartLine(
                listing=CartListing.model_validate(line.listing),
                quantity=line.quantity,
                subtotal=line.listing.price * line.quantity,
            )
            for line in valid
        ]
        # Sum unrounded subtotals; rounding happens once, at serialization
        total = sum((item.subtotal for item in items), Decimal("0"))
        return CartView(
            items=items,
            total_items=sum(item.quantity for item in items),
            total=total,
            notice=notice,
        )

    async def count(self, user_id: int) -> int:
        return await self.cart_repo.count(user_id)

    async def _reserve(self, listing_id: int, quantity: int, additional: bool = False) -> None:
        if await self.listing_repo.reserve_stock(listing_id, quantity):
            return
        listing = await self.listing_repo.get_fresh(listing_id)
        if listing is None or listing.is_draft:
            raise NotFoundError("listing")
        if additional:
            raise InsufficientStockError(
                listing.quantity, f"Only {listing.quantity} additional items available."
            )
        raise InsufficientStockError(listing.quantity)

    async def _compensate(
        self, user_id: int, listing_id: int, quantity: int, exc: Exception | None = None
    ) -> None:
        """Give back stock reserved for a cart write that did not happen, then fail."""
        restored = await self.listing_repo.release_stock(listing_id, quantity)
        logger.error(
            "cart write failed after reserving stock: user=%s listing=%s quantity=%s restored=%s error=%s",
            user_id,
            listing_id,
            quantity,
            restored,
            exc,
        )
        raise ConsistencyError() from exc
