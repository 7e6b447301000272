"""
Cart endpoints - add / update / remove / view.
Domain errors (stock, quantity, not found) become `{error}` responses in main.py.
"""

from fastapi import APIRouter

from marketplace.core.dependencies import CurrentUserId
from marketplace.db.repositories.cart_repository import CartRepository
from marketplace.db.repositories.listing_repository import ListingRepository
from marketplace.db.session import DbSession
from marketplace.schemas.cart import (
    CartAddRequest,
    CartMutationResponse,
    CartRemoveRequest,
    CartUpdateRequest,
    CartView,
)
from marketplace.services.cart_service import CartService

router = APIRouter()


def _get_cart_service(session: DbSession) -> CartService:
    return CartService(CartRepository(session), ListingRepository(session))


@router.get("", response_model=CartView)
async def view_cart(session: DbSession, user_id: CurrentUserId):
    """Lines with subtotals and total; stale lines are dropped and reported once in `notice`."""
    return await _get_cart_service(session).view(user_id)


@router.post("/add", response_model=CartMutationResponse, response_model_exclude_none=True)
async def add_to_cart(session: DbSession, data: CartAddRequest, user_id: CurrentUserId):
    return await _get_cart_service(session).add(user_id, data.listing_id, data.quantity)


@router.post("/update", response_model=CartMutationResponse, response_model_exclude_none=True)
async def update_cart(session: DbSession, data: CartUpdateRequest, user_id: CurrentUserId):
    return await _get_cart_service(session).update(user_id, data.listing_id, data.quantity)


@router.post("/remove", response_model=CartMutationResponse, response_model_exclude_none=True)
async def remove_from_cart(session: DbSession, data: CartRemoveRequest, user_id: CurrentUserId):
    return await _get_cart_service(session).remove(user_id, data.listing_id)
