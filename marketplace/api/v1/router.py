"""
API v1 router - aggregates all endpoint modules.
"""

from fastapi import APIRouter

from marketplace.api.v1.endpoints import cart, categories, events, favorites, health, listings, search, users

api_router = APIRouter(prefix="/v1")

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(listings.router, prefix="/listings", tags=["listings"])
api_router.include_router(categories.router, prefix="/categories", tags=["categories"])
api_router.include_router(favorites.router, prefix="/favorites", tags=["favorites"])
api_router.include_router(events.router, prefix="/events", tags=["events"])
api_router.include_router(cart.router, prefix="/cart", tags=["cart"])
api_router.include_router(search.router, prefix="/search", tags=["search"])
