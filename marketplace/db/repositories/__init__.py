# Repository pattern: data access behind a small async interface

from marketplace.db.repositories.cart_repository import CartRepository
from marketplace.db.repositories.event_repository import EventRepository
from marketplace.db.repositories.listing_repository import ListingFilter, ListingRepository
from marketplace.db.repositories.offer_repository import OfferRepository
from marketplace.db.repositories.user_repository import UserRepository

__all__ = [
    "CartRepository",
    "EventRepository",
    "ListingFilter",
    "ListingRepository",
    "OfferRepository",
    "UserRepository",
]
