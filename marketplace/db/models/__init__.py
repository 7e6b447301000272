from marketplace.db.models.user import User
from marketplace.db.models.event import Event
from marketplace.db.models.listing import Listing
from marketplace.db.models.cart_item import CartItem
from marketplace.db.models.favorite import Favorite
from marketplace.db.models.offer import Offer

__all__ = ["User", "Event", "Listing", "CartItem", "Favorite", "Offer"]
