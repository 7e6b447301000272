"""
Cart line item - a (listing, quantity) reservation owned by a user.
"""

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from marketplace.db.base import Base

if TYPE_CHECKING:
    from marketplace.db.models.listing import Listing
    from marketplace.db.models.user import User


class CartItem(Base):
    """One line per (user, listing). A deleted listing leaves the line dangling until the cart is read."""

    __tablename__ = "cart_items"
    __table_args__ = (
        UniqueConstraint("user_id", "listing_id", name="uq_cart_items_user_listing"),
        CheckConstraint("quantity >= 1", name="ck_cart_items_quantity_positive"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    listing_id: Mapped[int | None] = mapped_column(
        ForeignKey("listings.id", ondelete="SET NULL"), nullable=True, index=True
    )
    quantity: Mapped[int] = mapped_column(nullable=False)

    user: Mapped["User"] = relationship("User", back_populates="cart_items")
    listing: Mapped["Listing | None"] = relationship("Listing")

    def __repr__(self) -> str:
        return f"<CartItem(user_id={self.user_id}, listing_id={self.listing_id}, quantity={self.quantity})>"
