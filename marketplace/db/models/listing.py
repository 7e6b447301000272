"""
Listing model - a sellable item with an owner, a price and available stock.
"""

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import JSON, CheckConstraint, String, Text, DateTime, ForeignKey, Numeric, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from marketplace.db.base import Base

if TYPE_CHECKING:
    from marketplace.db.models.user import User


class Listing(Base):
    """Listing entity. `quantity` is the stock still available for carts."""

    __tablename__ = "listings"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_listings_quantity_non_negative"),
        CheckConstraint("price >= 0", name="ck_listings_price_non_negative"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    quantity: Mapped[int] = mapped_column(nullable=False, default=1)
    category: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    color: Mapped[str | None] = mapped_column(String(64), nullable=True)
    condition: Mapped[str | None] = mapped_column(String(64), nullable=True)
    delivery: Mapped[str] = mapped_column(String(32), nullable=False, default="pickup")
    handmade: Mapped[bool] = mapped_column(nullable=False, default=False)
    photos: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    is_draft: Mapped[bool] = mapped_column(nullable=False, default=False, index=True)
    event_id: Mapped[int | None] = mapped_column(
        ForeignKey("events.id", ondelete="SET NULL"), nullable=True, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    owner: Mapped["User"] = relationship("User", back_populates="listings")

    def __repr__(self) -> str:
        return f"<Listing(id={self.id}, title={self.title}, quantity={self.quantity})>"
