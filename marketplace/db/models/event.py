"""
Event model - a promotional campaign with a banner and an active window.
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from marketplace.db.base import Base


class Event(Base):
    """Seasonal banner shown on the home page while `starts_at <= now <= ends_at`."""

    __tablename__ = "events"
    __table_args__ = (CheckConstraint("ends_at >= starts_at", name="ck_events_window"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    slug: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    image: Mapped[str] = mapped_column(String(512), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    button_text: Mapped[str] = mapped_column(String(64), nullable=False, default="Shop Now")
    target_url: Mapped[str] = mapped_column(String(512), nullable=False, default="/shop")
    starts_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    ends_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, slug={self.slug})>"
