"""Events (seasonal banners) and offers on listings

Revision ID: 002
Revises: 001
Create Date: 2026-10-20

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "events",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("image", sa.String(512), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("button_text", sa.String(64), nullable=False, server_default="Shop Now"),
        sa.Column("target_url", sa.String(512), nullable=False, server_default="/shop"),
        sa.Column("starts_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("ends_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.CheckConstraint("ends_at >= starts_at", name="ck_events_window"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_index("ix_events_slug", "events", ["slug"], unique=True)

    op.add_column("listings", sa.Column("event_id", sa.Integer(), nullable=True))
    op.create_foreign_key(
        "fk_listings_event_id", "listings", "events", ["event_id"], ["id"], ondelete="SET NULL"
    )
    op.create_index("ix_listings_event_id", "listings", ["event_id"], unique=False)

    op.create_table(
        "offers",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("listing_id", sa.Integer(), nullable=False),
        sa.Column("sender_id", sa.Integer(), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(["listing_id"], ["listings.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["sender_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_offers_listing_id", "offers", ["listing_id"], unique=False)
    op.create_index("ix_offers_sender_id", "offers", ["sender_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_offers_sender_id", "offers")
    op.drop_index("ix_offers_listing_id", "offers")
    op.drop_table("offers")
    op.drop_index("ix_listings_event_id", "listings")
    op.drop_constraint("fk_listings_event_id", "listings", type_="foreignkey")
    op.drop_column("listings", "event_id")
    op.drop_index("ix_events_slug", "events")
    op.drop_table("events")
