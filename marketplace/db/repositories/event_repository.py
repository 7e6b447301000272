"""
Event repository - lookups by slug and by active window.
"""

from datetime import datetime

from sqlalchemy import select

from marketplace.db.models.event import Event
from marketplace.db.repositories.base_repository import BaseRepository


class EventRepository(BaseRepository[Event]):
    def __init__(self, session):
        super().__init__(session, Event)

    async def get_by_slug(self, slug: str) -> Event | None:
        result = await self.session.execute(select(Event).where(Event.slug == slug.lower()))
        return result.scalar_one_or_none()

    async def active_at(self, at: datetime, slug: str | None = None) -> list[Event]:
        """Events whose window contains `at`, earliest start first."""
        stmt = select(Event).where(Event.starts_at <= at, Event.ends_at >= at)
        if slug is not None:
            stmt = stmt.where(Event.slug == slug.lower())
        result = await self.session.execute(stmt.order_by(Event.starts_at, Event.id))
        return list(result.scalars().all())
