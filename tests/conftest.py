"""
Pytest fixtures - per-test SQLite database, API client, users and listings.
Redis and the Celery broker are replaced by mocks; nothing external is needed.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from types import SimpleNamespace
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from marketplace.core.security import create_access_token, hash_password
from marketplace.db.base import Base
from marketplace.db.models import Event, Listing, User
from marketplace.db.session import get_db
from marketplace.main import app


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)

    @event.listens_for(engine.sync_engine, "connect")
    def enforce_foreign_keys(dbapi_connection, connection_record):
        # SQLite leaves ON DELETE rules off unless asked per connection
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as s:
        yield s


@pytest.fixture(autouse=True)
def offline(monkeypatch):
    """Cache always misses; index tasks are recorded instead of published."""
    stubs = SimpleNamespace(
        cache_get=AsyncMock(return_value=None),
        cache_set=AsyncMock(return_value=True),
        cache_delete=AsyncMock(return_value=True),
        index_task=MagicMock(name="index_listing_task"),
        remove_task=MagicMock(name="remove_listing_task"),
    )
    monkeypatch.setattr("marketplace.services.listing_service.cache_get", stubs.cache_get)
    monkeypatch.setattr("marketplace.services.listing_service.cache_set", stubs.cache_set)
    monkeypatch.setattr("marketplace.services.listing_service.cache_delete", stubs.cache_delete)
    monkeypatch.setattr("marketplace.services.cart_service.cache_delete", stubs.cache_delete)
    monkeypatch.setattr("marketplace.services.listing_service.index_listing_task", stubs.index_task)
    monkeypatch.setattr("marketplace.services.listing_service.remove_listing_task", stubs.remove_task)
    return stubs


@pytest_asyncio.fixture
async def client(session: AsyncSession):
    async def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


async def _make_user(session: AsyncSession, email: str, full_name: str) -> User:
    user = User(email=email, hashed_password=hash_password("password123"), full_name=full_name)
    session.add(user)
    await session.flush()
    await session.refresh(user)
    return user


@pytest_asyncio.fixture
async def seller(session: AsyncSession) -> User:
    return await _make_user(session, "seller@example.com", "Sam Seller")


@pytest_asyncio.fixture
async def buyer(session: AsyncSession) -> User:
    return await _make_user(session, "buyer@example.com", "Bo Buyer")


def auth_for(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def seller_headers(seller: User) -> dict:
    return auth_for(seller)


@pytest.fixture
def buyer_headers(buyer: User) -> dict:
    return auth_for(buyer)


@pytest.fixture
def make_listing(session: AsyncSession, seller: User):
    """Factory: persisted listing owned by `seller` unless `owner` is given."""

    async def _make(**fields) -> Listing:
        owner = fields.pop("owner", seller)
        data = {
            "title": "Hand-thrown mug",
            "description": "Stoneware, dishwasher safe.",
            "price": Decimal("10.50"),
            "quantity": 5,
            "category": "home",
        }
        data.update(fields)
        listing = Listing(owner_id=owner.id, **data)
        session.add(listing)
        await session.flush()
        await session.refresh(listing)
        return listing

    return _make


@pytest.fixture
def make_event(session: AsyncSession):
    """Factory: persisted event; `days_from_now` shifts the window (0 = running now)."""

    async def _make(slug: str = "winter-market", days_from_now: int = 0, **fields) -> Event:
        start = datetime.now(timezone.utc) + timedelta(days=days_from_now) - timedelta(hours=1)
        data = {
            "name": slug.replace("-", " ").title(),
            "slug": slug,
            "image": f"/img/{slug}.jpg",
            "description": "Gifts from local makers.",
            "starts_at": start,
            "ends_at": start + timedelta(days=7),
        }
        data.update(fields)
        created = Event(**data)
        session.add(created)
        await session.flush()
        await session.refresh(created)
        return created

    return _make
