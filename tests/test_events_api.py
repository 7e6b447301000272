"""
Event API tests - active banner selection and event listing pages.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_no_active_event(client: AsyncClient, make_event):
    await make_event("spring-fair", days_from_now=30)

    response = await client.get("/api/v1/events/active")

    assert response.status_code == 200
    assert response.json() is None


@pytest.mark.asyncio
async def test_active_event_is_the_running_one(client: AsyncClient, make_event):
    await make_event("last-year", days_from_now=-365)
    await make_event("winter-market", button_text="Browse gifts")
    await make_event("spring-fair", days_from_now=30)

    response = await client.get("/api/v1/events/active")

    data = response.json()
    assert data["slug"] == "winter-market"
    assert data["name"] == "Winter Market"
    assert data["button_text"] == "Browse gifts"
    assert data["target_url"] == "/shop"


@pytest.mark.asyncio
async def test_event_page_lists_its_published_listings(client: AsyncClient, make_event, make_listing):
    event = await make_event("winter-market")
    await make_listing(title="Wool mittens", event_id=event.id)
    await make_listing(title="Draft mittens", event_id=event.id, is_draft=True)
    await make_listing(title="Unrelated mug")

    response = await client.get("/api/v1/events/Winter-Market")

    assert response.status_code == 200
    assert response.json()["event"]["slug"] == "winter-market"
    assert [item["title"] for item in response.json()["listings"]] == ["Wool mittens"]
    assert response.json()["listings"][0]["event_id"] == event.id


@pytest.mark.asyncio
async def test_event_page_unknown_or_closed(client: AsyncClient, make_event):
    await make_event("spring-fair", days_from_now=30)

    missing = await client.get("/api/v1/events/nope")
    closed = await client.get("/api/v1/events/spring-fair")

    assert missing.status_code == 404
    assert missing.json() == {"error": "Event not found."}
    assert closed.status_code == 404
    assert closed.json() == {"error": "This event is not currently active."}


@pytest.mark.asyncio
async def test_listing_can_join_an_event(client: AsyncClient, seller_headers, make_event):
    event = await make_event("winter-market")
    body = {"title": "Candle", "price": "9.00", "quantity": 2, "event_id": event.id}

    created = await client.post("/api/v1/listings", headers=seller_headers, json=body)
    unknown = await client.post("/api/v1/listings", headers=seller_headers, json={**body, "event_id": 9999})

    assert created.status_code == 201
    assert created.json()["event_id"] == event.id
    assert unknown.status_code == 404
    assert unknown.json() == {"error": "Event not found."}
