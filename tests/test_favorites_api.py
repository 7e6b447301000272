"""
Favorites API tests - save, duplicate, list and unsave.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_favorite_lifecycle(client: AsyncClient, buyer_headers, make_listing):
    listing = await make_listing(title="Beeswax candle")

    added = await client.post(f"/api/v1/favorites/{listing.id}", headers=buyer_headers)
    assert added.status_code == 201
    assert added.json() == {"message": "Listing added to your favorites."}

    duplicate = await client.post(f"/api/v1/favorites/{listing.id}", headers=buyer_headers)
    assert duplicate.status_code == 409
    assert duplicate.json() == {"error": "Listing is already in your favorites."}

    saved = await client.get("/api/v1/favorites", headers=buyer_headers)
    assert [item["title"] for item in saved.json()] == ["Beeswax candle"]
    assert saved.json()[0]["owner_name"] == "Sam Seller"

    removed = await client.delete(f"/api/v1/favorites/{listing.id}", headers=buyer_headers)
    assert removed.status_code == 204

    again = await client.delete(f"/api/v1/favorites/{listing.id}", headers=buyer_headers)
    assert again.status_code == 404
    assert again.json() == {"error": "Listing is not in your favorites."}

    assert (await client.get("/api/v1/favorites", headers=buyer_headers)).json() == []


@pytest.mark.asyncio
async def test_cannot_favorite_missing_or_foreign_draft(client: AsyncClient, buyer_headers, make_listing):
    draft = await make_listing(is_draft=True)

    missing = await client.post("/api/v1/favorites/31337", headers=buyer_headers)
    hidden = await client.post(f"/api/v1/favorites/{draft.id}", headers=buyer_headers)

    assert missing.status_code == 404
    assert missing.json() == {"error": "Listing not found."}
    assert hidden.status_code == 404


@pytest.mark.asyncio
async def test_favorites_are_filtered(client: AsyncClient, buyer_headers, make_listing):
    mug = await make_listing(title="Mug", category="home")
    ring = await make_listing(title="Ring", category="jewelry")
    for listing in (mug, ring):
        await client.post(f"/api/v1/favorites/{listing.id}", headers=buyer_headers)

    response = await client.get("/api/v1/favorites", headers=buyer_headers, params={"categories": "jewelry"})

    assert [item["title"] for item in response.json()] == ["Ring"]


@pytest.mark.asyncio
async def test_favorites_require_auth(client: AsyncClient):
    response = await client.get("/api/v1/favorites")
    assert response.status_code == 401
    assert response.json() == {"error": "Not authenticated"}
