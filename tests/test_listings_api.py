"""
Listing API tests - CRUD, ownership, drafts, filters and category pages.
"""

from decimal import Decimal

import pytest
from httpx import AsyncClient

LISTING = {
    "title": "Knitted scarf",
    "description": "Merino wool.",
    "price": "24.50",
    "quantity": 3,
    "category": "Clothing",
    "color": "red",
    "photos": ["scarf-front.jpg", "scarf-back.jpg"],
}


@pytest.mark.asyncio
async def test_list_listings_empty(client: AsyncClient):
    response = await client.get("/api/v1/listings")
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_create_listing_requires_auth(client: AsyncClient):
    response = await client.post("/api/v1/listings", json=LISTING)
    assert response.status_code in (401, 403)


@pytest.mark.asyncio
async def test_create_listing(client: AsyncClient, seller, seller_headers, offline):
    response = await client.post("/api/v1/listings", headers=seller_headers, json=LISTING)

    assert response.status_code == 201
    data = response.json()
    assert data["title"] == "Knitted scarf"
    assert data["price"] == "24.50"
    assert data["category"] == "clothing"
    assert data["photos"] == ["scarf-front.jpg", "scarf-back.jpg"]
    assert data["owner_id"] == seller.id
    assert data["owner_name"] == "Sam Seller"
    offline.index_task.delay.assert_called_once()
    assert offline.index_task.delay.call_args.args[0]["id"] == data["id"]


@pytest.mark.asyncio
async def test_create_listing_rejects_negative_price(client: AsyncClient, seller_headers):
    response = await client.post("/api/v1/listings", headers=seller_headers, json={**LISTING, "price": "-1"})
    assert response.status_code == 400
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_drafts_are_private(client: AsyncClient, seller_headers, buyer_headers, offline):
    created = await client.post("/api/v1/listings", headers=seller_headers, json={**LISTING, "is_draft": True})
    listing_id = created.json()["id"]
    offline.index_task.delay.assert_not_called()

    assert (await client.get("/api/v1/listings")).json() == []
    assert (await client.get(f"/api/v1/listings/{listing_id}", headers=buyer_headers)).status_code == 404
    assert (await client.get(f"/api/v1/listings/{listing_id}", headers=seller_headers)).status_code == 200

    mine = await client.get("/api/v1/listings/mine", headers=seller_headers)
    assert [item["id"] for item in mine.json()] == [listing_id]


@pytest.mark.asyncio
async def test_only_owner_can_update_or_delete(client: AsyncClient, buyer_headers, make_listing):
    listing = await make_listing()

    update = await client.put(f"/api/v1/listings/{listing.id}", headers=buyer_headers, json={"price": "1.00"})
    delete = await client.delete(f"/api/v1/listings/{listing.id}", headers=buyer_headers)

    assert update.status_code == 403
    assert update.json() == {"error": "You can only edit your own listings."}
    assert delete.status_code == 403


@pytest.mark.asyncio
async def test_owner_updates_listing(client: AsyncClient, seller_headers, make_listing, offline):
    listing = await make_listing()

    response = await client.put(
        f"/api/v1/listings/{listing.id}",
        headers=seller_headers,
        json={"price": "12.00", "quantity": 8, "photos": ["new.jpg"]},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["price"] == "12.00"
    assert data["quantity"] == 8
    assert data["photos"] == ["new.jpg"]
    assert data["title"] == "Hand-thrown mug"
    offline.cache_delete.assert_awaited_with(f"listing:{listing.id}")


@pytest.mark.asyncio
async def test_owner_deletes_listing(client: AsyncClient, seller_headers, make_listing, offline):
    listing = await make_listing()

    response = await client.delete(f"/api/v1/listings/{listing.id}", headers=seller_headers)

    assert response.status_code == 204
    offline.remove_task.delay.assert_called_once_with(listing.id)
    assert (await client.get(f"/api/v1/listings/{listing.id}")).status_code == 404


@pytest.mark.asyncio
async def test_filters_and_sort(client: AsyncClient, make_listing):
    await make_listing(title="Cheap mug", price=Decimal("8.00"), category="home", color="blue")
    await make_listing(title="Silver ring", price=Decimal("45.00"), category="jewelry", color="silver")
    await make_listing(title="Walnut tray", price=Decimal("120.00"), category="home", color="brown")

    by_category = await client.get("/api/v1/listings", params={"categories": "home", "sort": "price-asc"})
    assert [item["title"] for item in by_category.json()] == ["Cheap mug", "Walnut tray"]

    bucket = await client.get("/api/v1/listings", params={"price": "25-50"})
    assert [item["title"] for item in bucket.json()] == ["Silver ring"]

    over = await client.get("/api/v1/listings", params={"price": "100+"})
    assert [item["title"] for item in over.json()] == ["Walnut tray"]

    search = await client.get("/api/v1/listings", params={"search": "RING"})
    assert [item["title"] for item in search.json()] == ["Silver ring"]

    ranged = await client.get("/api/v1/listings", params={"min_price": "10", "max_price": "200", "sort": "price-desc"})
    assert [item["title"] for item in ranged.json()] == ["Walnut tray", "Silver ring"]

    colors = await client.get("/api/v1/listings", params=[("colors", "blue"), ("colors", "silver")])
    assert {item["title"] for item in colors.json()} == {"Cheap mug", "Silver ring"}


@pytest.mark.asyncio
async def test_unknown_sort_is_rejected(client: AsyncClient):
    response = await client.get("/api/v1/listings", params={"sort": "random"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_category_pages(client: AsyncClient, make_listing):
    await make_listing(title="Mug", category="home")
    await make_listing(title="Ring", category="jewelry")

    home = await client.get("/api/v1/categories/Home")
    assert home.json()["category_name"] == "Home"
    assert [item["title"] for item in home.json()["listings"]] == ["Mug"]

    everything = await client.get("/api/v1/categories/all")
    assert everything.json()["category_name"] == "All Listings"
    assert len(everything.json()["listings"]) == 2
