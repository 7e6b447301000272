"""
Cart API tests - request parsing, status codes and `{error}` bodies.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_cart_requires_auth(client: AsyncClient):
    response = await client.get("/api/v1/cart")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_add_returns_cart_count(client: AsyncClient, buyer_headers, make_listing, offline):
    listing = await make_listing(quantity=5)

    response = await client.post(
        "/api/v1/cart/add", headers=buyer_headers, json={"listingId": listing.id, "quantity": 2}
    )

    assert response.status_code == 200
    assert response.json()["cartCount"] == 2
    assert "listingName" not in response.json()
    offline.cache_delete.assert_awaited_with(f"listing:{listing.id}")


@pytest.mark.asyncio
async def test_add_parses_form_style_string_quantity(client: AsyncClient, buyer_headers, make_listing):
    listing = await make_listing(quantity=5)

    response = await client.post(
        "/api/v1/cart/add", headers=buyer_headers, json={"listingId": str(listing.id), "quantity": "3"}
    )

    assert response.status_code == 200
    assert response.json()["cartCount"] == 3


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [
    {"quantity": 1},
    {"listingId": 1, "quantity": "lots"},
    {"listingId": 1, "quantity": 1.5},
    {"listingId": 1, "quantity": True},
    {"listingId": True, "quantity": 1},
    {"listingId": 1, "quantity": 2**64},
    {"listingId": 2**64, "quantity": 1},
    {"listingId": -(2**64), "quantity": 1},
])
async def test_add_rejects_malformed_body(client: AsyncClient, buyer_headers, body):
    response = await client.post("/api/v1/cart/add", headers=buyer_headers, json=body)

    assert response.status_code == 400
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_add_insufficient_stock_reports_available(client: AsyncClient, buyer_headers, make_listing):
    listing = await make_listing(quantity=3)

    response = await client.post(
        "/api/v1/cart/add", headers=buyer_headers, json={"listingId": listing.id, "quantity": 4}
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Only 3 items available.", "available": 3}


@pytest.mark.asyncio
async def test_add_zero_quantity_is_invalid(client: AsyncClient, buyer_headers, make_listing):
    listing = await make_listing(quantity=3)

    response = await client.post(
        "/api/v1/cart/add", headers=buyer_headers, json={"listingId": listing.id, "quantity": 0}
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid quantity specified."}


@pytest.mark.asyncio
async def test_add_unknown_listing_is_404(client: AsyncClient, buyer_headers):
    response = await client.post(
        "/api/v1/cart/add", headers=buyer_headers, json={"listingId": 424242, "quantity": 1}
    )

    assert response.status_code == 404
    assert response.json() == {"error": "Listing not found."}


@pytest.mark.asyncio
async def test_update_then_remove(client: AsyncClient, buyer_headers, make_listing):
    listing = await make_listing(quantity=5, title="Linen tote bag")
    await client.post("/api/v1/cart/add", headers=buyer_headers, json={"listingId": listing.id, "quantity": 1})

    updated = await client.post(
        "/api/v1/cart/update", headers=buyer_headers, json={"listingId": listing.id, "quantity": 4}
    )
    assert updated.status_code == 200
    assert updated.json()["cartCount"] == 4

    removed = await client.post("/api/v1/cart/remove", headers=buyer_headers, json={"listingId": listing.id})
    assert removed.status_code == 200
    assert removed.json()["cartCount"] == 0
    assert removed.json()["listingName"] == "Linen tote bag"

    again = await client.post("/api/v1/cart/remove", headers=buyer_headers, json={"listingId": listing.id})
    assert again.status_code == 404
    assert again.json() == {"error": "Item not found in cart."}


@pytest.mark.asyncio
async def test_view_cart(client: AsyncClient, buyer_headers, make_listing):
    listing = await make_listing(quantity=5)
    await client.post("/api/v1/cart/add", headers=buyer_headers, json={"listingId": listing.id, "quantity": 2})

    response = await client.get("/api/v1/cart", headers=buyer_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["totalItems"] == 2
    assert data["total"] == "21.00"
    assert data["notice"] is None
    assert data["items"][0]["quantity"] == 2
    assert data["items"][0]["subtotal"] == "21.00"
    assert data["items"][0]["listing"]["id"] == listing.id


@pytest.mark.asyncio
@pytest.mark.parametrize("path,body", [
    ("/api/v1/cart/update", {"listingId": 1, "quantity": 2**64}),
    ("/api/v1/cart/update", {"listingId": 2**64, "quantity": 1}),
    ("/api/v1/cart/update", {"listingId": 1, "quantity": False}),
    ("/api/v1/cart/remove", {"listingId": 2**64}),
])
async def test_update_and_remove_reject_out_of_range_numbers(client: AsyncClient, buyer_headers, path, body):
    response = await client.post(path, headers=buyer_headers, json=body)

    assert response.status_code == 400
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_out_of_range_listing_path_is_rejected(client: AsyncClient, buyer_headers):
    assert (await client.get(f"/api/v1/listings/{2**64}")).status_code == 400
    assert (await client.post(f"/api/v1/favorites/{2**64}", headers=buyer_headers)).status_code == 400


@pytest.mark.asyncio
async def test_deleted_listing_is_healed_out_of_cart(
    client: AsyncClient, seller_headers, buyer_headers, make_listing
):
    gone = await make_listing(title="Sold elsewhere", quantity=3)
    kept = await make_listing(title="Still here", quantity=3)
    for listing in (gone, kept):
        await client.post("/api/v1/cart/add", headers=buyer_headers, json={"listingId": listing.id, "quantity": 1})
    await client.post(f"/api/v1/favorites/{gone.id}", headers=buyer_headers)

    deleted = await client.delete(f"/api/v1/listings/{gone.id}", headers=seller_headers)
    assert deleted.status_code == 204

    first = await client.get("/api/v1/cart", headers=buyer_headers)
    assert first.json()["notice"] == "Some items in your cart are no longer available and have been removed."
    assert [line["listing"]["title"] for line in first.json()["items"]] == ["Still here"]
    assert first.json()["totalItems"] == 1

    second = await client.get("/api/v1/cart", headers=buyer_headers)
    assert second.json()["notice"] is None
    assert second.json()["totalItems"] == 1

    assert (await client.get("/api/v1/favorites", headers=buyer_headers)).json() == []
