"""
Search endpoint tests - Elasticsearch is stubbed at the client function.
"""

from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_search_returns_hits(client: AsyncClient, monkeypatch):
    hits = [{"id": 7, "title": "Ceramic vase", "score": 1.3}]
    fake = AsyncMock(return_value=hits)
    monkeypatch.setattr("marketplace.api.v1.endpoints.search.search_listings", fake)

    response = await client.get("/api/v1/search/listings", params={"q": "vase", "limit": 5})

    assert response.status_code == 200
    assert response.json() == {"query": "vase", "results": hits, "count": 1}
    fake.assert_awaited_once_with(query="vase", skip=0, limit=5)


@pytest.mark.asyncio
async def test_search_requires_query(client: AsyncClient):
    response = await client.get("/api/v1/search/listings")
    assert response.status_code == 400
