"""
Search endpoint - Elasticsearch full-text search over published listings.
Returns an empty result when ES is down.
"""

from fastapi import APIRouter, Query

from marketplace.config import get_settings
from marketplace.schemas.fields import MAX_DB_INT
from marketplace.search.elasticsearch_client import search_listings

router = APIRouter()
settings = get_settings()


@router.get("/listings")
async def search_listings_endpoint(
    q: str = Query(..., min_length=1),
    skip: int = Query(0, ge=0, le=MAX_DB_INT),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
):
    hits = await search_listings(query=q, skip=skip, limit=limit)
    return {"query": q, "results": hits, "count": len(hits)}
