"""
Elasticsearch client - full-text listing search.
Degrades gracefully when ES is down. Sync helpers are used by Celery workers
(no event loop in a forked worker).
"""

import logging
from typing import Any
from urllib.parse import urlparse

from elasticsearch import AsyncElasticsearch, Elasticsearch

from marketplace.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

LISTINGS_INDEX = "listings"

_es_client: AsyncElasticsearch | None = None


def _es_client_options() -> dict:
    """Build client options from settings (supports HTTPS + basic auth in URL)."""
    url = settings.elasticsearch_url
    basic_auth = None
    if "@" in url and "://" in url:
        parsed = urlparse(url)
        if parsed.username and parsed.password:
            basic_auth = (parsed.username, parsed.password)
        # Strip credentials; the client takes them separately
        netloc = parsed.hostname or ""
        if parsed.port:
            netloc += f":{parsed.port}"
        url = f"{parsed.scheme}://{netloc}"
    opts = {
        "hosts": [url],
        "verify_certs": settings.elasticsearch_verify_certs,
        "request_timeout": 30,
    }
    if basic_auth:
        opts["basic_auth"] = basic_auth
    return opts


async def get_elasticsearch() -> AsyncElasticsearch:
    global _es_client
    if _es_client is None:
        _es_client = AsyncElasticsearch(**_es_client_options())
    return _es_client


def _listings_index_mappings() -> dict:
    return {
        "properties": {
            "id": {"type": "integer"},
            "title": {"type": "text", "analyzer": "standard"},
            "description": {"type": "text", "analyzer": "standard"},
            "category": {"type": "keyword"},
            "color": {"type": "keyword"},
            "price": {"type": "scaled_float", "scaling_factor": 100},
            "owner_id": {"type": "integer"},
            "created_at": {"type": "date"},
        }
    }


async def ensure_listings_index() -> None:
    """Create listings index if missing. Single-node: 0 replicas to avoid unassigned shards."""
    es = await get_elasticsearch()
    if not await es.indices.exists(index=LISTINGS_INDEX):
        await es.indices.create(
            index=LISTINGS_INDEX,
            settings={"index": {"number_of_replicas": 0}},
            mappings=_listings_index_mappings(),
        )


async def search_listings(query: str, skip: int = 0, limit: int = 20) -> list[dict[str, Any]]:
    """Full-text search on title, description and category. Returns list of hits."""
    try:
        es = await get_elasticsearch()
        response = await es.search(
            index=LISTINGS_INDEX,
            query={
                "multi_match": {
                    "query": query,
                    "fields": ["title^2", "description", "category"],
                    "fuzziness": "AUTO",
                }
            },
            from_=skip,
            size=limit,
        )
        body = getattr(response, "body", response)
        hits = body["hits"]["hits"]
        if not hits:
            logger.info("search_listings: query=%r returned 0 hits", query)
        return [hit["_source"] for hit in hits]
    except Exception as e:
        logger.warning("search_listings failed: query=%r error=%s", query, e)
        return []


# --- Sync API for Celery ---

def _sync_es_client() -> Elasticsearch:
    """New sync client per call (safe in forked Celery worker)."""
    return Elasticsearch(**_es_client_options())


def ensure_listings_index_sync() -> None:
    es = _sync_es_client()
    if not es.indices.exists(index=LISTINGS_INDEX):
        es.indices.create(
            index=LISTINGS_INDEX,
            settings={"index": {"number_of_replicas": 0}},
            mappings=_listings_index_mappings(),
        )


def index_listing_sync(doc: dict[str, Any]) -> None:
    """Index a single listing. ES 8 requires the id as str."""
    payload = {k: v for k, v in doc.items() if v is not None}
    _sync_es_client().index(index=LISTINGS_INDEX, id=str(doc["id"]), document=payload)


def remove_listing_sync(listing_id: int) -> None:
    es = _sync_es_client()
    es.options(ignore_status=404).delete(index=LISTINGS_INDEX, id=str(listing_id))
