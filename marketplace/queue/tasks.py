"""
Celery tasks - keep the listing search index in step with the database.
"""

import logging

from marketplace.queue.celery_app import celery_app
from marketplace.search.elasticsearch_client import (
    ensure_listings_index_sync,
    index_listing_sync,
    remove_listing_sync,
)

logger = logging.getLogger(__name__)


@celery_app.task(bind=True, max_retries=3)
def index_listing_task(self, listing_doc: dict):
    """Index a listing after create/update (API publishes, worker consumes)."""
    try:
        ensure_listings_index_sync()
        index_listing_sync(listing_doc)
    except Exception as exc:
        logger.warning("index_listing_task failed for id=%s: %s", listing_doc.get("id"), exc)
        raise self.retry(exc=exc, countdown=5)


@celery_app.task(bind=True, max_retries=3)
def remove_listing_task(self, listing_id: int):
    """Drop a deleted (or unpublished) listing from the search index."""
    try:
        remove_listing_sync(listing_id)
    except Exception as exc:
        logger.warning("remove_listing_task failed for id=%s: %s", listing_id, exc)
        raise self.retry(exc=exc, countdown=5)
