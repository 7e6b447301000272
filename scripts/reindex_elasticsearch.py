#!/usr/bin/env python3
"""
Re-enqueue every published listing for Elasticsearch indexing via Celery.
Use after fixing the worker or when the index was lost; no data is created.
Requires the API (to page through listings) and a running Celery worker.

  python scripts/reindex_elasticsearch.py
  python scripts/reindex_elasticsearch.py --reset-index
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import httpx

from marketplace.queue.tasks import index_listing_task
from marketplace.search.elasticsearch_client import LISTINGS_INDEX, _sync_es_client

API_BASE = "http://localhost:8000/api/v1"
PAGE_SIZE = 100  # API max_page_size


def delete_listings_index():
    """Drop the index; the first index task recreates it with 0 replicas."""
    es = _sync_es_client()
    if es.indices.exists(index=LISTINGS_INDEX):
        es.indices.delete(index=LISTINGS_INDEX)
        print(f"Deleted index '{LISTINGS_INDEX}'.")
    else:
        print(f"Index '{LISTINGS_INDEX}' does not exist.")


def main():
    ap = argparse.ArgumentParser(description="Enqueue all listings for Elasticsearch reindex")
    ap.add_argument("--base-url", default=API_BASE, help="API base URL")
    ap.add_argument("--reset-index", action="store_true", help="Delete the listings index first")
    args = ap.parse_args()

    if args.reset_index:
        delete_listings_index()

    listings = []
    with httpx.Client(base_url=args.base_url, timeout=30.0) as client:
        skip = 0
        while True:
            r = client.get("/listings", params={"skip": skip, "limit": PAGE_SIZE, "sort": "date-oldest"})
            if r.status_code != 200:
                print(f"Failed to fetch listings: {r.status_code} {r.text[:200]}")
                sys.exit(1)
            page = r.json()
            listings.extend(page)
            if len(page) < PAGE_SIZE:
                break
            skip += PAGE_SIZE

    if not listings:
        print("No listings. Run seed_data.py first.")
        return

    for it in listings:
        index_listing_task.delay({
            "id": it["id"],
            "title": it["title"],
            "description": it.get("description") or "",
            "category": it.get("category"),
            "color": it.get("color"),
            "price": float(it["price"]),
            "owner_id": it["owner_id"],
            "created_at": it.get("created_at"),
        })

    print(f"Enqueued {len(listings)} listings for reindex. Ensure the Celery worker is running.")


if __name__ == "__main__":
    main()
