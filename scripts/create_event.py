#!/usr/bin/env python3
"""
Create a seasonal event (home-page banner) directly in the database.
Events have no public write endpoint; operators add them with this script.
  python scripts/create_event.py "Winter Market" --image /img/winter.jpg \
      --description "Warm gifts from local makers." --days 30
"""

import argparse
import asyncio
import re
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from marketplace.db.models.event import Event
from marketplace.db.repositories.event_repository import EventRepository
from marketplace.db.session import async_session_maker


def slugify(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


async def create_event(args: argparse.Namespace) -> Event:
    starts_at = datetime.fromisoformat(args.start) if args.start else datetime.now(timezone.utc)
    if starts_at.tzinfo is None:
        starts_at = starts_at.replace(tzinfo=timezone.utc)
    async with async_session_maker() as session:
        repo = EventRepository(session)
        slug = args.slug or slugify(args.name)
        if await repo.get_by_slug(slug):
            raise SystemExit(f"Event '{slug}' already exists.")
        event = await repo.add(
            Event(
                name=args.name,
                slug=slug,
                image=args.image,
                description=args.description,
                button_text=args.button_text,
                target_url=args.target_url,
                starts_at=starts_at,
                ends_at=starts_at + timedelta(days=args.days),
            )
        )
        await session.commit()
        return event


def main():
    parser = argparse.ArgumentParser(description="Create a seasonal event banner")
    parser.add_argument("name")
    parser.add_argument("--slug", help="URL slug (default: derived from name)")
    parser.add_argument("--image", required=True, help="Banner image path or URL")
    parser.add_argument("--description", required=True)
    parser.add_argument("--button-text", default="Shop Now")
    parser.add_argument("--target-url", default="/shop")
    parser.add_argument("--start", help="ISO start time (default: now, UTC)")
    parser.add_argument("--days", type=int, default=14, help="Length of the active window")
    args = parser.parse_args()

    event = asyncio.run(create_event(args))
    print(f"Created event {event.id} '{event.slug}' ({event.starts_at} -> {event.ends_at})")


if __name__ == "__main__":
    main()
