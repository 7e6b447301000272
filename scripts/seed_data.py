#!/usr/bin/env python3
"""
Seed script: creates users and listings via the API (no direct DB), then has
every user put a few listings of other sellers in their cart.
Run with the API up; run the Celery worker too if listings should reach search.
  python scripts/seed_data.py
  python scripts/seed_data.py --users 50 --listings-per-user 10
"""

import argparse
import random

import httpx

API_BASE = "http://localhost:8000/api/v1"

TITLES = [
    "Hand-thrown mug", "Knitted scarf", "Oak cutting board", "Vintage denim jacket",
    "Leather wallet", "Ceramic planter", "Beeswax candles", "Linen tote bag",
    "Silver ring", "Watercolor print", "Macrame wall hanging", "Wool beanie",
    "Walnut serving tray", "Embroidered pillow", "Glass vase", "Soy candle set",
]

CATEGORIES = ["home", "clothing", "jewelry", "art", "accessories"]
COLORS = ["red", "blue", "green", "black", "white", "natural"]
CONDITIONS = ["new", "like new", "good", "fair"]
DESCRIPTIONS = [
    "Made in small batches.",
    "Gently used, no visible wear.",
    "Ships within two business days.",
    "Each piece is one of a kind.",
]


def random_listing() -> dict:
    return {
        "title": random.choice(TITLES),
        "description": random.choice(DESCRIPTIONS),
        "price": f"{random.choice([5, 12, 19, 24, 35, 49, 60, 75, 120]) + random.choice([0, 0.5, 0.99]):.2f}",
        "quantity": random.randint(1, 20),
        "category": random.choice(CATEGORIES),
        "color": random.choice(COLORS),
        "condition": random.choice(CONDITIONS),
        "delivery": random.choice(["pickup", "shipping", "both"]),
        "handmade": random.random() > 0.5,
    }


def main():
    ap = argparse.ArgumentParser(description="Seed users, listings and carts via API")
    ap.add_argument("--users", type=int, default=20, help="Number of users to create")
    ap.add_argument("--listings-per-user", type=int, default=8, help="Listings per user")
    ap.add_argument("--base-url", default=API_BASE, help="API base URL")
    args = ap.parse_args()

    tokens: list[str] = []
    listing_owner: dict[int, int] = {}
    errors = []

    with httpx.Client(base_url=args.base_url, timeout=30.0) as client:
        print(f"Creating {args.users} users...")
        for i in range(args.users):
            email = f"seller{i+1}@example.com"
            password = "password123"
            r = client.post("/users/register", json={
                "email": email,
                "password": password,
                "full_name": f"Seller {i+1}",
            })
            if r.status_code not in (201, 409):
                errors.append(f"Register {email}: {r.status_code} {r.text[:80]}")
                continue
            r = client.post("/users/login", json={"email": email, "password": password})
            if r.status_code != 200:
                errors.append(f"Login {email}: {r.status_code}")
                continue
            tokens.append(r.json()["access_token"])

        print(f"Creating ~{len(tokens) * args.listings_per_user} listings...")
        for idx, token in enumerate(tokens):
            headers = {"Authorization": f"Bearer {token}"}
            for _ in range(args.listings_per_user):
                r = client.post("/listings", headers=headers, json=random_listing())
                if r.status_code == 201:
                    listing_owner[r.json()["id"]] = idx
                else:
                    errors.append(f"Listing: {r.status_code} {r.text[:80]}")

        print("Filling carts...")
        carted = 0
        for idx, token in enumerate(tokens):
            headers = {"Authorization": f"Bearer {token}"}
            others = [lid for lid, owner in listing_owner.items() if owner != idx]
            for listing_id in random.sample(others, k=min(3, len(others))):
                r = client.post("/cart/add", headers=headers, json={"listingId": listing_id, "quantity": 1})
                if r.status_code == 200:
                    carted += 1
                elif r.status_code != 400:  # 400 = sold out, expected once stock runs low
                    errors.append(f"Cart add {listing_id}: {r.status_code}")

    print(f"\nDone. Users: {len(tokens)}, listings: {len(listing_owner)}, cart lines: {carted}")
    if errors:
        print(f"Errors ({len(errors)}):")
        for e in errors[:15]:
            print("  ", e)


if __name__ == "__main__":
    main()
