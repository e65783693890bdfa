#!/usr/bin/env python3
"""
Seed script: creates sample products via the bulk API (no direct index access).
Run: API must be running.
  python scripts/seed_products.py
  python scripts/seed_products.py --count 500 --batch-size 100
"""

import argparse
import random
import sys

import httpx

API_BASE = "http://localhost:8000/api"

CATALOG = {
    "Hardware": ["Widget", "Hammer", "Screwdriver Set", "Wrench", "Drill Bits", "Tape Measure"],
    "Electronics": ["Bluetooth Speaker", "USB-C Cable", "Wireless Mouse", "Mechanical Keyboard", "Webcam"],
    "Kitchen": ["Coffee Maker", "Electric Kettle", "Toaster", "Blender", "Air Fryer"],
    "Outdoor": ["Camping Lantern", "Water Bottle", "Backpack", "Tent", "Hiking Poles"],
}
BRANDS = ["Acme", "Globex", "Initech", "Umbrella", "Stark", "Wayne"]
ADJECTIVES = ["Blue", "Compact", "Deluxe", "Heavy Duty", "Classic", "Smart", "Eco"]
DESCRIPTIONS = [
    "Reliable everyday choice with a two year warranty.",
    "Lightweight design, easy to carry and store.",
    "Popular with professionals and hobbyists alike.",
    "Built from recycled materials.",
    "Great value for the price.",
]


def random_product(n: int) -> dict:
    category = random.choice(list(CATALOG))
    noun = random.choice(CATALOG[category])
    brand = random.choice(BRANDS)
    return {
        "title": f"{random.choice(ADJECTIVES)} {noun}",
        "description": random.choice(DESCRIPTIONS),
        "category": category,
        "brand": brand,
        "sku": f"{brand[:3].upper()}-{n:05d}",
        "price": round(random.uniform(2, 350), 2),
        "attributes": {"color": random.choice(["red", "blue", "black", "white"])},
        "tags": random.sample(["sale", "new", "bestseller", "eco", "gift"], k=2),
    }


def main():
    ap = argparse.ArgumentParser(description="Seed products via the bulk API")
    ap.add_argument("--count", type=int, default=200, help="Number of products to create")
    ap.add_argument("--batch-size", type=int, default=50, help="Products per bulk request")
    ap.add_argument("--base-url", default=API_BASE, help="API base URL")
    args = ap.parse_args()

    created = 0
    errors = []
    with httpx.Client(base_url=args.base_url, timeout=60.0) as client:
        for start in range(0, args.count, args.batch_size):
            batch = [random_product(n) for n in range(start, min(start + args.batch_size, args.count))]
            try:
                r = client.post("/products/bulk", json=batch)
            except httpx.HTTPError as e:
                errors.append(f"Batch at {start}: {e}")
                continue
            if r.status_code == 200:
                created += len(batch)
            else:
                errors.append(f"Batch at {start}: {r.status_code} {r.text[:120]}")
            print(f"  ... {created} products")

    print(f"\nDone. Products created: {created}")
    if errors:
        print(f"Errors ({len(errors)}):")
        for e in errors[:15]:
            print("  ", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
