#!/usr/bin/env python3
"""
Seed the car_listings table with deterministic random data.

Features:
- Deterministic: fixed seed → same dataset every run
- Idempotent: safe to run multiple times (clears listings and saves before seeding)
- Realism-lite: prices correlated with year + brand band, mileage with age
- Spread created_at over the last 90 days so "newest" ordering is meaningful

Usage:
    DATABASE_URL=postgresql+psycopg://... python scripts/seed_listings.py
"""

from __future__ import annotations

import random
import sys
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path

# Add src to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from motor_market.infra.db.models.listing import ListingRow, SavedListingRow
from motor_market.infra.db.session import get_session


RANDOM_SEED = 42
NUM_LISTINGS = 60
CURRENT_YEAR = 2026

# Opaque ids as issued by the identity provider
SELLER_IDS = [f"seed-seller-{n}" for n in range(1, 6)]

BRAND_BANDS = {
    "economy": {
        "brands": ["Nissan", "Chevrolet", "Kia", "Hyundai"],
        "base_price_min": Decimal("12000"),
        "base_price_max": Decimal("22000"),
    },
    "mid_range": {
        "brands": ["Toyota", "Honda", "Mazda", "Ford"],
        "base_price_min": Decimal("20000"),
        "base_price_max": Decimal("38000"),
    },
    "premium": {
        "brands": ["BMW", "Mercedes-Benz", "Audi", "Tesla"],
        "base_price_min": Decimal("38000"),
        "base_price_max": Decimal("75000"),
    },
}

# (model, category)
MODELS_BY_BRAND = {
    "Nissan": [("Sentra", "sedan"), ("Rogue", "suv"), ("Frontier", "truck")],
    "Chevrolet": [("Malibu", "sedan"), ("Equinox", "suv"), ("Silverado", "truck")],
    "Kia": [("Forte", "sedan"), ("Sportage", "suv"), ("Carnival", "van")],
    "Hyundai": [("Elantra", "sedan"), ("Tucson", "suv"), ("Santa Fe", "suv")],
    "Toyota": [("Camry", "sedan"), ("RAV4", "suv"), ("Tacoma", "truck"), ("Sienna", "van")],
    "Honda": [("Civic", "sedan"), ("CR-V", "suv"), ("Odyssey", "van")],
    "Mazda": [("Mazda3", "sedan"), ("CX-5", "suv"), ("MX-5", "convertible")],
    "Ford": [("Mustang", "coupe"), ("Explorer", "suv"), ("F-150", "truck")],
    "BMW": [("3 Series", "sedan"), ("X5", "suv"), ("4 Series", "coupe")],
    "Mercedes-Benz": [("C-Class", "sedan"), ("GLC", "suv"), ("S-Class", "luxury")],
    "Audi": [("A4", "sedan"), ("Q5", "suv"), ("A5", "convertible")],
    "Tesla": [("Model 3", "sedan"), ("Model Y", "suv")],
}

TRANSMISSIONS = ["Automatic", "Manual"]
FUEL_TYPES = ["Gasoline", "Diesel", "Hybrid", "Electric"]
COLORS = ["Black", "White", "Silver", "Gray", "Blue", "Red"]
FEATURES = [
    "Bluetooth",
    "Backup Camera",
    "Navigation",
    "Heated Seats",
    "Sunroof",
    "Apple CarPlay",
    "Lane Assist",
    "Adaptive Cruise Control",
]
LOCATIONS = ["Austin, TX", "Denver, CO", "Seattle, WA", "Miami, FL", "Chicago, IL", "Phoenix, AZ"]


def calculate_price(band: dict, year: int) -> Decimal:
    """
    Base price within the brand band, depreciated ~8% per year of age
    (capped at 65%), +/- 10% noise, rounded to the nearest 100.
    """
    base_price = Decimal(random.randint(int(band["base_price_min"]), int(band["base_price_max"])))

    years_old = max(0, CURRENT_YEAR - year)
    total_depreciation = min(Decimal("0.08") * years_old, Decimal("0.65"))
    price = base_price * (Decimal("1") - total_depreciation)
    price *= Decimal(str(random.uniform(0.90, 1.10)))

    price = (price / 100).quantize(Decimal("1")) * 100
    return max(price, Decimal("3000"))


def generate_listing(now: datetime) -> ListingRow:
    band_name = random.choice(list(BRAND_BANDS.keys()))
    band = BRAND_BANDS[band_name]
    brand = random.choice(band["brands"])
    model, category = random.choice(MODELS_BY_BRAND[brand])

    year = random.choices(
        range(CURRENT_YEAR - 10, CURRENT_YEAR + 1),
        weights=[1, 1, 2, 2, 3, 3, 4, 5, 6, 7, 3],
        k=1,
    )[0]
    years_old = CURRENT_YEAR - year
    max_mileage = min(180000, years_old * 12000 + random.randint(0, 15000))
    mileage = random.randint(0, max(500, max_mileage))

    if brand == "Tesla":
        fuel_type = "Electric"
    else:
        fuel_type = random.choices(FUEL_TYPES, weights=[7, 2, 2, 1], k=1)[0]

    transmission = random.choices(TRANSMISSIONS, weights=[8, 2], k=1)[0]
    created_at = now - timedelta(days=random.randint(0, 89), minutes=random.randint(0, 1439))
    slug = f"{brand}-{model}".lower().replace(" ", "-")

    return ListingRow(
        user_id=random.choice(SELLER_IDS),
        brand=brand,
        model=model,
        year=year,
        price=calculate_price(band, year),
        mileage=mileage,
        fuel_type=fuel_type,
        transmission=transmission,
        category=category,
        color=random.choice(COLORS),
        description=(
            f"{year} {brand} {model} with {mileage:,} miles. "
            f"{transmission} transmission, one owner, full service history."
        ),
        images=[f"/uploads/seed/{slug}-{n}.jpg" for n in range(1, random.randint(2, 4))],
        features=random.sample(FEATURES, k=random.randint(2, 5)),
        location=random.choice(LOCATIONS),
        created_at=created_at,
        updated_at=created_at,
    )


def seed_listings(num_listings: int = NUM_LISTINGS, seed: int = RANDOM_SEED) -> None:
    """
    Seed the database with random listings.

    Args:
        num_listings: Number of listings to generate
        seed: Random seed for deterministic results
    """
    random.seed(seed)
    # Pinned so reruns produce identical timestamps
    now = datetime(CURRENT_YEAR, 10, 1, 12, 0, tzinfo=timezone.utc)

    print(f"Seeding database with {num_listings} listings (seed={seed})...")

    with get_session() as session:
        saved_deleted = session.query(SavedListingRow).delete()
        listings_deleted = session.query(ListingRow).delete()
        print(f"   Deleted {listings_deleted} existing listings and {saved_deleted} saves")

        listings = [generate_listing(now) for _ in range(num_listings)]
        session.add_all(listings)
        session.flush()

        print(f"Seeded {len(listings)} listings")

        newest = sorted(listings, key=lambda row: row.created_at, reverse=True)
        for i, row in enumerate(newest[:5], 1):
            print(
                f"   {i}. {row.year} {row.brand} {row.model} - "
                f"${row.price:,.0f} ({row.category}, {row.location})"
            )

        if len(listings) > 5:
            print(f"   ... and {len(listings) - 5} more")


if __name__ == "__main__":
    try:
        seed_listings()
    except Exception as e:
        print(f"Error seeding database: {e}", file=sys.stderr)
        sys.exit(1)
