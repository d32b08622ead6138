#!/usr/bin/env python3
"""
Seed the inventory with deterministic demo cars.

- Deterministic: fixed seed, same dataset every run
- Idempotent: clears cars (and, by cascade, bookings and wishlists) first
- Prices follow a make band and depreciate with age

Usage:
    python scripts/seed_cars.py
"""

from __future__ import annotations

import logging
import random
import sys
from decimal import Decimal
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dealership.infra.db.models import CarRow
from dealership.infra.db.session import get_session
from dealership.infra.logging import configure_logging

logger = logging.getLogger("dealership.scripts.seed_cars")


# ==============================================================================
# Configuration
# ==============================================================================

RANDOM_SEED = 42
NUM_CARS = 40
FEATURED_COUNT = 6
CURRENT_YEAR = 2026


# ==============================================================================
# Inventory data
# ==============================================================================

PRICE_BANDS = {
    "economy": (["Toyota", "Honda", "Hyundai", "Kia", "Nissan"], 15000, 28000),
    "mid_range": (["Ford", "Mazda", "Volkswagen", "Subaru", "Chevrolet"], 22000, 40000),
    "premium": (["BMW", "Mercedes-Benz", "Audi", "Tesla", "Volvo"], 40000, 85000),
}

MODELS_BY_MAKE = {
    "Toyota": [("Corolla", "Sedan"), ("RAV4", "SUV"), ("Tacoma", "Truck")],
    "Honda": [("Civic", "Sedan"), ("CR-V", "SUV"), ("Fit", "Hatchback")],
    "Hyundai": [("Elantra", "Sedan"), ("Tucson", "SUV")],
    "Kia": [("Forte", "Sedan"), ("Sportage", "SUV"), ("Soul", "Hatchback")],
    "Nissan": [("Sentra", "Sedan"), ("Rogue", "SUV")],
    "Ford": [("F-150", "Truck"), ("Escape", "SUV"), ("Mustang", "Coupe")],
    "Mazda": [("Mazda3", "Hatchback"), ("CX-5", "SUV")],
    "Volkswagen": [("Jetta", "Sedan"), ("Golf", "Hatchback"), ("Tiguan", "SUV")],
    "Subaru": [("Outback", "Wagon"), ("Forester", "SUV")],
    "Chevrolet": [("Malibu", "Sedan"), ("Silverado", "Truck"), ("Equinox", "SUV")],
    "BMW": [("3 Series", "Sedan"), ("X5", "SUV"), ("4 Series", "Coupe")],
    "Mercedes-Benz": [("C-Class", "Sedan"), ("GLC", "SUV")],
    "Audi": [("A4", "Sedan"), ("Q5", "SUV")],
    "Tesla": [("Model 3", "Sedan"), ("Model Y", "SUV")],
    "Volvo": [("S60", "Sedan"), ("XC60", "SUV")],
}

COLORS = ["White", "Black", "Silver", "Gray", "Blue", "Red"]
TRANSMISSIONS = ["Automatic", "Manual", "CVT"]
FUEL_TYPES = ["Gasoline", "Diesel", "Hybrid", "Electric"]
SEATS_BY_BODY = {"Sedan": 5, "SUV": 5, "Truck": 5, "Hatchback": 5, "Coupe": 4, "Wagon": 5}


# ==============================================================================
# Generation
# ==============================================================================


def calculate_price(base_min: int, base_max: int, year: int) -> Decimal:
    """Band price, ~8%/year depreciation capped at 60%, rounded to 100."""
    base = Decimal(random.randint(base_min, base_max))
    age = max(0, CURRENT_YEAR - year)
    depreciation = min(Decimal("0.08") * age, Decimal("0.60"))
    price = base * (Decimal("1") - depreciation)
    return max((price / 100).quantize(Decimal("1")) * 100, Decimal("5000"))


def generate_car() -> CarRow:
    band = random.choice(list(PRICE_BANDS))
    makes, base_min, base_max = PRICE_BANDS[band]
    make = random.choice(makes)
    model, body_type = random.choice(MODELS_BY_MAKE[make])

    year = random.choices(range(2017, CURRENT_YEAR + 1), weights=range(1, 11), k=1)[0]
    age = CURRENT_YEAR - year
    mileage = random.randint(0, max(1000, age * 15000))

    fuel_type = "Electric" if make == "Tesla" else random.choices(FUEL_TYPES, weights=[7, 1, 2, 0])[0]
    transmission = "Automatic" if fuel_type == "Electric" else random.choices(TRANSMISSIONS, weights=[6, 1, 2])[0]
    color = random.choice(COLORS)

    return CarRow(
        make=make,
        model=model,
        year=year,
        price=calculate_price(base_min, base_max, year),
        mileage=mileage,
        color=color,
        fuel_type=fuel_type,
        transmission=transmission,
        body_type=body_type,
        seats=SEATS_BY_BODY[body_type],
        description=f"{year} {make} {model} in {color.lower()}, {mileage:,} miles.",
        status=random.choices(["AVAILABLE", "UNAVAILABLE", "SOLD"], weights=[8, 1, 1])[0],
        featured=False,
        images=[],
    )


def seed_cars(num_cars: int = NUM_CARS, seed: int = RANDOM_SEED) -> None:
    random.seed(seed)
    logger.info("Seeding inventory", extra={"num_cars": num_cars, "seed": seed})

    with get_session() as session:
        deleted = session.query(CarRow).delete()
        logger.info("Cleared existing cars", extra={"deleted": deleted})

        cars = [generate_car() for _ in range(num_cars)]
        available = [car for car in cars if car.status == "AVAILABLE"]
        for car in available[:FEATURED_COUNT]:
            car.featured = True

        session.add_all(cars)
        session.flush()

        logger.info(
            "Seeded inventory",
            extra={"cars": len(cars), "available": len(available)},
        )


# ==============================================================================
# Main
# ==============================================================================


if __name__ == "__main__":
    configure_logging()
    try:
        seed_cars()
    except Exception:
        logger.exception("Seeding failed")
        sys.exit(1)
