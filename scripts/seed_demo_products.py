#!/usr/bin/env python3
"""
Load a handful of demo products into an empty database.

The real catalogue comes from the bulk CSV import; this is only for trying
the API locally.
"""

import os
import sys
from decimal import Decimal

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ecocatalog.database.core import SessionLocal, engine  # noqa: E402
from ecocatalog.database.models import Base, Product  # noqa: E402
from ecocatalog.products.service import CatalogService  # noqa: E402
from ecocatalog.logging import logger  # noqa: E402

DEMO_PRODUCTS = [
    {"title": "Bamboo Toothbrush (4 pack)", "category": "Beauty", "eco_score": Decimal("9.10"),
     "age_target": None, "gender_target": None, "price": Decimal("7.99")},
    {"title": "Organic Cotton Tee", "category": "Clothing", "eco_score": Decimal("8.40"),
     "age_target": "25-34", "gender_target": "Female", "price": Decimal("24.00")},
    {"title": "Recycled Running Shoes", "category": "Clothing", "eco_score": Decimal("7.25"),
     "age_target": "18-24", "gender_target": "Male", "price": Decimal("89.50")},
    {"title": "Solar Garden Lights", "category": "Home", "eco_score": Decimal("6.80"),
     "age_target": "45-54", "gender_target": None, "price": Decimal("32.99")},
    {"title": "Refillable Glass Water Bottle", "category": "Home", "eco_score": None,
     "age_target": None, "gender_target": None, "price": Decimal("15.00")},
]


def main() -> int:
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if db.query(Product).count():
            logger.info("Products already present, nothing to seed.")
            return 0
        for fields in DEMO_PRODUCTS:
            CatalogService.create_product(db, **fields)
        logger.info(f"Seeded {len(DEMO_PRODUCTS)} demo products.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
