# catalog/seed.py

import logging
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from .db import Base
from .models import Product

logger = logging.getLogger(__name__)

SAMPLE_PRODUCTS = [
    {"name": "Laptop", "description": "High-performance laptop", "price": Decimal("999.99"), "stock": 10},
    {"name": "Mouse", "description": "Wireless mouse", "price": Decimal("29.99"), "stock": 50},
    {"name": "Keyboard", "description": "Mechanical keyboard", "price": Decimal("79.99"), "stock": 30},
]


def seed_products(db: Session) -> int:
    """
    Inserts the sample catalog when the products table is empty.
    On a fresh table the rows receive ids 1-3 in list order.
    Returns the number of rows added.
    """
    count = db.scalar(select(func.count(Product.id))) or 0
    if count:
        logger.info(f"Product Catalog: Skipping seed, {count} products already present.")
        return 0

    now = datetime.now(timezone.utc)
    db.add_all([Product(created_at=now, **data) for data in SAMPLE_PRODUCTS])
    db.commit()
    logger.info(f"Product Catalog: Seeded {len(SAMPLE_PRODUCTS)} sample products.")
    return len(SAMPLE_PRODUCTS)


def init_db(bind: Engine, seed: bool = True) -> None:
    Base.metadata.create_all(bind=bind)
    if seed:
        with Session(bind=bind) as db:
            seed_products(db)
