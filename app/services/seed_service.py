import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.config import get_settings
from app.core.constants import SAMPLE_PRODUCTS
from app.models.product import Product

logger = logging.getLogger(__name__)


def seed_sample_products(db: Session) -> int:
    """Insert the demo catalogue, leaving products that already exist alone."""
    placeholder = get_settings().PLACEHOLDER_IMAGE_URL
    existing = set(db.execute(select(Product.name)).scalars().all())

    created = 0
    for name, unit, category, brand, stock, status in SAMPLE_PRODUCTS:
        if name in existing:
            continue
        db.add(
            Product(
                name=name,
                unit=unit,
                category=category,
                brand=brand,
                stock=stock,
                status=status,
                image=placeholder,
            )
        )
        created += 1
    db.commit()

    if created:
        logger.info("Seeded %s sample products", created)
    return created


__all__ = ["seed_sample_products"]
