import logging
from typing import cast

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.core.constants import status_for_stock
from app.core.dates import to_iso_timestamp, utc_now
from app.core.errors import DuplicateName, NotFound, ValidationError, is_unique_violation
from app.models.product import Product
from app.schemas.product import ProductBase, ProductCreate, ProductUpdate
from app.services.history_service import record_stock_change_best_effort

logger = logging.getLogger(__name__)


def resolve_status(stock: int, status: str | None) -> str:
    """Status as it will be stored.

    Trusts the client unless ENFORCE_STATUS_FROM_STOCK is set; a missing
    status is always derived from the stock level.
    """
    if not status or get_settings().ENFORCE_STATUS_FROM_STOCK:
        return status_for_stock(stock)
    return status


def _product_values(payload: ProductBase) -> dict:
    settings = get_settings()
    return {
        "name": payload.name,
        "unit": payload.unit,
        "category": payload.category,
        "brand": payload.brand,
        "stock": payload.stock,
        "status": resolve_status(payload.stock, payload.status),
        "image": payload.image or settings.PLACEHOLDER_IMAGE_URL,
    }


def _commit_or_raise(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if is_unique_violation(exc):
            raise DuplicateName() from exc
        raise ValidationError(str(exc.orig)) from exc


def list_products(db: Session) -> list[Product]:
    products = db.execute(select(Product).order_by(Product.id.desc())).scalars().all()
    return cast(list[Product], list(products))


def search_products(db: Session, term: str | None) -> list[Product]:
    if not term:
        raise ValidationError("Search term is required")
    products = (
        db.execute(
            select(Product)
            .where(Product.name.icontains(str(term), autoescape=True))
            .order_by(Product.id.desc())
        )
        .scalars()
        .all()
    )
    return cast(list[Product], list(products))


def get_product(db: Session, product_id: int) -> Product:
    product = db.get(Product, product_id)
    if product is None:
        raise NotFound()
    return product


def create_product(db: Session, payload: ProductCreate) -> Product:
    product = Product(**_product_values(payload))
    db.add(product)
    _commit_or_raise(db)
    db.refresh(product)
    logger.info("Created product %s (%s)", product.id, product.name)
    return product


def update_product(
    db: Session,
    product_id: int,
    payload: ProductUpdate,
    *,
    changed_by: str | None = None,
) -> Product:
    product = get_product(db, product_id)
    old_stock = product.stock

    for key, value in _product_values(payload).items():
        setattr(product, key, value)
    product.updated_at = utc_now()
    _commit_or_raise(db)
    change_date = to_iso_timestamp()
    db.refresh(product)

    if old_stock != product.stock:
        record_stock_change_best_effort(
            db,
            product.id,
            old_stock,
            product.stock,
            changed_by=changed_by,
            change_date=change_date,
        )
    return product


def delete_product(db: Session, product_id: int) -> None:
    result = db.execute(delete(Product).where(Product.id == product_id))
    if result.rowcount == 0:
        db.rollback()
        raise NotFound()
    db.commit()
    logger.info("Deleted product %s", product_id)


__all__ = [
    "create_product",
    "delete_product",
    "get_product",
    "list_products",
    "resolve_status",
    "search_products",
    "update_product",
]
