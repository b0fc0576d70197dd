import logging
from typing import cast

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.core.dates import to_iso_timestamp
from app.models.inventory_history import InventoryHistory

logger = logging.getLogger(__name__)


def record_stock_change(
    db: Session,
    product_id: int,
    old_quantity: int,
    new_quantity: int,
    *,
    changed_by: str | None = None,
    change_date: str | None = None,
) -> InventoryHistory:
    """Append one history row and commit it.

    The caller decides whether the quantity really changed; this function
    always writes.
    """
    entry = InventoryHistory(
        product_id=product_id,
        old_quantity=int(old_quantity),
        new_quantity=int(new_quantity),
        change_date=change_date or to_iso_timestamp(),
        changed_by=changed_by or get_settings().HISTORY_ACTOR,
    )
    db.add(entry)
    db.commit()
    return entry


def record_stock_change_best_effort(
    db: Session,
    product_id: int,
    old_quantity: int,
    new_quantity: int,
    *,
    changed_by: str | None = None,
    change_date: str | None = None,
) -> InventoryHistory | None:
    """Like record_stock_change, but a failed write is logged and dropped.

    The product update that triggered it has already been committed and
    stays committed.
    """
    try:
        return record_stock_change(
            db,
            product_id,
            old_quantity,
            new_quantity,
            changed_by=changed_by,
            change_date=change_date,
        )
    except SQLAlchemyError:
        db.rollback()
        logger.exception(
            "Error logging inventory history for product %s (%s -> %s)",
            product_id,
            old_quantity,
            new_quantity,
            extra={"product_id": product_id},
        )
        return None


def list_history(db: Session, product_id: int) -> list[InventoryHistory]:
    history = (
        db.execute(
            select(InventoryHistory)
            .where(InventoryHistory.product_id == product_id)
            .order_by(InventoryHistory.change_date.desc(), InventoryHistory.id.desc())
        )
        .scalars()
        .all()
    )
    return cast(list[InventoryHistory], list(history))


__all__ = ["list_history", "record_stock_change", "record_stock_change_best_effort"]
