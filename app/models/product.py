from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from app.core.constants import DEFAULT_STOCK, PRODUCT_STATUSES
from app.core.dates import utc_now
from app.database.base import Base


_STATUS_VALUES = ", ".join("'{}'".format(status) for status in PRODUCT_STATUSES)


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)

    name = Column(String, nullable=False, unique=True)
    unit = Column(String, nullable=False)
    category = Column(String, nullable=False)
    brand = Column(String, nullable=False)

    stock = Column(Integer, nullable=False, default=DEFAULT_STOCK)
    status = Column(String, nullable=False)
    image = Column(String)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
    )

    history = relationship(
        "InventoryHistory",
        back_populates="product",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),
        CheckConstraint(f"status IN ({_STATUS_VALUES})", name="ck_products_status"),
    )


__all__ = ["Product"]
