from sqlalchemy import Column, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from app.database.base import Base


class InventoryHistory(Base):
    __tablename__ = "inventory_history"

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(
        Integer,
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
    )

    old_quantity = Column(Integer, nullable=False)
    new_quantity = Column(Integer, nullable=False)
    # ISO-8601 text written by the caller; ordering relies on string comparison
    change_date = Column(String, nullable=False)
    changed_by = Column(String, nullable=False)

    product = relationship("Product", back_populates="history")

    __table_args__ = (
        Index("idx_inventory_history_product", "product_id"),
    )


__all__ = ["InventoryHistory"]
