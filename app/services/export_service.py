from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.config import get_settings
from app.core.constants import CSV_COLUMNS, CSV_MEDIA_TYPE
from app.models.product import Product


@dataclass(frozen=True)
class ExportResult:
    content: str
    media_type: str
    filename: str


def _text(value):
    return "" if value is None else value


def format_product_line(name, unit, category, brand, stock, status, image) -> str:
    # Text fields are wrapped in quotes as-is; embedded quotes and newlines
    # are not escaped.
    return '"{}","{}","{}","{}",{},"{}","{}"'.format(
        _text(name), _text(unit), _text(category), _text(brand), stock, _text(status), _text(image)
    )


def build_csv(rows) -> str:
    header = ",".join(CSV_COLUMNS) + "\n"
    return header + "\n".join(format_product_line(*row) for row in rows)


def export_products(db: Session) -> ExportResult:
    rows = db.execute(
        select(
            Product.name,
            Product.unit,
            Product.category,
            Product.brand,
            Product.stock,
            Product.status,
            Product.image,
        )
    ).all()
    return ExportResult(
        content=build_csv(rows),
        media_type=CSV_MEDIA_TYPE,
        filename=get_settings().EXPORT_FILENAME,
    )


__all__ = ["ExportResult", "build_csv", "export_products"]
