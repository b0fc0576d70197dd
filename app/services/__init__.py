from app.services.export_service import export_products
from app.services.history_service import list_history, record_stock_change
from app.services.import_service import import_products, import_upload
from app.services.product_service import (
    create_product,
    delete_product,
    get_product,
    list_products,
    search_products,
    update_product,
)
from app.services.seed_service import seed_sample_products

__all__ = [
    "create_product",
    "delete_product",
    "export_products",
    "get_product",
    "import_products",
    "import_upload",
    "list_history",
    "list_products",
    "record_stock_change",
    "search_products",
    "seed_sample_products",
    "update_product",
]
