import importlib

from app.models.inventory_history import InventoryHistory
from app.models.product import Product


def import_all_models() -> None:
    for module_name in (
        "app.models.inventory_history",
        "app.models.product",
    ):
        importlib.import_module(module_name)


__all__ = [
    "InventoryHistory",
    "Product",
    "import_all_models",
]
