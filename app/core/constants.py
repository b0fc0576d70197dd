from pathlib import Path


APP_DIR = Path(__file__).resolve().parents[1]
PROJECT_ROOT = APP_DIR.parent

STATUS_IN_STOCK = "In Stock"
STATUS_OUT_OF_STOCK = "Out of Stock"
PRODUCT_STATUSES = (STATUS_IN_STOCK, STATUS_OUT_OF_STOCK)

DEFAULT_UNIT = "piece"
DEFAULT_CATEGORY = "General"
DEFAULT_BRAND = "Generic"
DEFAULT_STOCK = 0

CSV_COLUMNS = ("name", "unit", "category", "brand", "stock", "status", "image")
CSV_MEDIA_TYPE = "text/csv"

SAMPLE_PRODUCTS = (
    ("Laptop", "piece", "Electronics", "Dell", 15, STATUS_IN_STOCK),
    ("Mouse", "piece", "Electronics", "Logitech", 50, STATUS_IN_STOCK),
    ("Keyboard", "piece", "Electronics", "Corsair", 0, STATUS_OUT_OF_STOCK),
    ("Monitor", "piece", "Electronics", "Samsung", 8, STATUS_IN_STOCK),
    ("Desk Chair", "piece", "Furniture", "Herman Miller", 5, STATUS_IN_STOCK),
)


def status_for_stock(stock: int) -> str:
    return STATUS_IN_STOCK if stock > 0 else STATUS_OUT_OF_STOCK
