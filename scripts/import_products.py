import argparse
import sys
from pathlib import Path

# Ensure repo root is on sys.path when running this script directly.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from sqlalchemy.exc import SQLAlchemyError

from app.core.errors import InventoryError
from app.core.logging import setup_logging
from app.database import SessionLocal, init_db
from app.services.export_service import export_products
from app.services.import_service import import_products


def parse_args():
    parser = argparse.ArgumentParser(
        description="Import products from a CSV/.xlsx file, or export them to CSV."
    )
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--path", help="CSV or .xlsx file to import.")
    group.add_argument("--export", metavar="OUTPUT", help="Write all products to this CSV file.")
    return parser.parse_args()


def main():
    setup_logging()
    args = parse_args()
    init_db()

    db = SessionLocal()
    try:
        if args.export:
            result = export_products(db)
            Path(args.export).write_text(result.content, encoding="utf-8")
            print(f"Exported products to {args.export}")
            return
        report = import_products(db, args.path)
    except (OSError, SQLAlchemyError, InventoryError) as exc:
        raise SystemExit(f"Failed: {exc}") from exc
    finally:
        db.close()

    print(f"{report.added} added, {report.skipped} skipped")
    if report.duplicates:
        print("Duplicates:")
        for duplicate in report.duplicates:
            print(f"  {duplicate.name} (existing id {duplicate.existing_id})")


if __name__ == "__main__":
    main()
