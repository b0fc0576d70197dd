import argparse
import sys
from pathlib import Path

# Ensure repo root is on sys.path when running this script directly.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from sqlalchemy import delete

from app.core.logging import setup_logging
from app.database import SessionLocal, init_db
from app.models.product import Product
from app.services.seed_service import seed_sample_products


def parse_args():
    parser = argparse.ArgumentParser(description="Seed sample products.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Delete every product (and its history) before seeding.",
    )
    return parser.parse_args()


def main():
    setup_logging()
    args = parse_args()

    init_db()

    db = SessionLocal()
    try:
        if args.reset:
            db.execute(delete(Product))
            db.commit()
        created = seed_sample_products(db)
    finally:
        db.close()

    if created:
        print(f"Seed data created: {created} products.")
    else:
        print("Seed skipped: sample products already exist.")


if __name__ == "__main__":
    main()
