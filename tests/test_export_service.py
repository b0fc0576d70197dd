import unittest

from sqlalchemy.orm import sessionmaker

from app.database import build_engine, init_db
from app.models.product import Product
from app.services.export_service import build_csv, export_products


class ExportServiceTest(unittest.TestCase):
    def setUp(self):
        self.engine = build_engine("sqlite://")
        init_db(self.engine)
        self.db = sessionmaker(bind=self.engine, expire_on_commit=False)()

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def test_export_quotes_text_and_leaves_stock_bare(self):
        self.db.add(
            Product(
                name="Mouse",
                unit="piece",
                category="Electronics",
                brand="Logitech",
                stock=50,
                status="In Stock",
                image="https://via.placeholder.com/50",
            )
        )
        self.db.add(
            Product(
                name="Keyboard",
                unit="piece",
                category="Electronics",
                brand="Corsair",
                stock=0,
                status="Out of Stock",
                image="https://via.placeholder.com/50",
            )
        )
        self.db.commit()

        result = export_products(self.db)

        self.assertEqual(result.media_type, "text/csv")
        self.assertEqual(result.filename, "products.csv")
        lines = result.content.split("\n")
        self.assertEqual(lines[0], "name,unit,category,brand,stock,status,image")
        self.assertEqual(
            sorted(lines[1:]),
            [
                '"Keyboard","piece","Electronics","Corsair",0,"Out of Stock","https://via.placeholder.com/50"',
                '"Mouse","piece","Electronics","Logitech",50,"In Stock","https://via.placeholder.com/50"',
            ],
        )
        self.assertFalse(result.content.endswith("\n"))

    def test_embedded_quotes_are_not_escaped(self):
        content = build_csv([('27" Monitor', "piece", "IT", "LG", 1, "In Stock", "")])
        self.assertEqual(
            content.split("\n")[1],
            '"27" Monitor","piece","IT","LG",1,"In Stock",""',
        )

    def test_empty_store_exports_header_only(self):
        self.assertEqual(
            export_products(self.db).content,
            "name,unit,category,brand,stock,status,image\n",
        )


if __name__ == "__main__":
    unittest.main()
