import unittest

from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.config import get_settings
from app.database import build_engine, get_db, init_db
from app.main import app

PREFIX = get_settings().API_PREFIX


def product_json(**overrides):
    fields = {
        "name": "Laptop",
        "unit": "piece",
        "category": "Electronics",
        "brand": "Dell",
        "stock": 15,
        "status": "In Stock",
    }
    fields.update(overrides)
    return fields


class ProductsApiTest(unittest.TestCase):
    def setUp(self):
        self.engine = build_engine("sqlite://")
        init_db(self.engine)
        Session = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)

        def override_get_db():
            db = Session()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()
        self.engine.dispose()

    def create(self, **overrides):
        response = self.client.post(f"{PREFIX}/products", json=product_json(**overrides))
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()["data"]["id"]

    def test_create_and_get(self):
        product_id = self.create()

        response = self.client.get(f"{PREFIX}/products/{product_id}")

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["data"]["name"], "Laptop")
        self.assertEqual(body["data"]["image"], "https://via.placeholder.com/50")

    def test_list_returns_newest_first(self):
        first = self.create(name="A")
        second = self.create(name="B")

        body = self.client.get(f"{PREFIX}/products").json()

        self.assertEqual([item["id"] for item in body["data"]], [second, first])

    def test_create_duplicate_name_is_rejected(self):
        self.create()

        response = self.client.post(f"{PREFIX}/products", json=product_json())

        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json(),
            {"success": False, "error": "Product name already exists"},
        )

    def test_create_validates_fields(self):
        response = self.client.post(
            f"{PREFIX}/products",
            json=product_json(name="  ", stock=-1, status="Maybe"),
        )

        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertFalse(body["success"])
        fields = {error["field"] for error in body["errors"]}
        self.assertTrue({"name", "stock", "status"} <= fields)

    def test_get_unknown_product_is_404(self):
        response = self.client.get(f"{PREFIX}/products/999")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"success": False, "error": "Product not found"})

    def test_non_numeric_id_is_product_not_found(self):
        self.create()
        not_found = {"success": False, "error": "Product not found"}

        responses = [
            self.client.get(f"{PREFIX}/products/abc"),
            self.client.put(f"{PREFIX}/products/abc", json=product_json(name="Other")),
            self.client.delete(f"{PREFIX}/products/abc"),
        ]

        for response in responses:
            self.assertEqual(response.status_code, 404)
            self.assertEqual(response.json(), not_found)
        history = self.client.get(f"{PREFIX}/products/abc/history").json()
        self.assertEqual(history, {"success": True, "data": []})

    def test_search_with_space_matches_multiword_names(self):
        self.create(name="Desk Chair")
        self.create(name="Mouse")

        body = self.client.get(f"{PREFIX}/products/search", params={"name": " "}).json()

        self.assertEqual([item["name"] for item in body["data"]], ["Desk Chair"])

    def test_search(self):
        self.create(name="Gaming Mouse")
        self.create(name="Keyboard")

        found = self.client.get(f"{PREFIX}/products/search", params={"name": "mouse"}).json()
        missing = self.client.get(f"{PREFIX}/products/search", params={"name": "ZZZ"}).json()

        self.assertEqual([item["name"] for item in found["data"]], ["Gaming Mouse"])
        self.assertEqual(missing, {"success": True, "data": []})

    def test_search_without_term_is_400(self):
        response = self.client.get(f"{PREFIX}/products/search")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"success": False, "error": "Search term is required"})

    def test_update_records_history(self):
        product_id = self.create(stock=5)

        response = self.client.put(
            f"{PREFIX}/products/{product_id}",
            json=product_json(stock=0, status="Out of Stock"),
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["stock"], 0)

        self.client.put(
            f"{PREFIX}/products/{product_id}",
            json=product_json(stock=0, status="Out of Stock", category="Archive"),
        )
        history = self.client.get(f"{PREFIX}/products/{product_id}/history").json()

        self.assertEqual(len(history["data"]), 1)
        entry = history["data"][0]
        self.assertEqual((entry["old_quantity"], entry["new_quantity"]), (5, 0))
        self.assertEqual(entry["changed_by"], "admin")
        self.assertEqual(entry["product_id"], product_id)

    def test_update_unknown_product_is_404(self):
        response = self.client.put(f"{PREFIX}/products/999", json=product_json())
        self.assertEqual(response.status_code, 404)

    def test_delete(self):
        product_id = self.create(stock=5)
        self.client.put(f"{PREFIX}/products/{product_id}", json=product_json(stock=1))

        response = self.client.delete(f"{PREFIX}/products/{product_id}")

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["success"])
        self.assertEqual(self.client.get(f"{PREFIX}/products/{product_id}").status_code, 404)
        self.assertEqual(self.client.delete(f"{PREFIX}/products/{product_id}").status_code, 404)
        history = self.client.get(f"{PREFIX}/products/{product_id}/history").json()
        self.assertEqual(history, {"success": True, "data": []})

    def test_import(self):
        self.create(name="Laptop")
        csv_bytes = b"name,stock\nWidget,10\nwidget,20\nlaptop,3\n"

        response = self.client.post(
            f"{PREFIX}/products/import",
            files={"csvFile": ("products.csv", csv_bytes, "text/csv")},
        )

        self.assertEqual(response.status_code, 200, response.text)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["added"], 1)
        self.assertEqual(body["skipped"], 2)
        self.assertEqual([item["name"] for item in body["duplicates"]], ["widget", "laptop"])
        self.assertTrue(all("existingId" in item for item in body["duplicates"]))

    def test_import_without_file_is_400(self):
        response = self.client.post(f"{PREFIX}/products/import", data={"note": "empty"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"success": False, "error": "No file uploaded"})

    def test_export(self):
        self.create(name="Mouse", stock=50)

        response = self.client.get(f"{PREFIX}/products/export")

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.headers["content-type"].startswith("text/csv"))
        self.assertEqual(
            response.headers["content-disposition"],
            'attachment; filename="products.csv"',
        )
        self.assertEqual(
            response.text,
            "name,unit,category,brand,stock,status,image\n"
            '"Mouse","piece","Electronics","Dell",50,"In Stock","https://via.placeholder.com/50"',
        )

    def test_unknown_route_uses_error_envelope(self):
        response = self.client.get(f"{PREFIX}/nothing-here")
        self.assertEqual(response.status_code, 404)
        self.assertFalse(response.json()["success"])

    def test_health(self):
        body = self.client.get("/health").json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(body["database"], "ok")


if __name__ == "__main__":
    unittest.main()
