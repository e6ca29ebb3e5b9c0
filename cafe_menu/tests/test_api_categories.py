"""
Category API tests
"""

from cafe_menu.core.security import UNAUTHORIZED_MESSAGE


def _create_item(client, **overrides):
    body = {
        "persianName": "اسپرسو",
        "categoryName": "Espresso",
        "priceOptions": [{"label": "Single", "price": 50000}],
    }
    body.update(overrides)
    response = client.post("/api/v1/menu", json=body)
    assert response.status_code == 201, response.text
    return response.json()["item"]


class TestCategoryListing:

    def test_empty_catalog(self, client):
        response = client.get("/api/v1/categories")
        assert response.status_code == 200
        assert response.json() == {"categories": []}

    def test_categories_with_item_counts(self, admin_client):
        """Counts include unavailable items; order is creation order"""
        _create_item(admin_client, categoryName="Espresso")
        _create_item(admin_client, categoryName="Espresso", isAvailable=False)
        admin_client.post("/api/v1/categories", json={"name": "Tea"})

        categories = admin_client.get("/api/v1/categories").json()["categories"]

        assert [c["name"] for c in categories] == ["Espresso", "Tea"]
        assert categories[0]["itemCount"] == 2
        assert categories[1]["itemCount"] == 0
        assert "createdAt" in categories[0]


class TestCategoryCreate:

    def test_create_category(self, admin_client):
        response = admin_client.post(
            "/api/v1/categories",
            json={
                "name": "  Espresso  ",
                "description": "Coffee based drinks",
                "imageUrl": "https://cdn.example.com/espresso.jpg",
            }
        )

        assert response.status_code == 201
        category = response.json()["category"]
        assert category["name"] == "Espresso"
        assert category["description"] == "Coffee based drinks"
        assert category["imageUrl"] == "https://cdn.example.com/espresso.jpg"
        assert isinstance(category["id"], int)

    def test_duplicate_name_is_rejected(self, admin_client):
        """A second category with the same name is a conflict and nothing is stored"""
        assert admin_client.post("/api/v1/categories", json={"name": "Espresso"}).status_code == 201

        response = admin_client.post("/api/v1/categories", json={"name": "Espresso"})

        assert response.status_code == 409
        assert response.json()["error_code"] == "CATEGORY_DUPLICATE"
        names = [c["name"] for c in admin_client.get("/api/v1/categories").json()["categories"]]
        assert names == ["Espresso"]

    def test_blank_name_is_rejected(self, admin_client):
        response = admin_client.post("/api/v1/categories", json={"name": "   "})
        assert response.status_code == 400

    def test_invalid_image_url_is_rejected(self, admin_client):
        response = admin_client.post(
            "/api/v1/categories", json={"name": "Tea", "imageUrl": "javascript:alert(1)"}
        )
        assert response.status_code == 400

    def test_create_requires_admin(self, client):
        response = client.post("/api/v1/categories", json={"name": "Espresso"})
        assert response.status_code == 401
        assert response.json()["error"] == UNAUTHORIZED_MESSAGE
        assert response.json()["error_code"] == "AUTHENTICATION_REQUIRED"
        assert client.get("/api/v1/categories").json() == {"categories": []}


class TestCategoryDelete:

    def test_delete_empty_category(self, admin_client):
        category_id = admin_client.post("/api/v1/categories", json={"name": "Tea"}).json()["category"]["id"]

        response = admin_client.delete(f"/api/v1/categories/{category_id}")

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert admin_client.get("/api/v1/categories").json() == {"categories": []}

    def test_delete_category_with_items_is_refused(self, admin_client):
        """The category and its items stay untouched"""
        item = _create_item(admin_client, categoryName="Espresso")
        category_id = item["categoryId"]

        response = admin_client.delete(f"/api/v1/categories/{category_id}")

        assert response.status_code == 409
        body = response.json()
        assert body["error_code"] == "CATEGORY_NOT_EMPTY"
        assert body["details"] == {"item_count": 1}

        menu = admin_client.get("/api/v1/menu").json()["categories"]
        assert len(menu) == 1
        assert menu[0]["id"] == category_id
        assert [i["id"] for i in menu[0]["items"]] == [item["id"]]

    def test_delete_unknown_category(self, admin_client):
        response = admin_client.delete("/api/v1/categories/9999")
        assert response.status_code == 404
        assert response.json()["error_code"] == "RESOURCE_NOT_FOUND"

    def test_delete_with_non_numeric_id(self, admin_client):
        response = admin_client.delete("/api/v1/categories/abc")
        assert response.status_code == 400

    def test_delete_requires_admin(self, client, admin_identity, catalog):
        from cafe_menu.schemas.category import CategoryCreateRequest

        category = catalog.create_category(CategoryCreateRequest(name="Tea"), admin_identity)

        response = client.delete(f"/api/v1/categories/{category.id}")

        assert response.status_code == 401
        assert len(catalog.list_categories()) == 1

    def test_operations_are_logged(self, admin_client, db):
        category_id = admin_client.post("/api/v1/categories", json={"name": "Tea"}).json()["category"]["id"]
        admin_client.delete(f"/api/v1/categories/{category_id}")

        with db.cursor() as conn:
            actions = [
                row["action"] for row in db.fetch_dicts(
                    conn,
                    "SELECT action FROM logs WHERE action LIKE 'category_%' ORDER BY log_id"
                )
            ]
        assert actions == ["category_create", "category_delete"]
