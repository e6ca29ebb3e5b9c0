"""
Catalog service tests, below the HTTP layer
"""

import threading

import pytest

from cafe_menu.core.exceptions import CategoryNotEmptyError, ConflictError, NotFoundError, ValidationError
from cafe_menu.schemas.category import CategoryCreateRequest
from cafe_menu.schemas.menu import MenuItemCreateRequest, MenuItemUpdateRequest


def _item(**overrides):
    data = {
        "persian_name": "لاته",
        "category_name": "Hot Drinks",
        "price_options": [{"label": "Single", "price": 80000}],
    }
    data.update(overrides)
    return MenuItemCreateRequest(**data)


class TestCategories:

    def test_category_name_is_unique(self, catalog, admin_identity):
        catalog.create_category(CategoryCreateRequest(name="Tea"), admin_identity)
        with pytest.raises(ConflictError):
            catalog.create_category(CategoryCreateRequest(name="Tea"), admin_identity)
        assert len(catalog.list_categories()) == 1

    def test_delete_unknown(self, catalog, admin_identity):
        with pytest.raises(NotFoundError):
            catalog.delete_category(42, admin_identity)

    def test_delete_non_empty(self, catalog, admin_identity):
        item = catalog.create_item(_item(), admin_identity)

        with pytest.raises(CategoryNotEmptyError) as exc_info:
            catalog.delete_category(item.category_id, admin_identity)

        assert exc_info.value.details == {"item_count": 1}
        assert catalog.get_item(item.id) is not None

    def test_concurrent_create_and_delete_never_orphans_items(self, catalog, admin_identity):
        """Whichever runs first, an item never points at a deleted category"""
        category = catalog.create_category(CategoryCreateRequest(name="Tea"), admin_identity)
        errors = []

        def add_item():
            try:
                catalog.create_item(_item(category_name=None, category_id=category.id), admin_identity)
            except ValidationError as e:
                errors.append(e)

        def delete_category():
            try:
                catalog.delete_category(category.id, admin_identity)
            except CategoryNotEmptyError as e:
                errors.append(e)

        threads = [threading.Thread(target=add_item), threading.Thread(target=delete_category)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(errors) == 1
        menu = catalog.list_menu(include_unavailable=True)
        category_ids = {c.id for c in menu}
        for c in menu:
            for i in c.items:
                assert i.category_id in category_ids
        if category.id not in category_ids:
            assert all(not c.items for c in menu)


class TestItems:

    def test_category_name_reuses_existing(self, catalog, admin_identity):
        first = catalog.create_item(_item(), admin_identity)
        second = catalog.create_item(_item(persian_name="موکا"), admin_identity)

        assert first.category_id == second.category_id
        assert [c.name for c in catalog.list_categories()] == ["Hot Drinks"]

    def test_category_image_on_create_by_name(self, catalog, admin_identity):
        item = catalog.create_item(_item(), admin_identity)
        update = MenuItemUpdateRequest(category_name="Iced", category_image_url="https://x.example/iced.jpg")

        moved = catalog.update_item(item.id, update, admin_identity)

        categories = {c.id: c for c in catalog.list_categories()}
        assert categories[moved.category_id].name == "Iced"
        assert categories[moved.category_id].image_url == "https://x.example/iced.jpg"

    def test_update_without_changes_keeps_item(self, catalog, admin_identity):
        item = catalog.create_item(_item(), admin_identity)
        assert catalog.update_item(item.id, MenuItemUpdateRequest(), admin_identity) == item

    def test_option_order_is_preserved(self, catalog, admin_identity):
        item = catalog.create_item(_item(price_options=[
            {"label": "Small", "price": 1},
            {"label": "Medium", "price": 2},
            {"label": "Large", "price": 3},
        ]), admin_identity)
        assert [o.label for o in item.options] == ["Small", "Medium", "Large"]

    def test_get_missing_item(self, catalog):
        assert catalog.get_item(123) is None
