"""
Menu catalog service.
Categories, menu items and their price options, with the catalog invariants:

- category names are unique; naming a missing category creates it
- a category that still owns items cannot be deleted
- an item's price options are replaced as a whole, never patched
- unavailable items are hidden from the public menu only
"""

import logging
from typing import Dict, List, Optional

from ..core.database import DatabaseManager
from ..core.exceptions import CategoryNotEmptyError, ConflictError, NotFoundError, ValidationError
from ..models.admin import AdminIdentity
from ..models.menu import Category, CategorySummary, MenuCategory, MenuItem, MenuItemOption
from ..schemas.category import CategoryCreateRequest
from ..schemas.menu import MenuItemCreateRequest, MenuItemUpdateRequest, PriceOptionSchema

logger = logging.getLogger(__name__)

CATEGORY_COLUMNS = "id, name, description, image_url, created_at"
ITEM_COLUMNS = (
    "id, persian_name, english_name, description, image_url, "
    "is_available, category_id, created_at"
)
# columns a partial item update may touch
UPDATABLE_ITEM_COLUMNS = (
    "persian_name", "english_name", "description", "image_url", "is_available", "category_id"
)


class CatalogService:
    """Menu catalog operations"""

    def __init__(self, db: DatabaseManager):
        self.db = db

    # Categories

    def list_categories(self) -> List[CategorySummary]:
        with self.db.cursor() as conn:
            rows = self.db.fetch_dicts(
                conn,
                """
                SELECT c.id, c.name, c.description, c.image_url, c.created_at,
                       COUNT(i.id) AS item_count
                FROM categories c
                LEFT JOIN menu_items i ON i.category_id = c.id
                GROUP BY c.id, c.name, c.description, c.image_url, c.created_at
                ORDER BY c.created_at, c.id
                """
            )
        return [CategorySummary(**row) for row in rows]

    def create_category(self, data: CategoryCreateRequest, actor: AdminIdentity) -> Category:
        with self.db.transaction() as conn:
            if self._category_by_name(conn, data.name):
                raise ConflictError("دسته‌بندی با این نام وجود دارد.", error_code="CATEGORY_DUPLICATE")

            row = self.db.fetch_dict(
                conn,
                f"INSERT INTO categories (name, description, image_url) VALUES (?, ?, ?) "
                f"RETURNING {CATEGORY_COLUMNS}",
                [data.name, data.description, data.image_url]
            )
            self.db.log_operation(conn, actor.admin_id, "category_create",
                                  {"category_id": row["id"], "name": data.name})

        logger.info("Category %s created by admin %s", row["id"], actor.admin_id)
        return Category(**row)

    def delete_category(self, category_id: int, actor: AdminIdentity):
        with self.db.transaction() as conn:
            if not self._get_category(conn, category_id):
                raise NotFoundError("دسته‌بندی یافت نشد.")

            item_count = conn.execute(
                "SELECT COUNT(*) FROM menu_items WHERE category_id = ?", [category_id]
            ).fetchone()[0]
            if item_count > 0:
                raise CategoryNotEmptyError(
                    "برای حذف این دسته‌بندی ابتدا محصولات مرتبط را حذف یا منتقل کنید.",
                    details={"item_count": item_count}
                )

            # conditional delete: never removes a category that owns items
            conn.execute(
                """
                DELETE FROM categories
                WHERE id = ? AND NOT EXISTS (SELECT 1 FROM menu_items WHERE category_id = ?)
                """,
                [category_id, category_id]
            )
            self.db.log_operation(conn, actor.admin_id, "category_delete", {"category_id": category_id})

        logger.info("Category %s deleted by admin %s", category_id, actor.admin_id)

    # Menu

    def list_menu(self, include_unavailable: bool = False) -> List[MenuCategory]:
        """Categories with nested items and options, in creation order"""
        availability = "" if include_unavailable else "AND i.is_available"
        with self.db.cursor() as conn:
            categories = self.db.fetch_dicts(
                conn, f"SELECT {CATEGORY_COLUMNS} FROM categories ORDER BY created_at, id"
            )
            items = self.db.fetch_dicts(
                conn,
                f"""
                SELECT {ITEM_COLUMNS}
                FROM menu_items i
                WHERE i.category_id IS NOT NULL {availability}
                ORDER BY i.created_at, i.id
                """
            )
            options = self.db.fetch_dicts(
                conn,
                f"""
                SELECT o.id, o.menu_item_id, o.label, o.price
                FROM menu_item_options o
                JOIN menu_items i ON i.id = o.menu_item_id
                WHERE TRUE {availability}
                ORDER BY o.id
                """
            )

        options_by_item: Dict[int, List[MenuItemOption]] = {}
        for row in options:
            options_by_item.setdefault(row["menu_item_id"], []).append(MenuItemOption(**row))

        items_by_category: Dict[int, List[MenuItem]] = {}
        for row in items:
            item = MenuItem(**row, options=options_by_item.get(row["id"], []))
            items_by_category.setdefault(row["category_id"], []).append(item)

        return [
            MenuCategory(**row, items=items_by_category.get(row["id"], []))
            for row in categories
        ]

    def get_item(self, item_id: int) -> Optional[MenuItem]:
        with self.db.cursor() as conn:
            return self._load_item(conn, item_id)

    def create_item(self, data: MenuItemCreateRequest, actor: AdminIdentity) -> MenuItem:
        with self.db.transaction() as conn:
            category_id = self._resolve_category(conn, data.category_id, data.category_name)

            item_id = conn.execute(
                """
                INSERT INTO menu_items
                    (persian_name, english_name, description, image_url, is_available, category_id)
                VALUES (?, ?, ?, ?, ?, ?)
                RETURNING id
                """,
                [data.persian_name, data.english_name, data.description,
                 data.image_url, data.is_available, category_id]
            ).fetchone()[0]
            self._insert_options(conn, item_id, data.price_options)

            self.db.log_operation(conn, actor.admin_id, "item_create", {
                "item_id": item_id,
                "category_id": category_id,
                "option_count": len(data.price_options),
            })
            item = self._load_item(conn, item_id)

        logger.info("Menu item %s created by admin %s", item_id, actor.admin_id)
        return item

    def update_item(self, item_id: int, data: MenuItemUpdateRequest, actor: AdminIdentity) -> MenuItem:
        with self.db.transaction() as conn:
            current = self._load_item(conn, item_id)
            if current is None:
                raise NotFoundError("محصول یافت نشد.", error_code="ITEM_NOT_FOUND")

            changes = data.changes()
            if data.category_id is not None or data.category_name is not None:
                changes["category_id"] = self._resolve_category(
                    conn, data.category_id, data.category_name, data.category_image_url
                )
            elif data.category_image_url and current.category_id is not None:
                self._set_category_image(conn, current.category_id, data.category_image_url)

            if changes:
                columns = [c for c in UPDATABLE_ITEM_COLUMNS if c in changes]
                assignments = ", ".join(f"{c} = ?" for c in columns)
                conn.execute(
                    f"UPDATE menu_items SET {assignments} WHERE id = ?",
                    [changes[c] for c in columns] + [item_id]
                )

            if data.price_options is not None:
                conn.execute("DELETE FROM menu_item_options WHERE menu_item_id = ?", [item_id])
                self._insert_options(conn, item_id, data.price_options)

            self.db.log_operation(conn, actor.admin_id, "item_update", {
                "item_id": item_id,
                "fields": sorted(changes),
                "options_replaced": data.price_options is not None,
            })
            item = self._load_item(conn, item_id)

        logger.info("Menu item %s updated by admin %s", item_id, actor.admin_id)
        return item

    def delete_item(self, item_id: int, actor: AdminIdentity):
        with self.db.transaction() as conn:
            if self._load_item(conn, item_id) is None:
                raise NotFoundError("محصول یافت نشد.", error_code="ITEM_NOT_FOUND")

            conn.execute("DELETE FROM menu_item_options WHERE menu_item_id = ?", [item_id])
            conn.execute("DELETE FROM menu_items WHERE id = ?", [item_id])
            self.db.log_operation(conn, actor.admin_id, "item_delete", {"item_id": item_id})

        logger.info("Menu item %s deleted by admin %s", item_id, actor.admin_id)

    # Helpers, called inside an open transaction or cursor

    def _get_category(self, conn, category_id: int) -> Optional[dict]:
        return self.db.fetch_dict(
            conn, f"SELECT {CATEGORY_COLUMNS} FROM categories WHERE id = ?", [category_id]
        )

    def _category_by_name(self, conn, name: str) -> Optional[dict]:
        return self.db.fetch_dict(
            conn, f"SELECT {CATEGORY_COLUMNS} FROM categories WHERE name = ?", [name]
        )

    def _set_category_image(self, conn, category_id: int, image_url: str):
        conn.execute("UPDATE categories SET image_url = ? WHERE id = ?", [image_url, category_id])

    def _resolve_category(self, conn, category_id: Optional[int], category_name: Optional[str],
                          image_url: Optional[str] = None) -> Optional[int]:
        """Id of the referenced category; a name that does not exist yet is created"""
        if category_id is not None:
            if not self._get_category(conn, category_id):
                raise ValidationError("دسته‌بندی انتخاب‌شده وجود ندارد.", error_code="UNKNOWN_CATEGORY")
            if image_url:
                self._set_category_image(conn, category_id, image_url)
            return category_id

        if category_name is None:
            return None

        existing = self._category_by_name(conn, category_name)
        if existing:
            if image_url:
                self._set_category_image(conn, existing["id"], image_url)
            return existing["id"]

        return conn.execute(
            "INSERT INTO categories (name, image_url) VALUES (?, ?) RETURNING id",
            [category_name, image_url]
        ).fetchone()[0]

    def _insert_options(self, conn, item_id: int, options: List[PriceOptionSchema]):
        for option in options:
            conn.execute(
                "INSERT INTO menu_item_options (menu_item_id, label, price) VALUES (?, ?, ?)",
                [item_id, option.label, option.price]
            )

    def _load_item(self, conn, item_id: int) -> Optional[MenuItem]:
        row = self.db.fetch_dict(
            conn, f"SELECT {ITEM_COLUMNS} FROM menu_items WHERE id = ?", [item_id]
        )
        if row is None:
            return None
        options = self.db.fetch_dicts(
            conn,
            "SELECT id, menu_item_id, label, price FROM menu_item_options "
            "WHERE menu_item_id = ? ORDER BY id",
            [item_id]
        )
        return MenuItem(**row, options=[MenuItemOption(**o) for o in options])
