"""
Menu catalog data models: categories, items and price options.
"""

from pydantic import Field
from typing import List, Optional

from .base import BaseEntity, TimestampMixin


class MenuItemOption(BaseEntity):
    """One labeled price tier of a menu item"""
    menu_item_id: int = Field(..., description="Owning menu item")
    label: str = Field(..., description="Tier label, e.g. Single / Double")
    price: int = Field(..., ge=0, description="Price in the smallest currency unit")


class MenuItem(BaseEntity, TimestampMixin):
    persian_name: str = Field(..., description="Display name in Persian")
    english_name: Optional[str] = Field(None, description="Display name in English")
    description: Optional[str] = Field(None, description="Description")
    image_url: Optional[str] = Field(None, description="Image URL")
    is_available: bool = Field(True, description="Visible on the public menu")
    category_id: Optional[int] = Field(None, description="Owning category")
    options: List[MenuItemOption] = Field(default_factory=list, description="Price options")


class Category(BaseEntity, TimestampMixin):
    name: str = Field(..., description="Unique category name")
    description: Optional[str] = Field(None, description="Description")
    image_url: Optional[str] = Field(None, description="Image URL")


class CategorySummary(Category):
    """Category with the number of items it owns"""
    item_count: int = Field(0, description="Number of items in the category")


class MenuCategory(Category):
    """Category with its nested items, as shown on the menu"""
    items: List[MenuItem] = Field(default_factory=list, description="Items ordered by creation time")
