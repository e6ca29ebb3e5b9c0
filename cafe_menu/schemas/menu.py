"""
Menu item request/response schemas.

Items name their category by exactly one of ``categoryId`` (existing
category) or ``categoryName`` (created on demand). Prices are non-negative
integers in the smallest currency unit.
"""

from pydantic import BeforeValidator, Field, model_validator
from typing import Annotated, List, Optional

from .common import ImageUrl, OptionalText, RequiredText
from ..models.base import CamelModel
from ..models.menu import MenuCategory, MenuItem

BOTH_CATEGORY_REFS_MESSAGE = "categoryId و categoryName را همزمان ارسال نکنید."
MISSING_CATEGORY_MESSAGE = "انتخاب دسته‌بندی الزامی است."
PRICE_TYPE_MESSAGE = "قیمت باید عدد صحیح باشد."


def whole_number(value):
    """JSON numbers with no fractional part; booleans and strings are refused"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(PRICE_TYPE_MESSAGE)
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(PRICE_TYPE_MESSAGE)
        return int(value)
    return value


Price = Annotated[int, BeforeValidator(whole_number)]


class PriceOptionSchema(CamelModel):
    label: RequiredText = Field(description="Tier label")
    price: Price = Field(ge=0, description="Price in the smallest currency unit")


class MenuItemCreateRequest(CamelModel):
    persian_name: RequiredText = Field(description="Display name in Persian")
    english_name: OptionalText = Field(None, description="Display name in English")
    description: OptionalText = Field(None, description="Description")
    image_url: ImageUrl = Field(None, description="Image URL")
    is_available: bool = Field(True, description="Visible on the public menu")
    category_id: Optional[int] = Field(None, gt=0, description="Existing category id")
    category_name: OptionalText = Field(None, description="Category name, created if absent")
    price_options: List[PriceOptionSchema] = Field(min_length=1, description="At least one price option")

    @model_validator(mode="after")
    def check_category_ref(self):
        if self.category_id is not None and self.category_name is not None:
            raise ValueError(BOTH_CATEGORY_REFS_MESSAGE)
        if self.category_id is None and self.category_name is None:
            raise ValueError(MISSING_CATEGORY_MESSAGE)
        return self


class MenuItemUpdateRequest(CamelModel):
    """Partial update: only fields present in the body are changed"""
    persian_name: Optional[RequiredText] = Field(None, description="Display name in Persian")
    english_name: OptionalText = Field(None, description="Display name in English")
    description: OptionalText = Field(None, description="Description")
    image_url: ImageUrl = Field(None, description="Image URL")
    is_available: Optional[bool] = Field(None, description="Visible on the public menu")
    category_id: Optional[int] = Field(None, gt=0, description="Existing category id")
    category_name: OptionalText = Field(None, description="Category name, created if absent")
    category_image_url: ImageUrl = Field(None, description="New image for the target category")
    price_options: Optional[List[PriceOptionSchema]] = Field(
        None, description="Replaces the whole option set; [] removes all options"
    )

    @model_validator(mode="after")
    def check_fields(self):
        for name in ("persian_name", "is_available", "category_id", "price_options"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} نمی‌تواند خالی باشد.")
        if self.category_id is not None and self.category_name is not None:
            raise ValueError(BOTH_CATEGORY_REFS_MESSAGE)
        return self

    def changes(self) -> dict:
        """Item column values present in the request"""
        return self.model_dump(
            include={"persian_name", "english_name", "description", "image_url", "is_available"},
            exclude_unset=True,
        )


class MenuItemResponse(CamelModel):
    item: MenuItem


class MenuResponse(CamelModel):
    categories: List[MenuCategory]
