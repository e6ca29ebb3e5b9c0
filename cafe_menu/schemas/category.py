"""
Category request/response schemas
"""

from pydantic import Field
from typing import List

from .common import ImageUrl, OptionalText, RequiredText
from ..models.base import CamelModel
from ..models.menu import Category, CategorySummary


class CategoryCreateRequest(CamelModel):
    name: RequiredText = Field(description="Unique category name")
    description: OptionalText = Field(None, description="Description")
    image_url: ImageUrl = Field(None, description="Image URL")


class CategoryResponse(CamelModel):
    category: Category


class CategoryListResponse(CamelModel):
    categories: List[CategorySummary]
