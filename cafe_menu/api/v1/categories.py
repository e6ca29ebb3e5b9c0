"""
Category routes: public listing, admin create/delete.
"""

from fastapi import APIRouter, Depends

from ..deps import get_catalog_service
from ...core.security import require_admin
from ...models.admin import AdminIdentity
from ...schemas.category import CategoryCreateRequest, CategoryListResponse, CategoryResponse
from ...schemas.common import SuccessResponse
from ...services.catalog_service import CatalogService

router = APIRouter()


@router.get("", response_model=CategoryListResponse)
def list_categories(catalog: CatalogService = Depends(get_catalog_service)):
    """Categories in creation order, each with its item count"""
    return CategoryListResponse(categories=catalog.list_categories())


@router.post("", response_model=CategoryResponse, status_code=201)
def create_category(
    req: CategoryCreateRequest,
    admin: AdminIdentity = Depends(require_admin),
    catalog: CatalogService = Depends(get_catalog_service),
):
    return CategoryResponse(category=catalog.create_category(req, admin))


@router.delete("/{category_id}", response_model=SuccessResponse)
def delete_category(
    category_id: int,
    admin: AdminIdentity = Depends(require_admin),
    catalog: CatalogService = Depends(get_catalog_service),
):
    """Delete an empty category; 409 while it still owns items"""
    catalog.delete_category(category_id, admin)
    return SuccessResponse()
