"""
Menu routes.

- GET  /menu           public menu, available items only
- GET  /admin/menu     admin menu, unavailable items included
- POST /menu           create item (admin)
- PUT|PATCH /menu/{id} partial update (admin)
- DELETE /menu/{id}    delete item and its price options (admin)
"""

from fastapi import APIRouter, Depends

from ..deps import get_catalog_service
from ...core.security import require_admin
from ...models.admin import AdminIdentity
from ...schemas.common import SuccessResponse
from ...schemas.menu import MenuItemCreateRequest, MenuItemResponse, MenuItemUpdateRequest, MenuResponse
from ...services.catalog_service import CatalogService

router = APIRouter()


@router.get("/menu", response_model=MenuResponse)
def get_menu(catalog: CatalogService = Depends(get_catalog_service)):
    return MenuResponse(categories=catalog.list_menu(include_unavailable=False))


@router.get("/admin/menu", response_model=MenuResponse)
def get_admin_menu(
    admin: AdminIdentity = Depends(require_admin),
    catalog: CatalogService = Depends(get_catalog_service),
):
    return MenuResponse(categories=catalog.list_menu(include_unavailable=True))


@router.post("/menu", response_model=MenuItemResponse, status_code=201)
def create_menu_item(
    req: MenuItemCreateRequest,
    admin: AdminIdentity = Depends(require_admin),
    catalog: CatalogService = Depends(get_catalog_service),
):
    """
    Create a menu item.

    The category is named by exactly one of ``categoryId`` / ``categoryName``;
    a new name creates the category. At least one price option is required.
    """
    return MenuItemResponse(item=catalog.create_item(req, admin))


@router.api_route("/menu/{item_id}", methods=["PUT", "PATCH"], response_model=MenuItemResponse)
def update_menu_item(
    item_id: int,
    req: MenuItemUpdateRequest,
    admin: AdminIdentity = Depends(require_admin),
    catalog: CatalogService = Depends(get_catalog_service),
):
    """Update only the given fields; ``priceOptions`` replaces the whole option set"""
    return MenuItemResponse(item=catalog.update_item(item_id, req, admin))


@router.delete("/menu/{item_id}", response_model=SuccessResponse)
def delete_menu_item(
    item_id: int,
    admin: AdminIdentity = Depends(require_admin),
    catalog: CatalogService = Depends(get_catalog_service),
):
    catalog.delete_item(item_id, admin)
    return SuccessResponse()
