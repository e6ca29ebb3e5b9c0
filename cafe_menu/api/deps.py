"""
FastAPI dependencies handing out the services built in ``create_app``.
"""

from fastapi import Request

from ..services import AssistantService, AuthService, CatalogService, ImageStorage


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_catalog_service(request: Request) -> CatalogService:
    return request.app.state.catalog_service


def get_assistant_service(request: Request) -> AssistantService:
    return request.app.state.assistant_service


def get_image_storage(request: Request) -> ImageStorage:
    return request.app.state.image_storage
