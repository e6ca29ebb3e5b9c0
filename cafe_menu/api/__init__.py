"""
API routes and endpoints.
"""

from fastapi import APIRouter
from .v1 import assistant, auth, categories, menu, upload

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/admin", tags=["auth"])
api_router.include_router(categories.router, prefix="/categories", tags=["categories"])
# /menu and /admin/menu
api_router.include_router(menu.router, prefix="", tags=["menu"])
api_router.include_router(upload.router, prefix="/upload", tags=["upload"])
api_router.include_router(assistant.router, prefix="/ai", tags=["assistant"])
