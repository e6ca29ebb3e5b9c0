"""
Business logic services.
"""

from .auth_service import AuthService
from .catalog_service import CatalogService
from .assistant_service import AssistantService, GeminiClient
from .upload_service import ImageStorage

__all__ = [
    "AuthService",
    "CatalogService",
    "AssistantService",
    "GeminiClient",
    "ImageStorage",
]
