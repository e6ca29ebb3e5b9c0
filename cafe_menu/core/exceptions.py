"""
Application exception types.

Each error carries a localized, user-facing message plus a stable error code;
``core.error_handler`` maps the code to an HTTP status.
"""

from typing import Any, Dict, Optional


class BaseApplicationError(Exception):
    """Base class for every error the API reports to clients"""

    default_code = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code or self.default_code
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(BaseApplicationError):
    """Required process configuration is missing or invalid"""
    default_code = "CONFIGURATION_ERROR"


class DatabaseError(BaseApplicationError):
    """Unexpected storage failure"""
    default_code = "DATABASE_ERROR"


class ValidationError(BaseApplicationError):
    """Malformed or missing input"""
    default_code = "VALIDATION_ERROR"


class AuthenticationError(BaseApplicationError):
    """Missing, invalid or expired credentials"""
    default_code = "AUTHENTICATION_REQUIRED"


class NotFoundError(BaseApplicationError):
    """Unknown resource id"""
    default_code = "RESOURCE_NOT_FOUND"


class ConflictError(BaseApplicationError):
    """Uniqueness or referential-integrity violation"""
    default_code = "DUPLICATE_RESOURCE"


class CategoryNotEmptyError(ConflictError):
    default_code = "CATEGORY_NOT_EMPTY"


class PayloadTooLargeError(BaseApplicationError):
    default_code = "PAYLOAD_TOO_LARGE"


class ServiceUnavailableError(BaseApplicationError):
    """An external dependency is misconfigured or failing"""
    default_code = "SERVICE_UNAVAILABLE"
