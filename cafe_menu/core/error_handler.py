"""
Uniform error responses.

Every error leaves the API as ``{"error": <localized message>, "error_code": ...}``
with an HTTP status looked up from the error code. Unknown exceptions are
logged and recorded, and reach the client only as a generic message.
"""

import logging
import traceback
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .exceptions import BaseApplicationError

logger = logging.getLogger(__name__)

INVALID_INPUT_MESSAGE = "ورودی نامعتبر است."
INTERNAL_ERROR_MESSAGE = "خطای داخلی سرور رخ داد."


class ErrorResponse:
    """Error response body"""

    def __init__(self, error_code: str, message: str,
                 details: Optional[Dict[str, Any]] = None,
                 http_status: int = 400):
        self.error_code = error_code
        self.message = message
        self.details = details or {}
        self.http_status = http_status

    def to_dict(self) -> Dict[str, Any]:
        body = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            body["details"] = self.details
        return body

    def to_json_response(self) -> JSONResponse:
        return JSONResponse(
            status_code=self.http_status,
            content=self.to_dict()
        )


class ErrorHandler:
    """Maps exceptions to error responses"""

    ERROR_CODE_STATUS_MAP = {
        "VALIDATION_ERROR": 400,
        "AUTHENTICATION_REQUIRED": 401,
        "INVALID_CREDENTIALS": 401,
        "RESOURCE_NOT_FOUND": 404,
        "DUPLICATE_RESOURCE": 409,
        "CATEGORY_NOT_EMPTY": 409,
        "PAYLOAD_TOO_LARGE": 413,
        "SERVICE_UNAVAILABLE": 500,
        "CONFIGURATION_ERROR": 500,
        "DATABASE_ERROR": 500,
        "INTERNAL_ERROR": 500,

        "UNKNOWN_CATEGORY": 400,
        "UNSUPPORTED_MEDIA_TYPE": 400,
        "ITEM_NOT_FOUND": 404,
        "CATEGORY_DUPLICATE": 409,
    }

    @classmethod
    def handle_application_error(cls, error: BaseApplicationError) -> ErrorResponse:
        http_status = cls.ERROR_CODE_STATUS_MAP.get(error.error_code, 400)
        if http_status >= 500:
            logger.error("%s: %s", error.error_code, error.message)
            # storage/config internals stay in the log
            message = error.message if error.error_code == "SERVICE_UNAVAILABLE" else INTERNAL_ERROR_MESSAGE
            return ErrorResponse(error_code=error.error_code, message=message, http_status=http_status)

        return ErrorResponse(
            error_code=error.error_code,
            message=error.message,
            details=error.details,
            http_status=http_status
        )

    @classmethod
    def handle_http_exception(cls, error: StarletteHTTPException) -> ErrorResponse:
        return ErrorResponse(
            error_code="HTTP_ERROR",
            message=str(error.detail),
            http_status=error.status_code
        )

    @classmethod
    def handle_validation_error(cls, error: RequestValidationError) -> ErrorResponse:
        """Request shape errors are 400s with field locations"""
        errors = [
            {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
            for err in error.errors()
        ]
        return ErrorResponse(
            error_code="VALIDATION_ERROR",
            message=INVALID_INPUT_MESSAGE,
            details={"validation_errors": errors},
            http_status=400
        )

    @classmethod
    def handle_unknown_error(cls, request: Request, error: Exception) -> ErrorResponse:
        error_details = {
            "type": type(error).__name__,
            "message": str(error),
            "path": request.url.path,
            "traceback": traceback.format_exception(type(error), error, error.__traceback__),
        }
        logger.error("Unhandled error on %s", request.url.path, exc_info=error)
        cls._log_system_error(request, error_details)

        return ErrorResponse(
            error_code="INTERNAL_ERROR",
            message=INTERNAL_ERROR_MESSAGE,
            http_status=500
        )

    @classmethod
    def _log_system_error(cls, request: Request, error_details: Dict[str, Any]):
        """Record the error in the operation log table"""
        db = getattr(request.app.state, "db", None)
        if db is None:
            return
        try:
            with db.cursor() as conn:
                db.log_operation(conn, None, "system_error", error_details)
        except Exception:
            logger.exception("Failed to record system error")


async def application_error_handler(request: Request, exc: BaseApplicationError) -> JSONResponse:
    return ErrorHandler.handle_application_error(exc).to_json_response()


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return ErrorHandler.handle_http_exception(exc).to_json_response()


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return ErrorHandler.handle_validation_error(exc).to_json_response()


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    return ErrorHandler.handle_unknown_error(request, exc).to_json_response()
