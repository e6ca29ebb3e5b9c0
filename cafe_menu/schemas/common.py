from typing import Annotated, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, BeforeValidator, Field, StringConstraints

RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def blank_to_none(value):
    """Trim strings and map empty strings to None"""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def validate_image_url(value):
    """Accept absolute http(s) URLs and site-relative paths of stored uploads"""
    value = blank_to_none(value)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError("آدرس تصویر معتبر نیست.")
    if value.startswith("/") and not value.startswith("//"):
        return value
    parsed = urlparse(value)
    if parsed.scheme in ("http", "https") and parsed.netloc:
        return value
    raise ValueError("آدرس تصویر معتبر نیست.")


OptionalText = Annotated[Optional[str], BeforeValidator(blank_to_none)]
ImageUrl = Annotated[Optional[str], BeforeValidator(validate_image_url)]


class SuccessResponse(BaseModel):
    success: bool = Field(True, description="Operation succeeded")


class UploadResponse(BaseModel):
    url: str = Field(description="Public URL of the stored image")
