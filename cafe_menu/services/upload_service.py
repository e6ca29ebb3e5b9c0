"""
Image upload storage.
Stores uploaded menu images on local disk; the app serves them under the
media URL prefix. The stored extension always comes from the accepted image
type, never from the client's filename.
"""

import logging
import secrets
import time
from pathlib import Path
from typing import Optional

from ..config.settings import Settings
from ..core.exceptions import PayloadTooLargeError, ValidationError

logger = logging.getLogger(__name__)

NOT_AN_IMAGE_MESSAGE = "فقط فایل تصویری مجاز است"

# accepted content type -> stored extension
IMAGE_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}


def _matches_signature(content_type: str, data: bytes) -> bool:
    """Leading bytes agree with the declared image type"""
    if content_type == "image/jpeg":
        return data.startswith(b"\xff\xd8\xff")
    if content_type == "image/png":
        return data.startswith(b"\x89PNG\r\n\x1a\n")
    if content_type == "image/gif":
        return data.startswith((b"GIF87a", b"GIF89a"))
    if content_type == "image/webp":
        return data[:4] == b"RIFF" and data[8:12] == b"WEBP"
    return False


class ImageStorage:
    """Local-disk store for menu images"""

    SUBDIR = "menu"

    def __init__(self, settings: Settings):
        self.root = Path(settings.upload_dir)
        self.url_prefix = settings.media_url_prefix.rstrip("/")
        self.max_bytes = settings.max_upload_bytes

    def validate(self, filename: Optional[str], content_type: Optional[str], data: bytes) -> str:
        """Normalized content type of an acceptable image"""
        if not filename or not data:
            raise ValidationError("فایل ارسال نشده است")

        content_type = (content_type or "").split(";")[0].strip().lower()
        if content_type not in IMAGE_EXTENSIONS:
            raise ValidationError(NOT_AN_IMAGE_MESSAGE, error_code="UNSUPPORTED_MEDIA_TYPE")
        if len(data) > self.max_bytes:
            raise PayloadTooLargeError("حجم فایل باید کمتر از ۵ مگابایت باشد")
        if not _matches_signature(content_type, data):
            raise ValidationError(NOT_AN_IMAGE_MESSAGE, error_code="UNSUPPORTED_MEDIA_TYPE")
        return content_type

    def save(self, filename: Optional[str], content_type: Optional[str], data: bytes) -> str:
        """Validate and store one image, returning its public URL"""
        content_type = self.validate(filename, content_type, data)

        name = f"{int(time.time() * 1000)}-{secrets.token_hex(6)}.{IMAGE_EXTENSIONS[content_type]}"

        target_dir = self.root / self.SUBDIR
        target_dir.mkdir(parents=True, exist_ok=True)
        (target_dir / name).write_bytes(data)

        logger.info("Stored upload %s (%d bytes)", name, len(data))
        return f"{self.url_prefix}/{self.SUBDIR}/{name}"
