"""
Image upload route (admin only).
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from ..deps import get_image_storage
from ...core.exceptions import ValidationError
from ...core.security import require_admin
from ...models.admin import AdminIdentity
from ...schemas.common import UploadResponse
from ...services.upload_service import ImageStorage

router = APIRouter()


@router.post("", response_model=UploadResponse)
async def upload_image(
    file: Optional[UploadFile] = File(None),
    admin: AdminIdentity = Depends(require_admin),
    storage: ImageStorage = Depends(get_image_storage),
):
    """Store one image of at most 5 MB and return its URL"""
    if file is None:
        raise ValidationError("فایل ارسال نشده است")

    # one byte past the limit is enough to reject
    data = await file.read(storage.max_bytes + 1)
    url = storage.save(file.filename, file.content_type, data)
    return UploadResponse(url=url)
