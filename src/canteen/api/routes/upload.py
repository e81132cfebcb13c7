import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from canteen.api.files import read_upload
from canteen.config import settings
from canteen.schemas.upload import UploadRead
from canteen.services.storage import ImageStorage, StorageError, get_image_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/upload", tags=["upload"])


@router.post("", response_model=UploadRead)
async def upload_image(
    image: Optional[UploadFile] = File(None),
    file: Optional[UploadFile] = File(None),
    storage: ImageStorage = Depends(get_image_storage),
):
    """
    Загрузка картинки блюда. Принимается поле "image" или "file".
    """
    upload = image or file
    if upload is None:
        raise HTTPException(status_code=400, detail='No file uploaded. Use either "image" or "file".')

    data = await read_upload(upload, settings.ITEM_IMAGE_MAX_BYTES)
    try:
        result = await storage.upload(data, settings.ITEM_IMAGE_FOLDER, filename=upload.filename or "image")
    except StorageError as e:
        logger.error("Upload error: %s", e)
        raise HTTPException(status_code=500, detail=f"Upload failed: {e}")

    return {"url": result.url, "public_id": result.public_id, "raw": result.raw}
