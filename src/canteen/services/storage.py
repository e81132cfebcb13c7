"""
Хранилище картинок (Cloudinary SDK).

Загрузка: cloudinary.uploader.upload, в ответе secure_url и public_id.
Удаление: cloudinary.uploader.destroy по public_id.
SDK синхронный, поэтому вызовы уходят в поток через asyncio.to_thread.
Повторов нет: любая ошибка провайдера превращается в StorageError.
"""
import asyncio
import io
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import cloudinary.exceptions
import cloudinary.uploader

from canteen.config import settings

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Ошибка провайдера картинок."""


@dataclass
class UploadResult:
    url: str
    public_id: str
    raw: Dict[str, Any] = field(default_factory=dict)


class ImageStorage:
    def __init__(self, cloud_name: str, api_key: str, api_secret: str, timeout: float = 30.0):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    def _options(self, **options) -> Dict[str, Any]:
        return {
            "cloud_name": self.cloud_name,
            "api_key": self.api_key,
            "api_secret": self.api_secret,
            "timeout": self.timeout,
            **options,
        }

    async def _call(self, func, *args, **options) -> Dict[str, Any]:
        if not self.configured:
            raise StorageError("Image storage is not configured")
        try:
            return await asyncio.to_thread(func, *args, **self._options(**options))
        except cloudinary.exceptions.Error as e:
            raise StorageError(str(e) or e.__class__.__name__) from e
        except OSError as e:
            raise StorageError(str(e) or e.__class__.__name__) from e

    async def upload(self, data: bytes, folder: str, filename: str = "upload") -> UploadResult:
        payload = await self._call(
            cloudinary.uploader.upload,
            io.BytesIO(data),
            folder=folder,
            filename=filename,
            resource_type="image",
        )
        url = payload.get("secure_url") or payload.get("url")
        public_id = payload.get("public_id")
        if not url or not public_id:
            raise StorageError("Image storage returned no url")
        return UploadResult(url=url, public_id=public_id, raw=dict(payload))

    async def destroy(self, public_id: str) -> Dict[str, Any]:
        payload = await self._call(cloudinary.uploader.destroy, public_id, resource_type="image")
        # "not found" тоже устраивает: ассета уже нет
        if payload.get("result") not in ("ok", "not found"):
            raise StorageError(f"Unexpected destroy result: {payload.get('result')}")
        return payload


def get_image_storage() -> ImageStorage:
    return ImageStorage(
        cloud_name=settings.CLOUDINARY_CLOUD_NAME,
        api_key=settings.CLOUDINARY_API_KEY,
        api_secret=settings.CLOUDINARY_API_SECRET,
        timeout=settings.CLOUDINARY_TIMEOUT,
    )


def asset_id_from_meta(meta) -> Optional[str]:
    if isinstance(meta, dict) and meta.get("public_id"):
        return str(meta["public_id"])
    return None


async def discard_asset(storage: ImageStorage, public_id: str) -> None:
    """
    Удаление ассета "по возможности": ошибка пишется в лог и глотается.
    Запускается фоновой задачей после ответа клиенту.
    """
    try:
        result = await storage.destroy(public_id)
        logger.info("Provider asset %s removed: %s", public_id, result.get("result"))
    except StorageError as e:
        logger.warning("Failed to delete provider asset %s: %s", public_id, e)
