import os
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import NullPool

_DB_DIR = tempfile.mkdtemp(prefix="canteen-tests-")
DB_PATH = Path(_DB_DIR) / "test.db"

os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{DB_PATH}"
os.environ["CLOUDINARY_CLOUD_NAME"] = ""
os.environ["APP_BASE_URL"] = "http://canteen.test"

from canteen.db.base import Base  # noqa: E402
from canteen.db.session import get_async_session  # noqa: E402
from canteen.main import app  # noqa: E402
import canteen.models  # noqa: E402,F401
from canteen.services.storage import StorageError, UploadResult, get_image_storage  # noqa: E402


class FakeStorage:
    """
    Провайдер картинок в памяти: запоминает загрузки и удаления.
    """

    def __init__(self):
        self.uploads = []
        self.destroyed = []
        self.fail_upload = False
        self.fail_destroy = False

    async def upload(self, data: bytes, folder: str, filename: str = "upload") -> UploadResult:
        if self.fail_upload:
            raise StorageError("provider is down")
        self.uploads.append({"folder": folder, "filename": filename, "size": len(data)})
        public_id = f"{folder}/asset{len(self.uploads)}"
        url = f"https://res.cloudinary.test/{public_id}.png"
        return UploadResult(url=url, public_id=public_id, raw={"public_id": public_id, "secure_url": url})

    async def destroy(self, public_id: str):
        if self.fail_destroy:
            raise StorageError("destroy failed")
        self.destroyed.append(public_id)
        return {"result": "ok"}


@pytest.fixture()
def sync_engine():
    """
    Синхронный движок на тот же файл: пересоздаёт схему и сидирует данные
    с нужными created_at.
    """
    engine = create_engine(f"sqlite:///{DB_PATH}")
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def db_session(sync_engine):
    with Session(sync_engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture()
def storage():
    return FakeStorage()


@pytest.fixture()
def client(sync_engine, storage):
    engine = create_async_engine(os.environ["DATABASE_URL"], poolclass=NullPool)
    session_factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

    async def override_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_session
    app.dependency_overrides[get_image_storage] = lambda: storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def place_order(client, items, total=None, table_id="3", screenshot=PNG_BYTES):
    """Оформляет заказ через multipart, как это делает клиентское приложение."""
    import json

    data = {"tableId": table_id, "items": json.dumps(items)}
    if total is not None:
        data["total"] = str(total)
    files = {"screenshot": ("pay.png", screenshot, "image/png")} if screenshot is not None else None
    return client.post("/api/orders", data=data, files=files)
