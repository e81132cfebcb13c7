from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str
    SQL_ECHO: bool = False

    # адрес клиентского приложения, от него строятся ссылки для столов
    APP_BASE_URL: str = "http://localhost:3000"
    TABLE_LINK_PLACEHOLDER: str = "{table}"
    QR_IMAGE_URL_TEMPLATE: str = (
        "https://api.qrserver.com/v1/create-qr-code/?size=300x300&data={data}&format=png"
    )

    CLOUDINARY_CLOUD_NAME: str = ""
    CLOUDINARY_API_KEY: str = ""
    CLOUDINARY_API_SECRET: str = ""
    CLOUDINARY_TIMEOUT: float = 30.0

    # python -m canteen
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 8000
    APP_RELOAD: bool = False

    ITEM_IMAGE_FOLDER: str = "canteen_items"
    ORDER_SCREENSHOT_FOLDER: str = "canteen_orders"
    ITEM_IMAGE_MAX_BYTES: int = 5 * 1024 * 1024
    ORDER_SCREENSHOT_MAX_BYTES: int = 8 * 1024 * 1024

    ORDERS_DEFAULT_LIMIT: int = 50
    ORDERS_MAX_LIMIT: int = 200
    ORDER_UPDATES_POLL_INTERVAL: float = 1.0
    ORDER_UPDATES_MAX_WAIT: float = 30.0

    CORS_ORIGINS: List[str] = ["*"]

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    class Config:
        env_file = ".env"

settings = Settings()
