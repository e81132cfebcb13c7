from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator

from canteen.models.order import OrderStatusEnum
from .common import CamelModel, Money


class OrderItemIn(CamelModel):
    """Позиция заказа в том виде, в каком её прислал клиент."""

    item_id: str = Field(
        "",
        max_length=64,
        validation_alias=AliasChoices("itemId", "item_id", "_id", "id"),
        serialization_alias="itemId",
    )
    name: str = Field(..., min_length=1, max_length=128)
    price: Money
    qty: int = Field(1, ge=1)

    @field_validator("item_id", mode="before")
    @classmethod
    def _stringify_id(cls, value):
        return "" if value is None else str(value)

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value


class OrderItemRead(CamelModel):
    item_id: str
    name: str
    price: float
    qty: int


class OrderRead(CamelModel):
    id: int
    table_id: str = ""
    items: List[OrderItemRead] = []
    total: float
    screenshot_url: str = ""
    status: OrderStatusEnum
    created_at: datetime
    updated_at: datetime


class OrderUpdate(CamelModel):
    """
    Частичное обновление заказа.
    Лишние поля молча отбрасываются, None считается отсутствующим значением.
    """

    status: Optional[OrderStatusEnum] = None
    table_id: Optional[str] = Field(None, max_length=64)
    total: Optional[Money] = None
    items: Optional[List[OrderItemIn]] = None
    screenshot: Optional[str] = Field(None, max_length=512)

    @field_validator("table_id", mode="before")
    @classmethod
    def _stringify_table(cls, value):
        return None if value is None else str(value)
