import asyncio
import json
import time
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Path, Query, UploadFile
from pydantic import TypeAdapter, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from canteen.api.files import read_upload
from canteen.config import settings
from canteen.crud.order import clamp_limit, compute_total, create_order, delete_order, get_order_by_id
from canteen.crud.order import get_orders, get_orders_after, update_order
from canteen.db.session import get_async_session
from canteen.models.order import OrderStatusEnum
from canteen.schemas.common import MAX_AMOUNT
from canteen.schemas.order import OrderItemIn, OrderRead, OrderUpdate
from canteen.services.storage import ImageStorage, StorageError, get_image_storage


router = APIRouter(prefix="/orders", tags=["orders"])

_line_items = TypeAdapter(List[OrderItemIn])


def _reject_constant(name: str):
    # json.loads по умолчанию пропускает NaN, Infinity и -Infinity
    raise ValueError(f"Unsupported JSON constant: {name}")


def parse_line_items(raw: str) -> List[OrderItemIn]:
    """
    Позиции приходят JSON-строкой в multipart-форме.
    Сумма по позициям тоже должна влезать в Numeric(10, 2).
    """
    try:
        data = json.loads(raw or "[]", parse_constant=_reject_constant)
    except ValueError:
        raise HTTPException(status_code=400, detail="Items must be a JSON array")
    if not isinstance(data, list):
        raise HTTPException(status_code=400, detail="Items must be a JSON array")
    try:
        items = _line_items.validate_python(data)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"Invalid items: {e.errors(include_url=False)}")
    if compute_total(items) > Decimal(str(MAX_AMOUNT)):
        raise HTTPException(status_code=400, detail="Order total is too large")
    return items


@router.get("", response_model=List[OrderRead])
async def list_orders(
    status: Optional[OrderStatusEnum] = Query(None, description="Фильтр по статусу"),
    limit: Optional[int] = Query(None, description="Количество записей, от 1 до 200"),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Возвращает список заказов, новые первыми.
    Лимит по умолчанию 50 и всегда прижимается к диапазону [1, 200].
    Нечисловой limit (например, limit=abc) не подменяется значением по умолчанию,
    а отклоняется как ошибка валидации: 400.
    """
    limit = clamp_limit(limit, settings.ORDERS_DEFAULT_LIMIT, settings.ORDERS_MAX_LIMIT)
    return await get_orders(db, status=status, limit=limit)


@router.get("/updates", response_model=List[OrderRead])
async def order_updates(
    after: int = Query(0, ge=0, description="ID последнего известного заказа"),
    wait: float = Query(0, ge=0, description="Сколько секунд ждать новых заказов"),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Лонг-поллинг для панели владельца: заказы с id > after, старые первыми.
    Если новых нет, ждём до wait секунд, проверяя базу с интервалом.
    """
    deadline = time.monotonic() + min(wait, settings.ORDER_UPDATES_MAX_WAIT)
    while True:
        orders = await get_orders_after(db, after)
        remaining = deadline - time.monotonic()
        if orders or remaining <= 0:
            return orders
        # закрываем транзакцию, чтобы следующая проверка увидела свежие коммиты
        await db.rollback()
        await asyncio.sleep(min(settings.ORDER_UPDATES_POLL_INTERVAL, remaining))


@router.get("/{order_id}", response_model=OrderRead)
async def get_order(
    order_id: int = Path(..., description="ID заказа"),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Возвращает заказ по id.
    """
    order = await get_order_by_id(db, order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.post("", response_model=OrderRead, status_code=201)
async def create_order_endpoint(
    table_id: str = Form("", alias="tableId", max_length=64),
    items: str = Form("[]"),
    total: Optional[float] = Form(None, ge=0, le=MAX_AMOUNT, allow_inf_nan=False),
    screenshot: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_async_session),
    storage: ImageStorage = Depends(get_image_storage),
):
    """
    Оформление заказа покупателем.
    Сначала загружается скриншот оплаты, потом пишется заказ со статусом pending.
    """
    line_items = parse_line_items(items)
    if screenshot is None:
        raise HTTPException(status_code=400, detail="Payment screenshot is required")
    data = await read_upload(screenshot, settings.ORDER_SCREENSHOT_MAX_BYTES)

    try:
        uploaded = await storage.upload(
            data, settings.ORDER_SCREENSHOT_FOLDER, filename=screenshot.filename or "screenshot"
        )
    except StorageError as e:
        raise HTTPException(status_code=500, detail=f"Upload failed: {e}")

    return await create_order(
        db,
        items=line_items,
        screenshot_url=uploaded.url,
        table_id=table_id.strip(),
        client_total=total,
    )


@router.put("/{order_id}", response_model=OrderRead)
async def put_order_endpoint(
    order_id: int,
    order_in: OrderUpdate,
    db: AsyncSession = Depends(get_async_session),
):
    """
    Обновление заказа владельцем (обычно смена статуса).
    Поддерживаемые поля: status, tableId, total, items, screenshot.
    """
    try:
        order = await update_order(db, order_id, order_in)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not order:
        raise HTTPException(status_code=404, detail="Order not found")

    return order


@router.delete("/{order_id}")
async def remove_order(order_id: int, session: AsyncSession = Depends(get_async_session)):
    """
    Удаляет заказ.
    """
    deleted = await delete_order(session, order_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Order not found")
    return {"message": "Deleted", "id": order_id}
