import logging
from decimal import Decimal
from typing import List, Optional, Sequence

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from canteen.models import Order, OrderItem, OrderStatusEnum
from canteen.schemas.order import OrderItemIn, OrderUpdate

logger = logging.getLogger(__name__)

NO_UPDATABLE_FIELDS = "No updatable fields provided"


def clamp_limit(limit: Optional[int], default: int = 50, maximum: int = 200) -> int:
    """Лимит выдачи: по умолчанию default, всегда в пределах [1, maximum]."""
    if limit is None:
        return default
    return max(1, min(maximum, limit))


def compute_total(items: Sequence[OrderItemIn]) -> Decimal:
    """Сумма заказа по снимку позиций: price * qty."""
    total = sum((Decimal(str(i.price)) * i.qty for i in items), Decimal("0"))
    return total.quantize(Decimal("0.01"))


def _snapshot(items: Sequence[OrderItemIn]) -> List[OrderItem]:
    return [
        OrderItem(item_id=i.item_id, name=i.name, price=Decimal(str(i.price)), qty=i.qty)
        for i in items
    ]


async def get_orders(
    db: AsyncSession,
    status: Optional[str] = None,
    limit: int = 50,
) -> List[Order]:
    """
    Возвращает список заказов, новые первыми.
    Опционально фильтрует по точному совпадению статуса.
    """
    stmt = (
        select(Order)
        .options(selectinload(Order.items))
        .order_by(Order.created_at.desc(), Order.id.desc())
        .limit(limit)
    )
    if status:
        stmt = stmt.where(Order.status == status)

    result = await db.execute(stmt)
    return result.scalars().unique().all()


async def get_orders_after(db: AsyncSession, after_id: int, limit: int = 200) -> List[Order]:
    """
    Заказы с id больше after_id, старые первыми.
    Используется лонг-поллингом панели владельца.
    """
    stmt = (
        select(Order)
        .options(selectinload(Order.items))
        .where(Order.id > after_id)
        .order_by(Order.id.asc())
        .limit(limit)
    )
    result = await db.execute(stmt)
    return result.scalars().unique().all()


async def get_order_by_id(db: AsyncSession, order_id: int) -> Optional[Order]:
    """
    Возвращает заказ по ID с подгруженными позициями.
    populate_existing перечитывает серверные значения (created_at, updated_at) после коммита.
    """
    stmt = (
        select(Order)
        .where(Order.id == order_id)
        .options(selectinload(Order.items))
        .execution_options(populate_existing=True)
    )
    result = await db.execute(stmt)
    return result.scalars().unique().first()


async def create_order(
    db: AsyncSession,
    items: Sequence[OrderItemIn],
    screenshot_url: str,
    table_id: str = "",
    client_total: Optional[float] = None,
) -> Order:
    """
    Создаёт заказ со статусом pending и снимком позиций.
    Сумма пересчитывается по позициям, присланная клиентом служит только подсказкой.
    """
    if items:
        total = compute_total(items)
        if client_total is not None and abs(Decimal(str(client_total)) - total) >= Decimal("0.01"):
            logger.warning(
                "Client total %s differs from computed total %s, storing computed", client_total, total
            )
    else:
        total = Decimal(str(client_total or 0)).quantize(Decimal("0.01"))

    order = Order(
        table_id=table_id or "",
        total=total,
        screenshot_url=screenshot_url or "",
        status=OrderStatusEnum.pending,
        items=_snapshot(items),
    )
    db.add(order)
    await db.commit()

    logger.info("Order %s created for table %r, total %s", order.id, order.table_id, total)
    return await get_order_by_id(db, order.id)


async def update_order(db: AsyncSession, order_id: int, order_in: OrderUpdate) -> Optional[Order]:
    """
    Обновляет заказ по белому списку полей: status, tableId, total, items, screenshot.
    Пустой патч -> ValueError, заказ не найден -> None.
    """
    update_data = {k: v for k, v in order_in.model_dump(exclude_unset=True).items() if v is not None}
    if not update_data:
        raise ValueError(NO_UPDATABLE_FIELDS)

    order = await get_order_by_id(db, order_id)
    if not order:
        return None

    if "status" in update_data:
        order.status = order_in.status
    if "table_id" in update_data:
        order.table_id = order_in.table_id
    if "total" in update_data:
        order.total = Decimal(str(order_in.total))
    if "items" in update_data:
        # снимок заменяется целиком, старые строки удалит delete-orphan
        order.items = _snapshot(order_in.items)
    if "screenshot" in update_data:
        order.screenshot_url = order_in.screenshot

    order.updated_at = func.now()
    await db.commit()

    return await get_order_by_id(db, order.id)


async def delete_order(session: AsyncSession, order_id: int) -> bool:
    """
    Удаляет заказ вместе с позициями.
    """
    # позиции подгружаются заранее, иначе каскад полезет в lazy load
    order = await get_order_by_id(session, order_id)
    if not order:
        return False
    await session.delete(order)
    await session.commit()
    return True
