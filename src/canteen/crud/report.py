import logging
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from sqlalchemy import select, func, desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from canteen.models import Order, OrderItem, OrderStatusEnum

logger = logging.getLogger(__name__)


def parse_date(value: Optional[str]) -> Optional[datetime]:
    """
    Дата из строки запроса (YYYY-MM-DD или ISO 8601).
    Непарсящееся значение -> None, фильтр по этой границе просто не ставится.
    Дата с часовым поясом переводится в локальное время сервера.
    """
    if not value or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def parse_report_range(
    date_from: Optional[str],
    date_to: Optional[str],
) -> Tuple[Optional[datetime], Optional[datetime]]:
    """
    Границы отчёта: начало включительно, конец до 23:59:59.999 указанного дня.
    """
    start = parse_date(date_from)
    end = parse_date(date_to)
    if end is not None:
        end = end.replace(hour=23, minute=59, second=59, microsecond=999000)
    return start, end


def _completed(stmt, date_from: Optional[datetime], date_to: Optional[datetime]):
    # в отчёты попадают только завершённые заказы
    stmt = stmt.where(Order.status == OrderStatusEnum.completed)
    if date_from:
        stmt = stmt.where(Order.created_at >= date_from)
    if date_to:
        stmt = stmt.where(Order.created_at <= date_to)
    return stmt


async def get_revenue_totals(
    db: AsyncSession,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
) -> Dict:
    """
    Общая выручка и количество завершённых заказов за период.
    """
    stmt = _completed(
        select(
            func.count(Order.id).label("orders_count"),
            func.sum(Order.total).label("total_revenue"),
        ),
        date_from,
        date_to,
    )
    result = await db.execute(stmt)
    row = result.first()

    return {
        "total_revenue": float(row.total_revenue or 0) if row else 0.0,
        "orders_count": int(row.orders_count or 0) if row else 0,
    }


async def get_revenue_by_day(
    db: AsyncSession,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
) -> List[Dict]:
    """
    Выручка и количество заказов по календарным дням, по возрастанию даты.
    """
    day = func.date(Order.created_at)
    stmt = _completed(
        select(
            day.label("day"),
            func.sum(Order.total).label("total"),
            func.count(Order.id).label("orders"),
        ),
        date_from,
        date_to,
    ).group_by(day).order_by(day)

    result = await db.execute(stmt)
    return [
        {
            "date": str(row.day),
            "total": float(row.total or 0),
            "orders": int(row.orders or 0),
        }
        for row in result.all()
    ]


async def get_revenue_by_item(
    db: AsyncSession,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
) -> List[Dict]:
    """
    Продажи по позициям (по item_id из снимка заказа):
    - количество проданных единиц
    - выручка price * qty
    - сортировка по выручке
    """
    revenue = func.sum(OrderItem.price * OrderItem.qty)
    stmt = _completed(
        select(
            OrderItem.item_id,
            func.max(OrderItem.name).label("name"),
            func.sum(OrderItem.qty).label("qty_sold"),
            revenue.label("revenue"),
        ).join(Order, Order.id == OrderItem.order_id),
        date_from,
        date_to,
    ).group_by(OrderItem.item_id).order_by(desc("revenue"))

    result = await db.execute(stmt)
    return [
        {
            "item_id": row.item_id,
            "name": row.name,
            "qty_sold": int(row.qty_sold or 0),
            "revenue": float(row.revenue or 0),
        }
        for row in result.all()
    ]


async def get_revenue_report(
    db: AsyncSession,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
) -> Dict:
    """
    Полный отчёт: totalRevenue, ordersCount, byDay, byItem.
    Если разбивка по позициям не считается, отчёт всё равно отдаётся с пустым byItem.
    """
    report = await get_revenue_totals(db, date_from, date_to)
    report["by_day"] = await get_revenue_by_day(db, date_from, date_to)

    try:
        report["by_item"] = await get_revenue_by_item(db, date_from, date_to)
    except SQLAlchemyError as e:
        logger.warning("byItem aggregation skipped: %s", e)
        await db.rollback()
        report["by_item"] = []

    return report
