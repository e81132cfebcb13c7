import csv
import io
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from canteen.crud.report import get_revenue_report, parse_report_range
from canteen.db.session import get_async_session
from canteen.schemas.report import RevenueReport


router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("", response_model=RevenueReport)
async def revenue_report(
    date_from: Optional[str] = Query(None, alias="from", description="Начальная дата (YYYY-MM-DD)"),
    date_to: Optional[str] = Query(None, alias="to", description="Конечная дата включительно (YYYY-MM-DD)"),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Отчёт по выручке, только завершённые заказы:
    - totalRevenue и ordersCount
    - byDay: по дням
    - byItem: по позициям, по убыванию выручки
    Некорректные даты игнорируются.
    """
    start, end = parse_report_range(date_from, date_to)
    return await get_revenue_report(db, start, end)


def report_to_csv(report: dict) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL)
    writer.writerow(["Total revenue", report["total_revenue"]])
    writer.writerow(["Orders", report["orders_count"]])
    writer.writerow([])
    writer.writerow(["Date", "Revenue", "Orders"])
    for row in report["by_day"]:
        writer.writerow([row["date"], row["total"], row["orders"]])
    writer.writerow([])
    writer.writerow(["Item", "Name", "Qty sold", "Revenue"])
    for row in report["by_item"]:
        writer.writerow([row["item_id"], row["name"], row["qty_sold"], row["revenue"]])
    return buffer.getvalue()


@router.get("/export")
async def export_report(
    date_from: Optional[str] = Query(None, alias="from", description="Начальная дата (YYYY-MM-DD)"),
    date_to: Optional[str] = Query(None, alias="to", description="Конечная дата включительно (YYYY-MM-DD)"),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Тот же отчёт в CSV для таблиц.
    """
    start, end = parse_report_range(date_from, date_to)
    report = await get_revenue_report(db, start, end)
    return Response(
        content=report_to_csv(report),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="revenue-report.csv"'},
    )
