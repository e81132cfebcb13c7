from typing import List

from .common import CamelModel


class DayRevenue(CamelModel):
    date: str  # YYYY-MM-DD
    total: float
    orders: int


class ItemRevenue(CamelModel):
    item_id: str
    name: str
    qty_sold: int
    revenue: float


class RevenueReport(CamelModel):
    total_revenue: float = 0.0
    orders_count: int = 0
    by_day: List[DayRevenue] = []
    by_item: List[ItemRevenue] = []
