from typing import List, Optional

from .common import CamelModel
from .order import OrderItemIn


class CartReconcileRequest(CamelModel):
    items: List[OrderItemIn] = []


class CartReconcileResult(CamelModel):
    items: List[OrderItemIn] = []
    removed: List[OrderItemIn] = []
    notice: Optional[str] = None
