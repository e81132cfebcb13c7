from .menu_item import MenuItem
from .order import Order, OrderStatusEnum
from .order_item import OrderItem
from .table import DiningTable
from .payment_qr import PaymentQr
from .owner import Owner

__all__ = [
    "MenuItem",
    "Order",
    "OrderStatusEnum",
    "OrderItem",
    "DiningTable",
    "PaymentQr",
    "Owner",
]
