from sqlalchemy import Column, Integer, String, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from ..db.base import Base


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    # без FK на menu_items: позиция не меняется при правке или удалении блюда
    item_id = Column(String(64), nullable=False, default="")
    name = Column(String(128), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)  # фиксируется на момент заказа
    qty = Column(Integer, nullable=False, default=1)

    # связи
    order = relationship("Order", back_populates="items")
