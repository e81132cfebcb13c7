import enum
from sqlalchemy import Column, Integer, String, Numeric, DateTime, Enum as SAEnum, func
from sqlalchemy.orm import relationship
from ..db.base import Base


class OrderStatusEnum(str, enum.Enum):
    pending = "pending"
    completed = "completed"


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    table_id = Column(String(64), nullable=False, default="")  # может быть пустым
    total = Column(Numeric(10, 2), nullable=False, default=0)
    screenshot_url = Column(String(512), nullable=False, default="")
    status = Column(
        SAEnum(OrderStatusEnum, name="order_status", native_enum=False, length=20),
        nullable=False,
        default=OrderStatusEnum.pending,
        index=True,
    )
    created_at = Column(DateTime, server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    # снимок позиций на момент заказа
    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
    )
