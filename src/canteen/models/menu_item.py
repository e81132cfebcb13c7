from sqlalchemy import Column, Integer, String, Text, Numeric, Boolean, DateTime, func
from ..db.base import Base


class MenuItem(Base):
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(128), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)  # цена
    description = Column(Text, nullable=False, default="")
    image_url = Column(String(512), nullable=True)  # публичный URL картинки у провайдера
    available = Column(Boolean, default=True, nullable=False)  # false: скрыто из меню покупателя
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)
