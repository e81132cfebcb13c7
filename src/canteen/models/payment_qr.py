from sqlalchemy import Column, Integer, String, DateTime, JSON, func
from ..db.base import Base


class PaymentQr(Base):
    __tablename__ = "payment_qrs"

    id = Column(Integer, primary_key=True, index=True)
    url = Column(String(512), nullable=False)
    provider_meta = Column(JSON, nullable=False, default=dict)  # полный ответ провайдера (public_id и т.д.)
    created_at = Column(DateTime, server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)
