from sqlalchemy import Column, Integer, String, DateTime, func
from ..db.base import Base


class DiningTable(Base):
    __tablename__ = "tables"

    id = Column(Integer, primary_key=True, index=True)
    number = Column(String(32), nullable=False)
    link = Column(String(512), nullable=False, default="")  # может содержать {table}
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
