from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import Field

from .common import CamelModel


class PaymentQrWrite(CamelModel):
    url: Optional[str] = Field(None, max_length=512)
    provider_meta: Optional[Dict[str, Any]] = None


class PaymentQrRead(CamelModel):
    id: int
    url: str
    provider_meta: Dict[str, Any] = {}
    created_at: datetime
    updated_at: datetime
