from typing import Any, Dict

from pydantic import BaseModel


class UploadRead(BaseModel):
    url: str
    public_id: str
    raw: Dict[str, Any]
