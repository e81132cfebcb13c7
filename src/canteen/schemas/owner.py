from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from .common import CamelModel


class OwnerCreate(CamelModel):
    username: str
    password: str
    age: Optional[int] = None


class OwnerLogin(CamelModel):
    age: Optional[int] = None
    password: str


class OwnerUpdate(CamelModel):
    age: Optional[int] = None
    password: Optional[str] = None


class OwnerRead(CamelModel):
    id: int
    username: str
    age: Optional[int] = None
    created_at: datetime


class OwnerResult(BaseModel):
    ok: bool = True
    message: str
    owner: Optional[OwnerRead] = None


class OwnerInfo(BaseModel):
    exists: bool
    owner: Optional[OwnerRead] = None
