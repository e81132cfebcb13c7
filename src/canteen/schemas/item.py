from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BeforeValidator, Field
from typing_extensions import Annotated

from .common import CamelModel, Money


def _clean_name(value):
    value = str(value).strip()
    if not value:
        raise ValueError("Name is required")
    return value


ItemName = Annotated[str, BeforeValidator(_clean_name), Field(max_length=128)]

_image_alias = AliasChoices("image", "imageUrl", "image_url")


class ItemRead(CamelModel):
    id: int
    name: str
    price: float
    description: str = ""
    image_url: Optional[str] = None
    available: bool
    created_at: datetime
    updated_at: datetime


class ItemCreate(CamelModel):
    name: ItemName
    price: Money = Field(..., description="Price must be a non-negative number")
    description: Optional[str] = ""
    image_url: Optional[str] = Field(
        None, max_length=512, validation_alias=_image_alias, serialization_alias="imageUrl"
    )
    available: bool = True


class ItemUpdate(CamelModel):
    name: Optional[ItemName] = None
    price: Optional[Money] = None
    description: Optional[str] = None
    image_url: Optional[str] = Field(
        None, max_length=512, validation_alias=_image_alias, serialization_alias="imageUrl"
    )
    available: Optional[bool] = None
