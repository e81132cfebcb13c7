from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from canteen.services.links import build_outgoing_url, build_qr_image_url
from .common import CamelModel


class TableCreate(CamelModel):
    number: Optional[str] = Field(None, max_length=32)  # None: номер назначается автоматически
    link: Optional[str] = Field("", max_length=512)

    @field_validator("number", mode="before")
    @classmethod
    def _normalize_number(cls, value):
        if value is None:
            return None
        value = str(value).strip()
        if not value:
            raise ValueError("Table number required")
        return value


class TableRead(CamelModel):
    id: int
    number: str
    link: str = ""
    created_at: datetime
    outgoing: str
    qr: str

    @classmethod
    def from_orm_with_links(cls, table, base_url: str, placeholder: str, qr_template: str):
        outgoing = build_outgoing_url(table.number, table.link, base_url, placeholder)
        return cls(
            id=table.id,
            number=table.number,
            link=table.link or "",
            created_at=table.created_at,
            outgoing=outgoing,
            qr=build_qr_image_url(outgoing, qr_template),
        )


class NextTableNumber(CamelModel):
    number: str
