from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from canteen.config import settings
from canteen.crud.table import create_table, delete_table, get_next_table_number, get_tables
from canteen.db.session import get_async_session
from canteen.schemas.table import NextTableNumber, TableCreate, TableRead


router = APIRouter(prefix="/tables", tags=["tables"])


def _with_links(table) -> TableRead:
    return TableRead.from_orm_with_links(
        table,
        base_url=settings.APP_BASE_URL,
        placeholder=settings.TABLE_LINK_PLACEHOLDER,
        qr_template=settings.QR_IMAGE_URL_TEMPLATE,
    )


@router.get("", response_model=List[TableRead])
async def list_tables(db: AsyncSession = Depends(get_async_session)):
    """
    Столы с готовыми ссылками для QR-кодов (outgoing, qr).
    """
    return [_with_links(t) for t in await get_tables(db)]


@router.get("/next-number", response_model=NextTableNumber)
async def next_number(db: AsyncSession = Depends(get_async_session)):
    return {"number": await get_next_table_number(db)}


@router.post("", response_model=TableRead, status_code=201)
async def create_table_endpoint(table_in: TableCreate, db: AsyncSession = Depends(get_async_session)):
    """
    Создаёт стол. Если number не передан, номер назначается автоматически.
    """
    table = await create_table(db, number=table_in.number, link=table_in.link)
    return _with_links(table)


@router.delete("/{table_id}")
async def remove_table(table_id: int, db: AsyncSession = Depends(get_async_session)):
    deleted = await delete_table(db, table_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Table not found")
    return {"ok": True}
