from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.ext.asyncio import AsyncSession

from canteen.crud.item import create_item, delete_item, get_item_by_id, get_items, update_item
from canteen.db.session import get_async_session
from canteen.schemas.item import ItemCreate, ItemRead, ItemUpdate


router = APIRouter(prefix="/items", tags=["items"])


@router.get("", response_model=List[ItemRead])
async def list_available_items(db: AsyncSession = Depends(get_async_session)):
    """
    Меню для покупателя: только доступные позиции.
    """
    return await get_items(db, only_available=True)


@router.get("/all", response_model=List[ItemRead])
async def list_all_items(db: AsyncSession = Depends(get_async_session)):
    """
    Все позиции, включая скрытые (для владельца).
    """
    return await get_items(db)


@router.get("/{item_id}", response_model=ItemRead)
async def get_item(
    item_id: int = Path(..., description="ID позиции"),
    db: AsyncSession = Depends(get_async_session),
):
    item = await get_item_by_id(db, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Item not found")
    return item


@router.post("", response_model=ItemRead, status_code=201)
async def create_item_endpoint(item_in: ItemCreate, db: AsyncSession = Depends(get_async_session)):
    return await create_item(db, item_in)


@router.patch("/{item_id}", response_model=ItemRead)
async def patch_item_endpoint(
    item_id: int,
    item_in: ItemUpdate,
    db: AsyncSession = Depends(get_async_session),
):
    """
    Частичное обновление позиции (цена, название, доступность и т.д.).
    """
    item = await update_item(db, item_id, item_in)
    if not item:
        raise HTTPException(status_code=404, detail="Item not found")
    return item


@router.delete("/{item_id}")
async def remove_item(item_id: int, db: AsyncSession = Depends(get_async_session)):
    deleted = await delete_item(db, item_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Item not found")
    return {"ok": True}
