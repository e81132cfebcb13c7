from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from canteen.models import MenuItem
from canteen.schemas.item import ItemCreate, ItemUpdate


async def get_items(db: AsyncSession, only_available: bool = False) -> List[MenuItem]:
    """
    Меню, новые позиции первыми.
    only_available=True: то, что видит покупатель.
    """
    stmt = select(MenuItem).order_by(MenuItem.created_at.desc(), MenuItem.id.desc())
    if only_available:
        stmt = stmt.where(MenuItem.available.is_(True))
    result = await db.execute(stmt)
    return result.scalars().all()


async def get_available_item_ids(db: AsyncSession) -> List[str]:
    result = await db.execute(select(MenuItem.id).where(MenuItem.available.is_(True)))
    return [str(item_id) for item_id in result.scalars().all()]


async def get_item_by_id(db: AsyncSession, item_id: int) -> Optional[MenuItem]:
    stmt = select(MenuItem).where(MenuItem.id == item_id).execution_options(populate_existing=True)
    result = await db.execute(stmt)
    return result.scalars().first()


async def create_item(db: AsyncSession, item_in: ItemCreate) -> MenuItem:
    item = MenuItem(
        name=item_in.name,
        price=Decimal(str(item_in.price)),
        description=item_in.description or "",
        image_url=item_in.image_url or None,
        available=item_in.available,
    )
    db.add(item)
    await db.commit()
    return await get_item_by_id(db, item.id)


async def update_item(db: AsyncSession, item_id: int, item_in: ItemUpdate) -> Optional[MenuItem]:
    """
    Частичное обновление: меняются только переданные поля.
    """
    item = await db.get(MenuItem, item_id)
    if not item:
        return None

    update_data = {k: v for k, v in item_in.model_dump(exclude_unset=True).items() if v is not None}
    if "price" in update_data:
        update_data["price"] = Decimal(str(update_data["price"]))
    for key, value in update_data.items():
        setattr(item, key, value)

    await db.commit()
    return await get_item_by_id(db, item.id)


async def delete_item(db: AsyncSession, item_id: int) -> bool:
    item = await db.get(MenuItem, item_id)
    if not item:
        return False
    await db.delete(item)
    await db.commit()
    return True
