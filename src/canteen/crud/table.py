from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from canteen.models import DiningTable
from canteen.services.links import next_table_number


async def get_tables(db: AsyncSession) -> List[DiningTable]:
    result = await db.execute(
        select(DiningTable).order_by(DiningTable.created_at.desc(), DiningTable.id.desc())
    )
    return result.scalars().all()


async def get_next_table_number(db: AsyncSession) -> str:
    result = await db.execute(select(DiningTable.number))
    return next_table_number(result.scalars().all())


async def create_table(db: AsyncSession, number: Optional[str] = None, link: Optional[str] = "") -> DiningTable:
    """
    Создаёт стол. Без номера назначается следующий свободный.
    """
    if number is None:
        number = await get_next_table_number(db)

    table = DiningTable(number=number, link=(link or "").strip())
    db.add(table)
    await db.commit()

    result = await db.execute(
        select(DiningTable).where(DiningTable.id == table.id).execution_options(populate_existing=True)
    )
    return result.scalars().first()


async def delete_table(db: AsyncSession, table_id: int) -> bool:
    table = await db.get(DiningTable, table_id)
    if not table:
        return False
    await db.delete(table)
    await db.commit()
    return True
