from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from canteen.models import Owner
from canteen.schemas.owner import OwnerCreate, OwnerUpdate
from canteen.services.security import hash_password, verify_password


class OwnerAuthError(Exception):
    """Неверный возраст или пароль."""


async def get_owner(db: AsyncSession) -> Optional[Owner]:
    """
    Владелец в системе один: берём первую запись.
    """
    result = await db.execute(select(Owner).order_by(Owner.id).limit(1))
    return result.scalars().first()


async def create_owner(db: AsyncSession, owner_in: OwnerCreate) -> Owner:
    if await get_owner(db):
        raise ValueError("Owner already exists")

    username = owner_in.username.strip()
    if not username or not owner_in.password:
        raise ValueError("Username and password are required")

    owner = Owner(
        username=username,
        password_hash=hash_password(owner_in.password),
        age=owner_in.age,
    )
    db.add(owner)
    await db.commit()
    await db.refresh(owner)
    return owner


def check_credentials(owner: Owner, age: Optional[int], password: str) -> None:
    """
    Вход по возрасту и паролю. Возраст сверяется, только если он задан у владельца.
    """
    if owner.age is not None and age != owner.age:
        raise OwnerAuthError("Age does not match")
    if not verify_password(str(password), owner.password_hash):
        raise OwnerAuthError("Incorrect password")


async def update_owner(db: AsyncSession, owner: Owner, owner_in: OwnerUpdate) -> Owner:
    if owner_in.age is not None:
        owner.age = owner_in.age
    if owner_in.password:
        owner.password_hash = hash_password(owner_in.password)

    await db.commit()
    await db.refresh(owner)
    return owner
