from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from canteen.crud.owner import OwnerAuthError, check_credentials, create_owner, get_owner, update_owner
from canteen.db.session import get_async_session
from canteen.schemas.owner import OwnerCreate, OwnerInfo, OwnerLogin, OwnerResult, OwnerUpdate


router = APIRouter(prefix="/owner", tags=["owner"])


@router.post("", response_model=OwnerResult)
async def create_owner_endpoint(owner_in: OwnerCreate, db: AsyncSession = Depends(get_async_session)):
    """
    Создание владельца (один раз).
    """
    try:
        owner = await create_owner(db, owner_in)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"ok": True, "message": "Owner created", "owner": owner}


@router.post("/login")
async def login(body: OwnerLogin, db: AsyncSession = Depends(get_async_session)):
    """
    Вход по возрасту и паролю.
    """
    owner = await get_owner(db)
    if not owner:
        raise HTTPException(status_code=404, detail="Owner not found")
    try:
        check_credentials(owner, body.age, body.password)
    except OwnerAuthError as e:
        raise HTTPException(status_code=401, detail=str(e))
    return {"ok": True, "message": "Login successful"}


@router.put("/update", response_model=OwnerResult)
async def update_owner_endpoint(body: OwnerUpdate, db: AsyncSession = Depends(get_async_session)):
    owner = await get_owner(db)
    if not owner:
        raise HTTPException(status_code=404, detail="Owner not found")
    await update_owner(db, owner, body)
    return {"ok": True, "message": "Owner updated successfully"}


@router.get("/info", response_model=OwnerInfo)
async def owner_info(db: AsyncSession = Depends(get_async_session)):
    """
    Данные владельца для панели, без пароля.
    """
    owner = await get_owner(db)
    if not owner:
        return {"exists": False}
    return {"exists": True, "owner": owner}
