from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from canteen.crud.payment_qr import create_payment_qr, delete_payment_qr, get_current_payment_qr
from canteen.crud.payment_qr import get_payment_qrs, replace_payment_qr
from canteen.db.session import get_async_session
from canteen.schemas.payment_qr import PaymentQrRead, PaymentQrWrite
from canteen.services.storage import ImageStorage, asset_id_from_meta, discard_asset, get_image_storage


router = APIRouter(prefix="/payment-qr", tags=["payment-qr"])


def _require_url(qr_in: PaymentQrWrite) -> str:
    url = (qr_in.url or "").strip()
    if not url:
        raise HTTPException(status_code=400, detail="url is required")
    return url


@router.get("", response_model=PaymentQrRead)
async def get_current(db: AsyncSession = Depends(get_async_session)):
    """
    Текущий QR для оплаты (самый свежий).
    """
    qr = await get_current_payment_qr(db)
    if not qr:
        raise HTTPException(status_code=404, detail="No payment QR found")
    return qr


@router.get("/history", response_model=List[PaymentQrRead])
async def list_history(db: AsyncSession = Depends(get_async_session)):
    return await get_payment_qrs(db)


@router.post("", response_model=PaymentQrRead, status_code=201)
async def create_qr(qr_in: PaymentQrWrite, db: AsyncSession = Depends(get_async_session)):
    return await create_payment_qr(db, _require_url(qr_in), qr_in.provider_meta)


@router.put("/{qr_id}", response_model=PaymentQrRead)
async def replace_qr(
    qr_id: int,
    qr_in: PaymentQrWrite,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_async_session),
    storage: ImageStorage = Depends(get_image_storage),
):
    """
    Заменяет картинку QR. Старый ассет у провайдера удаляется в фоне,
    ошибка удаления только пишется в лог.
    """
    url = _require_url(qr_in)
    replaced = await replace_payment_qr(db, qr_id, url, qr_in.provider_meta)
    if replaced is None:
        raise HTTPException(status_code=404, detail="Payment QR not found")

    qr, old_meta = replaced
    old_asset = asset_id_from_meta(old_meta)
    if old_asset and old_asset != asset_id_from_meta(qr.provider_meta):
        background_tasks.add_task(discard_asset, storage, old_asset)
    return qr


@router.delete("/{qr_id}")
async def remove_qr(
    qr_id: int,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_async_session),
    storage: ImageStorage = Depends(get_image_storage),
):
    qr = await delete_payment_qr(db, qr_id)
    if qr is None:
        raise HTTPException(status_code=404, detail="Payment QR not found")

    asset = asset_id_from_meta(qr.provider_meta)
    if asset:
        background_tasks.add_task(discard_asset, storage, asset)
    return {"message": "Deleted", "id": qr_id}
