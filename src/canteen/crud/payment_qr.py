from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from canteen.models import PaymentQr


async def get_current_payment_qr(db: AsyncSession) -> Optional[PaymentQr]:
    """
    Текущий QR для оплаты: самая свежая запись.
    При одинаковом created_at выигрывает больший id, выбор всегда однозначный.
    """
    result = await db.execute(
        select(PaymentQr).order_by(PaymentQr.created_at.desc(), PaymentQr.id.desc()).limit(1)
    )
    return result.scalars().first()


async def get_payment_qrs(db: AsyncSession) -> List[PaymentQr]:
    result = await db.execute(select(PaymentQr).order_by(PaymentQr.created_at.desc(), PaymentQr.id.desc()))
    return result.scalars().all()


async def get_payment_qr_by_id(db: AsyncSession, qr_id: int) -> Optional[PaymentQr]:
    result = await db.execute(
        select(PaymentQr).where(PaymentQr.id == qr_id).execution_options(populate_existing=True)
    )
    return result.scalars().first()


async def create_payment_qr(db: AsyncSession, url: str, provider_meta: Optional[Dict[str, Any]] = None) -> PaymentQr:
    """
    Добавляет новую запись. Старые не трогаются, текущей станет эта.
    """
    qr = PaymentQr(url=url, provider_meta=provider_meta or {})
    db.add(qr)
    await db.commit()
    return await get_payment_qr_by_id(db, qr.id)


async def replace_payment_qr(
    db: AsyncSession,
    qr_id: int,
    url: str,
    provider_meta: Optional[Dict[str, Any]] = None,
) -> Optional[tuple]:
    """
    Перезаписывает url и метаданные. Возвращает (обновлённая запись, старые метаданные)
    или None, если записи нет.
    """
    qr = await db.get(PaymentQr, qr_id)
    if not qr:
        return None

    old_meta = dict(qr.provider_meta or {})
    qr.url = url
    qr.provider_meta = provider_meta or {}
    await db.commit()

    return await get_payment_qr_by_id(db, qr.id), old_meta


async def delete_payment_qr(db: AsyncSession, qr_id: int) -> Optional[PaymentQr]:
    """
    Удаляет запись и возвращает её (нужны метаданные для чистки у провайдера).
    """
    qr = await db.get(PaymentQr, qr_id)
    if not qr:
        return None
    await db.delete(qr)
    await db.commit()
    return qr
