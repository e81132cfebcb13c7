from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from canteen.crud.item import get_available_item_ids
from canteen.db.session import get_async_session
from canteen.schemas.cart import CartReconcileRequest, CartReconcileResult
from canteen.services.cart import reconcile_cart


router = APIRouter(prefix="/cart", tags=["cart"])


@router.post("/reconcile", response_model=CartReconcileResult)
async def reconcile(body: CartReconcileRequest, db: AsyncSession = Depends(get_async_session)):
    """
    Сверяет корзину клиента с текущим меню и убирает недоступные позиции.
    Сама корзина хранится на клиенте.
    """
    kept, removed, notice = reconcile_cart(body.items, await get_available_item_ids(db))
    return {"items": kept, "removed": removed, "notice": notice}
