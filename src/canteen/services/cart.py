from typing import Iterable, List, Optional, Sequence, Tuple

from canteen.schemas.order import OrderItemIn


def reconcile_cart(
    cart: Sequence[OrderItemIn],
    available_ids: Iterable[str],
) -> Tuple[List[OrderItemIn], List[OrderItemIn], Optional[str]]:
    """
    Убирает из корзины позиции, которых больше нет в меню (удалены или скрыты).
    Возвращает (оставшиеся, убранные, текст уведомления или None).
    """
    allowed = {str(i) for i in available_ids}
    kept = [line for line in cart if line.item_id in allowed]
    removed = [line for line in cart if line.item_id not in allowed]

    notice = None
    if removed:
        names = ", ".join(line.name for line in removed)
        notice = f"{names} removed from cart (now unavailable)"
    return kept, removed, notice
