"""
Ссылки для столов: адрес, на который ведёт QR-код стола, и URL картинки QR.

Ничего не хранится в базе, всё вычисляется при чтении.
"""
import re
from typing import Iterable
from urllib.parse import quote

_ABSOLUTE_URL = re.compile(r"^https?://", re.IGNORECASE)
_NON_DIGITS = re.compile(r"\D+")

# те же символы, что оставляет без кодирования encodeURIComponent
_URI_COMPONENT_SAFE = "!~*'()"


def _join(base_url: str, path: str) -> str:
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def build_outgoing_url(number: str, link: str, base_url: str, placeholder: str = "{table}") -> str:
    """
    Куда ведёт QR-код стола:
    - ссылка с плейсхолдером: все вхождения заменяются на номер стола;
    - абсолютный http(s) URL: как есть;
    - любая другая непустая строка: относительный путь от base_url;
    - пустая ссылка: <base_url>/order/<номер>.
    """
    raw = (link or "").strip()
    if placeholder and placeholder in raw:
        return raw.replace(placeholder, number)
    if raw:
        if _ABSOLUTE_URL.match(raw):
            return raw
        return _join(base_url, raw)
    return _join(base_url, f"order/{number}")


def build_qr_image_url(outgoing: str, template: str) -> str:
    return template.format(data=quote(outgoing, safe=_URI_COMPONENT_SAFE))


def _extract_number(value) -> int | None:
    digits = _NON_DIGITS.sub("", str(value or ""))
    if not digits:
        return None
    try:
        return int(digits)
    except ValueError:
        # больше sys.get_int_max_str_digits цифр: такой номер не учитываем
        return None


def next_table_number(existing: Iterable[str]) -> str:
    """
    Следующий номер стола: максимум среди номеров (только цифры) плюс один.
    Номера без цифр пропускаются; если числовых нет совсем, берём count + 1.
    """
    existing = list(existing)
    if not existing:
        return "1"
    numbers = [n for n in (_extract_number(v) for v in existing) if n is not None]
    if not numbers:
        return str(len(existing) + 1)
    return str(max(numbers) + 1)
