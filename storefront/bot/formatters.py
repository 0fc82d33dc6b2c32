from __future__ import annotations

from html import escape
from typing import Any, Dict

from storefront.constants import PAYLOAD_CUSTOM_REQUEST, PAYLOAD_ORDER
from storefront.utils.formatters import contact_method_label, money


def _obj(value: Any, name: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{name} must be an object")
    return value


def _int(value: Any, name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be a number") from e


def _contact_lines(contact: Dict[str, Any]) -> list[str]:
    lines = [
        f"Имя: {escape(str(contact.get('name') or '—'))}",
        f"Телефон: {escape(str(contact.get('phone') or '—'))}",
        f"Связь: {contact_method_label(str(contact.get('contactMethod') or ''))}",
    ]
    if contact.get("comment"):
        lines.append(f"Комментарий: {escape(str(contact['comment']))}")
    return lines


def format_order(data: Dict[str, Any], sender: str = "") -> str:
    lines = ["🧾 <b>Новая заявка</b>"]
    if sender:
        lines.append(f"От: {escape(sender)}")
    lines.extend(_contact_lines(_obj(data.get("contact"), "contact")))
    lines.append("")
    items = data.get("items") or []
    if not isinstance(items, list):
        raise ValueError("items must be a list")
    for it in items:
        it = _obj(it, "item")
        qty = _int(it.get("qty", 1), "qty")
        price = _int(it.get("priceRUB", 0), "priceRUB")
        lines.append(
            f"• {escape(str(it.get('brand', '')))} {escape(str(it.get('title', '')))}"
            f" × {qty} — {money(price * qty)}"
        )
    lines.append("")
    total = _int(data.get("totalRUB") or 0, "totalRUB")
    lines.append(f"<b>Итого: {money(total)}</b>")
    return "\n".join(lines)


def format_custom_request(data: Dict[str, Any], sender: str = "") -> str:
    req = _obj(data.get("payload"), "payload")
    lines = ["🔎 <b>Запрос на подбор</b>"]
    if sender:
        lines.append(f"От: {escape(sender)}")
    lines.extend(_contact_lines(_obj(req.get("contact"), "contact")))
    lines.append("")
    for title, key in (
        ("Бренд", "brand"),
        ("Модель", "model"),
        ("Размер", "size"),
        ("Бюджет, ₽", "budgetRUB"),
        ("Пожелания", "notes"),
    ):
        lines.append(f"{title}: {escape(str(req.get(key) or '—'))}")
    return "\n".join(lines)


FORMATTERS = {
    PAYLOAD_ORDER: format_order,
    PAYLOAD_CUSTOM_REQUEST: format_custom_request,
}


def format_payload(data: Dict[str, Any], sender: str = "") -> str:
    """
    Текст для менеджера по payload из мини-приложения.
    Неизвестный type -> ValueError.
    """
    fmt = FORMATTERS.get(str(data.get("type")))
    if fmt is None:
        raise ValueError(f"unknown payload type: {data.get('type')!r}")
    return fmt(data, sender)
