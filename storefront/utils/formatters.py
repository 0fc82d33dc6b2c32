from storefront.config import settings
from storefront.constants import ALL, CONTACT_METHODS

NBSP = "\u00a0"


def money(v: int) -> str:
    # 4100000 -> "4 100 000 ₽", как toLocaleString("ru-RU")
    return f"{v:,}".replace(",", NBSP) + f"{NBSP}{settings.currency_symbol}"


def option_label(value: str, all_label: str) -> str:
    return all_label if value == ALL else value


def contact_method_label(method: str) -> str:
    return CONTACT_METHODS.get(method, method)


def main_button_text(base: str, count: int) -> str:
    return f"{base} ({count})" if count else base
