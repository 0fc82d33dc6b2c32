from aiogram.types import KeyboardButton, ReplyKeyboardMarkup, WebAppInfo

from storefront.config import settings

OPEN_SHOP_TEXT = "🛍 Открыть витрину"


def webapp_url() -> str:
    sep = "&" if "?" in settings.webapp_url else "?"
    return f"{settings.webapp_url}{sep}{settings.host_param}=1"


def main_kb() -> ReplyKeyboardMarkup:
    # sendData работает только для мини-приложения, открытого с reply-клавиатуры
    return ReplyKeyboardMarkup(
        keyboard=[
            [KeyboardButton(text=OPEN_SHOP_TEXT, web_app=WebAppInfo(url=webapp_url()))],
            [KeyboardButton(text="/help")],
        ],
        resize_keyboard=True,
    )
