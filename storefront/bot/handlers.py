import json
import logging

from aiogram import F, Router
from aiogram.filters import Command
from aiogram.types import Message

from storefront.bot.formatters import format_payload
from storefront.bot.keyboards import main_kb
from storefront.config import settings
from storefront.constants import MSG_ORDER_SENT, MSG_REQUEST_SENT, PAYLOAD_CUSTOM_REQUEST

log = logging.getLogger(__name__)

router = Router()


def _sender(message: Message) -> str:
    user = message.from_user
    if user is None:
        return ""
    if user.username:
        return f"@{user.username} (id {user.id})"
    return f"{user.full_name} (id {user.id})"


@router.message(Command("start"))
async def cmd_start(message: Message):
    await message.answer(
        "👋 Personal Shopper\n\n"
        "Откройте витрину кнопкой ниже: каталог, горячие предложения и подбор под запрос.",
        reply_markup=main_kb(),
    )


@router.message(Command("help"))
async def cmd_help(message: Message):
    text = (
        "<b>Как заказать</b>\n\n"
        "1. Откройте витрину кнопкой «🛍 Открыть витрину»\n"
        "2. Добавьте позиции в корзину или заполните «Подбор»\n"
        "3. Оставьте имя и телефон и отправьте заявку\n\n"
        f"Менеджер {settings.operator_handle} свяжется с вами лично."
    )
    await message.answer(text, reply_markup=main_kb())


@router.message(F.web_app_data)
async def on_web_app_data(message: Message):
    raw = message.web_app_data.data
    try:
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError("payload is not an object")
        text = format_payload(data, sender=_sender(message))
    except (ValueError, TypeError) as e:
        log.warning("bad web_app_data from %s: %s", _sender(message), e)
        await message.answer("❌ Не удалось прочитать заявку. Попробуйте отправить ещё раз.")
        return

    if not settings.operator_chat_id:
        log.warning("OPERATOR_CHAT_ID is not set, payload dropped: %s", raw)
    else:
        try:
            await message.bot.send_message(settings.operator_chat_id, text)
        except Exception as e:
            log.exception("operator delivery failed")
            await message.answer(f"❌ Ошибка отправки менеджеру: {e}")
            return

    log.info("web_app_data %s forwarded", data.get("type"))
    done = MSG_REQUEST_SENT if data.get("type") == PAYLOAD_CUSTOM_REQUEST else MSG_ORDER_SENT
    await message.answer(f"✅ {done}", reply_markup=main_kb())
