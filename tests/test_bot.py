from __future__ import annotations

import asyncio
import dataclasses
import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from storefront.bot import handlers
from storefront.bot.formatters import format_custom_request, format_order, format_payload
from storefront.bot.keyboards import main_kb, webapp_url
from storefront.config import settings
from storefront.constants import MSG_ORDER_SENT, MSG_REQUEST_SENT

ORDER = {
    "type": "order",
    "to": "@grad_zakup",
    "contact": {"name": "Ivan", "phone": "+7900", "contactMethod": "whatsapp", "comment": "<срочно>"},
    "items": [
        {"id": "p2", "brand": "Fendi", "title": "Baguette Sequins", "priceRUB": 390000, "qty": 2},
    ],
    "totalRUB": 780000,
}

REQUEST = {
    "type": "custom_request",
    "to": "@grad_zakup",
    "payload": {
        "brand": "Hermès",
        "model": "Birkin 25",
        "size": "",
        "budgetRUB": "400000",
        "notes": "",
        "contact": {"name": "", "phone": "", "contactMethod": "telegram"},
    },
}


def _message(data: str) -> MagicMock:
    message = MagicMock()
    message.web_app_data.data = data
    message.from_user.username = "ivan"
    message.from_user.id = 42
    message.answer = AsyncMock()
    message.bot.send_message = AsyncMock()
    return message


@pytest.fixture
def operator(monkeypatch):
    monkeypatch.setattr(handlers, "settings", dataclasses.replace(settings, operator_chat_id=1001))


def test_format_order() -> None:
    text = format_order(ORDER, sender="@ivan")
    assert "Новая заявка" in text
    assert "От: @ivan" in text
    assert "Связь: WhatsApp" in text
    assert "&lt;срочно&gt;" in text
    assert "Fendi Baguette Sequins × 2 — 780\u00a0000\u00a0₽" in text
    assert "Итого: 780\u00a0000\u00a0₽" in text


def test_format_custom_request() -> None:
    text = format_custom_request(REQUEST)
    assert "Запрос на подбор" in text
    assert "Бренд: Hermès" in text
    assert "Размер: —" in text
    assert "Связь: Telegram" in text


def test_format_payload_unknown_type() -> None:
    with pytest.raises(ValueError):
        format_payload({"type": "refund"})


def test_webapp_button_marks_host() -> None:
    assert webapp_url().endswith(f"{settings.host_param}=1")
    button = main_kb().keyboard[0][0]
    assert button.web_app.url == webapp_url()


def test_web_app_data_forwarded_to_operator(operator) -> None:
    message = _message(json.dumps(ORDER, ensure_ascii=False))

    asyncio.run(handlers.on_web_app_data(message))

    message.bot.send_message.assert_awaited_once()
    chat_id, text = message.bot.send_message.await_args.args
    assert chat_id == 1001
    assert "Baguette Sequins" in text
    assert "@ivan" in text
    assert MSG_ORDER_SENT in message.answer.await_args.args[0]


def test_custom_request_confirmation(operator) -> None:
    message = _message(json.dumps(REQUEST, ensure_ascii=False))

    asyncio.run(handlers.on_web_app_data(message))

    assert MSG_REQUEST_SENT in message.answer.await_args.args[0]


def test_bad_web_app_data_is_reported(operator) -> None:
    message = _message("not json")

    asyncio.run(handlers.on_web_app_data(message))

    message.bot.send_message.assert_not_awaited()
    assert message.answer.await_args.args[0].startswith("❌")


def test_operator_delivery_failure_is_reported(operator) -> None:
    message = _message(json.dumps(ORDER))
    message.bot.send_message.side_effect = RuntimeError("chat not found")

    asyncio.run(handlers.on_web_app_data(message))

    assert "chat not found" in message.answer.await_args.args[0]


def test_start_shows_webapp_keyboard() -> None:
    message = _message("")

    asyncio.run(handlers.cmd_start(message))

    kb = message.answer.await_args.kwargs["reply_markup"]
    assert kb.keyboard[0][0].web_app is not None


@pytest.mark.parametrize(
    "payload",
    [
        {"type": "order", "items": [1], "contact": {}},
        {"type": "order", "items": [], "contact": "Ivan"},
        {"type": "order", "items": {"id": "p1"}},
        {"type": "order", "items": [{"id": "p1", "qty": "two"}]},
        {"type": "custom_request", "payload": ["brand"]},
        {"type": "custom_request", "payload": {"contact": 5}},
    ],
)
def test_malformed_structure_is_reported(operator, payload) -> None:
    message = _message(json.dumps(payload))

    asyncio.run(handlers.on_web_app_data(message))

    message.bot.send_message.assert_not_awaited()
    assert message.answer.await_args.args[0].startswith("❌")


def test_format_order_rejects_non_object_items() -> None:
    with pytest.raises(ValueError):
        format_order({"type": "order", "items": [1]})
