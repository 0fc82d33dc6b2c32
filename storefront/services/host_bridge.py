from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from storefront.constants import MSG_PREVIEW

log = logging.getLogger(__name__)

Handler = Callable[[], None]


@dataclass(frozen=True)
class HostCommand:
    """Вызов JS, который выполнит следующая отрисованная страница."""

    call: str
    args: List[Any] = field(default_factory=list)


class ButtonSubscription:
    """Один обработчик клика по MainButton. replace() не копит обработчики."""

    def __init__(self) -> None:
        self._handler: Optional[Handler] = None

    @property
    def handler(self) -> Optional[Handler]:
        return self._handler

    def replace(self, handler: Handler) -> None:
        self._handler = handler

    def clear(self) -> None:
        self._handler = None

    def fire(self) -> bool:
        if self._handler is None:
            return False
        self._handler()
        return True


class HostBridge(ABC):
    """Порт к хосту мини-приложения."""

    available = False

    def __init__(self) -> None:
        self.button = ButtonSubscription()
        self._pending: List[HostCommand] = []

    def ready(self) -> None:
        pass

    def expand(self) -> None:
        pass

    def configure_button(self, text: str, visible: bool) -> None:
        pass

    def on_button_click(self, handler: Handler) -> None:
        self.button.replace(handler)

    def click_button(self) -> bool:
        return self.button.fire()

    @abstractmethod
    def send(self, data: str) -> None:
        ...

    @abstractmethod
    def alert(self, message: str) -> None:
        ...

    def drain(self) -> List[HostCommand]:
        out, self._pending = self._pending, []
        return out


class TelegramWebAppBridge(HostBridge):
    """
    Команды копятся в очереди и уходят на страницу как вызовы
    Telegram.WebApp.*. sendData не подтверждается: доставку не видно.
    """

    available = True

    def _push(self, call: str, *args: Any) -> None:
        self._pending.append(HostCommand(call, list(args)))

    def ready(self) -> None:
        self._push("Telegram.WebApp.ready")

    def expand(self) -> None:
        self._push("Telegram.WebApp.expand")

    def configure_button(self, text: str, visible: bool) -> None:
        self._push("Telegram.WebApp.MainButton.setParams", {"text": text, "is_visible": visible})

    def send(self, data: str) -> None:
        log.info("sendData: %d bytes", len(data.encode("utf-8")))
        self._push("Telegram.WebApp.sendData", data)

    def alert(self, message: str) -> None:
        self._push("Telegram.WebApp.showAlert", message)


class LocalBridge(HostBridge):
    """Хоста нет (превью в браузере): всё показываем обычным alert()."""

    def __init__(self) -> None:
        super().__init__()
        self.notifications: List[str] = []

    def _notify(self, text: str) -> None:
        log.info("local notification: %s", text)
        self.notifications.append(text)
        self._pending.append(HostCommand("alert", [text]))

    def send(self, data: str) -> None:
        self._notify(f"{MSG_PREVIEW}\n{data}")

    def alert(self, message: str) -> None:
        self._notify(message)


def make_bridge(in_host: bool) -> HostBridge:
    # in_host берётся из ?tg=1 в URL кнопки бота; страница сама проверяет
    # Telegram.WebApp.initData и при его отсутствии переводит сессию на LocalBridge
    return TelegramWebAppBridge() if in_host else LocalBridge()
