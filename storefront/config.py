from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[1]  # .../personal_shopper
load_dotenv(dotenv_path=ROOT_DIR / ".env")


def _get_env(*keys: str, default: str | None = None) -> str | None:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


def _get_int(*keys: str, default: int | None = None) -> int | None:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    return int(v)


@dataclass(frozen=True)
class Settings:
    bot_token: str
    operator_chat_id: int
    operator_handle: str
    webapp_url: str
    catalog_path: str | None
    currency_symbol: str
    session_cookie: str
    host_param: str
    session_limit: int
    session_ttl: int
    log_level: str


settings = Settings(
    bot_token=_get_env("BOT_TOKEN", "TELEGRAM_BOT_TOKEN", default="") or "",
    operator_chat_id=_get_int("OPERATOR_CHAT_ID", "ADMIN_ID", "ADMIN_TG_ID", default=0) or 0,
    operator_handle=_get_env("OPERATOR_HANDLE", default="@grad_zakup") or "@grad_zakup",
    webapp_url=_get_env("WEBAPP_URL", default="http://localhost:8000/") or "http://localhost:8000/",
    catalog_path=_get_env("CATALOG_PATH", default=None),
    currency_symbol=_get_env("CURRENCY_SYMBOL", default="₽") or "₽",
    session_cookie=_get_env("SESSION_COOKIE", default="shop_sid") or "shop_sid",
    host_param=_get_env("HOST_PARAM", default="tg") or "tg",
    session_limit=_get_int("SESSION_LIMIT", default=1000) or 1000,
    session_ttl=_get_int("SESSION_TTL", default=6 * 3600) or 6 * 3600,
    log_level=(_get_env("LOG_LEVEL", default="INFO") or "INFO").upper(),
)
