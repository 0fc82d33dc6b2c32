from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Any, Dict

from storefront.config import settings
from storefront.constants import (
    MSG_EMPTY_CART,
    MSG_FILL_CONTACTS,
    MSG_ORDER_SENT,
    MSG_REQUEST_SENT,
    PAYLOAD_CUSTOM_REQUEST,
    PAYLOAD_ORDER,
)
from storefront.models import ContactInfo, CustomRequest
from storefront.services.cart import CartStore
from storefront.services.host_bridge import HostBridge
from storefront.utils.validators import is_filled

log = logging.getLogger(__name__)


class CheckoutState(str, Enum):
    EDITING = "editing"
    VALIDATING = "validating"
    REJECTED = "rejected"
    SUBMITTED = "submitted"


def serialize(payload: Dict[str, Any]) -> str:
    # тот же формат, что у JSON.stringify
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def build_order_payload(cart: CartStore, contact: ContactInfo, to: str | None = None) -> Dict[str, Any]:
    return {
        "type": PAYLOAD_ORDER,
        "to": to or settings.operator_handle,
        "contact": contact.to_payload(),
        "items": [line.to_payload() for line in cart.items()],
        "totalRUB": cart.total,
    }


def build_request_payload(request: CustomRequest, to: str | None = None) -> Dict[str, Any]:
    return {
        "type": PAYLOAD_CUSTOM_REQUEST,
        "to": to or settings.operator_handle,
        "payload": request.to_payload(),
    }


class CheckoutFlow:
    """
    EDITING -> VALIDATING -> REJECTED (обратно в EDITING) | SUBMITTED.

    Телефон проверяется только на непустоту.
    """

    def __init__(self) -> None:
        self.state = CheckoutState.EDITING

    def submit(self, cart: CartStore, contact: ContactInfo, bridge: HostBridge) -> CheckoutState:
        self.state = CheckoutState.VALIDATING

        if not len(cart):
            return self._reject(bridge, MSG_EMPTY_CART)
        if not (is_filled(contact.name) and is_filled(contact.phone)):
            return self._reject(bridge, MSG_FILL_CONTACTS)

        payload = build_order_payload(cart, contact)
        bridge.send(serialize(payload))
        bridge.alert(MSG_ORDER_SENT)
        log.info("order sent: %d lines, total=%s", len(payload["items"]), payload["totalRUB"])

        cart.clear()
        contact.reset()
        self.state = CheckoutState.SUBMITTED
        return self.state

    def _reject(self, bridge: HostBridge, message: str) -> CheckoutState:
        bridge.alert(message)
        self.state = CheckoutState.EDITING
        return CheckoutState.REJECTED


def submit_custom_request(request: CustomRequest, bridge: HostBridge) -> Dict[str, Any]:
    # полей не проверяем: менеджер разберётся сам
    payload = build_request_payload(request)
    bridge.send(serialize(payload))
    bridge.alert(MSG_REQUEST_SENT)
    log.info("custom request sent: brand=%r", request.brand)
    return payload
