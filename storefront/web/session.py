from __future__ import annotations

import logging
import time
import uuid
from collections import OrderedDict
from typing import Callable, List, Optional, Tuple

from storefront.constants import ALL, MAIN_BUTTON_TEXT, TAB_CATALOG, TAB_ORDERS, TABS
from storefront.db.catalog import Catalog
from storefront.models import ContactInfo, CustomRequest, FilterSelection, Product, normalize_contact_method
from storefront.services.cart import CartStore
from storefront.services.checkout import CheckoutFlow, CheckoutState, submit_custom_request
from storefront.services.filters import apply_filters
from storefront.services.host_bridge import HostBridge, LocalBridge
from storefront.utils.formatters import main_button_text

log = logging.getLogger(__name__)


class StorefrontSession:
    """Состояние одной открытой витрины. Ничего не сохраняется на диск."""

    def __init__(self, catalog: Catalog, bridge: Optional[HostBridge] = None) -> None:
        self.catalog = catalog
        self.bridge = bridge or LocalBridge()
        self.tab = TAB_CATALOG
        self.cart = CartStore()
        self.filters = FilterSelection()
        self.contact = ContactInfo()
        self.request = CustomRequest()
        self.checkout = CheckoutFlow()
        self._button_count: Optional[int] = None

        if self.bridge.available:
            self.bridge.ready()
            self.bridge.expand()
        self._sync_main_button()

    # ---------------- view ----------------

    def switch_tab(self, tab: str) -> None:
        self.tab = tab if tab in TABS else TAB_CATALOG

    def open_orders(self) -> None:
        self.tab = TAB_ORDERS

    def set_filters(self, brand: str = ALL, category: str = ALL) -> None:
        self.filters = FilterSelection(brand=brand or ALL, category=category or ALL)

    def visible_catalog(self) -> List[Product]:
        return apply_filters(self.catalog.items, self.filters)

    def visible_hot(self) -> List[Product]:
        return apply_filters(self.catalog.hot, self.filters)

    # ---------------- cart ----------------

    def add_to_cart(self, product_id: str) -> bool:
        product = self.catalog.find(product_id)
        if product is None:
            log.warning("add_to_cart: unknown product %r", product_id)
            return False
        self.cart.add(product)
        self._sync_main_button()
        return True

    def remove_from_cart(self, product_id: str) -> None:
        self.cart.remove(product_id)
        self._sync_main_button()

    def change_qty(self, product_id: str, delta: int) -> None:
        self.cart.change_qty(product_id, delta)
        self._sync_main_button()

    # ---------------- checkout ----------------

    def update_contact(self, name: str = "", phone: str = "", contact_method: str = "", comment: str = "") -> None:
        self.contact.name = name
        self.contact.phone = phone
        self.contact.contact_method = normalize_contact_method(contact_method)
        self.contact.comment = comment

    def submit_order(self) -> CheckoutState:
        result = self.checkout.submit(self.cart, self.contact, self.bridge)
        if result is CheckoutState.SUBMITTED:
            self._sync_main_button()
            self.open_orders()
        return result

    # ---------------- custom request ----------------

    def update_request(
        self,
        brand: str = "",
        model: str = "",
        size: str = "",
        budget: str = "",
        notes: str = "",
        name: str = "",
        phone: str = "",
        contact_method: str = "",
    ) -> None:
        self.request = CustomRequest(
            brand=brand,
            model=model,
            size=size,
            budget=budget,
            notes=notes,
            contact=ContactInfo(name=name, phone=phone, contact_method=normalize_contact_method(contact_method)),
        )

    def submit_request(self) -> dict:
        payload = submit_custom_request(self.request, self.bridge)
        self.request = CustomRequest()
        self.open_orders()
        return payload

    # ---------------- host main button ----------------

    def click_main_button(self) -> bool:
        return self.bridge.click_button()

    def detach_host(self) -> None:
        """?tg=1 открыли вне Telegram: дальше работаем через LocalBridge."""
        if not self.bridge.available:
            return
        log.info("host runtime not found in page, switching to local bridge")
        self.bridge = LocalBridge()

    def _sync_main_button(self) -> None:
        count = self.cart.count
        if count == self._button_count:
            return
        self._button_count = count
        if not self.bridge.available:
            return
        self.bridge.configure_button(main_button_text(MAIN_BUTTON_TEXT, count), visible=count > 0)
        self.bridge.on_button_click(self.open_orders)


class SessionStore:
    """
    session_id -> StorefrontSession, только в памяти процесса.

    Сессии, простаивающие дольше ttl секунд, выбрасываются; сверх max_sessions
    вытесняется самая давно использованная.
    """

    def __init__(
        self,
        max_sessions: int = 1000,
        ttl: float = 6 * 3600,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_sessions = max_sessions
        self.ttl = ttl
        self._clock = clock
        self._sessions: "OrderedDict[str, Tuple[float, StorefrontSession]]" = OrderedDict()

    def get(self, session_id: Optional[str]) -> Optional[StorefrontSession]:
        if not session_id:
            return None
        self._evict_idle()
        entry = self._sessions.get(session_id)
        if entry is None:
            return None
        session = entry[1]
        self._sessions[session_id] = (self._clock(), session)
        self._sessions.move_to_end(session_id)
        return session

    def create(self, catalog: Catalog, bridge: HostBridge) -> Tuple[str, StorefrontSession]:
        self._evict_idle()
        sid = uuid.uuid4().hex
        session = StorefrontSession(catalog, bridge)
        self._sessions[sid] = (self._clock(), session)
        while len(self._sessions) > self.max_sessions:
            old_sid, _ = self._sessions.popitem(last=False)
            log.info("session %s evicted (limit %d)", old_sid, self.max_sessions)
        log.info("session %s created (host=%s)", sid, bridge.available)
        return sid, session

    def _evict_idle(self) -> None:
        deadline = self._clock() - self.ttl
        # порядок = порядок последнего обращения, старые впереди
        while self._sessions:
            sid, (seen, _) = next(iter(self._sessions.items()))
            if seen > deadline:
                break
            del self._sessions[sid]
            log.info("session %s expired", sid)

    def clear(self) -> None:
        self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)
