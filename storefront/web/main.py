from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from fastapi import FastAPI, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from storefront.config import settings
from storefront.constants import ALL, CONTACT_METHODS, TAB_HOT, TABS
from storefront.db.catalog import Catalog, load_catalog
from storefront.services.filters import filter_options
from storefront.services.host_bridge import make_bridge
from storefront.utils.formatters import contact_method_label, money, option_label
from storefront.web.session import SessionStore, StorefrontSession

log = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = BASE_DIR / "templates"
STATIC_DIR = BASE_DIR / "static"

app = FastAPI(title="Personal Shopper")

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["money"] = money
templates.env.globals["option_label"] = option_label
templates.env.globals["contact_method_label"] = contact_method_label

if STATIC_DIR.exists():
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

SESSIONS = SessionStore(max_sessions=settings.session_limit, ttl=settings.session_ttl)
CATALOG: Catalog | None = None


@app.on_event("startup")
def _startup() -> None:
    global CATALOG
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    CATALOG = load_catalog(settings.catalog_path)


def _catalog() -> Catalog:
    global CATALOG
    if CATALOG is None:
        CATALOG = load_catalog(settings.catalog_path)
    return CATALOG


def _session(request: Request) -> StorefrontSession:
    session = SESSIONS.get(request.cookies.get(settings.session_cookie))
    if session is None:
        in_host = request.query_params.get(settings.host_param) == "1"
        sid, session = SESSIONS.create(_catalog(), make_bridge(in_host))
        request.state.new_sid = sid
    return session


def _with_cookie(request: Request, response: Any) -> Any:
    sid = getattr(request.state, "new_sid", None)
    if sid:
        response.set_cookie(settings.session_cookie, sid, httponly=True, samesite="lax")
    return response


def _back(request: Request) -> RedirectResponse:
    return _with_cookie(request, RedirectResponse(url="/", status_code=303))


def _render(request: Request, session: StorefrontSession) -> HTMLResponse:
    catalog = session.catalog
    ctx = {
        "request": request,
        "tabs": TABS,
        "tab": session.tab,
        "session": session,
        "cart_items": session.cart.items(),
        "cart_count": session.cart.count,
        "cart_total": session.cart.total,
        "brands": filter_options(catalog.brands),
        "categories": filter_options(catalog.categories),
        "contact_methods": list(CONTACT_METHODS),
        "products": session.visible_hot() if session.tab == TAB_HOT else session.visible_catalog(),
        "hot": session.tab == TAB_HOT,
        "in_host": session.bridge.available,
        "host_commands": session.bridge.drain(),
    }
    return _with_cookie(request, templates.TemplateResponse(request, "index.html", ctx))


@app.get("/", response_class=HTMLResponse)
def index(request: Request, tab: str | None = None):
    session = _session(request)
    if tab:
        session.switch_tab(tab)
    return _render(request, session)


# ---------------- filters ----------------

@app.post("/filters")
def filters(request: Request, brand: str = Form(ALL), category: str = Form(ALL)):
    _session(request).set_filters(brand, category)
    return _back(request)


# ---------------- cart ----------------

@app.post("/cart/add")
def cart_add(request: Request, product_id: str = Form(...)):
    _session(request).add_to_cart(product_id)
    return _back(request)


@app.post("/cart/remove")
def cart_remove(request: Request, product_id: str = Form(...)):
    _session(request).remove_from_cart(product_id)
    return _back(request)


@app.post("/cart/qty")
def cart_qty(request: Request, product_id: str = Form(...), delta: int = Form(...)):
    _session(request).change_qty(product_id, delta)
    return _back(request)


# ---------------- checkout ----------------

@app.post("/contact", status_code=204)
def contact_draft(
    request: Request,
    name: str = Form(""),
    phone: str = Form(""),
    contact_method: str = Form(""),
    comment: str = Form(""),
):
    # черновик контактов: страница шлёт его на каждый ввод
    _session(request).update_contact(name, phone, contact_method, comment)
    return _with_cookie(request, Response(status_code=204))


@app.post("/checkout")
def checkout(
    request: Request,
    name: str = Form(""),
    phone: str = Form(""),
    contact_method: str = Form(""),
    comment: str = Form(""),
):
    session = _session(request)
    session.update_contact(name, phone, contact_method, comment)
    session.submit_order()
    return _back(request)


# ---------------- custom request ----------------

@app.post("/request")
def custom_request(
    request: Request,
    brand: str = Form(""),
    model: str = Form(""),
    size: str = Form(""),
    budget: str = Form(""),
    notes: str = Form(""),
    name: str = Form(""),
    phone: str = Form(""),
    contact_method: str = Form(""),
):
    session = _session(request)
    session.update_request(brand, model, size, budget, notes, name, phone, contact_method)
    session.submit_request()
    return _back(request)


# ---------------- host ----------------

@app.post("/host/main-button")
def host_main_button(request: Request):
    _session(request).click_main_button()
    return _back(request)


@app.post("/host/detach")
def host_detach(request: Request):
    _session(request).detach_host()
    return _back(request)
