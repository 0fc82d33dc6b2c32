from __future__ import annotations

import pytest

from storefront.db.catalog import Catalog
from storefront.models import Product
from storefront.services.host_bridge import LocalBridge, TelegramWebAppBridge
from storefront.web.session import StorefrontSession


def _make_product(
    pid: str,
    *,
    brand: str = "Hermès",
    category: str = "bags",
    price: int = 100000,
    in_stock: bool | None = True,
    discount_pct: int | None = None,
) -> Product:
    return Product(
        id=pid,
        brand=brand,
        title=f"Item {pid}",
        price_rub=price,
        img=f"https://img.example/{pid}.jpg",
        category=category,
        in_stock=in_stock,
        discount_pct=discount_pct,
    )


@pytest.fixture
def make_product():
    return _make_product


@pytest.fixture
def catalog() -> Catalog:
    return Catalog.build(
        [
            _make_product("a", brand="Hermès", category="bags", price=100000),
            _make_product("b", brand="Cartier", category="jewelry", price=50000),
            _make_product("c", brand="Hermès", category="bags", price=70000, in_stock=False),
            _make_product("d", brand="Gucci", category="shoes", price=30000, in_stock=None),
        ],
        [
            _make_product("h1", brand="Chanel", category="bags", price=620000, discount_pct=7),
        ],
    )


@pytest.fixture
def local_session(catalog: Catalog) -> StorefrontSession:
    return StorefrontSession(catalog, LocalBridge())


@pytest.fixture
def host_session(catalog: Catalog) -> StorefrontSession:
    return StorefrontSession(catalog, TelegramWebAppBridge())
