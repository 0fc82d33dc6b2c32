from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from storefront.models import Product

log = logging.getLogger(__name__)

_IMG = "https://images.unsplash.com/{}?q=80&w=1200&auto=format&fit=crop"

DEMO_CATALOG: Tuple[Product, ...] = (
    Product("p1", "Hermès", "Kelly 20 Sellier", 4100000, _IMG.format("photo-1548036328-c9fa89d128fa"),
            "bags", tags=("VIP", "Rare"), in_stock=True),
    Product("p2", "Fendi", "Baguette Sequins", 390000, _IMG.format("photo-1551537482-f2075a1d41f2"),
            "bags", tags=("New",), in_stock=True),
    Product("p3", "Gucci", "Horsebit 1955", 285000, _IMG.format("photo-1548036324-8a1f9d3b1a02"),
            "bags", tags=("Classic",), in_stock=True),
    Product("p4", "Cartier", "Love Bracelet", 720000, _IMG.format("photo-1599643475993-6f2b1a7b3b19"),
            "jewelry", tags=("Jewelry",), in_stock=True),
)

DEMO_HOT: Tuple[Product, ...] = (
    Product("h1", "Hermès", "Birkin 25 Togo", 4300000, _IMG.format("photo-1616512651851-6d5f2f0dcf65"),
            "bags", in_stock=True, discount_pct=10),
    Product("h2", "Chanel", "Classic Flap Mini", 620000, _IMG.format("photo-1543776703-0359126f0615"),
            "bags", in_stock=True, discount_pct=7),
)


@dataclass(frozen=True)
class Catalog:
    items: Tuple[Product, ...]
    hot: Tuple[Product, ...]
    brands: Tuple[str, ...]
    categories: Tuple[str, ...]

    @classmethod
    def build(cls, items: List[Product], hot: List[Product]) -> "Catalog":
        both = list(items) + list(hot)
        return cls(
            items=tuple(items),
            hot=tuple(hot),
            brands=tuple(sorted({p.brand for p in both})),
            categories=tuple(sorted({p.category for p in both})),
        )

    def find(self, product_id: str) -> Optional[Product]:
        for p in self.items + self.hot:
            if p.id == product_id:
                return p
        return None


def load_catalog(path: Optional[str] = None) -> Catalog:
    """
    Без пути отдаёт демо-каталог.
    С путём читает JSON вида {"catalog": [...], "hot": [...]}.
    """
    if not path:
        return Catalog.build(list(DEMO_CATALOG), list(DEMO_HOT))

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"catalog file not found: {p}")

    with open(p, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError("catalog file must contain a JSON object")

    items = [Product.from_dict(row) for row in data.get("catalog") or []]
    hot = [Product.from_dict(row) for row in data.get("hot") or []]

    ids = [x.id for x in items + hot]
    if len(ids) != len(set(ids)):
        raise ValueError("catalog contains duplicate product ids")

    log.info("catalog loaded from %s: %d items, %d hot", p, len(items), len(hot))
    return Catalog.build(items, hot)
