from __future__ import annotations

from typing import Dict, List, Optional

from storefront.models import OrderItem, Product


class CartStore:
    """
    Корзина сессии: product_id -> OrderItem.

    qty никогда не опускается ниже 1. Позиция удаляется только через remove().
    """

    def __init__(self) -> None:
        self._lines: Dict[str, OrderItem] = {}

    def add(self, product: Product) -> OrderItem:
        cur = self._lines.get(product.id)
        qty = (cur.qty if cur else 0) + 1
        # снимок товара обновляется на текущий
        line = OrderItem(product=product, qty=qty)
        self._lines[product.id] = line
        return line

    def remove(self, product_id: str) -> None:
        self._lines.pop(product_id, None)

    def change_qty(self, product_id: str, delta: int) -> None:
        line = self._lines.get(product_id)
        if line is None:
            return
        line.qty = max(1, line.qty + delta)

    def clear(self) -> None:
        self._lines.clear()

    def get(self, product_id: str) -> Optional[OrderItem]:
        return self._lines.get(product_id)

    def items(self) -> List[OrderItem]:
        return list(self._lines.values())

    @property
    def count(self) -> int:
        return sum(line.qty for line in self._lines.values())

    @property
    def total(self) -> int:
        return sum(line.line_total for line in self._lines.values())

    def __len__(self) -> int:
        return len(self._lines)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._lines
