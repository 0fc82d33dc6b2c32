from __future__ import annotations

from typing import Iterable, List

from storefront.constants import ALL
from storefront.models import FilterSelection, Product


def matches(product: Product, selection: FilterSelection) -> bool:
    return (
        (selection.brand == ALL or product.brand == selection.brand)
        and (selection.category == ALL or product.category == selection.category)
        and product.in_stock is not False
    )


def apply_filters(items: Iterable[Product], selection: FilterSelection) -> List[Product]:
    # порядок исходного списка сохраняется
    return [p for p in items if matches(p, selection)]


def filter_options(values: Iterable[str]) -> List[str]:
    return [ALL, *values]
