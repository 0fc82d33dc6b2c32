import json

import pytest

from storefront.db.catalog import DEMO_CATALOG, DEMO_HOT, load_catalog
from storefront.models import FilterSelection, Product
from storefront.services.filters import apply_filters


def test_demo_catalog_defaults() -> None:
    catalog = load_catalog()
    assert catalog.items == DEMO_CATALOG
    assert catalog.hot == DEMO_HOT
    assert catalog.brands == ("Cartier", "Chanel", "Fendi", "Gucci", "Hermès")
    assert catalog.categories == ("bags", "jewelry")
    assert catalog.find("h2").discount_pct == 7
    assert catalog.find("nope") is None


def test_load_catalog_from_json(tmp_path) -> None:
    path = tmp_path / "catalog.json"
    path.write_text(
        json.dumps(
            {
                "catalog": [
                    {"id": "s1", "brand": "Dior", "title": "Saddle", "priceRUB": 350000,
                     "img": "https://img/s1.jpg", "category": "bags", "inStock": False},
                ],
                "hot": [
                    {"id": "s2", "brand": "Prada", "title": "Re-Edition", "priceRUB": 150000,
                     "img": "https://img/s2.jpg", "category": "bags", "discountPct": 15, "tags": ["New"]},
                ],
            }
        ),
        encoding="utf-8",
    )

    catalog = load_catalog(str(path))

    assert [p.id for p in catalog.items] == ["s1"]
    assert catalog.items[0].in_stock is False
    assert catalog.hot[0].tags == ("New",)
    assert catalog.brands == ("Dior", "Prada")


def test_load_catalog_missing_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_catalog(str(tmp_path / "nope.json"))


def test_load_catalog_rejects_duplicates(tmp_path) -> None:
    row = {"id": "x", "brand": "B", "title": "T", "priceRUB": 1, "category": "bags"}
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"catalog": [row], "hot": [row]}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_catalog(str(path))


@pytest.mark.parametrize(
    "row",
    [
        {"id": "x", "brand": "B", "title": "T", "category": "bags"},
        {"id": "x", "brand": "B", "title": "T", "priceRUB": -1, "category": "bags"},
        {"id": "x", "brand": "B", "title": "T", "priceRUB": 1, "category": "bags", "discountPct": 120},
        {"id": "x", "brand": "B", "title": "T", "priceRUB": 1, "category": "bags", "discountPct": "10"},
        {"id": "x", "brand": "B", "title": "T", "priceRUB": "100", "category": "bags"},
        {"id": "x", "brand": "B", "title": "T", "priceRUB": True, "category": "bags"},
        {"id": "x", "brand": "B", "title": "T", "priceRUB": 1, "category": "bags", "inStock": "false"},
        {"id": "x", "brand": "B", "title": "T", "priceRUB": 1, "category": "bags", "tags": "VIP"},
        {"id": "x", "brand": "B", "title": "T", "priceRUB": 1, "category": "bags", "tags": 5},
    ],
)
def test_product_from_dict_validation(row) -> None:
    with pytest.raises(ValueError):
        Product.from_dict(row)


def test_product_payload_omits_unset_fields() -> None:
    p = Product("p", "Brand", "Title", 10, "https://img/p.jpg", "bags")
    assert p.to_payload() == {
        "id": "p",
        "brand": "Brand",
        "title": "Title",
        "priceRUB": 10,
        "img": "https://img/p.jpg",
        "category": "bags",
    }


def test_load_catalog_rejects_non_object_entries(tmp_path) -> None:
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"catalog": [1], "hot": []}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_catalog(str(path))


def test_product_from_dict_keeps_explicit_out_of_stock() -> None:
    p = Product.from_dict(
        {"id": "x", "brand": "B", "title": "T", "priceRUB": 1, "category": "bags", "inStock": False}
    )
    assert p.in_stock is False
    assert apply_filters([p], FilterSelection()) == []
