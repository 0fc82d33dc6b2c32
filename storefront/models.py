from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from storefront.constants import ALL, CONTACT_METHODS, CONTACT_TELEGRAM
from storefront.utils.validators import require_int, require_non_negative, require_optional_bool


@dataclass(frozen=True)
class Product:
    id: str
    brand: str
    title: str
    price_rub: int
    img: str
    category: str  # bags, jewelry, shoes, accessories...
    tags: Tuple[str, ...] = ()
    in_stock: Optional[bool] = None  # None = в наличии
    discount_pct: Optional[int] = None  # только для "Горячее"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        """
        Принимает поля в том виде, в каком они ходят в payload
        (priceRUB, inStock, discountPct).
        """
        if not isinstance(data, dict):
            raise ValueError(f"product entry must be an object, got {data!r}")
        try:
            pid = str(data["id"])
            price = require_int(data["priceRUB"], f"{pid}: priceRUB")
            discount = data.get("discountPct")
            if discount is not None:
                require_int(discount, f"{pid}: discountPct")
            tags = data.get("tags") or ()
            if isinstance(tags, str) or not all(isinstance(t, str) for t in tags):
                raise ValueError(f"{pid}: tags must be a list of strings")
            product = cls(
                id=pid,
                brand=str(data["brand"]),
                title=str(data["title"]),
                price_rub=price,
                img=str(data.get("img", "")),
                category=str(data["category"]),
                tags=tuple(tags),
                in_stock=require_optional_bool(data.get("inStock"), f"{pid}: inStock"),
                discount_pct=discount,
            )
        except KeyError as e:
            raise ValueError(f"product field missing: {e.args[0]}") from e
        except TypeError as e:
            raise ValueError(f"bad product entry: {e}") from e

        require_non_negative(product.price_rub, f"{product.id}: priceRUB")
        if product.discount_pct is not None and not 0 <= product.discount_pct <= 100:
            raise ValueError(f"{product.id}: discountPct must be in 0..100")
        return product

    def to_payload(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "brand": self.brand,
            "title": self.title,
            "priceRUB": self.price_rub,
            "img": self.img,
            "category": self.category,
        }
        # необязательные поля не попадают в JSON, если не заданы
        if self.tags:
            out["tags"] = list(self.tags)
        if self.in_stock is not None:
            out["inStock"] = self.in_stock
        if self.discount_pct is not None:
            out["discountPct"] = self.discount_pct
        return out


@dataclass
class OrderItem:
    product: Product
    qty: int = 1

    @property
    def id(self) -> str:
        return self.product.id

    @property
    def line_total(self) -> int:
        return self.product.price_rub * self.qty

    def to_payload(self) -> Dict[str, Any]:
        out = self.product.to_payload()
        out["qty"] = self.qty
        return out


def normalize_contact_method(value: Optional[str]) -> str:
    v = (value or "").strip().lower()
    return v if v in CONTACT_METHODS else CONTACT_TELEGRAM


@dataclass
class ContactInfo:
    name: str = ""
    phone: str = ""
    contact_method: str = CONTACT_TELEGRAM
    comment: str = ""

    def reset(self) -> None:
        self.name = ""
        self.phone = ""
        self.contact_method = CONTACT_TELEGRAM
        self.comment = ""

    def to_payload(self, with_comment: bool = True) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "name": self.name,
            "phone": self.phone,
            "contactMethod": self.contact_method,
        }
        if with_comment:
            out["comment"] = self.comment
        return out


@dataclass
class CustomRequest:
    brand: str = ""
    model: str = ""
    size: str = ""
    budget: str = ""
    notes: str = ""
    contact: ContactInfo = field(default_factory=ContactInfo)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "brand": self.brand,
            "model": self.model,
            "size": self.size,
            "budgetRUB": self.budget,
            "notes": self.notes,
            "contact": self.contact.to_payload(with_comment=False),
        }


@dataclass
class FilterSelection:
    brand: str = ALL
    category: str = ALL
