from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

STOCK_MOVEMENT_TYPES = ("in", "out", "adjustment", "loss", "sale")
PRODUCT_STATUSES = ("active", "inactive", "discontinued")


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    category: str
    unit: str
    purchase_price: float
    sale_price: float
    current_stock: float
    minimum_stock: float
    status: str = "active"
    is_low_stock: bool = False
    profit_margin: float | None = None
    brand: str | None = None


@dataclass(frozen=True)
class ProductForm:
    name: str = ""
    category: str = ""
    unit: str = ""
    purchase_price: float = 0.0
    sale_price: float = 0.0
    current_stock: float = 0.0
    minimum_stock: float = 0.0
    maximum_stock: float | None = None
    brand: str | None = None
    description: str | None = None
    barcode: str | None = None
    status: str = "active"
    supplier: dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        stock: dict[str, Any] = {"current": self.current_stock, "minimum": self.minimum_stock}
        if self.maximum_stock is not None:
            stock["maximum"] = self.maximum_stock
        payload: dict[str, Any] = {
            "name": self.name.strip(),
            "category": self.category,
            "unit": self.unit,
            "price": {"purchase": self.purchase_price, "sale": self.sale_price},
            "stock": stock,
            "status": self.status,
        }
        for key in ("brand", "description", "barcode"):
            value = getattr(self, key)
            if value:
                payload[key] = value
        if self.supplier:
            payload["supplier"] = dict(self.supplier)
        return payload


@dataclass(frozen=True)
class StockMovementForm:
    type: str = "in"
    quantity: float = 0.0
    reason: str = ""
    unit_cost: float = 0.0
    notes: str | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "type": self.type,
            "quantity": self.quantity,
            "reason": self.reason.strip(),
            "unitCost": self.unit_cost,
        }
        if self.notes:
            payload["notes"] = self.notes
        return payload
