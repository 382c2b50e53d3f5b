from __future__ import annotations

import logging
from typing import Iterable

from barber_admin.application.exceptions import FormValidationError
from barber_admin.application.ports.barbershop_backend import BarbershopBackendPort
from barber_admin.domain.entities.product import (
    PRODUCT_STATUSES,
    STOCK_MOVEMENT_TYPES,
    Product,
    ProductForm,
    StockMovementForm,
)


def validate_product(form: ProductForm) -> dict[str, str]:
    errors: dict[str, str] = {}
    if not form.name.strip():
        errors["name"] = "Name is required"
    if not form.category:
        errors["category"] = "Category is required"
    if not form.unit:
        errors["unit"] = "Unit is required"
    if form.purchase_price < 0:
        errors["purchase_price"] = "Purchase price must be positive"
    if form.sale_price < 0:
        errors["sale_price"] = "Sale price must be positive"
    if form.current_stock < 0:
        errors["current_stock"] = "Current stock must be positive"
    if form.minimum_stock < 0:
        errors["minimum_stock"] = "Minimum stock must be positive"
    if form.status not in PRODUCT_STATUSES:
        errors["status"] = f"Status must be one of {', '.join(PRODUCT_STATUSES)}"
    return errors


def validate_stock_movement(form: StockMovementForm) -> dict[str, str]:
    errors: dict[str, str] = {}
    if form.type not in STOCK_MOVEMENT_TYPES:
        errors["type"] = f"Type must be one of {', '.join(STOCK_MOVEMENT_TYPES)}"
    if form.quantity <= 0:
        errors["quantity"] = "Quantity must be greater than zero"
    if not form.reason.strip():
        errors["reason"] = "Reason is required"
    if form.unit_cost < 0:
        errors["unit_cost"] = "Unit cost must be positive"
    return errors


def low_stock_count(products: Iterable[Product]) -> int:
    return sum(1 for p in products if p.is_low_stock)


def product_query_params(
    search: str = "",
    category: str = "all",
    status: str = "active",
    low_stock: bool = False,
) -> dict[str, str]:
    params: dict[str, str] = {}
    if search:
        params["search"] = search
    if category and category != "all":
        params["category"] = category
    if status and status != "all":
        params["status"] = status
    if low_stock:
        params["lowStock"] = "true"
    return params


class InventoryUseCase:
    def __init__(self, backend: BarbershopBackendPort) -> None:
        self._backend = backend
        self._logger = logging.getLogger(__name__)

    def list_products(self, barbershop_id: str, params: dict[str, str] | None = None) -> list[Product]:
        return self._backend.list_products(barbershop_id, params or {})

    def save_product(self, barbershop_id: str, form: ProductForm, product_id: str | None = None) -> None:
        errors = validate_product(form)
        if errors:
            raise FormValidationError(errors)
        if product_id:
            self._backend.update_product(barbershop_id, product_id, form.to_payload())
            self._logger.info("Product updated", extra={"barbershop_id": barbershop_id, "reason": product_id})
        else:
            self._backend.create_product(barbershop_id, form.to_payload())
            self._logger.info("Product created", extra={"barbershop_id": barbershop_id})

    def delete_product(self, barbershop_id: str, product_id: str) -> None:
        self._backend.delete_product(barbershop_id, product_id)

    def move_stock(self, barbershop_id: str, product_id: str, form: StockMovementForm) -> None:
        errors = validate_stock_movement(form)
        if errors:
            raise FormValidationError(errors)
        self._backend.move_stock(barbershop_id, product_id, form.to_payload())
