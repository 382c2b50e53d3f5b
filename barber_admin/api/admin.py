from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from barber_admin.api.schemas import (
    BlockedDaySchema,
    CustomerSchema,
    CustomersResponseSchema,
    DashboardResponseSchema,
    PeriodMode,
    PeriodSchema,
    PlanFilter,
    PlanSchema,
    ProductFormSchema,
    ProductSchema,
    ProductsResponseSchema,
    StockMovementSchema,
    SubscribeRequestSchema,
    ToggleDayRequestSchema,
    ToggleDayResponseSchema,
)
from barber_admin.application.exceptions import BackendContractError, BackendUpstreamError, FormValidationError
from barber_admin.application.use_cases.absences import AbsencesUseCase
from barber_admin.application.use_cases.customers import CustomersUseCase
from barber_admin.application.use_cases.dashboard import DashboardReport, DashboardUseCase
from barber_admin.application.use_cases.inventory import InventoryUseCase, low_stock_count, product_query_params
from barber_admin.application.utils.period import available_years, resolve_period
from barber_admin.domain.entities.product import ProductForm, StockMovementForm
from barber_admin.wiring.dependencies import (
    get_absences_use_case,
    get_customers_use_case,
    get_dashboard_use_case,
    get_inventory_use_case,
)

router = APIRouter()
logger = logging.getLogger(__name__)

UPSTREAM_ERRORS = (BackendUpstreamError, BackendContractError)


def _upstream_failure(e: Exception) -> HTTPException:
    logger.warning("Backend call failed", extra={"error": str(e)})
    return HTTPException(status_code=502, detail=str(e))


def _report_response(report: DashboardReport) -> DashboardResponseSchema:
    return DashboardResponseSchema(
        period=PeriodSchema(start_date=report.period.start, end_date=report.period.end, label=report.label),
        metrics=report.metrics,
        available_years=available_years(),
    )


@router.get("/barbershops/{barbershop_id}/dashboard", response_model=DashboardResponseSchema)
def dashboard_metrics(
    barbershop_id: str,
    mode: PeriodMode = Query(PeriodMode.month),
    year: int | None = Query(None),
    month: int | None = Query(None),
    start: date | None = Query(None),
    end: date | None = Query(None),
    uc: DashboardUseCase = Depends(get_dashboard_use_case),
):
    period = resolve_period(mode.value, year, month, start, end)
    try:
        return _report_response(uc.metrics(barbershop_id, period))
    except UPSTREAM_ERRORS as e:
        raise _upstream_failure(e)


@router.get("/barbershops/{barbershop_id}/barber-performance", response_model=DashboardResponseSchema)
def barber_performance(
    barbershop_id: str,
    year: int | None = Query(None),
    month: int | None = Query(None),
    uc: DashboardUseCase = Depends(get_dashboard_use_case),
):
    period = resolve_period("month", year, month)
    try:
        return _report_response(uc.barber_performance(barbershop_id, period))
    except UPSTREAM_ERRORS as e:
        raise _upstream_failure(e)


@router.get("/barbershops/{barbershop_id}/customers", response_model=CustomersResponseSchema)
def list_customers(
    barbershop_id: str,
    search: str = Query(""),
    plan: PlanFilter = Query(PlanFilter.all),
    uc: CustomersUseCase = Depends(get_customers_use_case),
):
    try:
        summaries = uc.list_customers(barbershop_id, search=search, plan_filter=plan.value)
    except UPSTREAM_ERRORS as e:
        raise _upstream_failure(e)
    return CustomersResponseSchema(
        total=len(summaries),
        customers=[
            CustomerSchema(
                id=s.customer.id,
                name=s.customer.name,
                phone=s.customer.phone,
                has_active_plan=s.has_active_plan,
                active_plan_name=s.active_plan_name,
                days_remaining=s.days_remaining,
            )
            for s in summaries
        ],
    )


@router.get("/barbershops/{barbershop_id}/plans", response_model=list[PlanSchema])
def list_plans(
    barbershop_id: str,
    uc: CustomersUseCase = Depends(get_customers_use_case),
):
    try:
        return [PlanSchema.model_validate(plan) for plan in uc.list_plans(barbershop_id)]
    except UPSTREAM_ERRORS as e:
        raise _upstream_failure(e)


@router.post("/barbershops/{barbershop_id}/customers/{customer_id}/subscribe", status_code=204)
def subscribe_customer(
    barbershop_id: str,
    customer_id: str,
    req: SubscribeRequestSchema,
    uc: CustomersUseCase = Depends(get_customers_use_case),
):
    try:
        uc.subscribe(barbershop_id, customer_id, req.plan_id)
    except FormValidationError as e:
        raise HTTPException(status_code=422, detail={"errors": e.errors})
    except UPSTREAM_ERRORS as e:
        raise _upstream_failure(e)


@router.get("/barbershops/{barbershop_id}/products", response_model=ProductsResponseSchema)
def list_products(
    barbershop_id: str,
    search: str = Query(""),
    category: str = Query("all"),
    status: str = Query("active"),
    low_stock: bool = Query(False),
    uc: InventoryUseCase = Depends(get_inventory_use_case),
):
    params = product_query_params(search=search, category=category, status=status, low_stock=low_stock)
    try:
        products = uc.list_products(barbershop_id, params)
    except UPSTREAM_ERRORS as e:
        raise _upstream_failure(e)
    return ProductsResponseSchema(
        low_stock_count=low_stock_count(products),
        products=[ProductSchema.model_validate(p) for p in products],
    )


@router.post("/barbershops/{barbershop_id}/products", status_code=201)
def create_product(
    barbershop_id: str,
    req: ProductFormSchema,
    uc: InventoryUseCase = Depends(get_inventory_use_case),
):
    return _save_product(uc, barbershop_id, req, None)


@router.put("/barbershops/{barbershop_id}/products/{product_id}")
def update_product(
    barbershop_id: str,
    product_id: str,
    req: ProductFormSchema,
    uc: InventoryUseCase = Depends(get_inventory_use_case),
):
    return _save_product(uc, barbershop_id, req, product_id)


def _save_product(uc: InventoryUseCase, barbershop_id: str, req: ProductFormSchema, product_id: str | None):
    try:
        uc.save_product(barbershop_id, ProductForm(**req.model_dump()), product_id)
    except FormValidationError as e:
        raise HTTPException(status_code=422, detail={"errors": e.errors})
    except UPSTREAM_ERRORS as e:
        raise _upstream_failure(e)
    return {"status": "ok"}


@router.delete("/barbershops/{barbershop_id}/products/{product_id}", status_code=204)
def delete_product(
    barbershop_id: str,
    product_id: str,
    uc: InventoryUseCase = Depends(get_inventory_use_case),
):
    try:
        uc.delete_product(barbershop_id, product_id)
    except UPSTREAM_ERRORS as e:
        raise _upstream_failure(e)


@router.post("/barbershops/{barbershop_id}/products/{product_id}/stock")
def move_stock(
    barbershop_id: str,
    product_id: str,
    req: StockMovementSchema,
    uc: InventoryUseCase = Depends(get_inventory_use_case),
):
    try:
        uc.move_stock(barbershop_id, product_id, StockMovementForm(**req.model_dump()))
    except FormValidationError as e:
        raise HTTPException(status_code=422, detail={"errors": e.errors})
    except UPSTREAM_ERRORS as e:
        raise _upstream_failure(e)
    return {"status": "ok"}


@router.get("/barbershops/{barbershop_id}/blocked-days", response_model=list[BlockedDaySchema])
def list_blocked_days(
    barbershop_id: str,
    uc: AbsencesUseCase = Depends(get_absences_use_case),
):
    try:
        return [BlockedDaySchema(id=d.id, day=d.day) for d in uc.list_blocked_days(barbershop_id)]
    except UPSTREAM_ERRORS as e:
        raise _upstream_failure(e)


@router.post("/barbershops/{barbershop_id}/blocked-days/toggle", response_model=ToggleDayResponseSchema)
def toggle_blocked_day(
    barbershop_id: str,
    req: ToggleDayRequestSchema,
    uc: AbsencesUseCase = Depends(get_absences_use_case),
):
    try:
        blocked = uc.toggle_day(barbershop_id, req.day)
    except UPSTREAM_ERRORS as e:
        raise _upstream_failure(e)
    return ToggleDayResponseSchema(day=req.day, blocked=blocked)
