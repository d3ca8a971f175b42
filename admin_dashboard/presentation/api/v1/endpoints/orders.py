"""Order screen endpoints — flattened order lines, filters and status changes."""

from fastapi import APIRouter, Depends, Query

from admin_dashboard.application.schemas import (
    LineStatusUpdate,
    OrderLineSchema,
    OrderListResponse,
    ToggleResponse,
)
from admin_dashboard.application.services import OrderService, filter_orders, status_counts
from admin_dashboard.infrastructure.dependencies import get_order_service
from admin_dashboard.presentation.api.error_mapping import DOMAIN_ERRORS, to_http_exception

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.get("", response_model=OrderListResponse)
async def list_orders(
    status_filter: str | None = Query(None, alias="status", description="Order status or 'all'"),
    type_filter: str | None = Query(None, alias="type", description="Order type or 'all'"),
    service: OrderService = Depends(get_order_service),
) -> OrderListResponse:
    """One row per product line; counts are taken before filtering."""
    lines = await service.list_lines()
    counts = status_counts(lines)
    lines = filter_orders(lines, status_filter, type_filter)
    return OrderListResponse(
        items=[OrderLineSchema.model_validate(line, from_attributes=True) for line in lines],
        error=service.store.error,
        count=len(lines),
        status_counts=counts,
    )


@router.post("/{order_id}/toggle-type", response_model=ToggleResponse)
async def toggle_order_type(
    order_id: str,
    service: OrderService = Depends(get_order_service),
) -> ToggleResponse:
    """Switch an order between ``inquiry`` and ``Order``."""
    try:
        new_type = await service.toggle_order_type(order_id)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return ToggleResponse(id=order_id, field="order_type", value=new_type)


@router.patch("/{order_id}/lines/{product_id}/status", response_model=ToggleResponse)
async def update_line_status(
    order_id: str,
    product_id: str,
    data: LineStatusUpdate,
    service: OrderService = Depends(get_order_service),
) -> ToggleResponse:
    try:
        new_status = await service.update_line_status(order_id, product_id, data.order_status)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return ToggleResponse(id=f"{order_id}/{product_id}", field="order_status", value=new_status)
