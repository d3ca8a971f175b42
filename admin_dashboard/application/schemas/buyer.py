"""Pydantic schemas for the Buyers screen."""

from typing import Any

from pydantic import BaseModel

from admin_dashboard.domain.entities import ApprovalStatus


class ApprovalStatusUpdate(BaseModel):
    """Request body for changing a buyer's or seller's approval status."""

    approve_status: ApprovalStatus


class BuyerOrderSummarySchema(BaseModel):
    order_id: Any
    products: list[dict[str, Any]]
    total_quantity: int
    total_amount: float
    product_names: str
    order_status: str
    order_type: str | None = None
    created_at: str | None = None

    model_config = {"from_attributes": True}


class BuyerOrdersResponse(BaseModel):
    buyer_id: str
    orders: list[BuyerOrderSummarySchema]
