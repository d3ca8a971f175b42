"""Pydantic schemas for the Orders screen."""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from admin_dashboard.domain.entities import ORDER_STATUSES


class OrderLineSchema(BaseModel):
    """One product line of an order as a table row."""

    order_id: Any
    product_id: Any
    buyer_id: Any = None
    seller_id: Any = None
    order_type: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    quantity: int
    price: float
    total: float
    order_status: str
    payment_status: str
    buyer_name: str
    buyer_email: str
    buyer_phone: str
    shipping_address: str
    product_name: str
    product_image: str | None = None
    category: str
    subcategory: str
    seller_name: str

    model_config = {"from_attributes": True}


class OrderListResponse(BaseModel):
    items: list[OrderLineSchema] = Field(default_factory=list)
    error: str | None = None
    count: int = 0
    status_counts: dict[str, int] = Field(default_factory=dict)


class LineStatusUpdate(BaseModel):
    """Request body for changing one order line's status."""

    order_status: str

    @field_validator("order_status")
    @classmethod
    def _known_status(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in ORDER_STATUSES:
            raise ValueError(f"Unknown order status '{value}'")
        return normalized
