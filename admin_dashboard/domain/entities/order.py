"""Domain entities for orders as the dashboard displays them."""

from dataclasses import dataclass, field
from typing import Any

ORDER_STATUSES = (
    "new",
    "pending",
    "confirmed",
    "prepared",
    "shipped",
    "delivered",
    "returned",
    "cancelled",
)

ORDER_TYPE_INQUIRY = "inquiry"
ORDER_TYPE_ORDER = "Order"


def get_next_order_type(current: str | None) -> str:
    """Flip between inquiry and Order; anything unrecognized starts as inquiry."""
    if isinstance(current, str) and current.strip().lower() == ORDER_TYPE_INQUIRY:
        return ORDER_TYPE_ORDER
    return ORDER_TYPE_INQUIRY


@dataclass
class OrderLine:
    """One product line of an order, flattened for the orders table."""

    order_id: Any
    product_id: Any
    buyer_id: Any = None
    seller_id: Any = None
    order_type: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    quantity: int = 0
    price: float = 0.0
    order_status: str = "new"
    payment_status: str = "pending"
    buyer_name: str = ""
    buyer_email: str = "N/A"
    buyer_phone: str = "N/A"
    shipping_address: str = "Address not available"
    product_name: str = ""
    product_image: str | None = None
    category: str = "General"
    subcategory: str = "N/A"
    category_id: Any = None
    subcategory_id: Any = None
    seller_name: str = ""

    @property
    def total(self) -> float:
        return round(self.price * self.quantity, 2)


@dataclass
class BuyerOrderSummary:
    """A buyer's order with product names joined in and totals computed."""

    order_id: Any
    products: list[dict[str, Any]] = field(default_factory=list)
    total_quantity: int = 0
    total_amount: float = 0.0
    product_names: str = ""
    order_status: str = ""
    order_type: str | None = None
    created_at: str | None = None
