"""Application service for the Orders screen: flattening, filters and toggles."""

import asyncio
import logging
from typing import Any

from admin_dashboard.application.interfaces import MarketplaceApi
from admin_dashboard.application.services.enrichment_service import (
    EnrichmentService,
    enrich_order_lines,
)
from admin_dashboard.application.services.mutation_dispatcher import MutationDispatcher
from admin_dashboard.application.services.resource_store import ResourceStore
from admin_dashboard.domain.entities import (
    ORDER_STATUSES,
    CancellationToken,
    OrderLine,
    Record,
    get_next_order_type,
    method_url_matrix,
    optional_text,
    record_id,
    same_id,
    to_float,
    to_int,
    to_text,
)
from admin_dashboard.domain.exceptions import EntityNotFoundError

logger = logging.getLogger(__name__)

# Undocumented backend routes for the order-type switch; tried in this order.
ORDER_TYPE_ROUTES = method_url_matrix(
    ("PATCH", "POST", "PUT"),
    ("/ordersOrderType", "/ordersOrderType/"),
)

ALL = "all"


def flatten_orders(orders: list[Record]) -> list[OrderLine]:
    """One table row per product line of every order."""
    lines: list[OrderLine] = []
    for order in orders:
        products = order.get("products")
        if not isinstance(products, list):
            continue
        order_id = record_id(order, "order")
        buyer_id = order.get("buyer_id")
        for product in products:
            if not isinstance(product, dict):
                continue
            product_id = product.get("product_id")
            lines.append(
                OrderLine(
                    order_id=order_id,
                    product_id=product_id,
                    buyer_id=buyer_id,
                    seller_id=product.get("seller_id"),
                    order_type=optional_text(order.get("order_type")),
                    created_at=optional_text(order.get("created_at")),
                    updated_at=optional_text(order.get("updated_at")),
                    quantity=to_int(product.get("quantity")),
                    price=to_float(product.get("price")),
                    order_status=to_text(product.get("order_status"), "new"),
                    payment_status=to_text(product.get("payment_status"), "pending"),
                    buyer_name=to_text(order.get("buyer_name"), f"Buyer {buyer_id}"),
                    buyer_email=to_text(order.get("buyer_email"), "N/A"),
                    buyer_phone=to_text(order.get("buyer_phone"), "N/A"),
                    shipping_address=to_text(
                        order.get("shipping_address"), "Address not available"
                    ),
                    product_name=to_text(product.get("product_name"), f"Product {product_id}"),
                    product_image=optional_text(product.get("product_image")),
                    category=to_text(product.get("category"), "General"),
                    subcategory=to_text(product.get("subcategory"), "N/A"),
                    category_id=product.get("category_id"),
                    subcategory_id=product.get("subcategory_id"),
                )
            )
    return lines


def _matches(value: str | None, wanted: str | None) -> bool:
    if not wanted or wanted.lower() == ALL:
        return True
    return (value or "").lower() == wanted.lower()


def filter_orders(
    lines: list[OrderLine],
    status_filter: str | None = None,
    type_filter: str | None = None,
) -> list[OrderLine]:
    """Case-insensitive status/type predicates; ``None`` or ``"all"`` disables one."""
    return [
        line
        for line in lines
        if _matches(line.order_status, status_filter) and _matches(line.order_type, type_filter)
    ]


def status_counts(lines: list[OrderLine]) -> dict[str, int]:
    counts = {ALL: len(lines)}
    for status in ORDER_STATUSES:
        counts[status] = sum(1 for line in lines if (line.order_status or "").lower() == status)
    return counts


class OrderService:
    """Orders list with lookups joined in, filters, order-type and line-status updates."""

    def __init__(self, api: MarketplaceApi, enrichment: EnrichmentService | None = None):
        self._api = api
        self.store = ResourceStore(api, path="/orders", plural="orders", entity="order")
        self._dispatcher = MutationDispatcher(
            api, self.store, create_path="/order", item_path="/order/{id}"
        )
        self._enrichment = enrichment or EnrichmentService(api)

    async def list_lines(
        self,
        *,
        status_filter: str | None = None,
        type_filter: str | None = None,
        cancel: CancellationToken | None = None,
    ) -> list[OrderLine]:
        _, lookups = await asyncio.gather(
            self.store.refresh(cancel=cancel),
            self._enrichment.build_lookups(cancel=cancel),
        )
        lines = enrich_order_lines(flatten_orders(self.store.records), lookups)
        return filter_orders(lines, status_filter, type_filter)

    def cached_lines(self) -> list[OrderLine]:
        return flatten_orders(self.store.records)

    async def toggle_order_type(
        self, order_id: Any, *, cancel: CancellationToken | None = None
    ) -> str:
        """Flip inquiry ↔ Order optimistically, probing the backend's known routes."""
        order = await self.store.ensure(order_id, cancel=cancel)
        next_type = get_next_order_type(order.get("order_type"))
        await self._dispatcher.patch_field(
            order_id,
            "order_type",
            next_type,
            json_body={"order_id": order_id, "order_type": next_type},
            candidates=ORDER_TYPE_ROUTES,
            cancel=cancel,
        )
        logger.info("Order %s type → %s", order_id, next_type)
        return next_type

    async def update_line_status(
        self,
        order_id: Any,
        product_id: Any,
        new_status: str,
        *,
        cancel: CancellationToken | None = None,
    ) -> str:
        """PATCH one product line's status, applied to the row before the server answers."""
        order = await self.store.ensure(order_id, cancel=cancel)
        line = next(
            (
                p
                for p in order.get("products") or []
                if isinstance(p, dict) and same_id(p.get("product_id"), product_id)
            ),
            None,
        )
        if line is None:
            raise EntityNotFoundError("Order line", f"{order_id}/{product_id}")

        body = {
            "products": [
                {
                    "product_id": line.get("product_id"),
                    "seller_id": line.get("seller_id"),
                    "quantity": line.get("quantity"),
                    "price": line.get("price"),
                    "order_status": new_status,
                    "payment_status": line.get("payment_status") or "pending",
                }
            ]
        }
        await self._dispatcher.patch_field(
            order_id,
            "order_status",
            new_status,
            target=line,
            json_body=body,
            kind=f"line-status:{product_id}",
            cancel=cancel,
        )
        return new_status
