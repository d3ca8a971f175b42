"""Detail/enrichment fetcher — joins records with names from related endpoints.

Partial results are always returned: a failed secondary lookup resolves to
a sentinel name instead of failing the whole batch.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

from admin_dashboard.application.interfaces import MarketplaceApi
from admin_dashboard.application.services.response_normalizer import (
    normalize_collection,
    unwrap_record,
)
from admin_dashboard.domain.entities import (
    BuyerOrderSummary,
    CancellationToken,
    OrderLine,
    Record,
    optional_text,
    record_id,
    to_float,
    to_int,
    to_text,
)
from admin_dashboard.domain.exceptions import ApiError, ApiHttpError

logger = logging.getLogger(__name__)

UNKNOWN_PRODUCT = "Unknown Product"
NOT_AVAILABLE = "N/A"


@dataclass
class ReferenceLookups:
    """id → display name maps, built once per view load."""

    categories: dict[str, str] = field(default_factory=dict)
    subcategories: dict[str, str] = field(default_factory=dict)
    sellers: dict[str, str] = field(default_factory=dict)

    def category_name(self, category_id: Any) -> str:
        if category_id in (None, ""):
            return NOT_AVAILABLE
        return self.categories.get(str(category_id), NOT_AVAILABLE)

    def subcategory_name(self, subcategory_id: Any) -> str:
        if subcategory_id in (None, ""):
            return NOT_AVAILABLE
        return self.subcategories.get(str(subcategory_id), NOT_AVAILABLE)

    def seller_name(self, seller_id: Any) -> str:
        return self.sellers.get(str(seller_id), f"Seller {seller_id}")


def index_by_id(records: list[Record], *name_fields: str, entity: str | None = None) -> dict[str, str]:
    """Map ``str(id)`` to the first non-empty of ``name_fields``."""
    index: dict[str, str] = {}
    for record in records:
        key = record_id(record, entity)
        if key is None:
            continue
        name = next((record[f] for f in name_fields if record.get(f)), None)
        if name:
            index[str(key)] = str(name)
    return index


class EnrichmentService:
    """Fetches child collections and reference data, then joins them by id."""

    def __init__(self, api: MarketplaceApi):
        self._api = api

    async def fetch_children(
        self,
        path: str,
        plural: str,
        *,
        cancel: CancellationToken | None = None,
    ) -> list[Record]:
        """Fetch a child collection; a 404 means "no related records", not an error."""
        try:
            payload = await self._api.get(path, cancel=cancel)
        except ApiHttpError as exc:
            if exc.is_not_found:
                logger.debug("%s answered 404 — treating as empty", path)
                return []
            raise
        return normalize_collection(payload, plural).records

    async def fetch_reference(
        self,
        path: str,
        plural: str,
        *name_fields: str,
        entity: str | None = None,
        cancel: CancellationToken | None = None,
    ) -> dict[str, str]:
        """Index one reference collection; failures yield an empty map."""
        try:
            payload = await self._api.get(path, cancel=cancel)
        except ApiError as exc:
            logger.warning("Reference lookup %s failed: %s", path, exc)
            return {}
        records = normalize_collection(payload, plural).records
        return index_by_id(records, *name_fields, entity=entity)

    async def build_lookups(self, *, cancel: CancellationToken | None = None) -> ReferenceLookups:
        categories, subcategories, sellers = await asyncio.gather(
            self.fetch_reference(
                "/categories", "categories", "category_name", "name",
                entity="category", cancel=cancel,
            ),
            self.fetch_reference(
                "/subcategories", "subcategories", "subcategory_name", "name",
                entity="subcategory", cancel=cancel,
            ),
            self.fetch_reference(
                "/sellers", "sellers", "name", "company_name",
                entity="seller", cancel=cancel,
            ),
        )
        return ReferenceLookups(categories, subcategories, sellers)

    async def product_name(
        self, product_id: Any, *, cancel: CancellationToken | None = None
    ) -> str:
        try:
            payload = await self._api.get(f"/product/{product_id}", cancel=cancel)
        except ApiError as exc:
            logger.warning("Product %s lookup failed: %s", product_id, exc)
            return UNKNOWN_PRODUCT
        product = unwrap_record(payload, "product") or {}
        return to_text(product.get("name") or product.get("product_name"), UNKNOWN_PRODUCT)

    async def enrich_buyer_orders(
        self, buyer_id: Any, *, cancel: CancellationToken | None = None
    ) -> list[BuyerOrderSummary]:
        """The buyer's orders with product names resolved and totals computed."""
        orders = await self.fetch_children(f"/orderbuyer/{buyer_id}", "orders", cancel=cancel)

        missing = sorted(
            {
                str(item["product_id"])
                for order in orders
                for item in _order_items(order)
                if not _item_name(item) and item.get("product_id") is not None
            }
        )
        names = await asyncio.gather(*(self.product_name(pid, cancel=cancel) for pid in missing))
        resolved = dict(zip(missing, names))
        logger.info(
            "Buyer %s: %d orders, %d product names looked up", buyer_id, len(orders), len(missing)
        )

        return [_summarize(order, resolved) for order in orders]


def enrich_order_lines(lines: list[OrderLine], lookups: ReferenceLookups) -> list[OrderLine]:
    """Fill category/subcategory/seller names from prebuilt lookup maps (O(1) per line)."""
    for line in lines:
        if line.category_id is not None and line.category == "General":
            name = lookups.category_name(line.category_id)
            if name != NOT_AVAILABLE:
                line.category = name
        if line.subcategory_id is not None and line.subcategory == NOT_AVAILABLE:
            line.subcategory = lookups.subcategory_name(line.subcategory_id)
        if line.seller_id is not None:
            line.seller_name = lookups.seller_name(line.seller_id)
    return lines


def _order_items(order: Record) -> list[Record]:
    items = order.get("products")
    return [i for i in items if isinstance(i, dict)] if isinstance(items, list) else []


def _item_name(item: Record) -> str | None:
    return item.get("name") or item.get("product_name")


def _summarize(order: Record, resolved: dict[str, str]) -> BuyerOrderSummary:
    items = []
    for item in _order_items(order):
        name = _item_name(item) or resolved.get(str(item.get("product_id")), UNKNOWN_PRODUCT)
        items.append({**item, "name": name})

    statuses = [s for s in dict.fromkeys(to_text(i.get("order_status")) for i in items) if s]
    return BuyerOrderSummary(
        order_id=record_id(order, "order"),
        products=items,
        total_quantity=sum(to_int(i.get("quantity")) for i in items),
        total_amount=round(
            sum(to_float(i.get("price")) * to_int(i.get("quantity")) for i in items), 2
        ),
        product_names=", ".join(dict.fromkeys(to_text(i["name"]) for i in items)),
        order_status=", ".join(statuses),
        order_type=optional_text(order.get("order_type")),
        created_at=optional_text(order.get("created_at")),
    )
