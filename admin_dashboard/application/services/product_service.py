"""Application service for the Products catalogue."""

import asyncio
import logging
from typing import Any

from admin_dashboard.application.interfaces import MarketplaceApi
from admin_dashboard.application.services.enrichment_service import (
    EnrichmentService,
    ReferenceLookups,
)
from admin_dashboard.application.services.mutation_dispatcher import MutationDispatcher
from admin_dashboard.application.services.resource_store import ResourceStore
from admin_dashboard.domain.entities import CancellationToken, Record

logger = logging.getLogger(__name__)

HIGHLIGHT_YES = "Yes"
HIGHLIGHT_NO = "No"
STATUS_ACTIVE = "active"
STATUS_INACTIVE = "inactive"


def is_highlighted(product: Record) -> bool:
    return str(product.get("highlight") or "").strip().lower() == "yes"


def next_highlight(current: Any) -> str:
    return HIGHLIGHT_NO if str(current or "").strip().lower() == "yes" else HIGHLIGHT_YES


def next_status(current: Any) -> str:
    return STATUS_INACTIVE if str(current or "").strip().lower() == STATUS_ACTIVE else STATUS_ACTIVE


class ProductService:
    """Read-mostly catalogue with two optimistic scalar toggles."""

    def __init__(self, api: MarketplaceApi, enrichment: EnrichmentService | None = None):
        self._api = api
        self.store = ResourceStore(api, path="/products", plural="products", entity="product")
        self._dispatcher = MutationDispatcher(
            api, self.store, create_path="/product", item_path="/product/{id}"
        )
        self._enrichment = enrichment or EnrichmentService(api)
        self.lookups = ReferenceLookups()

    async def list_products(self, *, cancel: CancellationToken | None = None) -> list[Record]:
        """Products with category, subcategory and seller names plus a resolved image URL."""
        _, self.lookups = await asyncio.gather(
            self.store.refresh(cancel=cancel),
            self._enrichment.build_lookups(cancel=cancel),
        )
        return [self.present(product) for product in self.store.records]

    def present(self, product: Record) -> Record:
        return {
            **product,
            "name": product.get("name") or "Unnamed Product",
            "category_name": self.lookups.category_name(product.get("cat_id")),
            "subcategory_name": self.lookups.subcategory_name(product.get("cat_sub_id")),
            "seller_name": self.lookups.seller_name(product.get("seller_id")),
            "image_url": self._api.resolve_media_url(product.get("f_image")),
            "highlighted": is_highlighted(product),
        }

    async def toggle_highlight(
        self, product_id: Any, *, cancel: CancellationToken | None = None
    ) -> str:
        """``Yes`` ↔ ``No``; the row flips immediately and flips back if the PATCH fails."""
        product = await self.store.ensure(product_id, cancel=cancel)
        value = next_highlight(product.get("highlight"))
        await self._dispatcher.patch_field(product_id, "highlight", value, cancel=cancel)
        logger.info("Product %s highlight → %s", product_id, value)
        return value

    async def toggle_status(
        self, product_id: Any, *, cancel: CancellationToken | None = None
    ) -> str:
        product = await self.store.ensure(product_id, cancel=cancel)
        value = next_status(product.get("status"))
        await self._dispatcher.patch_field(product_id, "status", value, cancel=cancel)
        logger.info("Product %s status → %s", product_id, value)
        return value
