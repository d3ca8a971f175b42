"""Dashboard stats — collection counts across the marketplace."""

import asyncio
import logging
from dataclasses import dataclass, field

from admin_dashboard.application.interfaces import MarketplaceApi
from admin_dashboard.application.services.buyer_service import flatten_buyer
from admin_dashboard.application.services.resource_store import ResourceStore
from admin_dashboard.application.services.seller_service import flatten_seller
from admin_dashboard.domain.entities import CancellationToken

logger = logging.getLogger(__name__)

ACTIVE_BUYER_STATUS = "Active"

# (path, plural, entity)
COUNTED_COLLECTIONS = (
    ("/buyers", "buyers", "buyer"),
    ("/sellers", "sellers", "seller"),
    ("/categories", "categories", "category"),
    ("/subcategories", "subcategories", "subcategory"),
    ("/products", "products", "product"),
    ("/orders", "orders", "order"),
)

# Buyers and sellers may be listed as {<entity>, company, kyc, ...} envelopes.
TRANSFORMS = {"buyer": flatten_buyer, "seller": flatten_seller}


@dataclass
class DashboardStats:
    counts: dict[str, int] = field(default_factory=dict)
    active_buyers: int = 0
    errors: dict[str, str] = field(default_factory=dict)


class DashboardService:
    """Fetches every counted collection concurrently; one failure never blanks the rest."""

    def __init__(self, api: MarketplaceApi):
        self.stores = {
            plural: ResourceStore(
                api,
                path=path,
                plural=plural,
                entity=entity,
                transform=TRANSFORMS.get(entity),
            )
            for path, plural, entity in COUNTED_COLLECTIONS
        }

    async def stats(self, *, cancel: CancellationToken | None = None) -> DashboardStats:
        await asyncio.gather(*(store.refresh(cancel=cancel) for store in self.stores.values()))

        result = DashboardStats()
        for plural, store in self.stores.items():
            result.counts[plural] = len(store.records)
            if store.error:
                result.errors[plural] = store.error
        result.active_buyers = sum(
            1 for buyer in self.stores["buyers"].records
            if buyer.get("status") == ACTIVE_BUYER_STATUS
        )
        if result.errors:
            logger.warning("Dashboard loaded with %d failed collections", len(result.errors))
        return result
