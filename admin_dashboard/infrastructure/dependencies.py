"""FastAPI dependency injection — wires infrastructure to application layer.

Every screen service keeps its resource store in memory, so one instance
per process is shared across requests. All of them talk to the marketplace
through a single ``MarketplaceApiClient``.
"""

from functools import lru_cache

import httpx
from fastapi import Depends

from admin_dashboard.config import get_settings
from admin_dashboard.application.interfaces import MarketplaceApi
from admin_dashboard.application.services import (
    RESOURCES,
    AttributeKind,
    AttributeService,
    BuyerService,
    CategoryService,
    DashboardService,
    EnrichmentService,
    OrderService,
    ProductService,
    SellerService,
    SliderService,
    SubCategoryService,
)
from admin_dashboard.infrastructure.http import MarketplaceApiClient


@lru_cache
def get_marketplace_api() -> MarketplaceApiClient:
    """Provides the shared marketplace client (one pooled httpx client per process)."""
    settings = get_settings()
    return MarketplaceApiClient(
        settings.marketplace_api_base_url,
        timeout=settings.marketplace_api_timeout,
        http_client=httpx.AsyncClient(timeout=settings.marketplace_api_timeout),
    )


@lru_cache
def get_enrichment_service() -> EnrichmentService:
    return EnrichmentService(_api())


@lru_cache
def get_buyer_service() -> BuyerService:
    return BuyerService(_api(), get_enrichment_service())


@lru_cache
def get_seller_service() -> SellerService:
    return SellerService(_api(), get_enrichment_service())


@lru_cache
def get_order_service() -> OrderService:
    return OrderService(_api(), get_enrichment_service())


@lru_cache
def get_product_service() -> ProductService:
    return ProductService(_api(), get_enrichment_service())


@lru_cache
def get_slider_service() -> SliderService:
    return SliderService(_api())


@lru_cache
def get_subcategory_service() -> SubCategoryService:
    return SubCategoryService(_api(), get_enrichment_service())


@lru_cache
def get_category_service() -> CategoryService:
    return CategoryService(_api())


@lru_cache
def get_dashboard_service() -> DashboardService:
    return DashboardService(_api())


@lru_cache
def get_attribute_services() -> dict[AttributeKind, AttributeService]:
    """One service per simple catalogue (colors, countries, finishes, FAQs)."""
    return {kind: AttributeService(_api(), resource) for kind, resource in RESOURCES.items()}


def get_attribute_service(
    kind: AttributeKind,
    services: dict[AttributeKind, AttributeService] = Depends(get_attribute_services),
) -> AttributeService:
    return services[kind]


def _api() -> MarketplaceApi:
    return get_marketplace_api()
