"""App-level fixtures: the real FastAPI app wired to the fake marketplace backend."""

import pytest
from httpx import ASGITransport, AsyncClient

from admin_dashboard.application.services import (
    RESOURCES,
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
from admin_dashboard.infrastructure.dependencies import (
    get_attribute_services,
    get_buyer_service,
    get_category_service,
    get_dashboard_service,
    get_order_service,
    get_product_service,
    get_seller_service,
    get_slider_service,
    get_subcategory_service,
)
from admin_dashboard.main import app


@pytest.fixture
def client(api):
    """AsyncClient against the app, with every screen service backed by ``api``."""
    enrichment = EnrichmentService(api)
    services = {
        get_buyer_service: BuyerService(api, enrichment),
        get_seller_service: SellerService(api, enrichment),
        get_order_service: OrderService(api, enrichment),
        get_product_service: ProductService(api, enrichment),
        get_slider_service: SliderService(api),
        get_category_service: CategoryService(api),
        get_subcategory_service: SubCategoryService(api, enrichment),
        get_dashboard_service: DashboardService(api),
        get_attribute_services: {
            kind: AttributeService(api, resource) for kind, resource in RESOURCES.items()
        },
    }
    def provide(service):
        return lambda: service

    for dependency, service in services.items():
        app.dependency_overrides[dependency] = provide(service)

    yield AsyncClient(transport=ASGITransport(app=app), base_url="http://test")

    app.dependency_overrides.clear()
