"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from admin_dashboard.presentation.api.v1.endpoints.health import router as health_router
from admin_dashboard.presentation.api.v1.endpoints.dashboard import router as dashboard_router
from admin_dashboard.presentation.api.v1.endpoints.buyers import router as buyers_router
from admin_dashboard.presentation.api.v1.endpoints.sellers import router as sellers_router
from admin_dashboard.presentation.api.v1.endpoints.orders import router as orders_router
from admin_dashboard.presentation.api.v1.endpoints.products import router as products_router
from admin_dashboard.presentation.api.v1.endpoints.sliders import router as sliders_router
from admin_dashboard.presentation.api.v1.endpoints.categories import router as categories_router
from admin_dashboard.presentation.api.v1.endpoints.subcategories import router as subcategories_router
from admin_dashboard.presentation.api.v1.endpoints.attributes import router as attributes_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(dashboard_router)
router.include_router(buyers_router)
router.include_router(sellers_router)
router.include_router(orders_router)
router.include_router(products_router)
router.include_router(sliders_router)
router.include_router(categories_router)
router.include_router(subcategories_router)
router.include_router(attributes_router)
