"""Product catalogue endpoints — enriched table and the two scalar toggles."""

from fastapi import APIRouter, Depends

from admin_dashboard.application.schemas import RecordListResponse, ToggleResponse
from admin_dashboard.application.services import ProductService
from admin_dashboard.infrastructure.dependencies import get_product_service
from admin_dashboard.presentation.api.error_mapping import DOMAIN_ERRORS, to_http_exception

router = APIRouter(prefix="/products", tags=["Products"])


@router.get("", response_model=RecordListResponse)
async def list_products(
    service: ProductService = Depends(get_product_service),
) -> RecordListResponse:
    """Products with category, subcategory and seller names resolved."""
    products = await service.list_products()
    return RecordListResponse(items=products, error=service.store.error, count=len(products))


@router.post("/{product_id}/toggle-highlight", response_model=ToggleResponse)
async def toggle_highlight(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> ToggleResponse:
    try:
        value = await service.toggle_highlight(product_id)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return ToggleResponse(id=product_id, field="highlight", value=value)


@router.post("/{product_id}/toggle-status", response_model=ToggleResponse)
async def toggle_status(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> ToggleResponse:
    try:
        value = await service.toggle_status(product_id)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return ToggleResponse(id=product_id, field="status", value=value)
