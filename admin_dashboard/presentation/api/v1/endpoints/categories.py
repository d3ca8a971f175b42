"""Category endpoints."""

from fastapi import APIRouter, Depends, Query, Request, status

from admin_dashboard.application.schemas import MutationResponse, RecordListResponse, RecordResponse
from admin_dashboard.application.services import CategoryService
from admin_dashboard.domain.entities import FormMode
from admin_dashboard.infrastructure.dependencies import get_category_service
from admin_dashboard.presentation.api.error_mapping import DOMAIN_ERRORS, to_http_exception
from admin_dashboard.presentation.api.forms import backend_message, fill_form

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("", response_model=RecordListResponse)
async def list_categories(
    service: CategoryService = Depends(get_category_service),
) -> RecordListResponse:
    items = await service.list_categories()
    return RecordListResponse(items=items, error=service.store.error, count=len(items))


@router.get("/{category_id}", response_model=RecordResponse)
async def get_category(
    category_id: str,
    service: CategoryService = Depends(get_category_service),
) -> RecordResponse:
    try:
        item = await service.get_category(category_id)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return RecordResponse(item=item)


@router.post("", response_model=MutationResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    request: Request,
    service: CategoryService = Depends(get_category_service),
) -> MutationResponse:
    form = await fill_form(service.new_form(), request)
    try:
        result = await service.create_category(form)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return MutationResponse(message=backend_message(result, "Category created successfully"), result=result)


@router.patch("/{category_id}", response_model=MutationResponse)
async def update_category(
    category_id: str,
    request: Request,
    service: CategoryService = Depends(get_category_service),
) -> MutationResponse:
    form = await fill_form(service.new_form(FormMode.EDIT), request)
    try:
        result = await service.update_category(category_id, form)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return MutationResponse(message=backend_message(result, "Category updated successfully"), result=result)


@router.delete("/{category_id}", response_model=MutationResponse)
async def delete_category(
    category_id: str,
    confirm: bool = Query(False, description="Must be true; deletion cannot be undone"),
    service: CategoryService = Depends(get_category_service),
) -> MutationResponse:
    try:
        result = await service.delete_category(category_id, confirmed=confirm)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return MutationResponse(message=backend_message(result, "Category deleted successfully"), result=result)
