"""Subcategory endpoints."""

from fastapi import APIRouter, Depends, Query, Request, status

from admin_dashboard.application.schemas import (
    FormPrefillResponse,
    MutationResponse,
    RecordListResponse,
    RecordResponse,
)
from admin_dashboard.application.services import SubCategoryService
from admin_dashboard.domain.entities import FormMode
from admin_dashboard.infrastructure.dependencies import get_subcategory_service
from admin_dashboard.presentation.api.error_mapping import DOMAIN_ERRORS, to_http_exception
from admin_dashboard.presentation.api.forms import backend_message, fill_form

router = APIRouter(prefix="/subcategories", tags=["Subcategories"])


@router.get("", response_model=RecordListResponse)
async def list_subcategories(
    service: SubCategoryService = Depends(get_subcategory_service),
) -> RecordListResponse:
    """Subcategories with their parent category's name."""
    items = await service.list_subcategories()
    return RecordListResponse(items=items, error=service.store.error, count=len(items))


@router.get("/{subcategory_id}", response_model=RecordResponse)
async def get_subcategory(
    subcategory_id: str,
    service: SubCategoryService = Depends(get_subcategory_service),
) -> RecordResponse:
    try:
        item = await service.get_subcategory(subcategory_id)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return RecordResponse(item=item)


@router.get("/{subcategory_id}/form", response_model=FormPrefillResponse)
async def get_subcategory_form(
    subcategory_id: str,
    service: SubCategoryService = Depends(get_subcategory_service),
) -> FormPrefillResponse:
    try:
        form = await service.edit_form(subcategory_id)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return FormPrefillResponse(fields=form.draft.fields, previews=form.draft.previews)


@router.post("", response_model=MutationResponse, status_code=status.HTTP_201_CREATED)
async def create_subcategory(
    request: Request,
    service: SubCategoryService = Depends(get_subcategory_service),
) -> MutationResponse:
    form = await fill_form(service.new_form(), request)
    try:
        result = await service.create_subcategory(form)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return MutationResponse(
        message=backend_message(result, "Subcategory added successfully!"), result=result
    )


@router.patch("/{subcategory_id}", response_model=MutationResponse)
async def update_subcategory(
    subcategory_id: str,
    request: Request,
    service: SubCategoryService = Depends(get_subcategory_service),
) -> MutationResponse:
    form = await fill_form(service.new_form(FormMode.EDIT), request)
    try:
        result = await service.update_subcategory(subcategory_id, form)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return MutationResponse(
        message=backend_message(result, "Subcategory updated successfully!"), result=result
    )


@router.delete("/{subcategory_id}", response_model=MutationResponse)
async def delete_subcategory(
    subcategory_id: str,
    confirm: bool = Query(False, description="Must be true; deletion cannot be undone"),
    service: SubCategoryService = Depends(get_subcategory_service),
) -> MutationResponse:
    try:
        result = await service.delete_subcategory(subcategory_id, confirmed=confirm)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return MutationResponse(
        message=backend_message(result, "Subcategory deleted successfully!"), result=result
    )
