"""Promotional slider endpoints."""

from fastapi import APIRouter, Depends, Query, Request, status

from admin_dashboard.application.schemas import (
    FormPrefillResponse,
    MutationResponse,
    RecordListResponse,
    RecordResponse,
    ToggleResponse,
)
from admin_dashboard.application.services import SliderService
from admin_dashboard.domain.entities import FormMode
from admin_dashboard.infrastructure.dependencies import get_slider_service
from admin_dashboard.presentation.api.error_mapping import DOMAIN_ERRORS, to_http_exception
from admin_dashboard.presentation.api.forms import backend_message, fill_form

router = APIRouter(prefix="/sliders", tags=["Sliders"])


@router.get("", response_model=RecordListResponse)
async def list_sliders(
    service: SliderService = Depends(get_slider_service),
) -> RecordListResponse:
    sliders = await service.list_sliders()
    return RecordListResponse(items=sliders, error=service.store.error, count=len(sliders))


@router.get("/{slider_id}", response_model=RecordResponse)
async def get_slider(
    slider_id: str,
    service: SliderService = Depends(get_slider_service),
) -> RecordResponse:
    try:
        slider = await service.get_slider(slider_id)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return RecordResponse(item=service.present(slider))


@router.get("/{slider_id}/form", response_model=FormPrefillResponse)
async def get_slider_form(
    slider_id: str,
    service: SliderService = Depends(get_slider_service),
) -> FormPrefillResponse:
    try:
        form = await service.edit_form(slider_id)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return FormPrefillResponse(fields=form.draft.fields, previews=form.draft.previews)


@router.post("", response_model=MutationResponse, status_code=status.HTTP_201_CREATED)
async def create_slider(
    request: Request,
    service: SliderService = Depends(get_slider_service),
) -> MutationResponse:
    """Multipart create; ``banner_image`` is mandatory."""
    form = await fill_form(service.new_form(), request)
    try:
        result = await service.create_slider(form)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return MutationResponse(message=backend_message(result, "Slider created successfully!"), result=result)


@router.patch("/{slider_id}", response_model=MutationResponse)
async def update_slider(
    slider_id: str,
    request: Request,
    service: SliderService = Depends(get_slider_service),
) -> MutationResponse:
    form = await fill_form(service.new_form(FormMode.EDIT), request)
    try:
        result = await service.update_slider(slider_id, form)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return MutationResponse(message=backend_message(result, "Slider updated successfully!"), result=result)


@router.delete("/{slider_id}", response_model=MutationResponse)
async def delete_slider(
    slider_id: str,
    confirm: bool = Query(False, description="Must be true; deletion cannot be undone"),
    service: SliderService = Depends(get_slider_service),
) -> MutationResponse:
    try:
        result = await service.delete_slider(slider_id, confirmed=confirm)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return MutationResponse(message=backend_message(result, "Slider deleted successfully!"), result=result)


@router.post("/{slider_id}/toggle-status", response_model=ToggleResponse)
async def toggle_slider_status(
    slider_id: str,
    service: SliderService = Depends(get_slider_service),
) -> ToggleResponse:
    try:
        value = await service.toggle_status(slider_id)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return ToggleResponse(id=slider_id, field="status", value=value)
