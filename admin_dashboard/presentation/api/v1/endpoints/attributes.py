"""Colors, countries, finishes and FAQs — one set of routes, ``kind`` picks the catalogue."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status

from admin_dashboard.application.schemas import (
    MutationResponse,
    RecordListResponse,
    RecordResponse,
)
from admin_dashboard.application.services import AttributeKind, AttributeService
from admin_dashboard.domain.entities import FormMode
from admin_dashboard.infrastructure.dependencies import get_attribute_service
from admin_dashboard.presentation.api.error_mapping import DOMAIN_ERRORS, to_http_exception
from admin_dashboard.presentation.api.forms import backend_message

router = APIRouter(prefix="/attributes", tags=["Attributes"])


def _label(service: AttributeService) -> str:
    return service.resource.entity.capitalize()


@router.get("/{kind}", response_model=RecordListResponse)
async def list_items(
    kind: AttributeKind,
    search: str | None = Query(None, description="Case-insensitive match on name or question"),
    service: AttributeService = Depends(get_attribute_service),
) -> RecordListResponse:
    items = await service.list_items()
    if search and search.strip():
        needle = search.strip().lower()
        items = [
            item for item in items
            if needle in str(item.get("name") or item.get("question") or "").lower()
        ]
    return RecordListResponse(items=items, error=service.store.error, count=len(items))


@router.get("/{kind}/{item_id}", response_model=RecordResponse)
async def get_item(
    kind: AttributeKind,
    item_id: str,
    service: AttributeService = Depends(get_attribute_service),
) -> RecordResponse:
    try:
        item = await service.get_item(item_id)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return RecordResponse(item=item)


@router.post("/{kind}", response_model=MutationResponse, status_code=status.HTTP_201_CREATED)
async def create_item(
    kind: AttributeKind,
    data: dict[str, Any] = Body(...),
    service: AttributeService = Depends(get_attribute_service),
) -> MutationResponse:
    form = service.new_form()
    form.set_fields(data)
    try:
        result = await service.create_item(form)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return MutationResponse(
        message=backend_message(result, f"{_label(service)} created successfully"), result=result
    )


@router.patch("/{kind}/{item_id}", response_model=MutationResponse)
async def update_item(
    kind: AttributeKind,
    item_id: str,
    data: dict[str, Any] = Body(...),
    service: AttributeService = Depends(get_attribute_service),
) -> MutationResponse:
    form = service.new_form(FormMode.EDIT, initial=data)
    try:
        result = await service.update_item(item_id, form)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return MutationResponse(
        message=backend_message(result, f"{_label(service)} updated successfully"), result=result
    )


@router.delete("/{kind}/{item_id}", response_model=MutationResponse)
async def delete_item(
    kind: AttributeKind,
    item_id: str,
    confirm: bool = Query(False, description="Must be true; deletion cannot be undone"),
    service: AttributeService = Depends(get_attribute_service),
) -> MutationResponse:
    try:
        result = await service.delete_item(item_id, confirmed=confirm)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return MutationResponse(
        message=backend_message(result, f"{_label(service)} deleted successfully"), result=result
    )
