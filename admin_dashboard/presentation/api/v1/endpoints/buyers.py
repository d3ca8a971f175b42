"""Buyer screen endpoints — table, detail, edit modal, approval and order history."""

from fastapi import APIRouter, Depends, Query, Request, status

from admin_dashboard.application.schemas import (
    ApprovalStatusUpdate,
    BuyerOrderSummarySchema,
    BuyerOrdersResponse,
    FormPrefillResponse,
    MutationResponse,
    RecordListResponse,
    RecordResponse,
    ToggleResponse,
)
from admin_dashboard.application.services import BuyerService
from admin_dashboard.domain.entities import FormMode
from admin_dashboard.infrastructure.dependencies import get_buyer_service
from admin_dashboard.presentation.api.error_mapping import DOMAIN_ERRORS, to_http_exception
from admin_dashboard.presentation.api.forms import backend_message, fill_form

router = APIRouter(prefix="/buyers", tags=["Buyers"])


@router.get("", response_model=RecordListResponse)
async def list_buyers(
    service: BuyerService = Depends(get_buyer_service),
) -> RecordListResponse:
    """Full buyer list; a failed fetch comes back as an empty list plus ``error``."""
    buyers = await service.list_buyers()
    return RecordListResponse(items=buyers, error=service.store.error, count=len(buyers))


@router.get("/{buyer_id}", response_model=RecordResponse)
async def get_buyer(
    buyer_id: str,
    service: BuyerService = Depends(get_buyer_service),
) -> RecordResponse:
    try:
        buyer = await service.get_buyer(buyer_id)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return RecordResponse(item=buyer)


@router.get("/{buyer_id}/form", response_model=FormPrefillResponse)
async def get_buyer_form(
    buyer_id: str,
    service: BuyerService = Depends(get_buyer_service),
) -> FormPrefillResponse:
    """Values for the edit modal; stored documents only come back as preview URLs."""
    try:
        form = service.edit_form(await service.get_buyer(buyer_id))
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return FormPrefillResponse(fields=form.draft.fields, previews=form.draft.previews)


@router.get("/{buyer_id}/orders", response_model=BuyerOrdersResponse)
async def get_buyer_orders(
    buyer_id: str,
    service: BuyerService = Depends(get_buyer_service),
) -> BuyerOrdersResponse:
    try:
        orders = await service.buyer_orders(buyer_id)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return BuyerOrdersResponse(
        buyer_id=buyer_id,
        orders=[BuyerOrderSummarySchema.model_validate(o, from_attributes=True) for o in orders],
    )


@router.post("", response_model=MutationResponse, status_code=status.HTTP_201_CREATED)
async def create_buyer(
    request: Request,
    service: BuyerService = Depends(get_buyer_service),
) -> MutationResponse:
    """Multipart create; field errors come back as 422 before anything is sent."""
    form = await fill_form(service.new_form(), request)
    try:
        result = await service.create_buyer(form)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return MutationResponse(message=backend_message(result, "Buyer created successfully"), result=result)


@router.patch("/{buyer_id}", response_model=MutationResponse)
async def update_buyer(
    buyer_id: str,
    request: Request,
    service: BuyerService = Depends(get_buyer_service),
) -> MutationResponse:
    form = await fill_form(service.new_form(FormMode.EDIT), request)
    try:
        result = await service.update_buyer(buyer_id, form)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return MutationResponse(message=backend_message(result, "Buyer updated successfully"), result=result)


@router.delete("/{buyer_id}", response_model=MutationResponse)
async def delete_buyer(
    buyer_id: str,
    confirm: bool = Query(False, description="Must be true; deletion cannot be undone"),
    service: BuyerService = Depends(get_buyer_service),
) -> MutationResponse:
    try:
        result = await service.delete_buyer(buyer_id, confirmed=confirm)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return MutationResponse(message=backend_message(result, "Buyer deleted successfully"), result=result)


@router.patch("/{buyer_id}/approval", response_model=ToggleResponse)
async def set_approval_status(
    buyer_id: str,
    data: ApprovalStatusUpdate,
    service: BuyerService = Depends(get_buyer_service),
) -> ToggleResponse:
    try:
        new_status = await service.set_approval_status(buyer_id, data.approve_status)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return ToggleResponse(id=buyer_id, field="approve_status", value=new_status.value)
