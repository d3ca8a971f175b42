"""Seller screen endpoints — table with counters, detail, edit modal, approval and products."""

from fastapi import APIRouter, Depends, Query, Request, status

from admin_dashboard.application.schemas import (
    ApprovalStatusUpdate,
    FormPrefillResponse,
    MutationResponse,
    RecordListResponse,
    RecordResponse,
    SellerListResponse,
    ToggleResponse,
)
from admin_dashboard.application.services import SellerService
from admin_dashboard.domain.entities import FormMode
from admin_dashboard.infrastructure.dependencies import get_seller_service
from admin_dashboard.presentation.api.error_mapping import DOMAIN_ERRORS, to_http_exception
from admin_dashboard.presentation.api.forms import backend_message, fill_form

router = APIRouter(prefix="/sellers", tags=["Sellers"])


@router.get("", response_model=SellerListResponse)
async def list_sellers(
    service: SellerService = Depends(get_seller_service),
) -> SellerListResponse:
    sellers = await service.list_sellers()
    return SellerListResponse(
        items=sellers,
        error=service.store.error,
        count=len(sellers),
        summary=service.summary(),
    )


@router.get("/{seller_id}", response_model=RecordResponse)
async def get_seller(
    seller_id: str,
    service: SellerService = Depends(get_seller_service),
) -> RecordResponse:
    try:
        seller = await service.get_seller(seller_id)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return RecordResponse(item=seller)


@router.get("/{seller_id}/form", response_model=FormPrefillResponse)
async def get_seller_form(
    seller_id: str,
    service: SellerService = Depends(get_seller_service),
) -> FormPrefillResponse:
    try:
        form = service.edit_form(await service.get_seller(seller_id))
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return FormPrefillResponse(fields=form.draft.fields, previews=form.draft.previews)


@router.get("/{seller_id}/products", response_model=RecordListResponse)
async def get_seller_products(
    seller_id: str,
    service: SellerService = Depends(get_seller_service),
) -> RecordListResponse:
    """The seller's products; a seller without any answers with an empty list."""
    try:
        products = await service.seller_products(seller_id)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return RecordListResponse(items=products, count=len(products))


@router.post("", response_model=MutationResponse, status_code=status.HTTP_201_CREATED)
async def create_seller(
    request: Request,
    service: SellerService = Depends(get_seller_service),
) -> MutationResponse:
    """Multipart create with optional company, KYC and bank documents."""
    form = await fill_form(service.new_form(), request)
    try:
        result = await service.create_seller(form)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return MutationResponse(message=backend_message(result, "Seller created successfully"), result=result)


@router.patch("/{seller_id}", response_model=MutationResponse)
async def update_seller(
    seller_id: str,
    request: Request,
    service: SellerService = Depends(get_seller_service),
) -> MutationResponse:
    form = await fill_form(service.new_form(FormMode.EDIT), request)
    try:
        result = await service.update_seller(seller_id, form)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return MutationResponse(message=backend_message(result, "Seller updated successfully"), result=result)


@router.delete("/{seller_id}", response_model=MutationResponse)
async def delete_seller(
    seller_id: str,
    confirm: bool = Query(False, description="Must be true; deletion cannot be undone"),
    service: SellerService = Depends(get_seller_service),
) -> MutationResponse:
    try:
        result = await service.delete_seller(seller_id, confirmed=confirm)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return MutationResponse(message=backend_message(result, "Seller deleted successfully"), result=result)


@router.patch("/{seller_id}/approval", response_model=ToggleResponse)
async def set_approval_status(
    seller_id: str,
    data: ApprovalStatusUpdate,
    service: SellerService = Depends(get_seller_service),
) -> ToggleResponse:
    try:
        new_status = await service.set_approval_status(seller_id, data.approve_status)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return ToggleResponse(id=seller_id, field="approve_status", value=new_status.value)
