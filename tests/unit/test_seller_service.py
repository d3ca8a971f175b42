"""Unit tests for the SellerService."""

import pytest

from admin_dashboard.application.services import SellerService, seller_summary
from admin_dashboard.application.services.seller_service import flatten_seller
from admin_dashboard.domain.entities import ApprovalStatus, Attachment, FormMode
from admin_dashboard.domain.exceptions import (
    ApiHttpError,
    ConfirmationRequiredError,
    ValidationFailedError,
)

SELLER_DETAIL = {
    "seller": {"id": 3, "name": "Stone Mart", "email": "sales@stonemart.in",
               "mobile": "9876543210", "status": "Active", "approve_status": "Approved"},
    "company": {"company_name": "Stone Mart Pvt", "company_logo": "/uploads/logo.png",
                "city": "Udaipur"},
    "kyc": {"aadhar_number": "5555", "gst_certificate": "/uploads/gst.pdf"},
    "bank": {"bank_name": "SBI", "cancelled_cheque_photo": "/uploads/cheque.jpg"},
}


@pytest.fixture
def service(api) -> SellerService:
    return SellerService(api)


def _create_form(service: SellerService, **overrides):
    form = service.new_form()
    form.set_fields({
        "name": " Stone Mart ",
        "mobile": "9876543210",
        "email": "sales@stonemart.in",
        "password": "secret",
        **overrides,
    })
    return form


def test_flatten_seller_keeps_bank_section():
    seller = flatten_seller(SELLER_DETAIL)
    assert seller["id"] == 3
    assert seller["bank"] == {"bank_name": "SBI", "cancelled_cheque_photo": "/uploads/cheque.jpg"}
    assert seller["company"]["city"] == "Udaipur"


def test_summary_counts_status_and_approval():
    sellers = [
        {"status": "Active", "approve_status": "Approved"},
        {"status": "Active", "approve_status": "Pending"},
        {"status": "Inactive", "approve_status": "Pending"},
        {"status": "Inactive", "approve_status": "Rejected"},
    ]
    assert seller_summary(sellers) == {"total": 4, "active": 2, "approved": 1, "pending": 2}


@pytest.mark.asyncio
async def test_list_accepts_nested_rows(backend, service):
    backend.collections["/sellers"] = {"sellers": [SELLER_DETAIL]}

    sellers = await service.list_sellers()

    assert sellers[0]["name"] == "Stone Mart"
    assert service.summary()["approved"] == 1


@pytest.mark.asyncio
async def test_create_sends_flat_multipart_with_defaults(backend, service):
    backend.collections["/sellers"] = []
    backend.on("POST", "/seller", json={"message": "Seller registered"})
    form = _create_form(service, city=" Jaipur ", bank_name="")
    form.set_file("company_logo", Attachment("logo.png", b"png", "image/png"))

    result = await service.create_seller(form)

    assert result == {"message": "Seller registered"}
    sent = backend.calls("POST", "/seller")[0]
    assert sent.fields == {
        "name": "Stone Mart",
        "mobile": "9876543210",
        "email": "sales@stonemart.in",
        "password": "secret",
        "status": "Active",
        "approve_status": "Pending",
        "device_token": "default_device_token",
        "subscription": "0",
        "company_type": "Proprietorship",
        "annual_turnover": "20-50_lakh",
        "city": "Jaipur",
    }
    assert sent.files == {"company_logo": ("logo.png", b"png")}


@pytest.mark.asyncio
async def test_create_requires_password(backend, service):
    form = _create_form(service, password="")

    with pytest.raises(ValidationFailedError) as info:
        await service.create_seller(form)

    assert info.value.errors == {"password": "Password is required for new sellers"}
    assert backend.requests == []


@pytest.mark.asyncio
async def test_edit_sends_only_what_the_form_carries(backend, service):
    backend.collections["/sellers"] = []
    backend.on("PATCH", "/seller/3", json={})
    form = service.new_form(
        FormMode.EDIT,
        initial={"name": "Stone Mart", "mobile": "9876543210",
                 "email": "sales@stonemart.in", "password": ""},
    )

    await service.update_seller(3, form)

    sent = backend.calls("PATCH", "/seller/3")[0].fields
    assert "password" not in sent
    assert "status" not in sent
    assert "approve_status" not in sent


@pytest.mark.asyncio
async def test_edit_form_reads_sections_and_previews(backend, service):
    backend.on("GET", "/seller/3", json=SELLER_DETAIL)

    form = service.edit_form(await service.get_seller(3))

    assert form.mode is FormMode.EDIT
    assert form.draft.fields["company_name"] == "Stone Mart Pvt"
    assert form.draft.fields["aadhar_number"] == "5555"
    assert form.draft.fields["bank_name"] == "SBI"
    assert form.draft.fields["annual_turnover"] == "20-50_lakh"
    assert form.draft.fields["password"] == ""
    assert form.draft.previews == {
        "company_logo": "http://marketplace.test/uploads/logo.png",
        "gst_certificate": "http://marketplace.test/uploads/gst.pdf",
        "cancelled_cheque_photo": "http://marketplace.test/uploads/cheque.jpg",
    }


@pytest.mark.asyncio
async def test_seller_products_resolve_first_image(backend, service):
    backend.collections["/product_seller/3"] = {
        "success": True,
        "data": [
            {"id": 1, "name": "Slab", "product_images": ["/uploads/p1.jpg", "/uploads/p2.jpg"]},
            {"id": 2, "name": "Tile", "product_images": []},
        ],
    }

    products = await service.seller_products(3)

    assert [p["image_url"] for p in products] == ["http://marketplace.test/uploads/p1.jpg", None]


@pytest.mark.asyncio
async def test_seller_without_products_is_empty(service):
    assert await service.seller_products(99) == []


@pytest.mark.asyncio
async def test_delete_requires_confirmation(backend, service):
    with pytest.raises(ConfirmationRequiredError):
        await service.delete_seller(3, confirmed=False)
    assert backend.requests == []


@pytest.mark.asyncio
async def test_approval_status_reverts_on_failure(backend, service):
    backend.collections["/sellers"] = [{"id": 3, "approve_status": "Pending"}]
    backend.on("PATCH", "/seller/3", status=500, json={"message": "nope"})
    await service.list_sellers()

    with pytest.raises(ApiHttpError):
        await service.set_approval_status(3, ApprovalStatus.APPROVED)

    assert service.store.find(3)["approve_status"] == "Pending"


@pytest.mark.asyncio
async def test_approval_status_is_sent_flat(backend, service):
    backend.collections["/sellers"] = [{"id": 3, "approve_status": "Pending"}]
    backend.on("PATCH", "/seller/3", json={})
    await service.list_sellers()

    assert await service.set_approval_status(3, "rejected") is ApprovalStatus.REJECTED
    assert backend.calls("PATCH", "/seller/3")[0].fields == {"approve_status": "Rejected"}
    assert service.store.find(3)["approve_status"] == "Rejected"
