"""Unit tests for the BuyerService."""

import json

import httpx
import pytest

from admin_dashboard.application.services import BuyerService
from admin_dashboard.application.services.buyer_service import flatten_buyer
from admin_dashboard.domain.entities import ApprovalStatus, Attachment, FormMode
from admin_dashboard.domain.exceptions import (
    ApiHttpError,
    EntityNotFoundError,
    ValidationFailedError,
)

NESTED_BUYER = {
    "buyer": {"id": 7, "name": "Asha", "email": "asha@example.com", "mobile": "9876543210",
              "approve_status": "Approved", "image": "asha.png"},
    "company": {"company_name": "Asha Stones", "city": "Jaipur"},
    "kyc": {"aadhar_number": "1234", "aadhar_front": "/uploads/kyc/front.png"},
}


@pytest.fixture
def service(api) -> BuyerService:
    return BuyerService(api)


def _create_form(service: BuyerService, **overrides):
    form = service.new_form()
    form.set_fields({
        "name": "Ravi",
        "mobile": "98765 43210",
        "email": "ravi@example.com",
        "password": "secret",
        "company_name": "Ravi Exports",
        **overrides,
    })
    return form


def test_flatten_buyer_accepts_both_shapes():
    nested = flatten_buyer(NESTED_BUYER)
    assert nested["id"] == 7
    assert nested["company"]["company_name"] == "Asha Stones"
    assert nested["kyc"]["aadhar_number"] == "1234"

    flat = flatten_buyer({"id": 8, "name": "Flat"})
    assert flat == {"id": 8, "name": "Flat"}


@pytest.mark.asyncio
async def test_created_buyer_appears_pending_after_refetch(backend, service):
    backend.collections["/buyers"] = {"buyers": []}

    def create(request):
        data = request.data
        backend.collections["/buyers"]["buyers"].append(
            {"buyer": {"id": 1, **data["buyer"]}, "company": data["company"], "kyc": data["kyc"]}
        )
        return httpx.Response(201, json={"message": "Buyer registered"})

    backend.on("POST", "/buyer", handler=create)
    form = _create_form(service)
    form.set_file("image", Attachment("ravi.jpg", b"jpeg"))

    await service.create_buyer(form)

    assert len(service.store.records) == 1
    buyer = service.store.records[0]
    assert buyer["name"] == "Ravi"
    assert buyer["approve_status"] == "Pending"
    assert buyer["company"]["company_name"] == "Ravi Exports"

    sent = backend.calls("POST", "/buyer")[0]
    assert sent.fields["email"] == "ravi@example.com"
    assert sent.fields["mobile"] == "98765 43210"
    assert sent.fields["name"] == "Ravi"
    assert sent.data["buyer"]["password"] == "secret"
    assert sent.files == {"image": ("ravi.jpg", b"jpeg")}


@pytest.mark.asyncio
async def test_create_without_password_is_rejected_locally(backend, service):
    with pytest.raises(ValidationFailedError) as info:
        await service.create_buyer(_create_form(service, password=""))
    assert info.value.errors == {"password": "Password is required for new buyers"}
    assert backend.requests == []


@pytest.mark.asyncio
async def test_edit_sends_only_changed_contact_fields(backend, service):
    backend.collections["/buyers"] = [NESTED_BUYER]
    backend.on("GET", "/buyer/7", json=NESTED_BUYER)
    backend.on("PATCH", "/buyer/7", json={"message": "updated"})

    form = service.new_form(FormMode.EDIT)
    form.set_fields({
        "name": "Asha R",
        "email": "ASHA@example.com ",
        "mobile": "98765-43210",
        "password": "",
        "approve_status": "Approved",
    })
    await service.update_buyer(7, form)

    sent = backend.calls("PATCH", "/buyer/7")[0]
    assert "email" not in sent.fields
    assert "mobile" not in sent.fields
    buyer = sent.data["buyer"]
    assert buyer == {"name": "Asha R", "approve_status": "Approved"}


@pytest.mark.asyncio
async def test_edit_sends_changed_email(backend, service):
    backend.collections["/buyers"] = []
    backend.on("PATCH", "/buyer/7", json={})
    form = service.new_form(
        FormMode.EDIT,
        original={"email": "asha@example.com", "mobile": "9876543210"},
    )
    form.set_fields({"name": "Asha", "email": "new@example.com", "mobile": "9876543210"})

    await service.update_buyer(7, form)

    sent = backend.calls("PATCH", "/buyer/7")[0]
    assert sent.fields["email"] == "new@example.com"
    assert sent.data["buyer"]["email"] == "new@example.com"
    assert "mobile" not in sent.data["buyer"]
    assert backend.calls("GET", "/buyer/7") == []


@pytest.mark.asyncio
async def test_get_buyer_404_is_not_found(service):
    with pytest.raises(EntityNotFoundError):
        await service.get_buyer(99)


@pytest.mark.asyncio
async def test_edit_form_previews_stored_files(backend, service):
    backend.on("GET", "/buyer/7", json=NESTED_BUYER)
    buyer = await service.get_buyer(7)

    form = service.edit_form(buyer)

    assert form.mode is FormMode.EDIT
    assert form.draft.fields["company_name"] == "Asha Stones"
    assert form.draft.fields["password"] == ""
    assert form.draft.previews == {
        "image": "http://marketplace.test/uploads/asha.png",
        "aadhar_front": "http://marketplace.test/uploads/kyc/front.png",
    }
    assert form.draft.files == {}


@pytest.mark.asyncio
async def test_set_approval_status_is_optimistic(backend, service):
    backend.collections["/buyers"] = [{"id": 7, "approve_status": "Pending"}]
    backend.on("PATCH", "/buyer/7", json={"message": "ok"})

    status = await service.set_approval_status(7, "approved")

    assert status is ApprovalStatus.APPROVED
    assert service.store.find(7)["approve_status"] == "Approved"
    sent = backend.calls("PATCH", "/buyer/7")[0]
    assert json.loads(sent.fields["data"]) == {"buyer": {"approve_status": "Approved"}}


@pytest.mark.asyncio
async def test_set_approval_status_reverts_on_failure(backend, service):
    backend.collections["/buyers"] = [{"id": 7, "approve_status": "Pending"}]
    backend.on("PATCH", "/buyer/7", status=500, json={"message": "nope"})

    with pytest.raises(ApiHttpError):
        await service.set_approval_status(7, ApprovalStatus.REJECTED)

    assert service.store.find(7)["approve_status"] == "Pending"


@pytest.mark.asyncio
async def test_buyer_orders_404_means_empty_without_error(service):
    assert await service.buyer_orders(7) == []
    assert service.store.error is None
