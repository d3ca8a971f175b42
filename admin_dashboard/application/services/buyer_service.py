"""Application service (use case) for the Buyers screen."""

import json
import logging
from typing import Any

from admin_dashboard.application.interfaces import MarketplaceApi, MultipartPayload
from admin_dashboard.application.services.enrichment_service import EnrichmentService
from admin_dashboard.application.services.form_controller import FormController
from admin_dashboard.application.services.mutation_dispatcher import MutationDispatcher
from admin_dashboard.application.services.resource_store import ResourceStore, fetch_record
from admin_dashboard.application.services.response_normalizer import flatten_nested
from admin_dashboard.domain.entities import (
    ApprovalStatus,
    BuyerOrderSummary,
    CancellationToken,
    FormDraft,
    FormMode,
    Record,
    digits_only,
)

logger = logging.getLogger(__name__)

COMPANY_FIELDS = (
    "company_name",
    "company_website",
    "company_GST_number",
    "IEC_code",
    "annual_turnover",
    "facebook_link",
    "linkedin_link",
    "insta_link",
    "city",
    "state",
    "pincode",
    "company_address",
)
KYC_FIELDS = ("aadhar_number", "driving_license_number", "driving_license_dob")
KYC_DOCUMENTS = ("aadhar_front", "aadhar_back", "driving_license_front", "driving_license_back")
BUYER_FILES = ("image", *KYC_DOCUMENTS)


def flatten_buyer(item: Record) -> Record:
    """One buyer shape for the table: ``{buyer, company, kyc}`` or flat, both accepted."""
    return flatten_nested(item, "buyer", ("company", "kyc"))


def company_of(buyer: Record) -> Record:
    """Nested company sub-record, or one rebuilt from flattened fields."""
    company = buyer.get("company")
    if isinstance(company, dict) and company:
        return company
    if buyer.get("company_name") or buyer.get("company_website"):
        return {name: buyer.get(name) for name in COMPANY_FIELDS}
    return {}


def kyc_of(buyer: Record) -> Record:
    kyc = buyer.get("kyc")
    if isinstance(kyc, dict) and kyc:
        return kyc
    if any(buyer.get(name) for name in (*KYC_FIELDS, *KYC_DOCUMENTS)):
        return {name: buyer.get(name) for name in (*KYC_FIELDS, *KYC_DOCUMENTS)}
    return {}


def build_buyer_payload(draft: FormDraft) -> MultipartPayload:
    """Multipart body: one ``data`` field holding JSON ``{buyer, company, kyc}``.

    In edit mode email and mobile are only sent when they changed (email
    compared case-insensitively, mobile by digits) and the password only
    when a new one was typed.
    """
    is_edit = draft.is_edit
    original = draft.original
    email = draft.text("email")
    mobile = draft.text("mobile")
    send_email = not is_edit or email.lower() != str(original.get("email") or "").strip().lower()
    send_mobile = not is_edit or digits_only(mobile) != digits_only(original.get("mobile"))

    buyer: Record = {"name": draft.value("name")}
    if send_mobile:
        buyer["mobile"] = draft.value("mobile")
    if send_email:
        buyer["email"] = draft.value("email")
    buyer["approve_status"] = ApprovalStatus.coerce(draft.value("approve_status")).value
    password = draft.value("password")
    if not is_edit or (isinstance(password, str) and password.strip()):
        buyer["password"] = password

    envelope = {
        "buyer": buyer,
        "company": {name: draft.value(name) for name in COMPANY_FIELDS},
        "kyc": {name: draft.value(name) for name in KYC_FIELDS},
    }

    payload = MultipartPayload()
    payload.add_field("data", json.dumps(envelope))
    if send_email:
        payload.add_field("email", draft.value("email"))
    if send_mobile:
        payload.add_field("mobile", draft.value("mobile"))
    payload.add_field("name", buyer["name"])
    for name in BUYER_FILES:
        payload.add_file(name, draft.files.get(name))
    return payload


class BuyerService:
    """Buyer list, detail, create/edit/delete, approval status and order history."""

    def __init__(self, api: MarketplaceApi, enrichment: EnrichmentService | None = None):
        self._api = api
        self.store = ResourceStore(
            api, path="/buyers", plural="buyers", entity="buyer", transform=flatten_buyer
        )
        self._dispatcher = MutationDispatcher(
            api,
            self.store,
            create_path="/buyer",
            item_path="/buyer/{id}",
            payload_builder=build_buyer_payload,
        )
        self._enrichment = enrichment or EnrichmentService(api)

    @property
    def tracker(self):
        return self._dispatcher.tracker

    # ── Forms ────────────────────────────────────────────────────────

    @staticmethod
    def new_form(mode: FormMode = FormMode.CREATE, **kwargs: Any) -> FormController:
        return FormController(
            mode,
            entity="buyer",
            required=("name", "mobile", "email"),
            password_field="password",
            **kwargs,
        )

    def edit_form(self, buyer: Record) -> FormController:
        """Form prefilled from a buyer detail; stored files only appear as previews."""
        company = company_of(buyer)
        kyc = kyc_of(buyer)
        initial: Record = {
            "name": buyer.get("name") or "",
            "mobile": buyer.get("mobile") or "",
            "email": buyer.get("email") or "",
            "password": "",
            "approve_status": ApprovalStatus.coerce(buyer.get("approve_status")).value,
        }
        for name in COMPANY_FIELDS:
            initial[name] = company.get(name) or buyer.get(name) or ""
        for name in KYC_FIELDS:
            initial[name] = kyc.get(name) or buyer.get(name) or ""

        previews = {}
        for name in BUYER_FILES:
            stored = buyer.get(name) if name == "image" else kyc.get(name)
            url = self._api.resolve_media_url(stored)
            if url:
                previews[name] = url

        return self.new_form(
            FormMode.EDIT,
            initial=initial,
            original={"email": buyer.get("email") or "", "mobile": buyer.get("mobile") or ""},
            previews=previews,
        )

    # ── Queries ──────────────────────────────────────────────────────

    async def list_buyers(self, *, cancel: CancellationToken | None = None) -> list[Record]:
        return await self.store.refresh(cancel=cancel)

    async def get_buyer(self, buyer_id: Any, *, cancel: CancellationToken | None = None) -> Record:
        record = await fetch_record(
            self._api, f"/buyer/{buyer_id}", label="Buyer", record_key=buyer_id, cancel=cancel
        )
        return flatten_buyer(record)

    async def buyer_orders(
        self, buyer_id: Any, *, cancel: CancellationToken | None = None
    ) -> list[BuyerOrderSummary]:
        return await self._enrichment.enrich_buyer_orders(buyer_id, cancel=cancel)

    # ── Mutations ────────────────────────────────────────────────────

    async def create_buyer(
        self, form: FormController, *, cancel: CancellationToken | None = None
    ) -> Any:
        if not form.draft.fields.get("approve_status"):
            form.set_field("approve_status", ApprovalStatus.PENDING.value)
        return await self._dispatcher.create(form, cancel=cancel)

    async def update_buyer(
        self,
        buyer_id: Any,
        form: FormController,
        *,
        cancel: CancellationToken | None = None,
    ) -> Any:
        if not form.draft.original:
            current = await self.get_buyer(buyer_id, cancel=cancel)
            form.draft.original = {
                "email": current.get("email") or "",
                "mobile": current.get("mobile") or "",
            }
        return await self._dispatcher.update(buyer_id, form, cancel=cancel)

    async def delete_buyer(
        self, buyer_id: Any, *, confirmed: bool, cancel: CancellationToken | None = None
    ) -> Any:
        return await self._dispatcher.remove(buyer_id, confirmed=confirmed, cancel=cancel)

    async def set_approval_status(
        self,
        buyer_id: Any,
        status: ApprovalStatus | str,
        *,
        cancel: CancellationToken | None = None,
    ) -> ApprovalStatus:
        """Optimistic multipart PATCH of ``{buyer: {approve_status}}``."""
        new_status = ApprovalStatus.coerce(status)
        await self.store.ensure(buyer_id, cancel=cancel)
        payload = MultipartPayload()
        payload.add_field("data", json.dumps({"buyer": {"approve_status": new_status.value}}))
        await self._dispatcher.patch_field(
            buyer_id, "approve_status", new_status.value, multipart=payload, cancel=cancel
        )
        logger.info("Buyer %s approval status → %s", buyer_id, new_status.value)
        return new_status
