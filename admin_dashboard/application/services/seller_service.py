"""Application service for the Sellers screen."""

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
    CancellationToken,
    FormDraft,
    FormMode,
    Record,
    to_int,
)

logger = logging.getLogger(__name__)

SELLER_SECTIONS = ("company", "kyc", "bank")

DEFAULT_STATUS = "Active"
DEFAULT_DEVICE_TOKEN = "default_device_token"
DEFAULT_COMPANY_TYPE = "Proprietorship"
DEFAULT_TURNOVER = "20-50_lakh"

# Optional text fields, grouped by the detail section they are read back from.
COMPANY_FIELDS = (
    "company_name",
    "company_type",
    "company_GST_number",
    "company_website",
    "IEC_code",
    "annual_turnover",
    "facebook_link",
    "linkedin_link",
    "insta_link",
    "city",
    "state",
    "pincode",
)
KYC_FIELDS = ("aadhar_number",)
BANK_FIELDS = ("bank_name", "bank_IFSC_code", "account_number", "account_type")

FILE_SECTIONS = {
    "company_logo": "company",
    "aadhar_front": "kyc",
    "aadhar_back": "kyc",
    "company_registration": "kyc",
    "company_pan_card": "kyc",
    "gst_certificate": "kyc",
    "cancelled_cheque_photo": "bank",
}


def flatten_seller(item: Record) -> Record:
    return flatten_nested(item, "seller", SELLER_SECTIONS)


def build_seller_payload(draft: FormDraft) -> MultipartPayload:
    """Flat multipart body: account fields always, optional fields only when filled.

    The password is only sent when one was typed, so an edit with an empty
    password leaves it unchanged. Edits likewise leave status, approval,
    device token and subscription alone unless the form carries them.
    """
    payload = MultipartPayload()
    for name in ("name", "mobile", "email"):
        payload.add_field(name, draft.text(name))
    if draft.text("password"):
        payload.add_field("password", draft.value("password"))

    def carried(name: str) -> bool:
        return not draft.is_edit or draft.fields.get(name) not in (None, "")

    if carried("status"):
        payload.add_field("status", draft.text("status") or DEFAULT_STATUS)
    if carried("approve_status"):
        payload.add_field(
            "approve_status", ApprovalStatus.coerce(draft.value("approve_status")).value
        )
    if carried("device_token"):
        payload.add_field("device_token", draft.text("device_token") or DEFAULT_DEVICE_TOKEN)
    if carried("subscription"):
        payload.add_field("subscription", to_int(draft.value("subscription", 0)))

    for name in (*COMPANY_FIELDS, *KYC_FIELDS, *BANK_FIELDS):
        if draft.text(name):
            payload.add_field(name, draft.text(name))
    for name in FILE_SECTIONS:
        payload.add_file(name, draft.files.get(name))
    return payload


def seller_summary(sellers: list[Record]) -> dict[str, int]:
    """Header counters: total, active, approved and pending sellers."""
    return {
        "total": len(sellers),
        "active": sum(1 for s in sellers if s.get("status") == DEFAULT_STATUS),
        "approved": sum(
            1 for s in sellers if s.get("approve_status") == ApprovalStatus.APPROVED.value
        ),
        "pending": sum(
            1 for s in sellers if s.get("approve_status") == ApprovalStatus.PENDING.value
        ),
    }


class SellerService:
    """Seller list, detail, create/edit/delete, approval status and product listing."""

    def __init__(self, api: MarketplaceApi, enrichment: EnrichmentService | None = None):
        self._api = api
        self.store = ResourceStore(
            api, path="/sellers", plural="sellers", entity="seller", transform=flatten_seller
        )
        self._dispatcher = MutationDispatcher(
            api,
            self.store,
            create_path="/seller",
            item_path="/seller/{id}",
            payload_builder=build_seller_payload,
        )
        self._enrichment = enrichment or EnrichmentService(api)

    @property
    def tracker(self):
        return self._dispatcher.tracker

    @staticmethod
    def new_form(mode: FormMode = FormMode.CREATE, **kwargs: Any) -> FormController:
        if mode is FormMode.CREATE:
            kwargs.setdefault(
                "initial",
                {
                    "status": DEFAULT_STATUS,
                    "approve_status": ApprovalStatus.PENDING.value,
                    "device_token": DEFAULT_DEVICE_TOKEN,
                    "subscription": 0,
                    "company_type": DEFAULT_COMPANY_TYPE,
                    "annual_turnover": DEFAULT_TURNOVER,
                },
            )
        return FormController(
            mode,
            entity="seller",
            required=("name", "mobile", "email"),
            password_field="password",
            **kwargs,
        )

    def edit_form(self, seller: Record) -> FormController:
        """Prefill from a flattened seller detail; stored documents become previews."""
        sections = {name: seller.get(name) or {} for name in SELLER_SECTIONS}
        initial: Record = {
            "name": seller.get("name") or "",
            "mobile": seller.get("mobile") or "",
            "email": seller.get("email") or "",
            "password": "",
            "status": seller.get("status") or DEFAULT_STATUS,
            "approve_status": ApprovalStatus.coerce(seller.get("approve_status")).value,
            "device_token": seller.get("device_token") or DEFAULT_DEVICE_TOKEN,
            "subscription": to_int(seller.get("subscription")),
        }
        for section, names in (
            ("company", COMPANY_FIELDS),
            ("kyc", KYC_FIELDS),
            ("bank", BANK_FIELDS),
        ):
            for name in names:
                initial[name] = sections[section].get(name) or ""
        initial["company_type"] = initial["company_type"] or DEFAULT_COMPANY_TYPE
        initial["annual_turnover"] = initial["annual_turnover"] or DEFAULT_TURNOVER

        previews = {}
        for name, section in FILE_SECTIONS.items():
            url = self._api.resolve_media_url(sections[section].get(name))
            if url:
                previews[name] = url
        return self.new_form(FormMode.EDIT, initial=initial, previews=previews)

    async def list_sellers(self, *, cancel: CancellationToken | None = None) -> list[Record]:
        return await self.store.refresh(cancel=cancel)

    def summary(self) -> dict[str, int]:
        return seller_summary(self.store.records)

    async def get_seller(
        self, seller_id: Any, *, cancel: CancellationToken | None = None
    ) -> Record:
        record = await fetch_record(
            self._api, f"/seller/{seller_id}", label="Seller", record_key=seller_id, cancel=cancel
        )
        return flatten_seller(record)

    async def seller_products(
        self, seller_id: Any, *, cancel: CancellationToken | None = None
    ) -> list[Record]:
        """The seller's catalogue with the first gallery image resolved to a URL."""
        products = await self._enrichment.fetch_children(
            f"/product_seller/{seller_id}", "products", cancel=cancel
        )
        presented = []
        for product in products:
            images = product.get("product_images")
            first = images[0] if isinstance(images, list) and images else None
            presented.append({**product, "image_url": self._api.resolve_media_url(first)})
        return presented

    async def create_seller(
        self, form: FormController, *, cancel: CancellationToken | None = None
    ) -> Any:
        return await self._dispatcher.create(form, cancel=cancel)

    async def update_seller(
        self,
        seller_id: Any,
        form: FormController,
        *,
        cancel: CancellationToken | None = None,
    ) -> Any:
        return await self._dispatcher.update(seller_id, form, cancel=cancel)

    async def delete_seller(
        self, seller_id: Any, *, confirmed: bool, cancel: CancellationToken | None = None
    ) -> Any:
        return await self._dispatcher.remove(seller_id, confirmed=confirmed, cancel=cancel)

    async def set_approval_status(
        self,
        seller_id: Any,
        status: ApprovalStatus | str,
        *,
        cancel: CancellationToken | None = None,
    ) -> ApprovalStatus:
        """Optimistic multipart PATCH of the flat ``approve_status`` field."""
        new_status = ApprovalStatus.coerce(status)
        await self.store.ensure(seller_id, cancel=cancel)
        payload = MultipartPayload()
        payload.add_field("approve_status", new_status.value)
        await self._dispatcher.patch_field(
            seller_id, "approve_status", new_status.value, multipart=payload, cancel=cancel
        )
        logger.info("Seller %s approval status → %s", seller_id, new_status.value)
        return new_status
