"""Application service for product subcategories."""

import asyncio
from typing import Any

from admin_dashboard.application.interfaces import MarketplaceApi, MultipartPayload
from admin_dashboard.application.services.enrichment_service import (
    EnrichmentService,
    ReferenceLookups,
)
from admin_dashboard.application.services.form_controller import FormController
from admin_dashboard.application.services.mutation_dispatcher import MutationDispatcher
from admin_dashboard.application.services.resource_store import ResourceStore, fetch_record
from admin_dashboard.domain.entities import CancellationToken, FormDraft, FormMode, Record


def build_subcategory_payload(draft: FormDraft) -> MultipartPayload:
    payload = MultipartPayload()
    payload.add_field("subcategory_name", draft.value("subcategory_name"))
    payload.add_field("category_id", draft.value("category_id"))
    payload.add_file("image", draft.files.get("image"))
    return payload


class SubCategoryService:
    def __init__(self, api: MarketplaceApi, enrichment: EnrichmentService | None = None):
        self._api = api
        self.store = ResourceStore(
            api, path="/subcategories", plural="subcategories", entity="subcategory"
        )
        self._dispatcher = MutationDispatcher(
            api,
            self.store,
            create_path="/subcategory",
            item_path="/subcategory/{id}",
            payload_builder=build_subcategory_payload,
        )
        self._enrichment = enrichment or EnrichmentService(api)
        self.lookups = ReferenceLookups()

    @staticmethod
    def new_form(mode: FormMode = FormMode.CREATE, **kwargs: Any) -> FormController:
        return FormController(
            mode, entity="subcategory", required=("subcategory_name", "category_id"), **kwargs
        )

    async def list_subcategories(
        self, *, cancel: CancellationToken | None = None
    ) -> list[Record]:
        _, self.lookups = await asyncio.gather(
            self.store.refresh(cancel=cancel),
            self._enrichment.build_lookups(cancel=cancel),
        )
        return [self.present(r) for r in self.store.records]

    def present(self, subcategory: Record) -> Record:
        return {
            **subcategory,
            "category_name": self.lookups.category_name(subcategory.get("category_id")),
            "image_url": self._api.resolve_media_url(subcategory.get("image")),
        }

    async def get_subcategory(
        self, subcategory_id: Any, *, cancel: CancellationToken | None = None
    ) -> Record:
        return await fetch_record(
            self._api,
            f"/subcategory/{subcategory_id}",
            label="Subcategory",
            record_key=subcategory_id,
            singular="subcategory",
            cancel=cancel,
        )

    async def edit_form(
        self, subcategory_id: Any, *, cancel: CancellationToken | None = None
    ) -> FormController:
        detail = await self.get_subcategory(subcategory_id, cancel=cancel)
        previews = {}
        image = self._api.resolve_media_url(detail.get("image"))
        if image:
            previews["image"] = image
        return self.new_form(
            FormMode.EDIT,
            initial={
                "subcategory_name": detail.get("subcategory_name") or "",
                "category_id": detail.get("category_id") or "",
            },
            previews=previews,
        )

    async def create_subcategory(
        self, form: FormController, *, cancel: CancellationToken | None = None
    ) -> Any:
        return await self._dispatcher.create(form, cancel=cancel)

    async def update_subcategory(
        self, subcategory_id: Any, form: FormController, *, cancel: CancellationToken | None = None
    ) -> Any:
        return await self._dispatcher.update(subcategory_id, form, cancel=cancel)

    async def delete_subcategory(
        self, subcategory_id: Any, *, confirmed: bool, cancel: CancellationToken | None = None
    ) -> Any:
        return await self._dispatcher.remove(subcategory_id, confirmed=confirmed, cancel=cancel)
