"""Application service for top-level product categories."""

from typing import Any

from admin_dashboard.application.interfaces import MarketplaceApi, MultipartPayload
from admin_dashboard.application.services.form_controller import FormController
from admin_dashboard.application.services.mutation_dispatcher import MutationDispatcher
from admin_dashboard.application.services.resource_store import ResourceStore, fetch_record
from admin_dashboard.domain.entities import CancellationToken, FormDraft, FormMode, Record


def build_category_payload(draft: FormDraft) -> MultipartPayload:
    payload = MultipartPayload()
    payload.add_field("category_name", draft.text("category_name"))
    payload.add_file("image", draft.files.get("image"))
    return payload


class CategoryService:
    def __init__(self, api: MarketplaceApi):
        self._api = api
        self.store = ResourceStore(api, path="/categories", plural="categories", entity="category")
        self._dispatcher = MutationDispatcher(
            api,
            self.store,
            create_path="/category",
            item_path="/category/{id}",
            payload_builder=build_category_payload,
        )

    @staticmethod
    def new_form(mode: FormMode = FormMode.CREATE, **kwargs: Any) -> FormController:
        """Name always required; the image only when creating."""
        return FormController(
            mode,
            entity="category",
            required=("category_name",),
            required_files_on_create=("image",),
            **kwargs,
        )

    async def list_categories(self, *, cancel: CancellationToken | None = None) -> list[Record]:
        records = await self.store.refresh(cancel=cancel)
        return [
            {**r, "image_url": self._api.resolve_media_url(r.get("image"))} for r in records
        ]

    async def get_category(
        self, category_id: Any, *, cancel: CancellationToken | None = None
    ) -> Record:
        return await fetch_record(
            self._api,
            f"/category/{category_id}",
            label="Category",
            record_key=category_id,
            singular="category",
            cancel=cancel,
        )

    async def create_category(
        self, form: FormController, *, cancel: CancellationToken | None = None
    ) -> Any:
        return await self._dispatcher.create(form, cancel=cancel)

    async def update_category(
        self, category_id: Any, form: FormController, *, cancel: CancellationToken | None = None
    ) -> Any:
        return await self._dispatcher.update(category_id, form, cancel=cancel)

    async def delete_category(
        self, category_id: Any, *, confirmed: bool, cancel: CancellationToken | None = None
    ) -> Any:
        return await self._dispatcher.remove(category_id, confirmed=confirmed, cancel=cancel)
