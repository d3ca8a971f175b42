"""Application service for promotional home-page sliders."""

import logging
from typing import Any

from admin_dashboard.application.interfaces import MarketplaceApi, MultipartPayload
from admin_dashboard.application.services.form_controller import FormController
from admin_dashboard.application.services.mutation_dispatcher import MutationDispatcher
from admin_dashboard.application.services.resource_store import ResourceStore, fetch_record
from admin_dashboard.domain.entities import (
    CancellationToken,
    CandidateRequest,
    FormDraft,
    FormMode,
    Record,
    to_int,
)
from admin_dashboard.domain.exceptions import ApiError, EntityNotFoundError

logger = logging.getLogger(__name__)

SLIDER_TEXT_FIELDS = ("tag_line", "CTA_button", "CTA_button_link")
DEFAULT_STATUS = "active"


def update_fallbacks(slider_id: Any) -> list[CandidateRequest]:
    """Alternate update routes some deployments expose when ``PATCH /slider/{id}`` 404s."""
    return [
        CandidateRequest("POST", f"/slider/{slider_id}/update"),
        CandidateRequest("POST", f"/slider/update/{slider_id}"),
        CandidateRequest("POST", f"/slider/update-slider/{slider_id}"),
    ]


def build_slider_payload(draft: FormDraft) -> MultipartPayload:
    """Create sends every field with defaults; edit sends only what the form holds."""
    payload = MultipartPayload()
    if draft.is_edit:
        for name in (*SLIDER_TEXT_FIELDS, "sort_order", "status"):
            if name in draft.fields:
                value = draft.value(name)
                payload.add_field(name, to_int(value) if name == "sort_order" else value or "")
        payload.add_file("banner_image", draft.files.get("banner_image"))
        return payload

    for name in SLIDER_TEXT_FIELDS:
        payload.add_field(name, draft.value(name) or "")
    payload.add_field("sort_order", to_int(draft.value("sort_order", 0)))
    payload.add_field("status", draft.value("status") or DEFAULT_STATUS)
    payload.add_file("banner_image", draft.files.get("banner_image"))
    return payload


def slider_form_values(slider: Record) -> Record:
    values: Record = {name: slider.get(name) or "" for name in SLIDER_TEXT_FIELDS}
    values["sort_order"] = to_int(slider.get("sort_order"))
    if slider.get("status"):
        values["status"] = slider["status"]
    return values


class SliderService:
    def __init__(self, api: MarketplaceApi):
        self._api = api
        self.store = ResourceStore(api, path="/sliders", plural="sliders", entity="slider")
        self._dispatcher = MutationDispatcher(
            api,
            self.store,
            create_path="/slider",
            item_path="/slider/{id}",
            payload_builder=build_slider_payload,
        )

    @staticmethod
    def new_form(mode: FormMode = FormMode.CREATE, **kwargs: Any) -> FormController:
        if mode is FormMode.CREATE:
            kwargs.setdefault("initial", {"sort_order": 0, "status": DEFAULT_STATUS})
        return FormController(
            mode,
            entity="slider",
            required_files_on_create=("banner_image",),
            **kwargs,
        )

    async def edit_form(
        self, slider_id: Any, *, cancel: CancellationToken | None = None
    ) -> FormController:
        """Prefill from the cached row, then overlay the detail endpoint when it answers."""
        row = self.store.find(slider_id) or {}
        values = slider_form_values(row)
        try:
            detail = await self.get_slider(slider_id, cancel=cancel)
        except (ApiError, EntityNotFoundError) as exc:
            if not row:
                raise
            logger.warning("Slider %s detail failed; using row data: %s", slider_id, exc)
        else:
            values.update({k: v for k, v in slider_form_values(detail).items() if v})
            row = {**row, **detail}

        previews = {}
        banner = self._api.resolve_media_url(row.get("banner_image"))
        if banner:
            previews["banner_image"] = banner
        return self.new_form(FormMode.EDIT, initial=values, previews=previews)

    async def list_sliders(self, *, cancel: CancellationToken | None = None) -> list[Record]:
        records = await self.store.refresh(cancel=cancel)
        return [self.present(r) for r in records]

    def present(self, slider: Record) -> Record:
        return {**slider, "image_url": self._api.resolve_media_url(slider.get("banner_image"))}

    async def get_slider(self, slider_id: Any, *, cancel: CancellationToken | None = None) -> Record:
        return await fetch_record(
            self._api,
            f"/slider/{slider_id}",
            label="Slider",
            record_key=slider_id,
            singular="slider",
            cancel=cancel,
        )

    async def create_slider(
        self, form: FormController, *, cancel: CancellationToken | None = None
    ) -> Any:
        return await self._dispatcher.create(form, cancel=cancel)

    async def update_slider(
        self, slider_id: Any, form: FormController, *, cancel: CancellationToken | None = None
    ) -> Any:
        return await self._dispatcher.update(
            slider_id, form, fallbacks=update_fallbacks(slider_id), cancel=cancel
        )

    async def delete_slider(
        self, slider_id: Any, *, confirmed: bool, cancel: CancellationToken | None = None
    ) -> Any:
        return await self._dispatcher.remove(slider_id, confirmed=confirmed, cancel=cancel)

    async def toggle_status(self, slider_id: Any, *, cancel: CancellationToken | None = None) -> str:
        """``active`` ↔ ``inactive`` via JSON PATCH, then the list is refetched."""
        slider = await self.store.ensure(slider_id, cancel=cancel)
        current = str(slider.get("status") or "").strip().lower()
        new_status = "inactive" if current == "active" else "active"
        await self._dispatcher.patch_json(
            slider_id, {"status": new_status}, kind="status", cancel=cancel
        )
        return new_status
