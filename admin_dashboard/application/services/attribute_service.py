"""Simple JSON-bodied catalogues: colors, countries, finishes and FAQs.

Each one is a flat list with create/edit/delete. Deployments disagree on
singular vs plural routes, so every write walks its alternates on 404.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from admin_dashboard.application.interfaces import MarketplaceApi
from admin_dashboard.application.services.form_controller import FormController
from admin_dashboard.application.services.mutation_dispatcher import (
    JsonBuilder,
    MutationDispatcher,
    send_first_accepted,
)
from admin_dashboard.application.services.resource_store import ResourceStore
from admin_dashboard.application.services.response_normalizer import unwrap_record
from admin_dashboard.domain.entities import (
    CancellationToken,
    CandidateRequest,
    FormDraft,
    FormMode,
    Record,
)
from admin_dashboard.domain.exceptions import ApiHttpError, EntityNotFoundError

DEFAULT_STATUS = "active"
_TRUTHY = ("1", "true", "yes", "on")


class AttributeKind(str, Enum):
    COLORS = "colors"
    COUNTRIES = "countries"
    FINISHES = "finishes"
    FAQS = "faqs"


def custom_flag(value: Any) -> int:
    """``is_custom`` as the backend stores it: 1 or 0."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return 1 if value else 0
    return 1 if str(value or "").strip().lower() in _TRUTHY else 0


def named_body(draft: FormDraft) -> dict[str, Any]:
    """Edits leave ``status`` alone unless the form carries one."""
    body: dict[str, Any] = {"name": draft.text("name")}
    if draft.text("status") or not draft.is_edit:
        body["status"] = draft.text("status") or DEFAULT_STATUS
    return body


def custom_named_body(draft: FormDraft) -> dict[str, Any]:
    body = named_body(draft)
    if "is_custom" in draft.fields or not draft.is_edit:
        body["is_custom"] = custom_flag(draft.value("is_custom", 0))
    return body


def faq_body(draft: FormDraft) -> dict[str, Any]:
    return {
        "question": draft.text("question"),
        "answer": draft.text("answer"),
        "status": draft.text("status") or DEFAULT_STATUS,
    }


def first_of(record: Record, *names: str) -> Any:
    return next((record[n] for n in names if record.get(n) is not None), None)


def normalize_faq(faq: Record) -> Record:
    """Older FAQ rows spell their fields ``Question``/``faq_question``/``faqQuestion``."""
    return {
        **faq,
        "question": first_of(faq, "question", "Question", "faq_question", "faqQuestion") or "",
        "answer": first_of(faq, "answer", "Answer", "faq_answer", "faqAnswer") or "",
        "status": first_of(faq, "status", "Status", "faq_status", "faqStatus") or "",
    }


@dataclass(frozen=True)
class AttributeResource:
    """Routes and body shape of one catalogue.

    ``create_paths`` and the ``{id}`` templates in ``item_paths`` are tried
    in order; the first is the primary route, the rest answer only after a 404.
    """

    entity: str
    plural: str
    list_path: str
    create_paths: tuple[str, ...]
    item_paths: tuple[str, ...]
    required: tuple[str, ...]
    build_body: JsonBuilder
    normalize: Callable[[Record], Record] | None = None


RESOURCES = {
    AttributeKind.COLORS: AttributeResource(
        entity="color",
        plural="colors",
        list_path="/colors",
        create_paths=("/colors", "/color"),
        item_paths=("/colors/{id}", "/color/{id}"),
        required=("name",),
        build_body=custom_named_body,
    ),
    AttributeKind.COUNTRIES: AttributeResource(
        entity="country",
        plural="countries",
        list_path="/countries",
        create_paths=("/countries", "/country"),
        item_paths=("/countries/{id}", "/country/{id}"),
        required=("name",),
        build_body=named_body,
    ),
    AttributeKind.FINISHES: AttributeResource(
        entity="finish",
        plural="finishes",
        list_path="/finishes",
        create_paths=("/finishes", "/finish"),
        item_paths=("/finishes/{id}", "/finish/{id}"),
        required=("name",),
        build_body=custom_named_body,
    ),
    AttributeKind.FAQS: AttributeResource(
        entity="faq",
        plural="faqs",
        list_path="/faqs",
        create_paths=("/faq",),
        item_paths=("/faq/{id}", "/faq/{id}/", "/faqs/{id}", "/faqs/{id}/"),
        required=("question", "answer", "status"),
        build_body=faq_body,
        normalize=normalize_faq,
    ),
}


class AttributeService:
    """List plus create/edit/delete for one :class:`AttributeResource`."""

    def __init__(self, api: MarketplaceApi, resource: AttributeResource):
        self._api = api
        self.resource = resource
        self.store = ResourceStore(
            api,
            path=resource.list_path,
            plural=resource.plural,
            entity=resource.entity,
            transform=resource.normalize,
        )
        self._dispatcher = MutationDispatcher(
            api,
            self.store,
            create_path=resource.create_paths[0],
            item_path=resource.item_paths[0],
            json_builder=resource.build_body,
        )

    @property
    def tracker(self):
        return self._dispatcher.tracker

    def new_form(self, mode: FormMode = FormMode.CREATE, **kwargs: Any) -> FormController:
        if mode is FormMode.CREATE:
            kwargs.setdefault("initial", {"status": DEFAULT_STATUS})
        return FormController(
            mode, entity=self.resource.entity, required=self.resource.required, **kwargs
        )

    def _item_routes(self, method: str, item_id: Any) -> list[CandidateRequest]:
        return [CandidateRequest(method, p.format(id=item_id)) for p in self.resource.item_paths]

    async def list_items(self, *, cancel: CancellationToken | None = None) -> list[Record]:
        return await self.store.refresh(cancel=cancel)

    async def get_item(self, item_id: Any, *, cancel: CancellationToken | None = None) -> Record:
        try:
            payload = await send_first_accepted(
                self._api, self._item_routes("GET", item_id), cancel=cancel
            )
        except ApiHttpError as exc:
            if exc.is_not_found:
                raise EntityNotFoundError(self.resource.entity.capitalize(), str(item_id)) from exc
            raise
        record = unwrap_record(payload, self.resource.entity)
        if record is None:
            raise EntityNotFoundError(self.resource.entity.capitalize(), str(item_id))
        return self.resource.normalize(record) if self.resource.normalize else record

    async def create_item(
        self, form: FormController, *, cancel: CancellationToken | None = None
    ) -> Any:
        fallbacks = [CandidateRequest("POST", p) for p in self.resource.create_paths[1:]]
        return await self._dispatcher.create(form, fallbacks=fallbacks, cancel=cancel)

    async def update_item(
        self, item_id: Any, form: FormController, *, cancel: CancellationToken | None = None
    ) -> Any:
        return await self._dispatcher.update(
            item_id, form, fallbacks=self._item_routes("PATCH", item_id)[1:], cancel=cancel
        )

    async def delete_item(
        self, item_id: Any, *, confirmed: bool, cancel: CancellationToken | None = None
    ) -> Any:
        return await self._dispatcher.remove(
            item_id,
            confirmed=confirmed,
            fallbacks=self._item_routes("DELETE", item_id)[1:],
            cancel=cancel,
        )
