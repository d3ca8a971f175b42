"""Mutation dispatcher — create/update/delete/patch against one resource.

Writes follow one policy: validate locally, send, then refetch the whole
collection (no hand-rolled merge). Scalar toggles are the exception: they
are applied optimistically and reverted if the backend rejects them.
"""

import logging
from collections.abc import Callable, Sequence
from typing import Any

from admin_dashboard.application.interfaces import MarketplaceApi, MultipartPayload
from admin_dashboard.application.services.form_controller import FormController
from admin_dashboard.application.services.resource_store import ResourceStore
from admin_dashboard.domain.entities import (
    NEW_RECORD_KEY,
    CancellationToken,
    CandidateRequest,
    FormDraft,
    MutationTracker,
    OptimisticUpdate,
    Record,
)
from admin_dashboard.domain.exceptions import (
    ApiHttpError,
    ConfirmationRequiredError,
    EntityNotFoundError,
    ValidationFailedError,
)

logger = logging.getLogger(__name__)

PayloadBuilder = Callable[[FormDraft], MultipartPayload]
JsonBuilder = Callable[[FormDraft], dict[str, Any]]


def default_payload(draft: FormDraft) -> MultipartPayload:
    """Every draft field as a form value, plus each newly chosen file."""
    payload = MultipartPayload()
    for name, value in draft.fields.items():
        payload.add_field(name, value)
    for name, attachment in draft.files.items():
        payload.add_file(name, attachment)
    return payload


async def send_first_accepted(
    api: MarketplaceApi,
    candidates: Sequence[CandidateRequest],
    *,
    json: Any = None,
    multipart: MultipartPayload | None = None,
    cancel: CancellationToken | None = None,
) -> Any:
    """Try each candidate in order; a 404 moves on, anything else is final."""
    if not candidates:
        raise ValueError("At least one candidate request is required")

    last_error: ApiHttpError | None = None
    for candidate in candidates:
        try:
            return await api.request(
                candidate.method,
                candidate.path,
                json=json,
                multipart=multipart,
                cancel=cancel,
            )
        except ApiHttpError as exc:
            if not exc.is_not_found:
                raise
            logger.info("%s %s answered 404, trying next route", candidate.method, candidate.path)
            last_error = exc
    raise last_error  # type: ignore[misc]


class MutationDispatcher:
    """Issues writes for one resource and reconciles its store afterwards."""

    def __init__(
        self,
        api: MarketplaceApi,
        store: ResourceStore,
        *,
        create_path: str,
        item_path: str,
        payload_builder: PayloadBuilder = default_payload,
        json_builder: JsonBuilder | None = None,
        tracker: MutationTracker | None = None,
    ):
        self._api = api
        self._store = store
        self._create_path = create_path
        self._item_path = item_path
        self._payload_builder = payload_builder
        self._json_builder = json_builder
        self.tracker = tracker or MutationTracker()

    @property
    def entity(self) -> str:
        return self._store.entity

    def item_path(self, record_key: object) -> str:
        return self._item_path.format(id=record_key)

    async def create(
        self,
        form: FormController,
        *,
        fallbacks: Sequence[CandidateRequest] = (),
        cancel: CancellationToken | None = None,
    ) -> Any:
        body = self._validated_body(form)
        candidates = [CandidateRequest("POST", self._create_path), *fallbacks]
        return await self._write(
            NEW_RECORD_KEY,
            "create",
            lambda: send_first_accepted(self._api, candidates, cancel=cancel, **body),
            cancel,
        )

    async def update(
        self,
        record_key: object,
        form: FormController,
        *,
        fallbacks: Sequence[CandidateRequest] = (),
        cancel: CancellationToken | None = None,
    ) -> Any:
        body = self._validated_body(form)
        candidates = [CandidateRequest("PATCH", self.item_path(record_key)), *fallbacks]
        return await self._write(
            record_key,
            "update",
            lambda: send_first_accepted(self._api, candidates, cancel=cancel, **body),
            cancel,
        )

    async def remove(
        self,
        record_key: object,
        *,
        confirmed: bool,
        fallbacks: Sequence[CandidateRequest] = (),
        cancel: CancellationToken | None = None,
    ) -> Any:
        """Irreversible; callers must pass ``confirmed=True`` after asking the user."""
        if not confirmed:
            raise ConfirmationRequiredError(self.entity, str(record_key))
        candidates = [CandidateRequest("DELETE", self.item_path(record_key)), *fallbacks]
        return await self._write(
            record_key,
            "delete",
            lambda: send_first_accepted(self._api, candidates, cancel=cancel),
            cancel,
        )

    async def patch_json(
        self,
        record_key: object,
        body: Any,
        *,
        kind: str = "patch",
        cancel: CancellationToken | None = None,
    ) -> Any:
        """Non-optimistic JSON PATCH of the item, followed by a full refetch."""
        return await self._write(
            record_key,
            kind,
            lambda: self._api.patch(self.item_path(record_key), json=body, cancel=cancel),
            cancel,
        )

    async def patch_field(
        self,
        record_key: object,
        field: str,
        value: Any,
        *,
        target: Record | None = None,
        json_body: Any = None,
        multipart: MultipartPayload | None = None,
        candidates: Sequence[CandidateRequest] | None = None,
        kind: str | None = None,
        cancel: CancellationToken | None = None,
    ) -> Any:
        """Optimistically set one scalar, PATCH it, and revert on any failure.

        ``target`` defaults to the store's copy of the record; pass a nested
        dict (e.g. one product line of an order) to patch that instead.
        No refetch follows a successful patch.
        """
        record = target if target is not None else self._store.find(record_key)
        if record is None:
            raise EntityNotFoundError(self.entity, str(record_key))

        if json_body is None and multipart is None:
            json_body = {field: value}
        routes = list(candidates) if candidates else [
            CandidateRequest("PATCH", self.item_path(record_key))
        ]
        kind = kind or f"patch:{field}"

        self.tracker.begin(record_key, kind)
        update = OptimisticUpdate(record, field, value)
        update.apply()
        confirmed = False
        try:
            response = await send_first_accepted(
                self._api, routes, json=json_body, multipart=multipart, cancel=cancel
            )
            confirmed = True
        finally:
            if not confirmed:
                update.revert()
                self.tracker.fail(record_key, kind)
                logger.warning(
                    "Reverted %s.%s (%s) on '%s'", self.entity, field, kind, record_key
                )
        update.confirm()
        self.tracker.succeed(record_key, kind)
        self.tracker.settle(record_key, kind)
        return response

    def _validated_body(self, form: FormController) -> dict[str, Any]:
        """``json=`` or ``multipart=`` keyword for the request, built only from a valid draft."""
        result = form.validate()
        if not result.valid:
            raise ValidationFailedError(result.errors)
        if self._json_builder is not None:
            return {"json": self._json_builder(form.draft)}
        return {"multipart": self._payload_builder(form.draft)}

    async def _write(
        self,
        record_key: object,
        kind: str,
        send: Callable[[], Any],
        cancel: CancellationToken | None,
    ) -> Any:
        self.tracker.begin(record_key, kind)
        sent = False
        try:
            response = await send()
            sent = True
        finally:
            if not sent:
                self.tracker.fail(record_key, kind)

        self.tracker.succeed(record_key, kind)
        self.tracker.refetching(record_key, kind)
        try:
            await self._store.refresh(cancel=cancel)
        finally:
            self.tracker.settle(record_key, kind)
        logger.info("%s %s '%s' succeeded", self.entity, kind, record_key)
        return response
