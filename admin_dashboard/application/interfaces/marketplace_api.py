"""Abstract marketplace backend interface — port for the REST adapter.

Every resource store, dispatcher and enrichment fetcher talks to the
marketplace through this one port, so base URL, timeout and error
translation live in exactly one adapter.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from admin_dashboard.domain.entities import Attachment, CancellationToken


@dataclass
class MultipartPayload:
    """Form values plus file uploads for one multipart write."""

    fields: dict[str, str] = field(default_factory=dict)
    files: dict[str, Attachment] = field(default_factory=dict)

    def add_field(self, name: str, value: Any) -> None:
        self.fields[name] = _form_value(value)

    def add_file(self, name: str, attachment: Attachment | None) -> None:
        """Attach a file only when one was actually chosen."""
        if attachment is not None and not attachment.is_empty:
            self.files[name] = attachment

    def as_parts(self) -> list[tuple[str, tuple[str | None, Any] | tuple[str, bytes, str]]]:
        """httpx ``files=`` parts; plain values carry no filename so they stay form fields."""
        parts: list = [(name, (None, value)) for name, value in self.fields.items()]
        parts += [(name, attachment.as_upload()) for name, attachment in self.files.items()]
        return parts


def _form_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


class MarketplaceApi(ABC):
    """Port — what the application layer needs from the marketplace backend."""

    @abstractmethod
    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        multipart: MultipartPayload | None = None,
        cancel: CancellationToken | None = None,
    ) -> Any:
        """Send one request and return the decoded JSON body (``None`` when empty).

        Raises:
            ApiTransportError: No response was received.
            ApiHttpError: The backend answered with a non-2xx status.
            ResponseFormatError: A 2xx body was not valid JSON.
            OperationCancelledError: ``cancel`` fired before or during the call.
        """
        ...

    @abstractmethod
    def resolve_media_url(self, path: str | None) -> str | None:
        """Turn a server-relative file path into an absolute URL."""
        ...

    async def get(self, path: str, *, cancel: CancellationToken | None = None) -> Any:
        return await self.request("GET", path, cancel=cancel)

    async def post(self, path: str, **kwargs: Any) -> Any:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> Any:
        return await self.request("PUT", path, **kwargs)

    async def patch(self, path: str, **kwargs: Any) -> Any:
        return await self.request("PATCH", path, **kwargs)

    async def delete(self, path: str, *, cancel: CancellationToken | None = None) -> Any:
        return await self.request("DELETE", path, cancel=cancel)
