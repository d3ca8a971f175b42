"""Shared fixtures: an in-memory marketplace backend behind httpx.MockTransport."""

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from email import policy
from email.parser import BytesParser
from typing import Any

import httpx
import pytest

from admin_dashboard.infrastructure.http import MarketplaceApiClient

BASE_URL = "http://marketplace.test"


@dataclass
class RecordedRequest:
    """What the fake backend saw for one call."""

    method: str
    path: str
    json: Any = None
    fields: dict[str, str] = field(default_factory=dict)
    files: dict[str, tuple[str, bytes]] = field(default_factory=dict)

    @property
    def data(self) -> dict[str, Any]:
        """The decoded JSON ``data`` form field (buyer writes)."""
        return json.loads(self.fields["data"])


Responder = Callable[[RecordedRequest], httpx.Response]


class FakeMarketplaceBackend:
    """Serves ``collections`` on GET and canned responses for registered routes.

    Anything unregistered answers 404, which is also what drives the
    fallback-route tests.
    """

    def __init__(self):
        self.collections: dict[str, Any] = {}
        self.routes: dict[tuple[str, str], Responder] = {}
        self.requests: list[RecordedRequest] = []

    def on(
        self,
        method: str,
        path: str,
        *,
        status: int = 200,
        json: Any = None,
        text: str | None = None,
        handler: Responder | None = None,
    ) -> None:
        if handler is None:
            def handler(_: RecordedRequest) -> httpx.Response:
                if text is not None:
                    return httpx.Response(status, text=text)
                return httpx.Response(status, json=json if json is not None else {})
        self.routes[(method.upper(), path)] = handler

    def calls(self, method: str | None = None, path: str | None = None) -> list[RecordedRequest]:
        return [
            r for r in self.requests
            if (method is None or r.method == method) and (path is None or r.path == path)
        ]

    def handle(self, request: httpx.Request) -> httpx.Response:
        recorded = _record(request)
        self.requests.append(recorded)
        route = self.routes.get((recorded.method, recorded.path))
        if route is not None:
            return route(recorded)
        if recorded.method == "GET" and recorded.path in self.collections:
            return httpx.Response(200, json=self.collections[recorded.path])
        return httpx.Response(404, json={"message": f"Cannot {recorded.method} {recorded.path}"})


def _record(request: httpx.Request) -> RecordedRequest:
    recorded = RecordedRequest(method=request.method, path=request.url.path)
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        recorded.json = json.loads(request.content)
    elif content_type.startswith("multipart/form-data"):
        message = BytesParser(policy=policy.default).parsebytes(
            b"Content-Type: " + content_type.encode() + b"\r\n\r\n" + request.content
        )
        for part in message.iter_parts():
            name = part.get_param("name", header="content-disposition")
            payload = part.get_payload(decode=True) or b""
            filename = part.get_filename()
            if filename:
                recorded.files[name] = (filename, payload)
            else:
                recorded.fields[name] = payload.decode("utf-8")
    return recorded


@pytest.fixture
def backend() -> FakeMarketplaceBackend:
    return FakeMarketplaceBackend()


@pytest.fixture
def api(backend: FakeMarketplaceBackend) -> MarketplaceApiClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(backend.handle))
    return MarketplaceApiClient(BASE_URL, http_client=http_client)
