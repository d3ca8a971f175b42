"""Unit tests for the MarketplaceApiClient (httpx adapter)."""

import httpx
import pytest

from admin_dashboard.application.interfaces import MultipartPayload
from admin_dashboard.domain.entities import Attachment, CancellationToken
from admin_dashboard.domain.exceptions import (
    ApiHttpError,
    ApiTransportError,
    OperationCancelledError,
    ResponseFormatError,
)
from admin_dashboard.infrastructure.http import MarketplaceApiClient

BASE = "http://marketplace.test"


# ── Helpers ──


def _client(handler) -> MarketplaceApiClient:
    return MarketplaceApiClient(
        BASE + "/", http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler))
    )


def _fixed(status_code: int = 200, **kwargs):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, **kwargs)

    return handler


# ── Tests ──


@pytest.mark.asyncio
async def test_get_decodes_json_and_builds_url():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[{"id": 1}])

    client = _client(handler)
    assert await client.get("/buyers") == [{"id": 1}]
    assert str(seen[0].url) == f"{BASE}/buyers"
    assert seen[0].headers["accept"] == "application/json"


@pytest.mark.asyncio
async def test_empty_body_decodes_to_none():
    client = _client(_fixed(204))
    assert await client.delete("/buyer/1") is None


@pytest.mark.asyncio
async def test_invalid_json_raises_format_error():
    client = _client(_fixed(200, text="<html>oops</html>"))
    with pytest.raises(ResponseFormatError, match="Invalid JSON received from server"):
        await client.get("/buyers")


@pytest.mark.asyncio
async def test_http_error_carries_status_message_and_field_errors():
    body = {"errors": [{"field": "email", "message": "Email already exists"}]}
    client = _client(_fixed(400, json=body))

    with pytest.raises(ApiHttpError) as info:
        await client.post("/buyer", multipart=MultipartPayload())

    error = info.value
    assert error.status_code == 400
    assert error.message == "Email already exists"
    assert error.field_errors == {"email": "Email already exists"}
    assert str(error) == "400: Email already exists"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("body", "expected"),
    [
        ({"message": "Buyer not found"}, "Buyer not found"),
        ({"error": "Bad id"}, "Bad id"),
        ({"error": {"message": "Nested"}}, "Nested"),
        ({"errors": {"mobile": ["Mobile taken"]}}, "Mobile taken"),
    ],
)
async def test_http_error_message_shapes(body, expected):
    client = _client(_fixed(422, json=body))
    with pytest.raises(ApiHttpError) as info:
        await client.get("/buyer/1")
    assert info.value.message == expected


@pytest.mark.asyncio
async def test_http_error_from_html_pre_block():
    page = "<html><body><pre>Cannot PATCH /slider/3</pre></body></html>"
    client = _client(_fixed(404, text=page))
    with pytest.raises(ApiHttpError) as info:
        await client.patch("/slider/3", json={})
    assert info.value.is_not_found
    assert info.value.message == "Cannot PATCH /slider/3"


@pytest.mark.asyncio
async def test_timeout_becomes_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(ApiTransportError, match="timed out after 10s"):
        await _client(handler).get("/orders")


@pytest.mark.asyncio
async def test_connection_error_becomes_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(ApiTransportError, match="No response from server."):
        await _client(handler).get("/orders")


@pytest.mark.asyncio
async def test_cancelled_token_short_circuits_before_sending():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json=[])

    token = CancellationToken()
    token.cancel()
    with pytest.raises(OperationCancelledError):
        await _client(handler).get("/orders", cancel=token)
    assert calls == []


@pytest.mark.asyncio
async def test_multipart_sends_fields_and_files(backend, api):
    backend.on("POST", "/category", json={"message": "created"})
    payload = MultipartPayload()
    payload.add_field("category_name", "Tiles")
    payload.add_field("featured", True)
    payload.add_file("image", Attachment("tile.png", b"png-bytes"))
    payload.add_file("banner", None)

    assert await api.post("/category", multipart=payload) == {"message": "created"}

    sent = backend.calls("POST", "/category")[0]
    assert sent.fields == {"category_name": "Tiles", "featured": "true"}
    assert sent.files == {"image": ("tile.png", b"png-bytes")}


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        (None, None),
        ("", None),
        ("https://cdn.test/a.png", "https://cdn.test/a.png"),
        ("data:image/png;base64,AA", "data:image/png;base64,AA"),
        ("/uploads/a.png", f"{BASE}/uploads/a.png"),
        ("images/a.png", f"{BASE}/images/a.png"),
        ("a.png", f"{BASE}/uploads/a.png"),
    ],
)
def test_resolve_media_url(path, expected):
    client = MarketplaceApiClient(BASE)
    assert client.resolve_media_url(path) == expected
