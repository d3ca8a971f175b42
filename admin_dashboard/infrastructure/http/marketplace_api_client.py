"""Marketplace REST client — implements the MarketplaceApi port.

Talks to the marketplace backend with httpx. One configured base URL and
one timeout apply to every call; every failure is translated into the
domain's ApiError taxonomy so callers never see httpx exceptions.
"""

import logging
import re
from typing import Any

import httpx

from admin_dashboard.application.interfaces import MarketplaceApi, MultipartPayload
from admin_dashboard.domain.entities import CancellationToken
from admin_dashboard.domain.exceptions import (
    ApiHttpError,
    ApiTransportError,
    ResponseFormatError,
)

logger = logging.getLogger(__name__)

_PRE_BLOCK = re.compile(r"<pre>(.*?)</pre>", re.IGNORECASE | re.DOTALL)
_MAX_TEXT_ERROR = 250


class MarketplaceApiClient(MarketplaceApi):
    """Infrastructure adapter — connects to the marketplace REST backend.

    An injected ``httpx.AsyncClient`` is reused across calls (and is what
    tests use to plug in ``httpx.MockTransport``); otherwise a short-lived
    client is opened per request.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._http_client = http_client

    @property
    def base_url(self) -> str:
        return self._base_url

    def _get_headers(self) -> dict[str, str]:
        return {"Accept": "application/json"}

    def _build_url(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def aclose(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        multipart: MultipartPayload | None = None,
        cancel: CancellationToken | None = None,
    ) -> Any:
        if cancel is not None:
            cancel.raise_if_cancelled()

        url = self._build_url(path)
        client = await self._get_client()
        should_close = self._http_client is None

        try:
            logger.debug("%s %s", method, url)
            try:
                response = await client.request(
                    method,
                    url,
                    headers=self._get_headers(),
                    json=json,
                    files=multipart.as_parts() if multipart is not None else None,
                    timeout=self._timeout,
                )
            except httpx.TimeoutException as exc:
                logger.warning("%s %s timed out after %.1fs", method, url, self._timeout)
                raise ApiTransportError(
                    f"Request timed out after {self._timeout:g}s.", method=method, url=url
                ) from exc
            except httpx.TransportError as exc:
                logger.warning("%s %s failed: %s", method, url, exc)
                raise ApiTransportError(
                    "No response from server.", method=method, url=url
                ) from exc

            if response.is_error:
                self._raise_http_error(response, method, url)

            payload = self._decode_body(response, method, url)

        finally:
            if should_close:
                await client.aclose()

        if cancel is not None:
            cancel.raise_if_cancelled()
        return payload

    def resolve_media_url(self, path: str | None) -> str | None:
        if not path:
            return None
        if path.startswith(("http://", "https://", "data:")):
            return path
        if path.startswith("/"):
            return f"{self._base_url}{path}"
        if "/" in path:
            return f"{self._base_url}/{path}"
        return f"{self._base_url}/uploads/{path}"

    @staticmethod
    def _decode_body(response: httpx.Response, method: str, url: str) -> Any:
        if not response.content or not response.content.strip():
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ResponseFormatError(
                "Invalid JSON received from server", method=method, url=url
            ) from exc

    def _raise_http_error(self, response: httpx.Response, method: str, url: str) -> None:
        """Raise ApiHttpError from a non-2xx httpx Response."""
        try:
            data = response.json()
        except ValueError:
            data = None

        message, field_errors = _extract_error(data)
        if not message:
            message = _extract_text_error(response.text) or (
                f"{response.status_code} {response.reason_phrase}".strip()
            )

        logger.warning("%s %s → %d: %s", method, url, response.status_code, message)
        raise ApiHttpError(
            status_code=response.status_code,
            message=message,
            field_errors=field_errors,
            method=method,
            url=url,
        )


def _extract_error(data: Any) -> tuple[str, dict[str, str]]:
    """Pull the human-readable message and field errors out of a JSON error body.

    Understands ``{message}``, ``{error}`` (string or ``{message}``),
    ``{errors: [{field, message}]}`` and ``{errors: {field: [msg, ...]}}``.
    """
    if isinstance(data, str):
        return data.strip(), {}
    if not isinstance(data, dict):
        return "", {}

    field_errors: dict[str, str] = {}
    errors = data.get("errors")
    if isinstance(errors, list):
        for entry in errors:
            if isinstance(entry, dict) and entry.get("message"):
                field_errors[str(entry.get("field") or "")] = str(entry["message"])
    elif isinstance(errors, dict):
        for name, value in errors.items():
            if isinstance(value, list) and value:
                field_errors[str(name)] = str(value[0])
            elif isinstance(value, str):
                field_errors[str(name)] = value

    message = data.get("message")
    if not message:
        error = data.get("error")
        if isinstance(error, dict):
            message = error.get("message")
        elif error:
            message = error
    if not message and field_errors:
        message = next(iter(field_errors.values()))
    return (str(message) if message else ""), field_errors


def _extract_text_error(text: str) -> str:
    """Best-effort message from a non-JSON error body (e.g. an Express HTML page)."""
    if not text:
        return ""
    match = _PRE_BLOCK.search(text)
    if match and match.group(1).strip():
        return match.group(1).strip()
    return text.strip()[:_MAX_TEXT_ERROR]
