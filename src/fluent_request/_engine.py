"""HTTP engine contract and the default httpx-backed engine.

The builder only knows the :class:`HTTPEngine` protocol: a single
``send(url, options)`` coroutine returning an :class:`EngineResponse`. The
options mapping carries ``method``, ``headers``, ``body``, ``timeout_ms`` and
``max_redirects``; any other key is engine-native and, for
:class:`HttpxEngine`, forwarded to ``httpx.AsyncClient.request``.
"""

import json
from logging import getLogger
from collections.abc import AsyncIterable, Iterator
from typing import Any, Mapping, Protocol, runtime_checkable

from httpx import URL, AsyncClient, Headers, Response, Timeout

from ._utils._errors import handle_decode_errors, handle_transport_errors
from ._utils._ssl_context import get_httpx_client_kwargs
from ._utils.constants import (
    CONTENT_TYPE_OCTET_STREAM,
    DEFAULT_MAX_REDIRECTS,
    DEFAULT_METHOD,
    DEFAULT_TIMEOUT_MS,
    HEADER_AUTHORIZATION,
    HEADER_CONTENT_TYPE,
    MILLISECONDS_PER_SECOND,
    OPTION_BODY,
    OPTION_HEADERS,
    OPTION_MAX_REDIRECTS,
    OPTION_METHOD,
    OPTION_TIMEOUT_MS,
)
from .models.blob import Blob
from .models.errors import EncodingError

logger = getLogger("fluent_request")

_RAW_CONTENT = (str, bytes, bytearray, memoryview)


class EngineResponse:
    """Response returned by an engine, with awaitable body decoders."""

    def __init__(self, response: Response) -> None:
        self._response = response

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def headers(self) -> Headers:
        return self._response.headers

    @property
    def url(self) -> URL:
        return self._response.url

    @property
    def is_success(self) -> bool:
        return self._response.is_success

    @property
    def http_response(self) -> Response:
        """The underlying ``httpx.Response``."""
        return self._response

    async def read(self) -> bytes:
        with handle_decode_errors("bytes"):
            return await self._response.aread()

    async def text(self) -> str:
        content = await self.read()
        with handle_decode_errors("text"):
            encoding = self._response.encoding or "utf-8"
            return content.decode(encoding)

    async def json(self) -> Any:
        text = await self.text()
        with handle_decode_errors("json"):
            return json.loads(text)

    async def blob(self) -> Blob:
        content = await self.read()
        content_type = self._response.headers.get(
            HEADER_CONTENT_TYPE, CONTENT_TYPE_OCTET_STREAM
        )
        return Blob(content=content, content_type=content_type)

    def __repr__(self) -> str:
        return f"<EngineResponse [{self.status_code}] {self.url}>"


@runtime_checkable
class HTTPEngine(Protocol):
    """Anything that can perform a fully assembled request."""

    async def send(self, url: URL, options: Mapping[str, Any]) -> EngineResponse: ...


def _is_sendable(body: Any) -> bool:
    if isinstance(body, _RAW_CONTENT):
        return True
    return isinstance(body, (Iterator, AsyncIterable))


def _redact(headers: Mapping[str, str]) -> dict[str, str]:
    return {
        name: "***" if name.lower() == HEADER_AUTHORIZATION else value
        for name, value in headers.items()
    }


class HttpxEngine:
    """Default engine: one ``httpx.AsyncClient`` per request.

    Args:
        **client_kwargs: Extra ``httpx.AsyncClient`` arguments (``transport``,
            ``proxy``, ``verify``...). They take precedence over the package
            SSL defaults but not over the per-request redirect and timeout
            settings.

    Bodies must be ``str``, bytes-like or byte iterators. Anything else, such
    as a mapping passed through by ``body(data, "buffer")``, raises
    ``EncodingError`` before a connection is opened.
    """

    def __init__(self, **client_kwargs: Any) -> None:
        self._client_kwargs = client_kwargs

    async def send(self, url: URL, options: Mapping[str, Any]) -> EngineResponse:
        request_kwargs = dict(options)
        method = request_kwargs.pop(OPTION_METHOD, DEFAULT_METHOD)
        headers = request_kwargs.pop(OPTION_HEADERS, None) or {}
        body = request_kwargs.pop(OPTION_BODY, None)
        timeout_ms = request_kwargs.pop(OPTION_TIMEOUT_MS, DEFAULT_TIMEOUT_MS)
        max_redirects = request_kwargs.pop(OPTION_MAX_REDIRECTS, DEFAULT_MAX_REDIRECTS)

        if body is not None:
            if not _is_sendable(body):
                raise EncodingError(
                    "content",
                    f"HttpxEngine sends str, bytes or byte iterators, got {type(body).__name__}",
                )
            if isinstance(body, (bytearray, memoryview)):
                body = bytes(body)
            request_kwargs.setdefault("content", body)

        client_kwargs = {
            **get_httpx_client_kwargs(),
            **self._client_kwargs,
            "follow_redirects": max_redirects > 0,
            "max_redirects": max_redirects,
            "timeout": Timeout(timeout_ms / MILLISECONDS_PER_SECOND),
        }

        logger.debug(f"Request: {method} {url}")
        logger.debug(f"HEADERS: {_redact(headers)}")

        with handle_transport_errors(str(url)):
            async with AsyncClient(**client_kwargs) as client:
                response = await client.request(
                    method, url, headers=headers, **request_kwargs
                )

        logger.debug(f"Response: {response.status_code} {response.url}")
        return EngineResponse(response)


_default_engine: HttpxEngine | None = None


def get_default_engine() -> HttpxEngine:
    global _default_engine
    if _default_engine is None:
        _default_engine = HttpxEngine()
    return _default_engine
