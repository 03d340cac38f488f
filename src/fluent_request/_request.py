import copy
from collections.abc import Mapping
from typing import Any, Generator, Optional, Union, overload

from httpx import URL, QueryParams

from ._config import RequestDefaults, get_defaults
from ._engine import EngineResponse, HTTPEngine, get_default_engine
from ._utils import (
    append_query_param,
    default_content_type,
    encode_body,
    join_path,
    parse_absolute_url,
)
from ._utils.constants import (
    DEFAULT_AUTH_SCHEME,
    DEFAULT_METHOD,
    HEADER_AUTHORIZATION,
    HEADER_CONTENT_TYPE,
    HEADER_USER_AGENT,
    MILLISECONDS_PER_SECOND,
    OPTION_BODY,
    OPTION_HEADERS,
    OPTION_MAX_REDIRECTS,
    OPTION_METHOD,
    OPTION_TIMEOUT_MS,
)
from .models.blob import Blob
from .models.payload import Payload


class Request:
    """Fluent builder for a single outbound HTTP request.

    Every mutator returns the builder itself so calls can be chained in any
    order. Nothing is sent until a terminal operation runs: ``send()``, one of
    the decoders (``json()``, ``text()``, ``raw()``, ``blob()``) or awaiting
    the builder directly.

    Each terminal operation assembles the request again and calls the engine
    once. Two terminal calls on one builder therefore issue two requests; use
    ``copy()`` to branch a builder before changing it for a second request.

    A builder is not synchronized. Mutating the same instance from concurrent
    tasks is the caller's responsibility.

    Examples:
        ```python
        from fluent_request import request

        user = await (
            request("https://api.example.com")
            .path("users", "42")
            .query("verbose", "true")
            .auth("tok123")
            .json()
        )
        ```
    """

    def __init__(
        self,
        url: Union[URL, str],
        *,
        engine: Optional[HTTPEngine] = None,
        defaults: Optional[RequestDefaults] = None,
    ) -> None:
        self._url = parse_absolute_url(url)
        self._engine = engine
        self._defaults = defaults or get_defaults()

        self._method = DEFAULT_METHOD
        self._payload: Optional[Payload] = None
        self._headers: dict[str, str] = {}
        self._timeout_ms = self._defaults.timeout_ms
        self._max_redirects = self._defaults.max_redirects
        self._user_agent = self._defaults.user_agent
        self._engine_options: dict[str, Any] = {}

    # Descriptor

    @property
    def url(self) -> URL:
        return self._url

    @property
    def http_method(self) -> str:
        return self._method

    @property
    def payload(self) -> Optional[Payload]:
        return self._payload

    @property
    def headers(self) -> dict[str, str]:
        """Explicitly set headers, keyed by lower-cased name."""
        return dict(self._headers)

    @property
    def timeout_ms(self) -> int:
        return self._timeout_ms

    @property
    def max_redirects(self) -> int:
        return self._max_redirects

    @property
    def user_agent(self) -> str:
        return self._user_agent

    @property
    def engine_options(self) -> dict[str, Any]:
        return dict(self._engine_options)

    # Options

    @overload
    def query(self, name: str, value: Any) -> "Request": ...

    @overload
    def query(self, name: Mapping[str, Any]) -> "Request": ...

    def query(
        self, name: Union[str, Mapping[str, Any]], value: Any = None
    ) -> "Request":
        """Append query parameters, keeping earlier values for the same name."""
        if isinstance(name, Mapping):
            return self.query_many(name)
        self._url = append_query_param(self._url, name, value)
        return self

    def query_many(self, params: Mapping[str, Any]) -> "Request":
        items = params.multi_items() if isinstance(params, QueryParams) else params.items()
        for key, value in items:
            self._url = append_query_param(self._url, key, value)
        return self

    def path(self, *segments: str) -> "Request":
        """Join segments onto the current URL path, left to right."""
        if not segments:
            return self
        # raw_path keeps existing escapes such as %2F intact
        current = self._url.raw_path.decode("ascii").partition("?")[0]
        for segment in segments:
            current = join_path(current, str(segment))
        self._url = self._url.copy_with(path=current)
        return self

    def body(self, data: Any, encoding: Optional[str] = None) -> "Request":
        """Set the request body, replacing any previous one.

        The encoding is chosen and the data serialized immediately, so
        ``EncodingError`` is raised here rather than when sending.

        Args:
            data: ``httpx.QueryParams`` (always sent as a form), a structured
                value (JSON unless ``encoding`` says otherwise), or text/bytes
                sent as is.
            encoding: Optional ``"json"``, ``"form"``, ``"buffer"`` or any
                custom name. Case-insensitive.
        """
        self._payload = encode_body(data, encoding)
        return self

    @overload
    def header(self, name: str, value: Any) -> "Request": ...

    @overload
    def header(self, name: Mapping[str, Any]) -> "Request": ...

    def header(
        self, name: Union[str, Mapping[str, Any]], value: Any = None
    ) -> "Request":
        """Set headers. Names are case-insensitive and the last write wins.

        ``user-agent`` shares its value with ``agent()``: whichever of the two
        was called last is sent.
        """
        if isinstance(name, Mapping):
            return self.header_many(name)
        self._set_header(name, value)
        return self

    def header_many(self, headers: Mapping[str, Any]) -> "Request":
        for key, value in headers.items():
            self._set_header(key, value)
        return self

    def _set_header(self, name: str, value: Any) -> None:
        key = name.lower()
        if key == HEADER_USER_AGENT:
            self._user_agent = str(value)
        else:
            self._headers[key] = str(value)

    def timeout(self, seconds: Union[int, float]) -> "Request":
        """Set the send timeout in seconds."""
        if seconds < 0:
            raise ValueError("timeout must not be negative")
        self._timeout_ms = int(round(seconds * MILLISECONDS_PER_SECOND))
        return self

    def agent(self, *fragments: Any) -> "Request":
        self._user_agent = " ".join(str(fragment) for fragment in fragments)
        return self

    @overload
    def options(self, key: str, value: Any) -> "Request": ...

    @overload
    def options(self, key: Mapping[str, Any]) -> "Request": ...

    def options(
        self, key: Union[str, Mapping[str, Any]], value: Any = None
    ) -> "Request":
        """Merge raw engine options.

        They are applied last when the request is assembled, so they override
        ``method``, ``headers``, ``body``, ``timeout_ms`` and ``max_redirects``
        as well as any engine-native argument.
        """
        if isinstance(key, Mapping):
            self._engine_options.update(key)
        else:
            self._engine_options[key] = value
        return self

    def auth(self, token: str, scheme: Optional[str] = DEFAULT_AUTH_SCHEME) -> "Request":
        self._headers[HEADER_AUTHORIZATION] = f"{scheme} {token}" if scheme else token
        return self

    def follow(self, count_or_flag: Union[bool, int]) -> "Request":
        """Set the redirect cap.

        ``True`` restores the default cap, ``False`` disables redirects and an
        integer sets the exact number of redirects to follow.
        """
        if isinstance(count_or_flag, bool):
            self._max_redirects = self._defaults.max_redirects if count_or_flag else 0
        else:
            if count_or_flag < 0:
                raise ValueError("redirect count must not be negative")
            self._max_redirects = int(count_or_flag)
        return self

    # HTTP methods

    def method(self, verb: str) -> "Request":
        self._method = verb.upper()
        return self

    def get(self) -> "Request":
        return self.method("GET")

    def post(self) -> "Request":
        return self.method("POST")

    def put(self) -> "Request":
        return self.method("PUT")

    def patch(self) -> "Request":
        return self.method("PATCH")

    def delete(self) -> "Request":
        return self.method("DELETE")

    def head(self) -> "Request":
        return self.method("HEAD")

    # Response modifiers

    async def json(self) -> Any:
        response = await self.send()
        return await response.json()

    async def text(self) -> str:
        response = await self.send()
        return await response.text()

    async def raw(self) -> bytes:
        response = await self.send()
        return await response.read()

    buffer = raw

    async def blob(self) -> Blob:
        response = await self.send()
        return await response.blob()

    # Sending

    def build_options(self) -> dict[str, Any]:
        """Assemble the options handed to the engine, without mutating the builder."""
        headers = dict(self._headers)
        if self._payload is not None and HEADER_CONTENT_TYPE not in headers:
            content_type = default_content_type(self._payload.encoding)
            if content_type:
                headers[HEADER_CONTENT_TYPE] = content_type
        headers[HEADER_USER_AGENT] = self._user_agent

        return {
            OPTION_METHOD: self._method,
            OPTION_HEADERS: headers,
            OPTION_BODY: self._payload.value if self._payload is not None else None,
            OPTION_TIMEOUT_MS: self._timeout_ms,
            OPTION_MAX_REDIRECTS: self._max_redirects,
            **self._engine_options,
        }

    async def send(self) -> EngineResponse:
        engine = self._engine or get_default_engine()
        return await engine.send(self._url, self.build_options())

    def __await__(self) -> Generator[Any, None, EngineResponse]:
        return self.send().__await__()

    def copy(self) -> "Request":
        """Return an independent builder with the same state and engine."""
        clone = copy.copy(self)
        clone._headers = dict(self._headers)
        clone._engine_options = dict(self._engine_options)
        return clone

    def __repr__(self) -> str:
        return f"<Request {self._method} {self._url}>"


def request(url: Union[URL, str], **kwargs: Any) -> Request:
    """Start building a request for ``url``."""
    return Request(url, **kwargs)


def make_request(url: Union[URL, str], **kwargs: Any) -> Request:
    return Request(url, **kwargs)
