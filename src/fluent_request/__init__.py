"""Fluent builder for outbound HTTP requests on top of httpx.

```python
from fluent_request import request

data = await request("https://api.example.com").path("users", "42").auth("tok").json()
```
"""

from ._config import RequestDefaults
from ._engine import EngineResponse, HTTPEngine, HttpxEngine
from ._request import Request, make_request, request
from ._version import __version__
from .models import (
    Blob,
    DecodeError,
    EncodingError,
    InvalidURLError,
    Payload,
    RequestError,
    TransportError,
)

__all__ = [
    "Blob",
    "DecodeError",
    "EncodingError",
    "EngineResponse",
    "HTTPEngine",
    "HttpxEngine",
    "InvalidURLError",
    "Payload",
    "Request",
    "RequestDefaults",
    "RequestError",
    "TransportError",
    "__version__",
    "make_request",
    "request",
]
