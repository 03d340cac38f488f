import json
from contextlib import contextmanager
from typing import Generator, Optional

import httpx

from ..models.errors import DecodeError, TransportError


@contextmanager
def handle_transport_errors(url: Optional[str] = None) -> Generator[None, None, None]:
    """Context manager translating httpx failures into ``TransportError``.

    Wraps the engine call so that timeouts, connection failures and redirect
    loops surface as a single error type. The httpx exception is kept as the
    ``__cause__``.

    Args:
        url: The request target, attached to the raised error.

    Raises:
        TransportError: For any ``httpx.TimeoutException``,
            ``httpx.TooManyRedirects`` or ``httpx.TransportError``.
    """
    try:
        yield
    except httpx.TimeoutException as e:
        raise TransportError(f"Request timed out: {e}", url) from e
    except httpx.TooManyRedirects as e:
        raise TransportError(f"Too many redirects: {e}", url) from e
    except httpx.TransportError as e:
        raise TransportError(str(e) or type(e).__name__, url) from e


@contextmanager
def handle_decode_errors(decoder: str) -> Generator[None, None, None]:
    """Context manager translating body decoding failures into ``DecodeError``."""
    try:
        yield
    except (json.JSONDecodeError, UnicodeDecodeError, LookupError) as e:
        raise DecodeError(decoder, str(e)) from e
    except httpx.StreamError as e:
        raise DecodeError(decoder, str(e)) from e
