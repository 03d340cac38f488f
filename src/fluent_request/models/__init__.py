from .blob import Blob
from .errors import (
    DecodeError,
    EncodingError,
    InvalidURLError,
    RequestError,
    TransportError,
)
from .payload import Payload

__all__ = [
    "Blob",
    "DecodeError",
    "EncodingError",
    "InvalidURLError",
    "Payload",
    "RequestError",
    "TransportError",
]
