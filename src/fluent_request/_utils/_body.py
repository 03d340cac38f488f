import json
from collections.abc import Mapping
from typing import Any, Optional

from httpx import QueryParams

from ..models.errors import EncodingError
from ..models.payload import Payload
from .constants import (
    CONTENT_TYPE_FORM,
    CONTENT_TYPE_JSON,
    ENCODING_BUFFER,
    ENCODING_FORM,
    ENCODING_JSON,
)

_RAW_TYPES = (str, bytes, bytearray, memoryview)

_DEFAULT_CONTENT_TYPES: dict[str, str] = {
    ENCODING_JSON: CONTENT_TYPE_JSON,
    ENCODING_FORM: CONTENT_TYPE_FORM,
}


def is_structured(data: Any) -> bool:
    """Whether ``data`` still needs serializing, i.e. it is not text or bytes."""
    return not isinstance(data, _RAW_TYPES)


def encode_json(data: Any) -> str:
    try:
        return json.dumps(
            data, separators=(",", ":"), ensure_ascii=False, allow_nan=False
        )
    except (TypeError, ValueError) as e:
        raise EncodingError(ENCODING_JSON, str(e)) from e


def encode_form(data: Any) -> str:
    """Serialize a mapping or a sequence of pairs as ``x-www-form-urlencoded``."""
    if isinstance(data, QueryParams):
        return str(data)
    if not isinstance(data, Mapping):
        try:
            data = list(data)
        except TypeError as e:
            raise EncodingError(ENCODING_FORM, str(e)) from e
    try:
        return str(QueryParams(data))
    except (TypeError, ValueError) as e:
        raise EncodingError(ENCODING_FORM, str(e)) from e


def encode_body(data: Any, encoding: Optional[str] = None) -> Payload:
    """Pick the encoding for ``data`` and serialize it in one step.

    Resolution order, first match wins:

    1. ``httpx.QueryParams`` is always sent as a form, whatever ``encoding`` says.
    2. Without ``encoding``, anything that is not text or bytes becomes JSON.
    3. With ``encoding``, the lower-cased name is used as is. Structured data is
       serialized for ``form`` and ``json``; everything else is assumed to be
       encoded already and passed through.
    4. Text and bytes without ``encoding`` are sent as a raw ``buffer``.

    Args:
        data: The value handed to ``Request.body()``.
        encoding: Optional encoding name, case-insensitive.

    Returns:
        Payload: The chosen encoding and the wire-ready value.

    Raises:
        EncodingError: If structured data cannot be serialized.
    """
    if isinstance(data, QueryParams):
        return Payload(ENCODING_FORM, str(data))

    if not encoding and is_structured(data):
        return Payload(ENCODING_JSON, encode_json(data))

    if encoding:
        resolved = encoding.lower()
        if resolved == ENCODING_FORM and is_structured(data):
            return Payload(resolved, encode_form(data))
        if resolved == ENCODING_JSON and is_structured(data):
            return Payload(resolved, encode_json(data))
        return Payload(resolved, data)

    return Payload(ENCODING_BUFFER, data)


def default_content_type(encoding: str) -> Optional[str]:
    return _DEFAULT_CONTENT_TYPES.get(encoding)
