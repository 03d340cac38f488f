from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Payload:
    """A request body that has already been serialized for the wire.

    ``encoding`` is one of ``json``, ``form``, ``buffer`` or any custom
    encoding name passed to ``Request.body()``. ``value`` is normally a
    ``str`` or ``bytes``; it is left untouched when the caller declares the
    data as already encoded.
    """

    encoding: str
    value: Any
