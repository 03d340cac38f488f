from dataclasses import dataclass

from .._utils.constants import CONTENT_TYPE_OCTET_STREAM


@dataclass(frozen=True)
class Blob:
    """Binary response body together with its media type."""

    content: bytes
    content_type: str = CONTENT_TYPE_OCTET_STREAM

    @property
    def size(self) -> int:
        return len(self.content)

    def text(self, encoding: str = "utf-8") -> str:
        return self.content.decode(encoding)
