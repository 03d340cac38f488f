import posixpath
from typing import Any, Union

from httpx import URL, InvalidURL

from ..models.errors import InvalidURLError


def parse_absolute_url(url: Union[URL, str]) -> URL:
    """Parse ``url`` and make sure it carries both a scheme and a host.

    Args:
        url: A pre-parsed ``httpx.URL`` or a string.

    Returns:
        The parsed URL.

    Raises:
        InvalidURLError: If the value cannot be parsed or is relative.
    """
    try:
        parsed = url if isinstance(url, URL) else URL(url)
    except (InvalidURL, TypeError, ValueError) as e:
        raise InvalidURLError() from e

    if not parsed.is_absolute_url:
        raise InvalidURLError()

    return parsed


def append_query_param(url: URL, name: str, value: Any) -> URL:
    return url.copy_add_param(str(name), str(value))


def join_path(base: str, segment: str) -> str:
    """Join ``segment`` onto ``base`` lexically.

    Unlike ``posixpath.join`` an absolute segment is appended rather than
    replacing the base. Redundant separators and ``.``/``..`` components are
    collapsed without touching the filesystem.

    Examples:
        >>> join_path("/api", "/users/")
        '/api/users/'
        >>> join_path("/api/v1", "../v2")
        '/api/v2'
    """
    if not segment:
        return base or "/"

    joined = posixpath.normpath(f"{base}/{segment}")
    # POSIX keeps a leading "//", URLs must not
    if joined.startswith("//"):
        joined = "/" + joined.lstrip("/")
    if joined == ".":
        joined = "/"
    if not joined.startswith("/"):
        joined = "/" + joined
    if segment.endswith("/") and not joined.endswith("/"):
        joined += "/"
    return joined
