import platform

import httpx

from .._version import __version__

_PRODUCT = "fluent-request"
_HOMEPAGE = "https://www.python-httpx.org"


def user_agent_value(*extra: str) -> str:
    """Compose the default identity sent as ``user-agent``.

    The value names this package, the interpreter and the httpx release used
    by the default engine, e.g.
    ``fluent-request/0.1.0 Python/3.12.4 httpx/0.28.1 (+https://www.python-httpx.org)``.
    """
    parts = [
        f"{_PRODUCT}/{__version__}",
        f"Python/{platform.python_version()}",
        f"httpx/{httpx.__version__}",
        *extra,
        f"(+{_HOMEPAGE})",
    ]
    return " ".join(parts)
