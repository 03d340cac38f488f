import sys
from pathlib import Path
from typing import Any, Callable, Mapping

import httpx
import pytest

# Ensure local source package (src/fluent_request) is importable before tests collect
_PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
_SRC_PATH: Path = _PROJECT_ROOT / "src"
if _SRC_PATH.exists():
    sys.path.insert(0, str(_SRC_PATH))

from fluent_request import EngineResponse  # noqa: E402


class RecordingEngine:
    """Engine double that records every call and answers with a canned body."""

    def __init__(
        self,
        json: Any = None,
        status_code: int = 200,
        error: Exception | None = None,
    ) -> None:
        self.calls: list[tuple[httpx.URL, dict[str, Any]]] = []
        self._json = {} if json is None else json
        self._status_code = status_code
        self._error = error

    async def send(self, url: httpx.URL, options: Mapping[str, Any]) -> EngineResponse:
        self.calls.append((url, dict(options)))
        if self._error is not None:
            raise self._error
        response = httpx.Response(
            self._status_code,
            json=self._json,
            request=httpx.Request(options.get("method", "GET"), url),
        )
        return EngineResponse(response)

    @property
    def last_url(self) -> httpx.URL:
        return self.calls[-1][0]

    @property
    def last_options(self) -> dict[str, Any]:
        return self.calls[-1][1]


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def base_url() -> str:
    return "https://api.example.com"


@pytest.fixture
def make_engine() -> Callable[..., RecordingEngine]:
    return RecordingEngine


@pytest.fixture
def engine(make_engine: Callable[..., RecordingEngine]) -> RecordingEngine:
    return make_engine(json={"ok": True})
