from pydantic import BaseModel, ConfigDict, Field

from ._utils._user_agent import user_agent_value
from ._utils.constants import DEFAULT_MAX_REDIRECTS, DEFAULT_TIMEOUT_MS


class RequestDefaults(BaseModel):
    """Values every new ``Request`` starts from."""

    model_config = ConfigDict(frozen=True)

    timeout_ms: int = Field(DEFAULT_TIMEOUT_MS, ge=0, description="Send timeout in milliseconds")
    max_redirects: int = Field(
        DEFAULT_MAX_REDIRECTS, ge=0, description="Redirect cap restored by follow(True)"
    )
    user_agent: str = Field(default_factory=user_agent_value)


_default_defaults: RequestDefaults | None = None


def get_defaults() -> RequestDefaults:
    """Return the package-wide defaults, computing them on first use."""
    global _default_defaults
    if _default_defaults is None:
        _default_defaults = RequestDefaults()
    return _default_defaults
