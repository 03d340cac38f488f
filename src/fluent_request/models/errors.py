class RequestError(Exception):
    """Base class for every error raised by fluent_request."""


class InvalidURLError(RequestError, ValueError):
    def __init__(self, message="Only absolute URLs are supported"):
        self.message = message
        super().__init__(self.message)


class EncodingError(RequestError, ValueError):
    """Raised by ``Request.body()`` when a payload cannot be serialized."""

    def __init__(self, encoding: str, message: str):
        self.encoding = encoding
        self.message = f"Unable to encode request body as {encoding}: {message}"
        super().__init__(self.message)


class TransportError(RequestError):
    """Raised when the HTTP engine fails to complete a request.

    Covers connection failures, exceeded timeouts and redirect loops that go
    past the configured cap. The underlying engine exception is available as
    ``__cause__``.
    """

    def __init__(self, message: str, url: str | None = None):
        self.message = message
        self.url = url
        super().__init__(self.message)


class DecodeError(RequestError):
    """Raised when a response body cannot be decoded into the requested form."""

    def __init__(self, decoder: str, message: str):
        self.decoder = decoder
        self.message = f"Unable to decode response body as {decoder}: {message}"
        super().__init__(self.message)
