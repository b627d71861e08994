from .core.retry import NonRetryableError, RetryableError


class ProviderError(Exception):
    """Base class for failures talking to a chat-completion provider."""

class RateLimitError(ProviderError, RetryableError):
    """Raised on HTTP 429; retried with a fixed delay."""

    def __init__(self, message: str, retry_after: str | None = None):
        self.retry_after = retry_after
        super().__init__(message)

class ProviderHTTPError(ProviderError, NonRetryableError):
    """Raised on any non-2xx status other than 429."""

    def __init__(self, message: str, status_code: int):
        self.status_code = status_code
        super().__init__(message)

class ProviderTransportError(ProviderError, NonRetryableError):
    """Raised when the request never produced an HTTP response (DNS, refused connection, timeout)."""

class ProviderResponseError(ProviderError, NonRetryableError):
    """Raised when the body is not JSON or lacks choices[0].message."""
