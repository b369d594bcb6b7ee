"""Error taxonomy for calls made against the Cloudflare API.

Three kinds are classified from HTTP responses (authentication, rate limit,
generic API error).  Network failures get their own ``TransportError`` so
they never masquerade as one of those.  None of these are retried here:
they propagate to the tool boundary and are rendered as error blocks.
"""

from __future__ import annotations

from typing import Any

from cloudflare_mcp.schemas.common import ErrorDetail

DEFAULT_RETRY_AFTER_SECONDS = 60


class ToolError(Exception):
    """Base class for every failure a tool call can surface."""

    status_code: int | None = None
    retryable: bool = False

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_detail(self) -> ErrorDetail:
        return ErrorDetail(
            name=type(self).__name__,
            message=self.message,
            status_code=self.status_code,
            retryable=self.retryable,
        )


class AuthenticationError(ToolError):
    """Credentials are missing, incomplete, or were rejected (401/403)."""

    status_code = 401


class RateLimitError(ToolError):
    """Cloudflare answered 429.  ``retry_after`` is in seconds."""

    status_code = 429
    retryable = True

    def __init__(self, message: str, retry_after: int = DEFAULT_RETRY_AFTER_SECONDS) -> None:
        super().__init__(message)
        self.retry_after = retry_after

    def to_detail(self) -> ErrorDetail:
        detail = super().to_detail()
        detail.retry_after = self.retry_after
        return detail


class CloudflareApiError(ToolError):
    """Unsuccessful envelope or non-2xx raw response.

    Server-side failures (5xx) are flagged retryable; client errors are not.
    """

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.retryable = status_code >= 500


class TransportError(ToolError):
    """The request never produced an HTTP response (connect failure, timeout)."""

    retryable = True


class InvalidArgumentError(ToolError):
    """A string argument that should hold JSON could not be parsed.

    Raised before any provider call.  ``title`` is the short label shown to
    the caller, ``message`` carries the expected format.
    """

    def __init__(self, title: str, message: str) -> None:
        super().__init__(message)
        self.title = title


def format_error_for_logging(error: BaseException | Any) -> dict[str, Any]:
    """Uniform, JSON-safe description of *error* for logs and error blocks."""
    if isinstance(error, ToolError):
        detail = error.to_detail()
    elif isinstance(error, BaseException):
        detail = ErrorDetail(name=type(error).__name__, message=str(error))
    else:
        detail = ErrorDetail(name="UnknownError", message=str(error))
    return detail.model_dump(exclude_none=True)
