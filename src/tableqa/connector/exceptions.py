"""
Custom exceptions for the connector layer.

Every failure of an inference call surfaces as exactly one of these, so a
caller can decide on its own retry policy by type (the connector itself
never retries):

- InvalidPayloadError / EncodingError: caller bug, never retry
- TransportError / TransportTimeoutError: network trouble, caller may retry
- InferenceCancelledError: caller asked to stop, do not retry
- BackendError: non-success HTTP status, inspect status_code
- DecodingError: backend answered 200 with a body of the wrong shape
"""

from typing import Any


class ConnectorError(Exception):
    """
    Base exception for all connector errors.

    All connector-specific exceptions inherit from this to allow catching
    any inference failure with a single except clause.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidPayloadError(ConnectorError):
    """
    Raised when infer() receives something other than the request type the
    connector accepts, or a credential that is not a string.

    A programming error: retrying cannot help.
    """
    pass


class EncodingError(ConnectorError):
    """
    Raised when a request cannot be serialized to the backend's encoding
    (non-JSON-serializable values, text that is not valid UTF-8).
    """
    pass


class TransportError(ConnectorError):
    """
    Raised when the request could not be delivered or the response could not
    be received: connection refused, DNS failure, reset, timeout.

    ``cause`` names the failure class ("timeout", "connect", "network", ...);
    the original exception is chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        cause: str = "network",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.cause = cause
        self.details.setdefault("cause", cause)


class TransportTimeoutError(TransportError):
    """
    Raised when the round trip did not complete within the configured timeout.

    Separate from generic transport errors to allow specific handling
    (e.g. a caller retrying with a longer timeout).
    """

    def __init__(self, message: str, timeout: float | None = None, details: dict[str, Any] | None = None):
        super().__init__(message, cause="timeout", details=details)
        self.timeout = timeout
        if timeout is not None:
            self.details.setdefault("timeout", timeout)


class InferenceCancelledError(ConnectorError):
    """
    Raised when the caller cancelled the in-flight call.

    Deliberately not a TransportError: cancellation is the caller's choice,
    not a network failure.
    """
    pass


class BackendError(ConnectorError):
    """
    Raised when the backend answers with any status other than 200.

    The body is not decoded. ``status_code`` lets callers tell
    authentication failures from rate limiting and server errors.
    """

    def __init__(self, status_code: int, message: str | None = None, details: dict[str, Any] | None = None):
        super().__init__(message or f"Backend returned status {status_code}", details)
        self.status_code = status_code
        self.details.setdefault("status_code", status_code)

    @property
    def is_auth_failure(self) -> bool:
        return self.status_code in (401, 403)

    @property
    def is_rate_limited(self) -> bool:
        return self.status_code == 429

    @property
    def is_server_error(self) -> bool:
        return 500 <= self.status_code < 600


class DecodingError(ConnectorError):
    """
    Raised when a 200 response body is not valid JSON or does not match the
    expected response shape.

    Garbled success responses are never coerced into an empty response.
    """
    pass
