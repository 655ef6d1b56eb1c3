"""
Transport abstraction used by connectors.

A connector never opens sockets itself: it hands an OutboundRequest to a
BaseTransport and gets an InboundResponse back. This keeps request building,
error classification and decoding independent of the HTTP library, and lets
tests substitute an in-memory transport.
"""

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

import structlog


logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class OutboundRequest:
    """One HTTP call as the connector wants it sent."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    def __repr__(self) -> str:
        # Headers carry the bearer credential
        return (
            f"{self.__class__.__name__}("
            f"method={self.method}, url={self.url}, "
            f"body_bytes={len(self.body)})"
        )


@dataclass(frozen=True)
class InboundResponse:
    """Raw response as received; the connector classifies and decodes it."""

    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    def body_snippet(self, limit: int = 500) -> str:
        """First ``limit`` characters of the body for diagnostics."""
        return self.body[:limit].decode("utf-8", errors="replace")


class BaseTransport(ABC):
    """
    Abstract base class for transports.

    Implementations must:
    - Send exactly one request per call (no retries)
    - Give up after ``timeout`` seconds with TransportTimeoutError
    - Raise TransportError for any other delivery failure
    - Raise InferenceCancelledError when ``cancel_event`` is set mid-call,
      if the underlying client allows aborting

    Non-success statuses are NOT errors at this level: they are returned as
    an InboundResponse and classified by the connector.
    """

    @abstractmethod
    def send(
        self,
        request: OutboundRequest,
        timeout: float,
        cancel_event: threading.Event | None = None,
    ) -> InboundResponse:
        """
        Deliver the request and return the raw response.

        Args:
            request: Request to send
            timeout: Upper bound in seconds for the whole round trip
            cancel_event: Set by the caller to abort the call

        Returns:
            InboundResponse with whatever status the server sent

        Raises:
            TransportError: Network failure
            TransportTimeoutError: Round trip exceeded ``timeout``
            InferenceCancelledError: ``cancel_event`` was set
        """
        pass

    def close(self):
        """
        Release pooled connections.

        Default implementation does nothing. Subclasses holding persistent
        connections should override.
        """
        logger.debug("Closing transport", transport_class=self.__class__.__name__)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
