"""
httpx-based transport.

Sends requests with a pooled httpx.Client. httpx timeouts apply per phase
(connect, each read, each write), so a server that trickles its status line,
headers or body one byte at a time never trips them. The exchange therefore
runs on a worker thread while the calling thread waits on a single wall-clock
deadline for the whole round trip. When the deadline passes or the
cancel_event is set, the caller gets its error immediately and the worker's
socket is shut down so the worker unblocks too.
"""

import socket
import threading
import time
from concurrent.futures import Future, wait
from typing import Any, Optional

import httpx
import structlog

from tableqa.connector.exceptions import (
    InferenceCancelledError,
    TransportError,
    TransportTimeoutError,
)
from tableqa.connector.transport import BaseTransport, InboundResponse, OutboundRequest


logger = structlog.get_logger(__name__)

# How often a waiting caller looks at its cancel_event (seconds)
CANCEL_POLL_INTERVAL = 0.05

# httpcore trace events whose return value is a freshly opened network stream
_STREAM_OPENED_EVENTS = frozenset(
    {"connection.connect_tcp.complete", "connection.start_tls.complete"}
)


class _InFlightCall:
    """
    Abort handle for one exchange.

    Collects the network streams the exchange runs on (new connections are
    reported through httpcore's trace extension, pooled ones through the
    response's network_stream extension) so another thread can shut their
    sockets down.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._streams: list[Any] = []
        self.aborted = threading.Event()

    def trace(self, event_name: str, info: dict) -> None:
        if event_name in _STREAM_OPENED_EVENTS:
            self.attach(info.get("return_value"))

    def attach(self, stream: Any) -> None:
        if stream is None:
            return
        with self._lock:
            self._streams.append(stream)
            aborted = self.aborted.is_set()
        if aborted:
            self._shutdown(stream)

    def abort(self) -> None:
        self.aborted.set()
        with self._lock:
            streams = list(self._streams)
        for stream in streams:
            self._shutdown(stream)

    @staticmethod
    def _shutdown(stream: Any) -> None:
        sock = stream.get_extra_info("socket")
        if sock is None:
            return
        try:
            sock.shutdown(socket.SHUT_RDWR)
        except OSError as e:
            # Already closed by the peer or by httpcore
            logger.debug("Socket shutdown skipped", error=str(e))


class HttpxTransport(BaseTransport):
    """
    Transport backed by a synchronous httpx.Client.

    httpx.Client is safe to share between threads, so one HttpxTransport can
    serve concurrent infer() calls. Redirects are not followed: a 3xx is
    returned to the connector like any other non-success status.
    """

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        connection_limits: Optional[httpx.Limits] = None,
    ):
        """
        Initialize transport.

        Args:
            client: Pre-built client (e.g. with httpx.MockTransport in tests).
                When given, the transport does not close it.
            connection_limits: httpx connection pool limits (default: 10 max connections)
        """
        if connection_limits is None:
            connection_limits = httpx.Limits(
                max_keepalive_connections=5,
                max_connections=10,
                keepalive_expiry=30.0,
            )
        self._owns_client = client is None
        self._client = client or httpx.Client(limits=connection_limits, follow_redirects=False)

        logger.debug(
            "httpx transport initialized",
            owns_client=self._owns_client,
            connection_limits=str(connection_limits),
        )

    def send(
        self,
        request: OutboundRequest,
        timeout: float,
        cancel_event: threading.Event | None = None,
    ) -> InboundResponse:
        if cancel_event is not None and cancel_event.is_set():
            raise InferenceCancelledError("Request cancelled before dispatch")

        deadline = time.monotonic() + timeout
        call = _InFlightCall()
        future: Future = Future()
        worker = threading.Thread(
            target=self._run,
            args=(request, timeout, deadline, call, cancel_event, future),
            name="tableqa-http",
            daemon=True,
        )
        worker.start()

        while True:
            if future.done():
                return future.result()

            remaining = deadline - time.monotonic()
            if remaining <= 0:
                call.abort()
                logger.warning("Inference request deadline exceeded", url=request.url, timeout=timeout)
                raise TransportTimeoutError(
                    f"No complete response within {timeout}s",
                    timeout=timeout,
                    details={"phase": "round_trip"},
                )

            if cancel_event is not None and cancel_event.is_set():
                call.abort()
                raise InferenceCancelledError("Request cancelled while waiting for response")

            if cancel_event is None:
                wait([future], timeout=remaining)
            else:
                wait([future], timeout=min(remaining, CANCEL_POLL_INTERVAL))

    def _run(
        self,
        request: OutboundRequest,
        timeout: float,
        deadline: float,
        call: _InFlightCall,
        cancel_event: threading.Event | None,
        future: Future,
    ) -> None:
        """Worker thread body: perform the exchange and publish its outcome."""
        if not future.set_running_or_notify_cancel():
            return
        try:
            result = self._exchange(request, timeout, deadline, call, cancel_event)
        except Exception as e:
            future.set_exception(e)
        else:
            future.set_result(result)

    def _exchange(
        self,
        request: OutboundRequest,
        timeout: float,
        deadline: float,
        call: _InFlightCall,
        cancel_event: threading.Event | None,
    ) -> InboundResponse:
        try:
            with self._client.stream(
                request.method,
                request.url,
                headers=request.headers,
                content=request.body,
                timeout=httpx.Timeout(max(deadline - time.monotonic(), 0.001)),
                extensions={"trace": call.trace},
            ) as response:
                call.attach(response.extensions.get("network_stream"))

                chunks = []
                body = response.iter_bytes()
                while True:
                    # Checked before every blocking read
                    if call.aborted.is_set() or (cancel_event is not None and cancel_event.is_set()):
                        raise InferenceCancelledError(
                            "Request cancelled while receiving response",
                            details={"status_code": response.status_code},
                        )
                    if time.monotonic() >= deadline:
                        raise TransportTimeoutError(
                            f"Response not received within {timeout}s",
                            timeout=timeout,
                            details={"phase": "body"},
                        )
                    chunk = next(body, None)
                    if chunk is None:
                        break
                    chunks.append(chunk)

                return InboundResponse(
                    status_code=response.status_code,
                    headers=dict(response.headers),
                    body=b"".join(chunks),
                )

        except httpx.TimeoutException as e:
            logger.warning(
                "Inference request timeout",
                url=request.url,
                timeout=timeout,
                error_type=type(e).__name__,
            )
            raise TransportTimeoutError(
                f"Request timeout after {timeout}s",
                timeout=timeout,
                details={"error_type": type(e).__name__},
            ) from e

        except httpx.ConnectError as e:
            logger.warning("Inference connection failed", url=request.url, error=str(e))
            raise TransportError(
                f"Connection failed: {e}",
                cause="connect",
                details={"error_type": type(e).__name__},
            ) from e

        except httpx.TransportError as e:
            if call.aborted.is_set():
                logger.debug("Aborted exchange closed", url=request.url, error=str(e))
            else:
                logger.warning("Inference network error", url=request.url, error=str(e))
            raise TransportError(
                f"Network error: {e}",
                cause="network",
                details={"error_type": type(e).__name__},
            ) from e

    def close(self):
        """Close the HTTP client if this transport created it."""
        if self._owns_client and not self._client.is_closed:
            self._client.close()
            logger.debug("Closed httpx client")
