"""Unit test fixtures (stubs).

Provides in-memory transports for testing connectors without a network.
"""

import json
import threading
from typing import Any, Callable

import pytest

from tableqa.connector.transport import BaseTransport, InboundResponse, OutboundRequest


class StubTransport(BaseTransport):
    """Records every request and answers with a canned response or exception."""

    def __init__(self, response: InboundResponse | None = None, error: Exception | None = None):
        self.response = response or InboundResponse(status_code=200, body=b"{}")
        self.error = error
        self.requests: list[OutboundRequest] = []
        self.timeouts: list[float] = []
        self.closed = False

    def send(
        self,
        request: OutboundRequest,
        timeout: float,
        cancel_event: threading.Event | None = None,
    ) -> InboundResponse:
        self.requests.append(request)
        self.timeouts.append(timeout)
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        self.closed = True

    @property
    def last_request(self) -> OutboundRequest:
        return self.requests[-1]


@pytest.fixture
def stub_transport_factory() -> Callable[..., StubTransport]:
    """Factory fixture for StubTransport.

    Usage:
        def test_something(stub_transport_factory):
            transport = stub_transport_factory(status_code=500)
            transport = stub_transport_factory(json_body={"answer": "x"})
            transport = stub_transport_factory(error=RuntimeError("boom"))
    """
    def _create(
        status_code: int = 200,
        json_body: Any = None,
        raw_body: bytes | None = None,
        error: Exception | None = None,
    ) -> StubTransport:
        if raw_body is None:
            raw_body = json.dumps(json_body if json_body is not None else {}).encode("utf-8")
        return StubTransport(
            response=InboundResponse(
                status_code=status_code,
                headers={"content-type": "application/json"},
                body=raw_body,
            ),
            error=error,
        )

    return _create
