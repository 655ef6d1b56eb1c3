"""
Abstract base connector for remote inference backends.

Implements the one-call contract shared by every backend: validate the
request, encode it, POST it through the injected transport, classify the
outcome, decode the body. Concrete connectors only say how a request becomes
a JSON payload and how a JSON body becomes a response model.
"""

import json
import threading
import time
from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

import structlog
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from tableqa.connector.exceptions import (
    BackendError,
    ConnectorError,
    DecodingError,
    EncodingError,
    InferenceCancelledError,
    InvalidPayloadError,
    TransportError,
    TransportTimeoutError,
)
from tableqa.connector.transport import BaseTransport, InboundResponse, OutboundRequest
from tableqa.models.inference_models import TableQueryRequest
from tableqa.monitoring.metrics import inference_latency_seconds, inference_requests_total


logger = structlog.get_logger(__name__)

ResponseT = TypeVar("ResponseT", bound=BaseModel)

SUCCESS_STATUS = 200


def outcome_label(error: ConnectorError) -> str:
    """Metric label for a classified failure."""
    if isinstance(error, TransportTimeoutError):
        return "timeout"
    if isinstance(error, TransportError):
        return "transport_error"
    if isinstance(error, InferenceCancelledError):
        return "cancelled"
    if isinstance(error, BackendError):
        return "backend_error"
    if isinstance(error, DecodingError):
        return "decoding_error"
    if isinstance(error, EncodingError):
        return "encoding_error"
    return "invalid_payload"


class BaseConnector(ABC, Generic[ResponseT]):
    """
    Abstract base class for inference connectors.

    Responsibilities:
    - Reject requests of the wrong type (InvalidPayloadError)
    - Serialize to JSON (EncodingError)
    - Dispatch one POST through the transport (TransportError and subclasses)
    - Classify non-200 statuses without reading the body (BackendError)
    - Decode 200 bodies into the response model (DecodingError)

    Does NOT handle:
    - Retries (the caller decides)
    - Credential lookup (the caller passes the token to every call)
    - Connection pooling (the transport's job)

    Holds no per-call mutable state: concurrent infer() calls are safe as
    long as the transport is.
    """

    request_type: type[BaseModel] = TableQueryRequest

    def __init__(
        self,
        endpoint: str,
        transport: BaseTransport,
        timeout: float = 30.0,
    ):
        """
        Initialize connector.

        Args:
            endpoint: Full URL the request is POSTed to
            transport: Transport used for the single network round trip
            timeout: Upper bound in seconds for the round trip
        """
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")
        self.endpoint = endpoint
        self.transport = transport
        self.timeout = timeout

        logger.info(
            "Initialized connector",
            connector_class=self.__class__.__name__,
            endpoint=self.endpoint,
            timeout=timeout,
        )

    @abstractmethod
    def build_payload(self, request: TableQueryRequest) -> Any:
        """
        Turn a validated request into a JSON-serializable payload.

        Args:
            request: Request of ``request_type``

        Returns:
            Object passed to json.dumps
        """
        pass

    @abstractmethod
    def decode_payload(self, data: Any) -> ResponseT:
        """
        Turn a parsed JSON body into the response model.

        Args:
            data: Result of json.loads on a 200 body

        Returns:
            Response model instance

        Raises:
            DecodingError: ``data`` has the wrong shape
            pydantic.ValidationError: field types do not match (wrapped by caller)
        """
        pass

    def encode(self, request: TableQueryRequest) -> bytes:
        """Serialize the request payload to UTF-8 JSON bytes."""
        try:
            payload = self.build_payload(request)
            return json.dumps(payload, ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            # UnicodeEncodeError is a ValueError
            raise EncodingError(
                f"Failed to serialize request: {e}",
                details={"error_type": type(e).__name__},
            ) from e

    def build_request(self, body: bytes, credential: str) -> OutboundRequest:
        return OutboundRequest(
            method="POST",
            url=self.endpoint,
            headers={
                "Authorization": f"Bearer {credential}",
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
            body=body,
        )

    def decode(self, response: InboundResponse) -> ResponseT:
        """Parse and validate a 200 response body."""
        try:
            data = json.loads(response.body)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DecodingError(
                f"Invalid JSON response from backend: {e}",
                details={"body_snippet": response.body_snippet()},
            ) from e

        try:
            return self.decode_payload(data)
        except PydanticValidationError as e:
            raise DecodingError(
                f"Backend response does not match {self.__class__.__name__} response shape",
                details={
                    "validation_errors": [err["msg"] for err in e.errors()][:20],
                    "body_snippet": response.body_snippet(),
                },
            ) from e

    def infer(
        self,
        request: TableQueryRequest,
        credential: str,
        cancel_event: threading.Event | None = None,
    ) -> ResponseT:
        """
        Send one request to the backend and return the decoded response.

        Exactly one network round trip; no retries.

        Args:
            request: Table and query to send
            credential: Bearer token, sent exactly as given
            cancel_event: Set from another thread to abort the call

        Returns:
            Decoded response model

        Raises:
            InvalidPayloadError: ``request`` or ``credential`` has the wrong type
            EncodingError: Request could not be serialized
            TransportError: Delivery failed (TransportTimeoutError on timeout)
            InferenceCancelledError: ``cancel_event`` was set during the call
            BackendError: Backend answered with a non-200 status
            DecodingError: 200 body is malformed or has the wrong shape
        """
        connector_name = self.__class__.__name__
        start_time = time.monotonic()
        try:
            result = self._infer(request, credential, cancel_event)
        except ConnectorError as e:
            outcome = outcome_label(e)
            inference_requests_total.labels(connector=connector_name, outcome=outcome).inc()
            inference_latency_seconds.labels(connector=connector_name, outcome=outcome).observe(
                time.monotonic() - start_time
            )
            logger.warning(
                "Inference failed",
                connector=connector_name,
                endpoint=self.endpoint,
                outcome=outcome,
                error=e.message,
            )
            raise

        latency = time.monotonic() - start_time
        inference_requests_total.labels(connector=connector_name, outcome="success").inc()
        inference_latency_seconds.labels(connector=connector_name, outcome="success").observe(latency)
        logger.info(
            "Inference successful",
            connector=connector_name,
            endpoint=self.endpoint,
            latency_ms=int(latency * 1000),
        )
        return result

    def _infer(
        self,
        request: TableQueryRequest,
        credential: str,
        cancel_event: threading.Event | None,
    ) -> ResponseT:
        if not isinstance(request, self.request_type):
            raise InvalidPayloadError(
                f"Invalid payload type: expected {self.request_type.__name__}, "
                f"got {type(request).__name__}",
                details={"payload_type": type(request).__name__},
            )
        if not isinstance(credential, str):
            raise InvalidPayloadError(
                f"Credential must be str, got {type(credential).__name__}",
            )

        outbound = self.build_request(self.encode(request), credential)

        logger.debug(
            "Sending inference request",
            connector=self.__class__.__name__,
            endpoint=self.endpoint,
            body_bytes=len(outbound.body),
            columns=len(request.table),
            rows=request.table.row_count,
        )

        try:
            response = self.transport.send(outbound, self.timeout, cancel_event)
        except ConnectorError:
            raise
        except Exception as e:
            # Custom transports may raise their own exceptions
            raise TransportError(
                f"Unexpected transport error: {e}",
                cause="unexpected",
                details={"error_type": type(e).__name__},
            ) from e

        if response.status_code != SUCCESS_STATUS:
            raise BackendError(
                response.status_code,
                details={"body_snippet": response.body_snippet()},
            )

        return self.decode(response)

    def close(self):
        """Close the underlying transport."""
        self.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"endpoint={self.endpoint}, "
            f"timeout={self.timeout}s)"
        )
