"""
Inference connectors and transports.

Components:
- BaseConnector: validate -> encode -> dispatch -> classify -> decode
- TableQAConnector: table-question-answering backends
- SummarizationConnector: summarization backends fed a serialized table
- BaseTransport / HttpxTransport: the single network round trip
- exceptions: classified connector failures
"""

from tableqa.connector.base_connector import BaseConnector
from tableqa.connector.table_qa import TableQAConnector
from tableqa.connector.summarization import SummarizationConnector
from tableqa.connector.transport import BaseTransport, InboundResponse, OutboundRequest
from tableqa.connector.httpx_transport import HttpxTransport
from tableqa.connector.factory import create_connector
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

__all__ = [
    "BaseConnector",
    "TableQAConnector",
    "SummarizationConnector",
    "create_connector",
    "BaseTransport",
    "HttpxTransport",
    "OutboundRequest",
    "InboundResponse",
    "ConnectorError",
    "InvalidPayloadError",
    "EncodingError",
    "TransportError",
    "TransportTimeoutError",
    "InferenceCancelledError",
    "BackendError",
    "DecodingError",
]
