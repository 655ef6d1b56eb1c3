"""
tableqa: ask natural-language questions about CSV tables.

Turns CSV text into a column-oriented table and sends it, with a query, to a
remote table-question-answering (or summarization) backend, returning:
- Answer text
- Coordinates of the cells the backend used
- Cited cell values
- Aggregation operator applied

Architecture: pure CSV-to-table transform + backend-agnostic connector over
an injected HTTP transport.
"""

from tableqa.connector import (
    BackendError,
    ConnectorError,
    DecodingError,
    EncodingError,
    HttpxTransport,
    InferenceCancelledError,
    InvalidPayloadError,
    SummarizationConnector,
    TableQAConnector,
    TransportError,
    TransportTimeoutError,
    create_connector,
)
from tableqa.models import (
    DuplicateHeaderPolicy,
    InferenceTask,
    RaggedRowPolicy,
    SummarizationResponse,
    Table,
    TableOptions,
    TableQAResponse,
    TableQueryRequest,
)
from tableqa.table import TableParseError, build_table

__version__ = "0.1.0"

__all__ = [
    "build_table",
    "TableParseError",
    "Table",
    "TableOptions",
    "RaggedRowPolicy",
    "DuplicateHeaderPolicy",
    "InferenceTask",
    "TableQueryRequest",
    "TableQAResponse",
    "SummarizationResponse",
    "TableQAConnector",
    "SummarizationConnector",
    "HttpxTransport",
    "create_connector",
    "ConnectorError",
    "InvalidPayloadError",
    "EncodingError",
    "TransportError",
    "TransportTimeoutError",
    "InferenceCancelledError",
    "BackendError",
    "DecodingError",
]
