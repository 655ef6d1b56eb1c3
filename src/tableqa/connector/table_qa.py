"""
Table question answering connector.

POST body:
{
    "table": {"name": ["Alice", "Bob"], "age": ["30", "25"]},
    "query": "average age"
}

Response (every field optional):
{
    "answer": "27.5",
    "coordinates": [[0, 1], [1, 1]],
    "cells": ["30", "25"],
    "aggregator": "AVERAGE"
}
"""

from typing import Any

from tableqa.connector.base_connector import BaseConnector
from tableqa.connector.exceptions import DecodingError
from tableqa.models.inference_models import TableQAResponse, TableQueryRequest


class TableQAConnector(BaseConnector[TableQAResponse]):
    """Connector for table-question-answering backends (e.g. TAPAS models)."""

    def build_payload(self, request: TableQueryRequest) -> dict[str, Any]:
        return request.to_wire()

    def decode_payload(self, data: Any) -> TableQAResponse:
        if not isinstance(data, dict):
            raise DecodingError(
                f"Backend response is not a JSON object (got {type(data).__name__})",
                details={"response_type": type(data).__name__},
            )
        return TableQAResponse.model_validate(data)
