"""
Summarization connector.

Summarization backends take free text, so the table and query are sent as
one JSON document inside the inputs list:

POST body:
{"inputs": ["{\"table\": {...}, \"query\": \"...\"}"]}

Response:
[{"summary_text": "..."}]
"""

import json
from typing import Any

from tableqa.connector.base_connector import BaseConnector
from tableqa.connector.exceptions import DecodingError
from tableqa.models.inference_models import SummarizationResponse, TableQueryRequest


class SummarizationConnector(BaseConnector[SummarizationResponse]):
    """Connector for text summarization backends fed a serialized table."""

    def build_payload(self, request: TableQueryRequest) -> dict[str, Any]:
        document = json.dumps(request.to_wire(), ensure_ascii=False)
        return {"inputs": [document]}

    def decode_payload(self, data: Any) -> SummarizationResponse:
        if isinstance(data, dict):
            # Some backends answer with a single object instead of a list
            data = [data]
        if not isinstance(data, list):
            raise DecodingError(
                f"Backend response is not a JSON list (got {type(data).__name__})",
                details={"response_type": type(data).__name__},
            )
        return SummarizationResponse.model_validate({"summaries": data})
