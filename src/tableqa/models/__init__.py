"""
Data models for tableqa.

Includes:
- Table and TableOptions (column-oriented table built from CSV)
- Inference models (TableQueryRequest, TableQAResponse, SummarizationResponse)
- Enums (InferenceTask, RaggedRowPolicy, DuplicateHeaderPolicy)
"""

from tableqa.models.enums import DuplicateHeaderPolicy, InferenceTask, RaggedRowPolicy
from tableqa.models.table import Table, TableOptions
from tableqa.models.inference_models import (
    SummarizationResponse,
    Summary,
    TableQAResponse,
    TableQueryRequest,
)

__all__ = [
    # Enums
    "InferenceTask",
    "RaggedRowPolicy",
    "DuplicateHeaderPolicy",
    # Table
    "Table",
    "TableOptions",
    # Inference models
    "TableQueryRequest",
    "TableQAResponse",
    "Summary",
    "SummarizationResponse",
]
