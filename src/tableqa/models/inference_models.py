"""
Request/response values exchanged with inference backends.

These models are the typed boundary of the connector layer: callers build a
TableQueryRequest, connectors return one of the response models. All of them
are frozen so a value can be handed across threads without copying.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    field_validator,
    model_validator,
)

from tableqa.models.table import Table


def _without_nulls(data: Any) -> Any:
    # JSON null on an optional field means "absent", not "wrong type"
    if isinstance(data, dict):
        return {key: value for key, value in data.items() if value is not None}
    return data


class TableQueryRequest(BaseModel):
    """
    A table plus the natural-language query to ask about it.

    Built once per invocation and never mutated.
    """

    model_config = ConfigDict(frozen=True)

    table: Table = Field(..., description="Column-oriented table built from CSV")
    query: str = Field(..., description="Natural-language question about the table")

    @field_validator("table", mode="before")
    @classmethod
    def coerce_table(cls, value: Any) -> Any:
        if isinstance(value, Mapping) and not isinstance(value, Table):
            return Table(value)
        return value

    def to_wire(self) -> dict[str, Any]:
        """Wire shape shared by the backends: {"table": {...}, "query": "..."}."""
        return {"table": self.table.to_dict(), "query": self.query}


class TableQAResponse(BaseModel):
    """
    Structured answer from a table question answering backend.

    Every field is optional on the wire; absent fields take their defaults.
    Present fields must already have the right JSON type: "1" is not a
    coordinate and 30 is not a cell value.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    answer: StrictStr = Field(default="", description="Answer text")
    coordinates: tuple[tuple[StrictInt, StrictInt], ...] = Field(
        default=(),
        description="(row, column) indices of the cells the backend used",
    )
    cells: tuple[StrictStr, ...] = Field(default=(), description="Cited cell values")
    aggregator: StrictStr = Field(
        default="",
        description="Aggregation applied (e.g. NONE, SUM, COUNT, AVERAGE)",
    )

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        return _without_nulls(data)


class Summary(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    summary_text: StrictStr = ""

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        return _without_nulls(data)


class SummarizationResponse(BaseModel):
    """Summaries returned by a summarization backend, in backend order."""

    model_config = ConfigDict(frozen=True)

    summaries: tuple[Summary, ...] = ()

    @property
    def text(self) -> str:
        """First summary text, or an empty string when none came back."""
        return self.summaries[0].summary_text if self.summaries else ""
