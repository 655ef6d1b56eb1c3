"""
Column-oriented table produced from CSV text.

A Table maps column names (in header order) to equal-length tuples of cell
values. It is immutable once built and is the only table representation the
connector layer accepts.
"""

from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, GetCoreSchemaHandler
from pydantic_core import core_schema

from tableqa.models.enums import DuplicateHeaderPolicy, RaggedRowPolicy


class Table(Mapping[str, tuple[str, ...]]):
    """
    Immutable ordered mapping of column name -> cell values.

    Invariants:
    - Iteration order is column (header) order.
    - Every column holds the same number of values (``row_count``).
    """

    __slots__ = ("_columns",)

    def __init__(self, columns: Mapping[str, Sequence[str]] | None = None):
        normalized = {}
        for name, values in (columns or {}).items():
            if not isinstance(name, str):
                raise ValueError(f"Column names must be str, got {type(name).__name__}")
            # A bare string is a Sequence too, but never a column of cells
            if isinstance(values, (str, bytes)) or not isinstance(values, Sequence):
                raise ValueError(
                    f"Column {name!r} must be a sequence of str, got {type(values).__name__}"
                )
            cells = tuple(values)
            for cell in cells:
                if not isinstance(cell, str):
                    raise ValueError(
                        f"Column {name!r}: cells must be str, got {type(cell).__name__}"
                    )
            normalized[name] = cells

        lengths = {len(values) for values in normalized.values()}
        if len(lengths) > 1:
            raise ValueError(
                f"All columns must have the same length, got lengths {sorted(lengths)}"
            )
        self._columns = normalized

    def __getitem__(self, name: str) -> tuple[str, ...]:
        return self._columns[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._columns)

    def __len__(self) -> int:
        return len(self._columns)

    @property
    def column_names(self) -> tuple[str, ...]:
        return tuple(self._columns)

    @property
    def row_count(self) -> int:
        for values in self._columns.values():
            return len(values)
        return 0

    def to_dict(self) -> dict[str, list[str]]:
        """Plain JSON-ready copy, preserving column order."""
        return {name: list(values) for name, values in self._columns.items()}

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.is_instance_schema(cls)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"columns={list(self._columns)}, "
            f"rows={self.row_count})"
        )


class TableOptions(BaseModel):
    """Explicit policies for irregular CSV input."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    ragged_rows: RaggedRowPolicy = Field(
        default=RaggedRowPolicy.PAD,
        description="Handling of rows shorter or longer than the header",
    )
    duplicate_headers: DuplicateHeaderPolicy = Field(
        default=DuplicateHeaderPolicy.LAST_WINS,
        description="Handling of header names that occur more than once",
    )
    fill_value: str = Field(
        default="",
        description="Value used to pad short rows under RaggedRowPolicy.PAD",
    )
