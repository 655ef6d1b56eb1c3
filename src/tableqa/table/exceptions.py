"""
Exceptions raised while turning CSV text into a Table.
"""

from typing import Any


class TableParseError(Exception):
    """
    Raised when CSV text cannot be turned into a Table.

    Covers malformed delimited text (unterminated quotes, stray characters
    after a closing quote) and input rejected by an explicit TableOptions
    policy (ragged rows, duplicate headers). Never retried: the same input
    always fails the same way.
    """

    def __init__(
        self,
        message: str,
        reason: str = "malformed_csv",
        line_number: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.reason = reason
        self.line_number = line_number
        self.details = details or {}
        if line_number is not None:
            self.details.setdefault("line_number", line_number)

    def __str__(self) -> str:
        if self.line_number is not None:
            return f"{self.message} (line {self.line_number})"
        return self.message
