"""
CSV-to-table transform.

Components:
- build_table: CSV text -> column-oriented Table
- TableParseError: malformed CSV or input rejected by a TableOptions policy
"""

from tableqa.table.builder import build_table, find_duplicate_headers, read_records
from tableqa.table.exceptions import TableParseError

__all__ = [
    "build_table",
    "read_records",
    "find_duplicate_headers",
    "TableParseError",
]
