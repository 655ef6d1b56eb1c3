"""
CSV-to-table transform.

Turns row-oriented CSV text into a column-oriented Table. Pure and
deterministic: no I/O, no global state, same text and options always
produce the same Table or the same TableParseError.
"""

import csv
import io

import structlog

from tableqa.models.enums import DuplicateHeaderPolicy, RaggedRowPolicy
from tableqa.models.table import Table, TableOptions
from tableqa.monitoring.metrics import table_parse_failures_total
from tableqa.table.exceptions import TableParseError


logger = structlog.get_logger(__name__)


def read_records(raw_text: str) -> list[tuple[int, list[str]]]:
    """
    Split CSV text into records.

    Uses the csv module in strict mode so an unterminated quoted field or a
    character after a closing quote is an error instead of being absorbed
    into the field. Blank lines are not records.

    Args:
        raw_text: Comma-separated text with standard double-quote escaping

    Returns:
        List of (line_number, fields) where line_number is the source line on
        which the record ends

    Raises:
        TableParseError: If the text is not valid CSV
    """
    reader = csv.reader(io.StringIO(raw_text, newline=""), strict=True)
    records: list[tuple[int, list[str]]] = []
    try:
        for fields in reader:
            if fields:
                records.append((reader.line_num, fields))
    except csv.Error as e:
        table_parse_failures_total.labels(reason="malformed_csv").inc()
        raise TableParseError(
            f"Malformed CSV: {e}",
            reason="malformed_csv",
            line_number=reader.line_num,
        ) from e
    return records


def find_duplicate_headers(header: list[str]) -> list[str]:
    """Header names occurring more than once, in first-occurrence order."""
    seen: set[str] = set()
    duplicates: list[str] = []
    for name in header:
        if name in seen and name not in duplicates:
            duplicates.append(name)
        seen.add(name)
    return duplicates


def build_table(raw_text: str, options: TableOptions | None = None) -> Table:
    """
    Build a column-oriented Table from CSV text.

    The first record is the header; every later record is a data row. With
    no records, or a header and no data rows, the result is an empty Table
    (no columns).

    Args:
        raw_text: CSV text
        options: Policies for ragged rows and duplicate headers
            (defaults: pad short rows, last duplicate header wins)

    Returns:
        Table whose column order is header order and whose columns all hold
        one value per data row

    Raises:
        TableParseError: Malformed CSV, or input rejected by a REJECT policy
    """
    if not isinstance(raw_text, str):
        raise TypeError(f"raw_text must be str, got {type(raw_text).__name__}")
    options = options or TableOptions()

    records = read_records(raw_text)
    if len(records) < 2:
        logger.debug("CSV has no data rows, returning empty table", records=len(records))
        return Table()

    header_line, header = records[0]
    rows = records[1:]

    duplicates = find_duplicate_headers(header)
    if duplicates:
        if options.duplicate_headers == DuplicateHeaderPolicy.REJECT:
            table_parse_failures_total.labels(reason="duplicate_header").inc()
            raise TableParseError(
                f"Duplicate header names: {', '.join(repr(d) for d in duplicates)}",
                reason="duplicate_header",
                line_number=header_line,
                details={"duplicates": duplicates},
            )
        logger.warning(
            "Duplicate CSV headers collapsed, last occurrence wins",
            duplicates=duplicates,
        )

    # Column name -> index of the field that fills it. Insertion order keeps
    # the first occurrence's position; reassignment makes the last one win.
    owners: dict[str, int] = {}
    for index, name in enumerate(header):
        owners[name] = index

    width = len(header)
    columns: dict[str, list[str]] = {name: [] for name in owners}
    padded = 0
    truncated = 0

    for row_number, (line_number, fields) in enumerate(rows, start=1):
        if len(fields) != width:
            if options.ragged_rows == RaggedRowPolicy.REJECT:
                table_parse_failures_total.labels(reason="ragged_row").inc()
                raise TableParseError(
                    f"Row {row_number} has {len(fields)} fields, expected {width}",
                    reason="ragged_row",
                    line_number=line_number,
                    details={
                        "row": row_number,
                        "expected_fields": width,
                        "actual_fields": len(fields),
                    },
                )
            if len(fields) < width:
                padded += 1
                fields = fields + [options.fill_value] * (width - len(fields))
            else:
                truncated += 1
                fields = fields[:width]

        for name, index in owners.items():
            columns[name].append(fields[index])

    if padded or truncated:
        logger.info(
            "Ragged CSV rows normalized",
            padded_rows=padded,
            truncated_rows=truncated,
            width=width,
        )

    logger.debug("Built table from CSV", columns=len(columns), rows=len(rows))
    return Table(columns)
