"""
Command-line entry point.

    tableqa ask data.csv --query "average age"
    tableqa table data.csv

Reads the CSV file and the credential here, at the edge, and passes them
into the table builder and connector explicitly.
"""

import json
from pathlib import Path
from typing import Optional

import structlog
import typer

from tableqa.config import settings
from tableqa.connector import ConnectorError, create_connector
from tableqa.connector.exceptions import BackendError, TransportTimeoutError
from tableqa.logging_config import configure_logging
from tableqa.models import (
    InferenceTask,
    SummarizationResponse,
    Table,
    TableOptions,
    TableQAResponse,
    TableQueryRequest,
)
from tableqa.table import TableParseError, build_table

logger = structlog.get_logger(__name__)

app = typer.Typer(add_completion=False, help="Ask natural-language questions about CSV tables.")


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Override LOG_LEVEL (DEBUG, INFO, WARNING, ...)"
    ),
) -> None:
    configure_logging(log_level or settings.LOG_LEVEL, settings.ENVIRONMENT)


def load_table(csv_path: Path, options: TableOptions) -> Table:
    """Read and parse a CSV file, exiting with status 1 on failure."""
    try:
        raw_text = csv_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        typer.echo(f"Error: cannot read {csv_path}: {e}", err=True)
        raise typer.Exit(code=1)

    try:
        return build_table(raw_text, options)
    except TableParseError as e:
        typer.echo(f"Error: {csv_path}: {e}", err=True)
        raise typer.Exit(code=1)


def describe_error(error: ConnectorError) -> str:
    if isinstance(error, BackendError):
        if error.is_auth_failure:
            return f"authentication rejected by backend (status {error.status_code})"
        if error.is_rate_limited:
            return "rate limited by backend (status 429), try again later"
        return f"backend returned status {error.status_code}"
    if isinstance(error, TransportTimeoutError):
        return f"no response within {error.timeout}s"
    return error.message


def render(response: TableQAResponse | SummarizationResponse) -> None:
    if isinstance(response, SummarizationResponse):
        typer.echo(response.text)
        return

    typer.echo(response.answer)
    if response.aggregator and response.aggregator.upper() != "NONE":
        typer.echo(f"Aggregator: {response.aggregator}")
    if response.cells:
        typer.echo(f"Cells: {', '.join(response.cells)}")


@app.command("table")
def show_table(
    csv_path: Path = typer.Argument(..., help="CSV file with a header row"),
) -> None:
    """
    Print the column-oriented table built from a CSV file as JSON.
    """
    table = load_table(csv_path, settings.table_options())
    typer.echo(json.dumps(table.to_dict(), ensure_ascii=False, indent=2))


@app.command("ask")
def ask(
    csv_path: Path = typer.Argument(..., help="CSV file with a header row"),
    query: Optional[str] = typer.Option(
        None, "--query", "-q", help="Question to ask; prompted for when omitted"
    ),
    task: Optional[InferenceTask] = typer.Option(
        None, "--task", help="Override INFERENCE_TASK"
    ),
    endpoint: Optional[str] = typer.Option(
        None, "--endpoint", help="Override INFERENCE_ENDPOINT"
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", min=0.001, help="Override INFERENCE_TIMEOUT (seconds)"
    ),
) -> None:
    """
    Ask a question about a CSV table and print the backend's answer.
    """
    token = settings.INFERENCE_TOKEN.get_secret_value()
    if not token:
        typer.echo(
            "Error: INFERENCE_TOKEN (or HUGGINGFACE_TOKEN) is required but not set",
            err=True,
        )
        raise typer.Exit(code=1)

    table = load_table(csv_path, settings.table_options())
    if query is None:
        query = typer.prompt("Can I help you?")

    request = TableQueryRequest(table=table, query=query)
    connector = create_connector(
        task or settings.INFERENCE_TASK,
        endpoint=endpoint or settings.INFERENCE_ENDPOINT,
        timeout=timeout or settings.INFERENCE_TIMEOUT,
    )
    with connector:
        try:
            response = connector.infer(request, token)
        except ConnectorError as e:
            logger.debug("Inference error details", details=e.details)
            typer.echo(f"Error: {describe_error(e)}", err=True)
            raise typer.Exit(code=1)

    render(response)
