"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict

import pytest
import structlog
from pydantic import SecretStr

from tableqa.config import Settings
from tableqa.models import Table, TableQueryRequest


@pytest.fixture(autouse=True, scope="session")
def quiet_structlog():
    """Keep structlog output off stdout so CLI output can be parsed.

    Without configuration structlog prints every level to stdout.
    """
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults, independent of the developer's .env.

    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            test_settings.INFERENCE_TIMEOUT = 1.0
    """
    return Settings(
        _env_file=None,
        APP_NAME="tableqa (Test)",
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        INFERENCE_ENDPOINT="https://inference.test/models/table-qa",
        INFERENCE_TOKEN=SecretStr("hf_test_token"),
        INFERENCE_TIMEOUT=5.0,
    )


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def people_csv_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "people.csv"


@pytest.fixture
def sample_csv_text() -> str:
    return "name,age\nAlice,30\nBob,25\n"


@pytest.fixture
def sample_table() -> Table:
    return Table({"name": ["Alice", "Bob"], "age": ["30", "25"]})


@pytest.fixture
def sample_request(sample_table: Table) -> TableQueryRequest:
    return TableQueryRequest(table=sample_table, query="average age")


@pytest.fixture
def table_qa_response_data(fixtures_dir: Path) -> Dict[str, Any]:
    """Load the table QA backend response fixture as dict."""
    with open(fixtures_dir / "table_qa_response.json") as f:
        return json.load(f)
