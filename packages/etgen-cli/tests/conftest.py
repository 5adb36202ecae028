"""Shared test fixtures for etgen-cli tests.

Provides CliRunner fixtures, the sample decorated packages under
``fixtures/`` and a patched schema download.
"""

from __future__ import annotations

import sys
from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest
import structlog
from click.testing import CliRunner

from etgen_cli import output
from testing.fixtures.element_templates import SchemaServer


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Send structlog output to stdout so it never mixes with CliRunner output."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,
    )


@pytest.fixture(autouse=True)
def wide_console() -> Generator[None, None, None]:
    """Keep each console message on one line so assertions can match it."""
    original = output.console
    output.console = output.create_console(no_color=True)
    output.console.width = 200
    try:
        yield
    finally:
        output.console = original


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def isolated_runner(cli_runner: CliRunner) -> Generator[CliRunner, None, None]:
    """Create a Click test runner with an isolated filesystem.

    Yields:
        CliRunner whose working directory is a fresh temporary directory.
    """
    with cli_runner.isolated_filesystem():
        yield cli_runner


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_packages(fixtures_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Make the sample decorated packages importable.

    Returns:
        Directory holding etgen_sample_tasks, etgen_invalid_tasks and
        etgen_broken_tasks.
    """
    monkeypatch.syspath_prepend(str(fixtures_dir))
    return fixtures_dir


@pytest.fixture
def schema_server() -> SchemaServer:
    return SchemaServer()


@pytest.fixture
def mock_schema(schema_server: SchemaServer) -> Generator[SchemaServer, None, None]:
    """Serve the schema subset to every resolver created without a client."""
    with patch("etgen_core.validation.resolver.httpx.get", side_effect=schema_server.get):
        yield schema_server


@pytest.fixture
def offline_schema() -> Generator[SchemaServer, None, None]:
    """Fail every schema download with a connection error."""
    server = SchemaServer(error=httpx.ConnectError("Name or service not known"))
    with patch("etgen_core.validation.resolver.httpx.get", side_effect=server.get):
        yield server
