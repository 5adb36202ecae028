"""Shared pytest fixtures for etgen-core tests."""

from __future__ import annotations

import sys
from typing import Any

import pytest
import structlog

from etgen_core.validation import SchemaResolver, TemplateValidator
from testing.fixtures.element_templates import SchemaServer, http_tasks_records

SCHEMA_URL = "https://unpkg.com/@camunda/element-templates-json-schema@0.12.0/resources/schema.json"


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to output to stdout for test capture.

    capsys can then assert on logged events regardless of test order.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,
    )


@pytest.fixture
def schema_server() -> SchemaServer:
    """Mock HTTP server answering with the element-templates schema subset."""
    return SchemaServer()


@pytest.fixture
def resolver(schema_server: SchemaServer) -> SchemaResolver:
    """Resolver for schema 0.12.0 backed by the mock server."""
    return SchemaResolver("0.12.0", client=schema_server.client())


@pytest.fixture
def validator(resolver: SchemaResolver) -> TemplateValidator:
    return TemplateValidator(resolver)


@pytest.fixture
def records() -> list[dict[str, Any]]:
    """Raw metadata records of the reference HttpTasks group."""
    return http_tasks_records()
