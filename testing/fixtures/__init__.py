"""Shared test fixtures for etgen packages.

Exports:
    ELEMENT_TEMPLATES_SCHEMA: Draft 7 subset of the element-templates schema
    SCHEMA_URL_LATEST: Schema locator without a version segment
    SchemaServer: httpx.MockTransport serving the schema, counting requests
    http_tasks_records: Raw metadata records of the reference HttpTasks group
"""

from __future__ import annotations

from testing.fixtures.element_templates import (
    ELEMENT_TEMPLATES_SCHEMA,
    SCHEMA_URL_LATEST,
    SchemaServer,
    http_tasks_records,
)

__all__ = [
    "ELEMENT_TEMPLATES_SCHEMA",
    "SCHEMA_URL_LATEST",
    "SchemaServer",
    "http_tasks_records",
]
