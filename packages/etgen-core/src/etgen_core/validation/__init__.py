"""Schema resolution and template validation.

This package provides:
- schema_url(): Build the element-templates schema locator for a version
- SchemaResolver: Fetch the schema once per run, degrade on failure
- TemplateValidator: Validate documents, returning diagnostics as data
- ConformanceDiagnostic, ValidationReport: Validation result models
"""

from __future__ import annotations

from etgen_core.validation.models import ConformanceDiagnostic, ValidationReport
from etgen_core.validation.resolver import (
    DEFAULT_TIMEOUT_SECONDS,
    LATEST_VERSION,
    SCHEMA_BASE_URL,
    SchemaResolver,
    schema_url,
)
from etgen_core.validation.validator import TemplateValidator

__all__: list[str] = [
    "schema_url",
    "SchemaResolver",
    "SCHEMA_BASE_URL",
    "LATEST_VERSION",
    "DEFAULT_TIMEOUT_SECONDS",
    "TemplateValidator",
    "ConformanceDiagnostic",
    "ValidationReport",
]
