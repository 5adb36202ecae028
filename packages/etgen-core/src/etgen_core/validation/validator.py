"""Validate template documents against the element-templates schema."""

from __future__ import annotations

import json
from pathlib import Path

import structlog
from referencing.exceptions import Unresolvable

from etgen_core.errors import SchemaResolutionError
from etgen_core.validation.models import ConformanceDiagnostic, ValidationReport
from etgen_core.validation.resolver import SchemaResolver

logger = structlog.get_logger(__name__)


class TemplateValidator:
    """Check serialized templates against the resolved schema.

    Validation never raises for non-conforming content. Diagnostics are
    sorted so that validating the same text twice yields identical reports.
    When the resolver could not provide a schema, every report is skipped.

    Example:
        >>> validator = TemplateValidator(SchemaResolver())
        >>> report = validator.validate(text, source="HttpTasksTemplates.json")
        >>> for diagnostic in report.diagnostics:
        ...     print(diagnostic)
    """

    def __init__(self, resolver: SchemaResolver) -> None:
        self.resolver = resolver
        self._log = logger.bind(component="template_validator")

    def validate(self, text: str, *, source: str = "") -> ValidationReport:
        """Validate JSON text.

        Args:
            text: Serialized template document.
            source: Name used in logs and in the report.

        Returns:
            ValidationReport with sorted diagnostics.
        """
        schema_validator = self.resolver.resolve()
        if schema_validator is None:
            self._log.debug("validation_skipped", source=source)
            return ValidationReport(source=source, skipped=True)

        try:
            instance = json.loads(text)
        except json.JSONDecodeError as e:
            diagnostics: tuple[ConformanceDiagnostic, ...] = (
                ConformanceDiagnostic(
                    path="$",
                    message=f"Invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})",
                ),
            )
        else:
            try:
                diagnostics = tuple(
                    sorted(
                        (
                            ConformanceDiagnostic(path=error.json_path, message=error.message)
                            for error in schema_validator.iter_errors(instance)
                        ),
                        key=lambda d: (d.path, d.message),
                    )
                )
            except Unresolvable as e:
                self.resolver.discard(
                    SchemaResolutionError(
                        "Schema contains an unresolvable reference",
                        url=self.resolver.url,
                        internal_details=f"{type(e).__name__}: {e}",
                    )
                )
                self._log.debug("validation_skipped", source=source)
                return ValidationReport(source=source, skipped=True)

        if diagnostics:
            for diagnostic in diagnostics:
                self._log.warning(
                    "conformance_diagnostic",
                    source=source,
                    path=diagnostic.path,
                    message=diagnostic.message,
                )
        else:
            self._log.info("validation_successful", source=source)

        return ValidationReport(source=source, diagnostics=diagnostics)

    def validate_file(self, path: Path | str) -> ValidationReport:
        """Read and validate a template file.

        Args:
            path: Path to a template JSON file.

        Returns:
            ValidationReport named after the file.

        Raises:
            OSError: If the file cannot be read.
        """
        path = Path(path)
        return self.validate(path.read_text(encoding="utf-8"), source=path.name)
