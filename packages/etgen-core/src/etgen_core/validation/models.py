"""Validation result models.

Conformance problems are data, not exceptions: the validator returns a
ValidationReport listing every ConformanceDiagnostic it found.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ConformanceDiagnostic(BaseModel):
    """One violation of the element-templates schema.

    Attributes:
        path: JSON path of the offending value (e.g., "$.properties[0].binding").
        message: Human-readable description.

    Example:
        >>> ConformanceDiagnostic(path="$.id", message="123 is not of type 'string'")
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str = Field(..., min_length=1, description="JSON path of the offending value")
    message: str = Field(..., description="Human-readable description")

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


class ValidationReport(BaseModel):
    """Outcome of validating one document.

    Attributes:
        source: Name of the validated document (file name or element group).
        diagnostics: Violations, sorted by path then message.
        skipped: True when no schema was available and nothing was checked.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    source: str = Field(default="", description="Validated document name")
    diagnostics: tuple[ConformanceDiagnostic, ...] = Field(
        default=(),
        description="Schema violations",
    )
    skipped: bool = Field(default=False, description="Validation was not performed")

    @property
    def valid(self) -> bool:
        """True if the document was checked and has no violations."""
        return not self.skipped and not self.diagnostics
