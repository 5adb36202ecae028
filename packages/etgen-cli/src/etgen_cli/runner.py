"""Generation run orchestration.

GenerationRunner drives one run:

    discover -> build -> stamp -> serialize -> write -> validate

Groups are processed sequentially. Failures are scoped: a malformed record
skips that template, a write failure skips that group, and a schema that
cannot be resolved only disables validation. Everything is recorded in the
returned RunReport rather than raised.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from etgen_core.builder import TemplateBuilder
from etgen_core.errors import MalformedMetadataError, PersistenceError, SchemaResolutionError
from etgen_core.schemas import Template
from etgen_core.serializer import serialize_templates
from etgen_core.validation import (
    ConformanceDiagnostic,
    SchemaResolver,
    TemplateValidator,
    ValidationReport,
)

from etgen_cli.config import GeneratorConfig
from etgen_cli.discovery import TemplateGroup, discover_groups

logger = structlog.get_logger(__name__)

OUTPUT_SUFFIX = "Templates.json"


def output_filename(group_name: str) -> str:
    """Return the file name for a group, e.g. ``HttpTasksTemplates.json``."""
    return f"{group_name}{OUTPUT_SUFFIX}"


@dataclass
class GroupResult:
    """Outcome for one element group.

    Attributes:
        group: Group (class) name.
        templates: Templates built for the group.
        build_errors: Records that were skipped.
        output_path: Target file, set once serialization succeeded.
        persistence_error: Write failure, if any.
        report: Validation report of the written document.
    """

    group: str
    templates: list[Template] = field(default_factory=list)
    build_errors: list[MalformedMetadataError] = field(default_factory=list)
    output_path: Path | None = None
    persistence_error: PersistenceError | None = None
    report: ValidationReport | None = None

    @property
    def written(self) -> bool:
        """True if the group's file was written."""
        return self.output_path is not None and self.persistence_error is None

    @property
    def diagnostics(self) -> tuple[ConformanceDiagnostic, ...]:
        return self.report.diagnostics if self.report is not None else ()


@dataclass
class RunReport:
    """Outcome of a generation run.

    Attributes:
        schema_url: Schema locator stamped on every document.
        groups: One result per discovered group, in discovery order.
        schema_error: The schema resolution failure, reported once per run.
    """

    schema_url: str
    groups: list[GroupResult] = field(default_factory=list)
    schema_error: SchemaResolutionError | None = None

    @property
    def build_errors(self) -> list[MalformedMetadataError]:
        return [e for g in self.groups for e in g.build_errors]

    @property
    def persistence_errors(self) -> list[PersistenceError]:
        return [g.persistence_error for g in self.groups if g.persistence_error is not None]

    @property
    def diagnostics(self) -> list[ConformanceDiagnostic]:
        return [d for g in self.groups for d in g.diagnostics]

    @property
    def files_written(self) -> list[Path]:
        return [g.output_path for g in self.groups if g.written and g.output_path is not None]

    @property
    def has_errors(self) -> bool:
        """True if anything was skipped, not written or non-conforming."""
        return bool(self.build_errors or self.persistence_errors or self.diagnostics)


class GenerationRunner:
    """Run the generation pipeline for a configuration.

    Example:
        >>> config = GeneratorConfig(scan_packages=["myapp.tasks"])
        >>> report = GenerationRunner(config).run()
        >>> [str(p) for p in report.files_written]
        ['element-templates/HttpTasksTemplates.json']
    """

    def __init__(
        self,
        config: GeneratorConfig,
        resolver: SchemaResolver | None = None,
        validator: TemplateValidator | None = None,
        builder: TemplateBuilder | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            config: Run configuration.
            resolver: Schema resolver; taken from ``validator`` or created
                from the configuration if omitted.
            validator: Template validator; created around ``resolver`` if omitted.
            builder: Template builder.
        """
        self.config = config
        if resolver is None:
            resolver = validator.resolver if validator is not None else SchemaResolver(
                config.schema_version,
                timeout=config.fetch_timeout,
            )
        self.resolver = resolver
        self.validator = validator or TemplateValidator(self.resolver)
        self.builder = builder or TemplateBuilder()
        self._log = logger.bind(component="generation_runner")

    def run(self, groups: Iterable[TemplateGroup] | None = None) -> RunReport:
        """Generate, write and validate every group.

        Args:
            groups: Groups to process; discovered from
                ``config.scan_packages`` if omitted.

        Returns:
            RunReport describing every group.

        Raises:
            DiscoveryError: If discovery fails.
        """
        if groups is None:
            groups = discover_groups(self.config.scan_packages)

        report = RunReport(schema_url=self.resolver.url)
        self._log.info(
            "generation_started",
            output_dir=str(self.config.output_dir),
            schema_url=report.schema_url,
        )

        for group in groups:
            report.groups.append(self.run_group(group))

        report.schema_error = self.resolver.error
        self._log.info(
            "generation_completed",
            groups=len(report.groups),
            files=len(report.files_written),
            build_errors=len(report.build_errors),
            persistence_errors=len(report.persistence_errors),
            diagnostics=len(report.diagnostics),
        )
        return report

    def run_group(self, group: TemplateGroup) -> GroupResult:
        """Process one group: build, stamp, serialize, write, validate."""
        log = self._log.bind(group=group.qualified_name)
        result = GroupResult(group=group.name)

        build = self.builder.build(group.records)
        result.templates = build.templates
        result.build_errors = build.errors

        if not build.templates:
            log.warning("group_skipped", reason="no valid templates")
            return result

        text = serialize_templates(build.templates, schema_url=self.resolver.url)
        path = self.config.output_dir / output_filename(group.name)
        result.output_path = path

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        except OSError as e:
            result.persistence_error = PersistenceError(
                "Failed to write",
                path=str(path),
                internal_details=f"{type(e).__name__}: {e}",
            )
            return result

        log.info("templates_written", path=str(path), templates=len(build.templates))
        result.report = self.validator.validate(text, source=path.name)
        return result
