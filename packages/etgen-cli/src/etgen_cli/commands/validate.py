"""etgen validate command - Check template files against the schema."""

from __future__ import annotations

from pathlib import Path

import click

from etgen_cli.errors import EXIT_SYSTEM_ERROR, EXIT_USER_ERROR, CLIError
from etgen_cli.output import error, success


@click.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(dir_okay=False))
@click.option(
    "-s",
    "--schema-version",
    envvar="ETGEN_SCHEMA_VERSION",
    default=None,
    help="Element-templates schema version [default: latest]",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Schema download timeout in seconds [default: 10]",
)
def validate(files: tuple[str, ...], schema_version: str | None, timeout: float | None) -> None:
    """Validate element template files.

    Reports every schema violation with its JSON path. Exits with code 1
    when a file does not conform and 2 when the schema is unavailable.

    Examples:

        etgen validate element-templates/HttpTasksTemplates.json

        etgen validate --schema-version 0.12.0 element-templates/*.json
    """
    from etgen_core.validation import DEFAULT_TIMEOUT_SECONDS, SchemaResolver, TemplateValidator

    from etgen_cli.errors import handle_file_not_found

    paths = [Path(f) for f in files]
    for path in paths:
        if not path.is_file():
            handle_file_not_found(str(path))

    resolver = SchemaResolver(schema_version, timeout=timeout or DEFAULT_TIMEOUT_SECONDS)
    if resolver.resolve() is None:
        message = resolver.error.user_message if resolver.error else "Schema unavailable"
        raise CLIError(message, exit_code=EXIT_SYSTEM_ERROR)

    validator = TemplateValidator(resolver)
    failed = 0
    for path in paths:
        try:
            report = validator.validate_file(path)
        except OSError as e:
            raise CLIError(f"Cannot read {path}: {e.strerror}", exit_code=EXIT_SYSTEM_ERROR) from e

        if report.skipped:
            message = resolver.error.user_message if resolver.error else "Schema unavailable"
            raise CLIError(message, exit_code=EXIT_SYSTEM_ERROR)

        if report.valid:
            success(f"{path} conforms to the schema")
            continue

        failed += 1
        error(f"{path}: {len(report.diagnostics)} issue(s)")
        for diagnostic in report.diagnostics:
            click.echo(f"  - {diagnostic}")

    if failed:
        raise SystemExit(EXIT_USER_ERROR)
