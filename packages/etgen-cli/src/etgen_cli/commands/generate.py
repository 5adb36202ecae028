"""etgen generate command - Write element template files for decorated classes."""

from __future__ import annotations

import click

from etgen_cli.errors import EXIT_SYSTEM_ERROR, EXIT_USER_ERROR, CLIError
from etgen_cli.output import print_run_summary, success, warning


@click.command()
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to etgen.yaml [default: ./etgen.yaml if present]",
)
@click.option(
    "-p",
    "--package",
    "packages",
    multiple=True,
    help="Package or module to scan (repeatable, overrides scan_packages)",
)
@click.option(
    "-o",
    "--output-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Output directory [default: ./element-templates]",
)
@click.option(
    "-s",
    "--schema-version",
    default=None,
    help="Element-templates schema version [default: latest]",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Exit with code 1 if a template was skipped or does not conform.",
)
def generate(
    config_path: str | None,
    packages: tuple[str, ...],
    output_dir: str | None,
    schema_version: str | None,
    strict: bool,
) -> None:
    """Generate element templates from decorated classes.

    Scans the configured packages, writes one `<Class>Templates.json` per
    decorated class and validates each file against the schema.

    Examples:

        etgen generate -p myapp.tasks

        etgen generate --config etgen.yaml --output-dir build/templates --strict
    """
    import yaml
    from pydantic import ValidationError as PydanticValidationError

    from etgen_cli.config import load_config
    from etgen_cli.discovery import DiscoveryError
    from etgen_cli.errors import handle_file_not_found, handle_validation_error, handle_yaml_error
    from etgen_cli.runner import GenerationRunner

    source = config_path or "options"
    try:
        config = load_config(
            config_path,
            scan_packages=list(packages) or None,
            output_dir=output_dir,
            schema_version=schema_version,
        )
    except FileNotFoundError:
        handle_file_not_found(str(config_path))
    except yaml.YAMLError as e:
        handle_yaml_error(e, source)
    except PydanticValidationError as e:
        handle_validation_error(e, source)
    except ValueError as e:
        raise CLIError(str(e), exit_code=EXIT_SYSTEM_ERROR) from e

    if not config.scan_packages:
        raise CLIError(
            "No packages to scan. Use --package or set scan_packages in etgen.yaml.",
            exit_code=EXIT_SYSTEM_ERROR,
        )

    try:
        report = GenerationRunner(config).run()
    except DiscoveryError as e:
        raise CLIError(e.user_message, exit_code=EXIT_SYSTEM_ERROR) from e

    if not report.groups:
        warning(f"No decorated classes found in {', '.join(config.scan_packages)}")
        return

    print_run_summary(report)

    if report.persistence_errors:
        raise SystemExit(EXIT_SYSTEM_ERROR)
    if strict and (report.build_errors or report.diagnostics):
        raise SystemExit(EXIT_USER_ERROR)

    success(f"Generated {len(report.files_written)} template file(s) in {config.output_dir}")
