"""CLI error handling for etgen-cli.

Wraps etgen-core and configuration exceptions into user-friendly messages
with exit codes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import click
from pydantic import ValidationError as PydanticValidationError

from etgen_cli.output import error

if TYPE_CHECKING:
    import yaml
    from pydantic_core import ErrorDetails


# Exit codes following sysexits.h convention
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1  # Build errors or conformance diagnostics
EXIT_SYSTEM_ERROR = 2  # Configuration, discovery, schema or write failure


class CLIError(click.ClickException):
    """CLI-specific exception with exit code support.

    Attributes:
        message: User-facing error message.
        exit_code: Exit code for the CLI (default: 1).
    """

    def __init__(self, message: str, exit_code: int = EXIT_USER_ERROR) -> None:
        """Initialize CLIError.

        Args:
            message: User-facing error message.
            exit_code: Exit code for the CLI.
        """
        super().__init__(message)
        self.exit_code = exit_code

    def show(self, file: object = None) -> None:
        """Display the error message using Rich formatting.

        Args:
            file: Output file (unused, for Click compatibility).
        """
        error(self.format_message())


def format_pydantic_error(err: PydanticValidationError) -> str:
    """Format Pydantic validation error into user-friendly message.

    Args:
        err: Pydantic ValidationError instance.

    Returns:
        Formatted error message with field paths and issues.

    Example:
        >>> format_pydantic_error(err)
        "Validation failed:\\n  - scan_packages: Value error, '*' is not supported..."
    """
    errors: list[ErrorDetails] = err.errors()
    lines = ["Validation failed:"]

    for e in errors:
        loc = ".".join(str(x) for x in e["loc"])
        lines.append(f"  - {loc}: {e['msg']}" if loc else f"  - {e['msg']}")

    return "\n".join(lines)


def handle_yaml_error(err: yaml.YAMLError, file_path: str) -> NoReturn:
    """Raise a CLIError for a YAML parsing error, with line information.

    Raises:
        CLIError: Always, with exit code 2.
    """
    error_msg = str(err)
    mark = getattr(err, "problem_mark", None)
    if mark is not None:
        problem = getattr(err, "problem", None) or "syntax error"
        error_msg = f"YAML syntax error at line {mark.line + 1}, column {mark.column + 1}: {problem}"

    raise CLIError(f"Invalid YAML in {file_path}: {error_msg}", exit_code=EXIT_SYSTEM_ERROR)


def handle_validation_error(err: PydanticValidationError, source: str) -> NoReturn:
    """Raise a CLIError for an invalid configuration.

    Args:
        err: Pydantic ValidationError instance.
        source: Where the configuration came from (file path or "options").

    Raises:
        CLIError: Always, with exit code 2.
    """
    formatted = format_pydantic_error(err)
    raise CLIError(f"Invalid configuration in {source}:\n{formatted}", exit_code=EXIT_SYSTEM_ERROR)


def handle_file_not_found(file_path: str) -> NoReturn:
    """Raise a CLIError for a missing input file.

    Raises:
        CLIError: Always, with exit code 2.
    """
    raise CLIError(f"File not found: {file_path}", exit_code=EXIT_SYSTEM_ERROR)
