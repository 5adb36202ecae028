"""CLI entry point for etgen.

The main group loads subcommands lazily so that ``etgen --help`` does not
import jsonschema, httpx or the packages being scanned.
"""

from __future__ import annotations

import importlib
from typing import Any

import click
import rich_click as rclick

from etgen_cli import __version__
from etgen_cli.observability import configure_logging
from etgen_cli.output import set_no_color

rclick.rich_click.TEXT_MARKUP = "markdown"
rclick.rich_click.SHOW_ARGUMENTS = True
rclick.rich_click.GROUP_ARGUMENTS_OPTIONS = True


class LazyGroup(rclick.RichGroup):
    """Click group that imports a command only when it is invoked.

    Attributes:
        lazy_subcommands: Mapping of command names to ``module.attribute`` paths.
    """

    def __init__(
        self,
        *args: Any,
        lazy_subcommands: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize LazyGroup.

        Args:
            *args: Positional arguments for parent class.
            lazy_subcommands: Mapping of command name to module path.
                Format: {"validate": "etgen_cli.commands.validate.validate"}
            **kwargs: Keyword arguments for parent class.
        """
        super().__init__(*args, **kwargs)
        self.lazy_subcommands: dict[str, str] = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        commands = set(super().list_commands(ctx))
        commands.update(self.lazy_subcommands.keys())
        return sorted(commands)

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, importing it on first use.

        Args:
            ctx: Click context.
            cmd_name: Name of the command to get.

        Returns:
            Click Command instance, or None if not found.
        """
        cmd = super().get_command(ctx, cmd_name)  # type: ignore[arg-type]
        if cmd is not None:
            return cmd

        if cmd_name not in self.lazy_subcommands:
            return None

        module_name, attr_name = self.lazy_subcommands[cmd_name].rsplit(".", 1)
        mod = importlib.import_module(module_name)
        return getattr(mod, attr_name)  # type: ignore[no-any-return]


LAZY_COMMANDS = {
    "generate": "etgen_cli.commands.generate.generate",
    "validate": "etgen_cli.commands.validate.validate",
    "schema-url": "etgen_cli.commands.schema_url.schema_url_cmd",
}


@click.command(cls=LazyGroup, lazy_subcommands=LAZY_COMMANDS)
@click.version_option(version=__version__, prog_name="etgen")
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output.",
    is_eager=True,
    expose_value=False,
    callback=lambda ctx, param, value: set_no_color(value) if value else None,
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    default=False,
    help="Log debug events to stderr.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Write log events to stderr as JSON lines.",
)
def cli(verbose: bool, log_json: bool) -> None:
    """etgen - Element templates for the Camunda Modeler.

    Generate element template JSON from decorated Python classes and check
    it against the published element-templates schema.

    **Getting Started:**

    - `etgen generate -p myapp.tasks` - Write one file per decorated class
    - `etgen validate element-templates/*.json` - Check existing files
    - `etgen schema-url -s 0.12.0` - Show the schema locator
    """
    configure_logging(verbose=verbose, json_format=log_json)


if __name__ == "__main__":
    cli()
