"""etgen schema-url command - Print the element-templates schema locator."""

from __future__ import annotations

import click


@click.command(name="schema-url")
@click.option(
    "-s",
    "--schema-version",
    envvar="ETGEN_SCHEMA_VERSION",
    default=None,
    help="Schema version [default: latest]",
)
def schema_url_cmd(schema_version: str | None) -> None:
    """Print the schema URL stamped into generated templates.

    Examples:

        etgen schema-url

        etgen schema-url --schema-version 0.12.0
    """
    from etgen_core.validation import schema_url

    click.echo(schema_url(schema_version))
