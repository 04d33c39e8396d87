"""Formats command for Slidemill CLI."""

from __future__ import annotations

import click

from ..errors import FormatError
from ..services.render import get_format_descriptions
from ._common import SlidemillCliError, get_config


@click.command(name="formats")
@click.pass_context
def formats(ctx: click.Context) -> None:
    """List available output formats."""

    config = get_config(ctx)
    try:
        descriptions = get_format_descriptions(config)
    except FormatError as exc:
        raise SlidemillCliError(str(exc)) from exc

    if not descriptions:
        click.echo("No output formats are available.")
        return

    click.echo("Available output formats:\n")
    for fmt, desc in descriptions:
        if desc:
            click.echo(f"  - {fmt}: {desc}")
        else:
            click.echo(f"  - {fmt}")


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(formats)
