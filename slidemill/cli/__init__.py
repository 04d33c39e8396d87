"""Slidemill CLI package."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import click

from . import config_cmd, formats_cmd, render_cmd
from ._common import CONTEXT_SETTINGS, SlidemillCliError

__all__ = ["cli", "main", "SlidemillCliError"]

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option(
    "-c",
    "--config",
    "config_path_opt",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to configuration TOML file.",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Log debug information to stderr.",
)
@click.pass_context
def cli(ctx: click.Context, config_path_opt: Path | None, verbose: bool) -> None:
    """Slidemill command group."""

    ctx.ensure_object(dict)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.command.get_help(ctx))
        ctx.exit(0)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )
    ctx.obj["config_path"] = config_path_opt


for register_command in (
    render_cmd.register,
    formats_cmd.register,
    config_cmd.register,
):
    register_command(cli)


def main(argv: Sequence[str] | None = None) -> int:
    args = list(argv) if argv is not None else None
    try:
        return cli.main(args=args, prog_name="slidemill", standalone_mode=False) or 0
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        return 1
    except SystemExit as exc:
        return int(exc.code or 0)
