"""Render command for Slidemill CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click
import yaml

from ..errors import ConverterError, FormatError
from ..pandoc import format_command
from ..services.render import prepare_render, resolve_format, run_render
from ._common import SlidemillCliError, get_config

# Options whose values are kept verbatim rather than parsed as YAML.
TEXT_OPTIONS = frozenset({"footer", "template", "highlight", "mathjax", "lib_dir"})


def _parse_option(raw: str) -> tuple[str, Any]:
    key, sep, value = raw.partition("=")
    key = key.strip().replace("-", "_")
    if not sep or not key:
        raise SlidemillCliError(f"Invalid option '{raw}'. Expected KEY=VALUE.")
    if key in TEXT_OPTIONS:
        return key, value
    try:
        parsed = yaml.safe_load(value) if value.strip() else ""
    except yaml.YAMLError:
        parsed = value
    return key, parsed


@click.command(name="render")
@click.argument(
    "input_file",
    type=click.Path(path_type=Path, dir_okay=False, exists=True),
)
@click.option(
    "-f",
    "--format",
    "format_id",
    default="slidy",
    show_default=True,
    metavar="FORMAT",
    help="Output format identifier.",
)
@click.option(
    "-o",
    "--output",
    "output_file",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Output file (defaults to the input name with .html).",
)
@click.option(
    "-O",
    "--option",
    "raw_options",
    multiple=True,
    metavar="KEY=VALUE",
    help="Format option; non-text values are parsed as YAML scalars (repeatable).",
)
@click.option(
    "--incremental/--no-incremental",
    default=None,
    help="Reveal lists step by step.",
)
@click.option("--duration", type=float, default=None, help="Talk duration in minutes.")
@click.option("--footer", type=str, default=None, help="Footer text.")
@click.option(
    "--font-adjustment",
    type=int,
    default=None,
    help="Increase or decrease the default font size.",
)
@click.option("--css", "css", multiple=True, help="Extra stylesheet (repeatable).")
@click.option(
    "--self-contained/--no-self-contained",
    default=None,
    help="Embed assets into a single HTML file.",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Print the pandoc command instead of running it.",
)
@click.pass_context
def render(
    ctx: click.Context,
    input_file: Path,
    format_id: str,
    output_file: Path | None,
    raw_options: tuple[str, ...],
    incremental: bool | None,
    duration: float | None,
    footer: str | None,
    font_adjustment: int | None,
    css: tuple[str, ...],
    self_contained: bool | None,
    dry_run: bool,
) -> None:
    """Render a Markdown document with pandoc."""

    config = get_config(ctx)

    options: dict[str, Any] = dict(_parse_option(raw) for raw in raw_options)
    shortcuts = {
        "incremental": incremental,
        "duration": duration,
        "footer": footer,
        "font_adjustment": font_adjustment,
        "self_contained": self_contained,
    }
    options.update(
        {key: value for key, value in shortcuts.items() if value is not None}
    )
    if css:
        options["css"] = list(css)

    try:
        output_format = resolve_format(config, format_id, options)
        plan = prepare_render(
            config, input_file, output_format, output_file=output_file
        )
        if dry_run:
            click.echo(format_command(plan.command))
            return
        written = run_render(plan)
    except (FormatError, ConverterError) as exc:
        raise SlidemillCliError(str(exc)) from exc

    click.echo(f"Rendered {input_file} to {written}")


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(render)
