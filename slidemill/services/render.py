"""Render services for Slidemill."""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from ..assets import assets_from
from ..config import SlidemillConfig
from ..errors import ConverterError, FormatError
from ..frontmatter import FrontMatterError, read_metadata
from ..output_format import OutputFormat, merge_output_formats
from ..plugins import (
    FormatContribution,
    PluginRegistrationError,
    load_format_contributions,
    reset_plugin_manager_cache,
)

logger = logging.getLogger(__name__)

DEFAULT_RUNTIME = "static"


@dataclass(frozen=True)
class RenderPlan:
    """A fully resolved pandoc invocation for one document."""

    command: tuple[str, ...]
    input_file: Path
    output_file: Path
    files_dir: Path
    clean_supporting: bool


def clear_format_registry_cache() -> None:
    """Reset cached format discovery (primarily for testing)."""

    reset_plugin_manager_cache()


def _load_format_registry(config: SlidemillConfig) -> dict[str, FormatContribution]:
    try:
        return load_format_contributions(config)
    except PluginRegistrationError as exc:
        raise FormatError(str(exc)) from exc


def get_format_descriptions(config: SlidemillConfig) -> list[tuple[str, str]]:
    """Return tuples of ``(format_id, description)`` for available formats."""

    registry = _load_format_registry(config)
    return sorted(
        ((fmt, contrib.description) for fmt, contrib in registry.items()),
        key=lambda item: item[0],
    )


def resolve_format(
    config: SlidemillConfig,
    format_id: str,
    options: Mapping[str, Any] | None = None,
) -> OutputFormat:
    """Build the output format ``format_id``.

    Configured defaults from ``[formats.<id>]`` are applied underneath the
    given ``options``.
    """

    formats = _load_format_registry(config)
    contribution = formats.get(format_id.lower())
    if contribution is None:
        available = ", ".join(sorted(formats))
        if available:
            raise FormatError(
                f"Unknown output format: {format_id}. Available: {available}."
            )
        raise FormatError("No output format plugins are available.")

    merged_options = {**config.format_defaults(format_id), **dict(options or {})}
    logger.debug("Building format %s with options %s", format_id, merged_options)

    try:
        return contribution.builder(
            merged_options, assets=assets_from(config.assets_root)
        )
    except FormatError:
        raise
    except Exception as exc:
        raise FormatError(
            f"Format '{contribution.format_id}' raised an unexpected error: {exc}"
        ) from exc


def default_output_file(input_file: Path) -> Path:
    return input_file.with_suffix(".html")


def prepare_render(
    config: SlidemillConfig,
    input_file: Path,
    output_format: OutputFormat,
    *,
    output_file: Path | None = None,
    runtime: str = DEFAULT_RUNTIME,
    knit_meta: Sequence[Any] = (),
) -> RenderPlan:
    """Run the format's pre-processor and assemble the pandoc command."""

    if not input_file.is_file():
        raise FormatError(f"Input file not found: {input_file}")

    target = output_file or default_output_file(input_file)
    output_dir = target.parent
    files_dir = output_dir / f"{target.stem}_files"

    try:
        metadata = read_metadata(input_file)
    except FrontMatterError as exc:
        raise FormatError(f"{input_file}: {exc}") from exc

    flat = merge_output_formats(None, output_format)

    args = list(flat.pandoc.args)
    if flat.pre_processor is not None:
        args.extend(
            flat.pre_processor(
                metadata, input_file, runtime, knit_meta, files_dir, output_dir
            )
        )

    command: list[str] = [config.pandoc, str(input_file)]
    if flat.pandoc.to:
        command.extend(["--to", flat.pandoc.to])
    source_format = flat.pandoc.source_format()
    if source_format:
        command.extend(["--from", source_format])
    command.extend(["--output", str(target)])
    command.extend(args)

    return RenderPlan(
        command=tuple(command),
        input_file=input_file,
        output_file=target,
        files_dir=files_dir,
        clean_supporting=flat.clean_supporting and flat.lib_dir is None,
    )


def run_render(plan: RenderPlan) -> Path:
    """Invoke pandoc for ``plan`` and return the written output file."""

    plan.output_file.parent.mkdir(parents=True, exist_ok=True)
    logger.info("Rendering %s to %s", plan.input_file, plan.output_file)
    logger.debug("Running %s", plan.command)

    try:
        process = subprocess.run(
            list(plan.command),
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError as exc:
        raise ConverterError(f"pandoc executable not found: {plan.command[0]}") from exc

    if process.returncode != 0:
        stderr = process.stderr.strip()
        raise ConverterError(
            f"pandoc exited with status {process.returncode}: {stderr}",
            returncode=process.returncode,
        )

    if plan.clean_supporting and plan.files_dir.exists():
        logger.debug("Removing supporting files in %s", plan.files_dir)
        shutil.rmtree(plan.files_dir)

    return plan.output_file


def render(
    config: SlidemillConfig,
    input_file: Path,
    *,
    format_id: str,
    options: Mapping[str, Any] | None = None,
    output_file: Path | None = None,
) -> Path:
    """Render ``input_file`` with the given format and return the output path."""

    output_format = resolve_format(config, format_id, options)
    plan = prepare_render(config, input_file, output_format, output_file=output_file)
    return run_render(plan)


__all__ = [
    "RenderPlan",
    "clear_format_registry_cache",
    "default_output_file",
    "get_format_descriptions",
    "prepare_render",
    "render",
    "resolve_format",
    "run_render",
]
