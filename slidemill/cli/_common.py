"""Shared helpers for Slidemill CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click

from ..config import ConfigError, SlidemillConfig, load_config

CONTEXT_SETTINGS: dict[str, Any] = {"help_option_names": ["-h", "--help"]}


class SlidemillCliError(click.ClickException):
    """Shared Click exception wrapper for CLI failures."""


def get_config(ctx: click.Context) -> SlidemillConfig:
    """Return the cached configuration for the current CLI invocation."""

    config: SlidemillConfig | None = ctx.obj.get("config")
    if config is not None:
        return config

    config_path_opt: Path | None = ctx.obj.get("config_path")

    try:
        config = load_config(config_path_opt)
    except ConfigError as exc:
        raise SlidemillCliError(str(exc)) from exc

    ctx.obj["config"] = config
    return config
