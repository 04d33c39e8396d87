"""Pluggy integration for the built-in Slidy presentation format."""

from __future__ import annotations

from typing import Any, Mapping

from slidemill.assets import AssetsRoot
from slidemill.config import SlidemillConfig
from slidemill.formats.slidy import SlidyOptions, slidy_presentation
from slidemill.output_format import OutputFormat
from slidemill.plugins import FormatContribution, hookimpl

FORMAT_ID = "slidy"


def _build_slidy(options: Mapping[str, Any], *, assets: AssetsRoot) -> OutputFormat:
    return slidy_presentation(SlidyOptions.from_mapping(options), assets=assets)


@hookimpl
def output_formats(config: SlidemillConfig) -> tuple[FormatContribution, ...]:
    """Expose the Slidy presentation format as a plugin contribution."""

    contribution = FormatContribution(
        format_id=FORMAT_ID,
        builder=_build_slidy,
        description="Slidy HTML slide presentation",
    )
    return (contribution,)


__all__ = ["FORMAT_ID", "output_formats"]
