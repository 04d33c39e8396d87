"""Pluggy integration for the built-in HTML document format."""

from __future__ import annotations

from typing import Any, Mapping

from slidemill.assets import AssetsRoot
from slidemill.config import SlidemillConfig
from slidemill.formats.html import HtmlOptions, html_document
from slidemill.output_format import OutputFormat
from slidemill.plugins import FormatContribution, hookimpl

FORMAT_ID = "html"


def _build_html(options: Mapping[str, Any], *, assets: AssetsRoot) -> OutputFormat:
    _ = assets  # pandoc's own HTML template needs no bundled assets
    return html_document(HtmlOptions.from_mapping(options))


@hookimpl
def output_formats(config: SlidemillConfig) -> tuple[FormatContribution, ...]:
    """Expose the plain HTML document format as a plugin contribution."""

    contribution = FormatContribution(
        format_id=FORMAT_ID,
        builder=_build_html,
        description="Standalone HTML document",
    )
    return (contribution,)


__all__ = ["FORMAT_ID", "output_formats"]
