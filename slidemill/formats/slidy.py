"""Slidy slide presentation output format.

Options are translated into pandoc arguments in two phases: the arguments
that only depend on the options are computed when the format is built, and
the ones that depend on where the current render writes its files are
computed later by the format's pre-processor.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, fields
from numbers import Real
from types import MappingProxyType
from typing import Any, Mapping

from ..assets import AssetsRoot, default_assets
from ..errors import FormatError
from ..output_format import OutputFormat, knitr_options_html, pandoc_options
from ..pandoc import (
    Includes,
    as_str_tuple,
    copy_supporting_files,
    from_markdown,
    includes_to_pandoc_args,
    pandoc_highlight_args,
    pandoc_path_arg,
    pandoc_variable_arg,
    relative_to,
    requires_asset_copy,
)
from .html import html_document_base

logger = logging.getLogger(__name__)

SLIDY_TEMPLATE = ("slidy", "default.html")
SLIDY_RUNTIME = ("slidy", "runtime")
SLIDY_HIGHLIGHT_DEFAULT = "pygments"

# fig_retina placeholder resolved from fig_caption
AUTO = "auto"


@dataclass(frozen=True)
class SlidyOptions:
    """User-facing options of a Slidy presentation."""

    incremental: bool = False
    duration: float | None = None
    footer: str | None = None
    font_adjustment: int = 0
    fig_width: float = 8
    fig_height: float = 6
    fig_retina: float | str | None = AUTO
    fig_caption: bool = False
    smart: bool = True
    self_contained: bool = True
    highlight: str | None = "default"
    mathjax: str | None = "default"
    template: str | None = "default"
    css: tuple[str, ...] = ()
    includes: Includes | None = None
    keep_md: bool = False
    lib_dir: str | None = None
    pandoc_args: tuple[str, ...] = ()
    extra: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SlidyOptions":
        """Build options from a loose mapping; unknown keys go to ``extra``."""

        known = {f.name for f in fields(cls)} - {"extra"}
        values: dict[str, Any] = {}
        extra: dict[str, Any] = dict(data.get("extra", {}))
        for key, value in data.items():
            name = key.replace("-", "_")
            if name == "extra":
                continue
            if name in known:
                values[name] = value
            else:
                extra[name] = value

        if "css" in values:
            values["css"] = as_str_tuple(values["css"])
        if "pandoc_args" in values:
            values["pandoc_args"] = as_str_tuple(values["pandoc_args"])
        if "includes" in values:
            values["includes"] = Includes.from_mapping(values["includes"])
        return cls(extra=MappingProxyType(extra), **values)


def resolve_fig_retina(
    fig_retina: float | str | None, fig_caption: bool
) -> float | None:
    """Return the effective retina scale; ``"auto"`` means 2 unless captioning."""

    if fig_retina == AUTO:
        return None if fig_caption else 2
    return fig_retina


def _positive_number(name: str, value: Any) -> float | int:
    if isinstance(value, bool):
        raise FormatError(f"'{name}' must be a positive number, got {value!r}")
    if isinstance(value, Real):
        number = value
    else:
        try:
            number = float(str(value).strip())
        except ValueError as exc:
            raise FormatError(
                f"'{name}' must be a positive number, got {value!r}"
            ) from exc
    if not (math.isfinite(number) and number > 0):
        raise FormatError(f"'{name}' must be a positive number, got {value!r}")
    if isinstance(number, float) and number.is_integer():
        return int(number)
    return number


def _font_adjustment(value: Any) -> int:
    if isinstance(value, bool) or (
        isinstance(value, float) and not value.is_integer()
    ):
        raise FormatError(f"'font_adjustment' must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise FormatError(
            f"'font_adjustment' must be an integer, got {value!r}"
        ) from exc


def slidy_presentation(
    options: SlidyOptions | None = None,
    *,
    assets: AssetsRoot | None = None,
) -> OutputFormat:
    """Return the output format for a Slidy presentation.

    Parameters
    ----------
    options:
        Presentation options; defaults apply when omitted.
    assets:
        Root of the bundled template and Slidy runtime. The assets shipped
        with the package are used when omitted.

    Raises
    ------
    FormatError
        If ``duration`` is not a positive number or ``font_adjustment`` is not
        an integer.
    """

    opts = options or SlidyOptions()
    assets = assets or default_assets()
    fig_retina = resolve_fig_retina(opts.fig_retina, opts.fig_caption)

    args: list[str] = []

    if opts.template == "default":
        args.extend(["--template", pandoc_path_arg(assets.path(*SLIDY_TEMPLATE))])
    elif opts.template is not None and opts.template != "none":
        args.extend(["--template", pandoc_path_arg(opts.template)])

    if opts.incremental:
        args.append("--incremental")

    if opts.duration is not None:
        duration = _positive_number("duration", opts.duration)
        args.extend(pandoc_variable_arg("duration", duration))

    # Footer text is escaped by pandoc's template engine, not here.
    if opts.footer is not None:
        args.extend(pandoc_variable_arg("footer", opts.footer))

    font_adjustment = _font_adjustment(opts.font_adjustment)
    if font_adjustment != 0:
        args.extend(pandoc_variable_arg("font-size-adjustment", font_adjustment))

    args.extend(includes_to_pandoc_args(opts.includes))

    for css_file in opts.css:
        args.extend(["--css", pandoc_path_arg(css_file)])

    def pre_processor(metadata, input_file, runtime, knit_meta, files_dir, output_dir):
        lib_dir = opts.lib_dir if opts.lib_dir is not None else files_dir

        extra_args: list[str] = []

        slidy_path = assets.path(*SLIDY_RUNTIME)
        if not opts.self_contained or requires_asset_copy():
            copied = copy_supporting_files(slidy_path, lib_dir)
            slidy_url = relative_to(output_dir, copied)
        else:
            slidy_url = str(slidy_path)
        logger.debug("Slidy runtime for %s resolved to %s", input_file, slidy_url)
        extra_args.extend(
            pandoc_variable_arg("slidy-url", pandoc_path_arg(slidy_url))
        )

        extra_args.extend(
            pandoc_highlight_args(opts.highlight, default=SLIDY_HIGHLIGHT_DEFAULT)
        )
        return extra_args

    base = html_document_base(
        smart=opts.smart,
        lib_dir=opts.lib_dir,
        self_contained=opts.self_contained,
        mathjax=opts.mathjax,
        bootstrap_compatible=True,
        pandoc_args=opts.pandoc_args,
        **opts.extra,
    )

    return OutputFormat(
        knitr=knitr_options_html(
            opts.fig_width, opts.fig_height, fig_retina, opts.keep_md
        ),
        pandoc=pandoc_options(
            to="slidy",
            from_format=from_markdown(opts.fig_caption),
            args=args,
        ),
        keep_md=opts.keep_md,
        clean_supporting=opts.self_contained,
        pre_processor=pre_processor,
        base_format=base,
        lib_dir=opts.lib_dir,
    )


__all__ = [
    "AUTO",
    "SLIDY_HIGHLIGHT_DEFAULT",
    "SlidyOptions",
    "resolve_fig_retina",
    "slidy_presentation",
]
