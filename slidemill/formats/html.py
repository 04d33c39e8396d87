"""Base HTML output format shared by the HTML-producing formats."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Mapping

from ..errors import FormatError
from ..output_format import (
    KnitOptions,
    OutputFormat,
    knitr_options_html,
    pandoc_options,
)
from ..pandoc import (
    Includes,
    as_str_tuple,
    from_markdown,
    includes_to_pandoc_args,
    pandoc_highlight_args,
    pandoc_path_arg,
    pandoc_variable_arg,
)

DEFAULT_MATHJAX_URL = "https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-chtml-full.js"


def mathjax_args(mathjax: str | None) -> list[str]:
    """Return the MathJax arguments for the given setting."""

    if mathjax is None or mathjax == "none":
        return []
    if mathjax == "default":
        mathjax = DEFAULT_MATHJAX_URL
    return [f"--mathjax={mathjax}"]


def html_document_base(
    smart: bool = True,
    lib_dir: str | None = None,
    self_contained: bool = True,
    mathjax: str | None = "default",
    bootstrap_compatible: bool = False,
    pandoc_args: Sequence[str] = (),
    **unknown: Any,
) -> OutputFormat:
    """Return the base format every HTML output builds upon."""

    if unknown:
        names = ", ".join(sorted(unknown))
        raise FormatError(f"Unknown HTML options: {names}")

    args: list[str] = []
    if self_contained:
        args.extend(["--embed-resources", "--standalone"])
    else:
        args.append("--standalone")
    if bootstrap_compatible:
        args.extend(pandoc_variable_arg("bootstrap-compatible", "true"))
    args.extend(pandoc_args)

    extensions = () if smart else ("-smart",)

    def pre_processor(metadata, input_file, runtime, knit_meta, files_dir, output_dir):
        return mathjax_args(mathjax)

    return OutputFormat(
        knitr=KnitOptions(),
        pandoc=pandoc_options(to="html", args=args, extensions=extensions),
        keep_md=False,
        clean_supporting=self_contained,
        pre_processor=pre_processor,
        lib_dir=lib_dir,
    )


@dataclass(frozen=True)
class HtmlOptions:
    """Options of the plain HTML document format."""

    fig_width: float = 7
    fig_height: float = 5
    fig_retina: float | None = 2
    fig_caption: bool = False
    smart: bool = True
    self_contained: bool = True
    highlight: str | None = "default"
    mathjax: str | None = "default"
    toc: bool = False
    css: tuple[str, ...] = ()
    includes: Includes | None = None
    keep_md: bool = False
    lib_dir: str | None = None
    pandoc_args: tuple[str, ...] = ()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "HtmlOptions":
        values = dict(data)
        unknown = set(values) - set(cls.__dataclass_fields__)
        if unknown:
            raise FormatError(f"Unknown HTML options: {', '.join(sorted(unknown))}")
        if "css" in values:
            values["css"] = as_str_tuple(values["css"])
        if "pandoc_args" in values:
            values["pandoc_args"] = as_str_tuple(values["pandoc_args"])
        if "includes" in values:
            values["includes"] = Includes.from_mapping(values["includes"])
        return cls(**values)


def html_document(options: HtmlOptions | None = None) -> OutputFormat:
    """Plain standalone HTML page using pandoc's own template."""

    opts = options or HtmlOptions()

    args: list[str] = []
    if opts.toc:
        args.append("--toc")
    args.extend(includes_to_pandoc_args(opts.includes))
    for css_file in opts.css:
        args.extend(["--css", pandoc_path_arg(css_file)])
    args.extend(pandoc_highlight_args(opts.highlight))

    return OutputFormat(
        knitr=knitr_options_html(
            opts.fig_width, opts.fig_height, opts.fig_retina, opts.keep_md
        ),
        pandoc=pandoc_options(
            to="html", from_format=from_markdown(opts.fig_caption), args=args
        ),
        keep_md=opts.keep_md,
        clean_supporting=opts.self_contained,
        base_format=html_document_base(
            smart=opts.smart,
            lib_dir=opts.lib_dir,
            self_contained=opts.self_contained,
            mathjax=opts.mathjax,
            pandoc_args=opts.pandoc_args,
        ),
    )


__all__ = [
    "DEFAULT_MATHJAX_URL",
    "HtmlOptions",
    "html_document",
    "html_document_base",
    "mathjax_args",
]
