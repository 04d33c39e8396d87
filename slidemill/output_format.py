"""Output format descriptors shared by every format builder."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Protocol

DEFAULT_DPI = 96


class PreProcessor(Protocol):
    """Deferred step producing extra pandoc arguments for one render."""

    def __call__(
        self,
        metadata: Mapping[str, Any],
        input_file: Path,
        runtime: str,
        knit_meta: Sequence[Any],
        files_dir: Path,
        output_dir: Path,
    ) -> list[str]:  # pragma: no cover - Protocol
        """Return additional pandoc arguments."""


@dataclass(frozen=True)
class KnitOptions:
    """Figure settings handed to whatever executes code chunks."""

    chunk: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    keep_md: bool = False


@dataclass(frozen=True)
class PandocOptions:
    """How pandoc is invoked for a format."""

    to: str | None = None
    from_format: str | None = None
    args: tuple[str, ...] = ()
    extensions: tuple[str, ...] = ()

    def source_format(self) -> str | None:
        if self.from_format is None:
            return None
        return self.from_format + "".join(self.extensions)


@dataclass(frozen=True)
class OutputFormat:
    """Everything the render driver needs to run pandoc for one document."""

    knitr: KnitOptions
    pandoc: PandocOptions
    keep_md: bool = False
    clean_supporting: bool = True
    pre_processor: PreProcessor | None = None
    base_format: "OutputFormat | None" = None
    lib_dir: str | None = None


def knitr_options_html(
    fig_width: float,
    fig_height: float,
    fig_retina: float | None,
    keep_md: bool,
) -> KnitOptions:
    chunk = {
        "dev": "png",
        "dpi": DEFAULT_DPI,
        "fig_width": fig_width,
        "fig_height": fig_height,
        "fig_retina": fig_retina,
    }
    return KnitOptions(chunk=MappingProxyType(chunk), keep_md=keep_md)


def pandoc_options(
    *,
    to: str | None = None,
    from_format: str | None = None,
    args: Sequence[str] = (),
    extensions: Sequence[str] = (),
) -> PandocOptions:
    return PandocOptions(
        to=to,
        from_format=from_format,
        args=tuple(args),
        extensions=tuple(extensions),
    )


def merge_output_formats(
    base: OutputFormat | None, overlay: OutputFormat
) -> OutputFormat:
    """Flatten ``overlay`` on top of ``base``.

    Base arguments come first. The overlay's target and source formats win
    when set. Supporting files are cleaned only when both agree, and the
    intermediate markdown is kept when either asks for it. Pre-processors are
    chained with the base output first.
    """

    if overlay.base_format is not None:
        base = (
            overlay.base_format
            if base is None
            else merge_output_formats(base, overlay.base_format)
        )
        overlay = replace(overlay, base_format=None)
    if base is None:
        return overlay
    if base.base_format is not None:
        base = merge_output_formats(None, base)

    pandoc = PandocOptions(
        to=overlay.pandoc.to or base.pandoc.to,
        from_format=overlay.pandoc.from_format or base.pandoc.from_format,
        args=base.pandoc.args + overlay.pandoc.args,
        extensions=base.pandoc.extensions + overlay.pandoc.extensions,
    )
    knitr = KnitOptions(
        chunk=MappingProxyType({**base.knitr.chunk, **overlay.knitr.chunk}),
        keep_md=base.knitr.keep_md or overlay.knitr.keep_md,
    )
    return OutputFormat(
        knitr=knitr,
        pandoc=pandoc,
        keep_md=base.keep_md or overlay.keep_md,
        clean_supporting=base.clean_supporting and overlay.clean_supporting,
        pre_processor=_chain_pre_processors(base.pre_processor, overlay.pre_processor),
        base_format=None,
        lib_dir=overlay.lib_dir or base.lib_dir,
    )


def _chain_pre_processors(
    first: PreProcessor | None,
    second: PreProcessor | None,
) -> PreProcessor | None:
    if first is None:
        return second
    if second is None:
        return first

    def chained(metadata, input_file, runtime, knit_meta, files_dir, output_dir):
        context = (metadata, input_file, runtime, knit_meta, files_dir, output_dir)
        args = list(first(*context))
        args.extend(second(*context))
        return args

    return chained


__all__ = [
    "DEFAULT_DPI",
    "KnitOptions",
    "OutputFormat",
    "PandocOptions",
    "PreProcessor",
    "knitr_options_html",
    "merge_output_formats",
    "pandoc_options",
]
