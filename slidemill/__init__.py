"""Slidemill: pandoc output formats for Markdown slides and documents."""

from __future__ import annotations

from .assets import AssetsRoot, default_assets
from .errors import ConverterError, FormatError
from .formats import (
    HtmlOptions,
    SlidyOptions,
    html_document,
    html_document_base,
    slidy_presentation,
)
from .output_format import OutputFormat, merge_output_formats

__version__ = "0.1.0"

__all__ = [
    "AssetsRoot",
    "ConverterError",
    "FormatError",
    "HtmlOptions",
    "OutputFormat",
    "SlidyOptions",
    "default_assets",
    "html_document",
    "html_document_base",
    "merge_output_formats",
    "slidy_presentation",
]
