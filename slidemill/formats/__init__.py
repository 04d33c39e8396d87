"""Output formats bundled with Slidemill."""

from __future__ import annotations

from .html import HtmlOptions, html_document, html_document_base
from .slidy import SlidyOptions, slidy_presentation

__all__ = [
    "HtmlOptions",
    "SlidyOptions",
    "html_document",
    "html_document_base",
    "slidy_presentation",
]
