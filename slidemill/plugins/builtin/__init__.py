"""Built-in Slidemill plugins."""

from __future__ import annotations

from . import html, slidy

BUILTIN_PLUGINS = (html, slidy)

__all__ = ["BUILTIN_PLUGINS"]
