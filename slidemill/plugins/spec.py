"""Hook specifications for Slidemill plugins."""

from __future__ import annotations

from collections.abc import Iterable

from slidemill.config import SlidemillConfig

from ._markers import hookspec
from .types import FormatContribution


class SlidemillHookSpec:
    """Collection of pluggy hook specifications."""

    @hookspec
    def output_formats(self, config: SlidemillConfig) -> Iterable[FormatContribution]:
        """Return output format contributions provided by the plugin."""
