"""Type definitions for Slidemill plugin contracts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping, Protocol

if TYPE_CHECKING:  # pragma: no cover - type check only
    from ..assets import AssetsRoot
    from ..output_format import OutputFormat


class FormatBuilder(Protocol):
    """Callable turning loose options into an output format descriptor."""

    def __call__(
        self,
        options: Mapping[str, Any],
        *,
        assets: "AssetsRoot",
    ) -> "OutputFormat":  # pragma: no cover - Protocol
        """Build the output format."""


@dataclass(slots=True, frozen=True)
class FormatContribution:
    """Descriptor describing an output format provided by a plugin."""

    format_id: str
    builder: FormatBuilder
    description: str
