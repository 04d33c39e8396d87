"""Location of the templates and runtime files bundled with Slidemill."""

from __future__ import annotations

from dataclasses import dataclass
from importlib import resources
from pathlib import Path

RESOURCE_PACKAGE = "slidemill.resources"


@dataclass(frozen=True)
class AssetsRoot:
    """Directory holding bundled assets such as templates and the Slidy runtime."""

    root: Path

    def path(self, *parts: str) -> Path:
        """Return the path of a bundled asset; existence is not checked."""

        return self.root.joinpath(*parts)


def default_assets() -> AssetsRoot:
    """Return the assets shipped inside the installed package."""

    return AssetsRoot(Path(str(resources.files(RESOURCE_PACKAGE))))


def assets_from(root: Path | None) -> AssetsRoot:
    """Return ``root`` as an assets root, falling back to the bundled assets."""

    if root is None:
        return default_assets()
    return AssetsRoot(Path(root))


__all__ = ["AssetsRoot", "RESOURCE_PACKAGE", "assets_from", "default_assets"]
