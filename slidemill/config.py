"""Configuration management for Slidemill."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

DEFAULT_CONFIG_DIR = Path("~/.config/slidemill").expanduser()
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.toml"
DEFAULT_PANDOC = "pandoc"


class ConfigError(RuntimeError):
    """Base error for configuration related issues."""


class MissingConfigError(ConfigError):
    """Raised when an explicitly requested configuration file cannot be found."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Configuration file not found at {path}")
        self.path = path


class InvalidConfigError(ConfigError):
    """Raised when the configuration file contains malformed values."""


@dataclass(slots=True)
class SlidemillConfig:
    """In-memory representation of the Slidemill configuration file."""

    pandoc: str = DEFAULT_PANDOC
    assets_root: Path | None = None
    formats: dict[str, dict[str, Any]] = field(default_factory=dict)
    source_path: Path | None = None

    def format_defaults(self, format_id: str) -> dict[str, Any]:
        """Return a copy of the configured default options for ``format_id``."""

        return dict(self.formats.get(format_id.lower(), {}))


def load_config(path: Path | None = None) -> SlidemillConfig:
    """Load configuration from ``path`` or the default location.

    Parameters
    ----------
    path:
        Optional location of the configuration file. When ``None`` the default
        path (``~/.config/slidemill/config.toml``) is used, and a missing file
        simply yields the built-in defaults.

    Raises
    ------
    MissingConfigError
        If an explicitly given file cannot be found.
    InvalidConfigError
        If settings are malformed.
    """

    config_path = (path or DEFAULT_CONFIG_PATH).expanduser()
    if not config_path.exists():
        if path is not None:
            raise MissingConfigError(config_path)
        return SlidemillConfig()

    try:
        with config_path.open("rb") as fh:
            raw = tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise InvalidConfigError(f"Invalid TOML in {config_path}: {exc}") from exc

    config_dir = config_path.parent

    section = raw.get("slidemill", {})
    if not isinstance(section, dict):
        raise InvalidConfigError("'slidemill' section must be a table")

    pandoc_raw = section.get("pandoc", DEFAULT_PANDOC)
    if not isinstance(pandoc_raw, str) or not pandoc_raw.strip():
        raise InvalidConfigError("'pandoc' must be a non-empty string")

    # Relative asset roots are resolved against the configuration directory.
    assets_root: Path | None = None
    assets_raw = section.get("assets_root")
    if assets_raw is not None:
        if not isinstance(assets_raw, str):
            raise InvalidConfigError("'assets_root' must be a string when provided")
        if assets_raw.strip():
            root = Path(assets_raw.strip()).expanduser()
            assets_root = (root if root.is_absolute() else config_dir / root).resolve()

    formats_section = raw.get("formats", {})
    if not isinstance(formats_section, dict):
        raise InvalidConfigError("'formats' section must be a table")
    formats: dict[str, dict[str, Any]] = {}
    for key, value in formats_section.items():
        if not isinstance(value, dict):
            raise InvalidConfigError(f"'formats.{key}' must be a table")
        formats[str(key).lower()] = dict(value)

    return SlidemillConfig(
        pandoc=pandoc_raw.strip(),
        assets_root=assets_root,
        formats=formats,
        source_path=config_path,
    )


def bootstrap_config_file(path: Path) -> bool:
    """Create a default config file if missing.

    Returns True when the file was created, False if it already existed.
    """

    if path.exists():
        return False

    path.parent.mkdir(parents=True, exist_ok=True)
    default_content = (
        "[slidemill]\n"
        'pandoc = "pandoc"\n'
        "\n"
        "[formats.slidy]\n"
        'highlight = "default"\n'
        "self_contained = true\n"
    )
    path.write_text(default_content, encoding="utf-8")
    return True
