"""Helpers that turn option values into pandoc command-line arguments."""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import sys
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

logger = logging.getLogger(__name__)

PathLike = str | os.PathLike[str]

MARKDOWN_EXTENSIONS = (
    "+autolink_bare_uris",
    "+tex_math_single_backslash",
)


def is_windows() -> bool:
    return sys.platform.startswith("win")


def requires_asset_copy() -> bool:
    """Return True when the host cannot reference bundled assets in place."""

    return is_windows()


def pandoc_path_arg(path: PathLike) -> str:
    """Return ``path`` in the form pandoc expects on this platform."""

    value = os.path.expanduser(os.fspath(path))
    if is_windows():
        value = value.replace("/", "\\")
    return value


def pandoc_variable_arg(name: str, value: Any) -> list[str]:
    """Return a ``--variable name=value`` argument pair."""

    return ["--variable", f"{name}={value}"]


def pandoc_highlight_args(
    highlight: str | None, *, default: str = "tango"
) -> list[str]:
    """Return syntax highlighting arguments.

    ``None`` or ``"none"`` disables highlighting; ``"default"`` selects the
    format specific ``default`` theme.
    """

    if highlight is None or highlight == "none":
        return ["--no-highlight"]
    if highlight == "default":
        highlight = default
    return ["--highlight-style", highlight]


@dataclass(frozen=True)
class Includes:
    """Files to splice into the document header and body."""

    in_header: tuple[str, ...] = ()
    before_body: tuple[str, ...] = ()
    after_body: tuple[str, ...] = ()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "Includes | None":
        if data is None:
            return None
        if isinstance(data, Includes):
            return data
        return cls(
            in_header=as_str_tuple(data.get("in_header")),
            before_body=as_str_tuple(data.get("before_body")),
            after_body=as_str_tuple(data.get("after_body")),
        )


def includes_to_pandoc_args(includes: Includes | None) -> list[str]:
    """Expand include directives into pandoc ``--include-*`` pairs."""

    if includes is None:
        return []
    args: list[str] = []
    for flag, paths in (
        ("--include-in-header", includes.in_header),
        ("--include-before-body", includes.before_body),
        ("--include-after-body", includes.after_body),
    ):
        for path in paths:
            args.extend([flag, pandoc_path_arg(path)])
    return args


def from_markdown(fig_caption: bool = False, extensions: Iterable[str] = ()) -> str:
    """Return the pandoc source format used for Markdown input."""

    parts = ["markdown", *MARKDOWN_EXTENSIONS]
    if not fig_caption:
        parts.append("-implicit_figures")
    parts.extend(extensions)
    return "".join(parts)


def relative_to(directory: PathLike, path: PathLike) -> str:
    """Return ``path`` relative to ``directory`` when it lives underneath it."""

    directory_str = os.fspath(directory).rstrip("/\\")
    path_str = os.fspath(path)
    if directory_str in ("", "."):
        return path_str
    try:
        return Path(path_str).relative_to(directory_str).as_posix()
    except ValueError:
        return path_str


def copy_supporting_files(source: PathLike, files_dir: PathLike) -> Path:
    """Copy the ``source`` directory into ``files_dir`` and return the copy's path.

    An existing copy is reused as is.
    """

    source_path = Path(source)
    target = Path(files_dir) / source_path.name
    if not target.exists():
        logger.debug("Copying %s to %s", source_path, target)
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copytree(source_path, target)
    return target


def format_command(args: Sequence[str]) -> str:
    """Return a shell-safe rendering of a command line."""

    return shlex.join(args)


def as_str_tuple(value: Any) -> tuple[str, ...]:
    """Normalize a scalar or iterable option value to a tuple of strings."""

    if value is None:
        return ()
    if isinstance(value, (str, os.PathLike)):
        return (os.fspath(value),)
    return tuple(
        os.fspath(item) if isinstance(item, os.PathLike) else str(item)
        for item in value
    )


__all__ = [
    "Includes",
    "MARKDOWN_EXTENSIONS",
    "as_str_tuple",
    "copy_supporting_files",
    "format_command",
    "from_markdown",
    "includes_to_pandoc_args",
    "is_windows",
    "pandoc_highlight_args",
    "pandoc_path_arg",
    "pandoc_variable_arg",
    "relative_to",
    "requires_asset_copy",
]
