"""YAML front matter parsing for input documents."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

FRONTMATTER_DELIM = "---"


class FrontMatterError(ValueError):
    """Raised when a document's metadata block is not valid YAML."""


@dataclass(slots=True)
class ParsedDocument:
    """Outcome of splitting a document into metadata and body."""

    metadata: dict[str, Any]
    body: str


def parse_document(raw: str) -> ParsedDocument:
    lines = raw.splitlines()
    if not lines or lines[0].strip() != FRONTMATTER_DELIM:
        return ParsedDocument(metadata={}, body=raw)

    closing_index = None
    for index in range(1, len(lines)):
        if lines[index].strip() in (FRONTMATTER_DELIM, "..."):
            closing_index = index
            break
    if closing_index is None:
        return ParsedDocument(metadata={}, body=raw)

    metadata_block = "\n".join(lines[1:closing_index])
    body = "\n".join(lines[closing_index + 1 :])

    try:
        loaded = yaml.safe_load(metadata_block) or {}
    except yaml.YAMLError as exc:
        raise FrontMatterError(f"Invalid YAML front matter: {exc}") from exc

    metadata = loaded if isinstance(loaded, dict) else {}
    return ParsedDocument(metadata=metadata, body=body)


def read_metadata(path: Path) -> dict[str, Any]:
    """Return the front matter metadata of the document at ``path``."""

    return parse_document(path.read_text(encoding="utf-8")).metadata


__all__ = [
    "FRONTMATTER_DELIM",
    "FrontMatterError",
    "ParsedDocument",
    "parse_document",
    "read_metadata",
]
