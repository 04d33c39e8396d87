from __future__ import annotations

from pathlib import Path

import pytest
from slidemill.frontmatter import FrontMatterError, parse_document, read_metadata


def test_parse_document_with_front_matter() -> None:
    parsed = parse_document("---\ntitle: Talk\nauthor: [A, B]\n---\n\n# Intro\n")

    assert parsed.metadata == {"title": "Talk", "author": ["A", "B"]}
    assert parsed.body.strip() == "# Intro"


def test_parse_document_accepts_dot_terminator() -> None:
    parsed = parse_document("---\ntitle: Talk\n...\nbody\n")

    assert parsed.metadata == {"title": "Talk"}


def test_parse_document_without_front_matter() -> None:
    raw = "# Slides\n\n---\n"

    parsed = parse_document(raw)
    assert parsed.metadata == {}
    assert parsed.body == raw


def test_non_mapping_front_matter_is_ignored() -> None:
    assert parse_document("---\n- a\n- b\n---\n").metadata == {}


def test_invalid_yaml_raises() -> None:
    with pytest.raises(FrontMatterError):
        parse_document("---\ntitle: [unclosed\n---\n")


def test_read_metadata(tmp_path: Path) -> None:
    path = tmp_path / "talk.md"
    path.write_text("---\nfooter: Acme\n---\n", encoding="utf-8")

    assert read_metadata(path) == {"footer": "Acme"}
