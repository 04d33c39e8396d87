from __future__ import annotations

from pathlib import Path

import pytest
from slidemill.assets import AssetsRoot
from slidemill.services import render as render_service


@pytest.fixture
def assets(tmp_path: Path) -> AssetsRoot:
    """A throwaway assets root with a template and a Slidy runtime bundle."""

    root = tmp_path / "assets"
    slidy_dir = root / "slidy"
    (slidy_dir / "runtime" / "scripts").mkdir(parents=True)
    (slidy_dir / "runtime" / "styles").mkdir(parents=True)
    (slidy_dir / "default.html").write_text("$body$\n", encoding="utf-8")
    (slidy_dir / "runtime" / "scripts" / "slidy.js").write_text("// js\n", encoding="utf-8")
    (slidy_dir / "runtime" / "styles" / "slidy.css").write_text("/* css */\n", encoding="utf-8")
    return AssetsRoot(root)


@pytest.fixture(autouse=True)
def reset_format_registry() -> None:
    """Ensure plugin discovery cache is cleared between tests."""

    render_service.clear_format_registry_cache()
    yield
    render_service.clear_format_registry_cache()
