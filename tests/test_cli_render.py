"""Tests for the Click-based Slidemill CLI commands."""

from __future__ import annotations

import subprocess
from pathlib import Path

from click.testing import CliRunner
from slidemill import cli
from slidemill import config as config_module
from slidemill.assets import AssetsRoot
from slidemill.formats import slidy as slidy_module
from slidemill.services import render as render_service


def _write_config(base_dir: Path, assets: AssetsRoot, extra: str = "") -> Path:
    config_path = base_dir / "config.toml"
    config_path.write_text(
        f'[slidemill]\nassets_root = "{assets.root.as_posix()}"\n{extra}',
        encoding="utf-8",
    )
    return config_path


def _write_input(base_dir: Path) -> Path:
    input_file = base_dir / "talk.md"
    input_file.write_text("---\ntitle: Talk\n---\n\n# One\n\n- a\n- b\n", encoding="utf-8")
    return input_file


def test_render_dry_run_prints_command(tmp_path: Path, assets: AssetsRoot, monkeypatch) -> None:
    monkeypatch.setattr(slidy_module, "requires_asset_copy", lambda: False)
    config_path = _write_config(tmp_path, assets)
    input_file = _write_input(tmp_path)

    runner = CliRunner()
    result = runner.invoke(
        cli.cli,
        [
            "-c",
            str(config_path),
            "render",
            str(input_file),
            "--dry-run",
            "--incremental",
            "--duration",
            "5",
            "--footer",
            "Acme",
            "--css",
            "a.css",
            "--css",
            "b.css",
        ],
    )

    assert result.exit_code == 0, result.output
    output = result.output
    assert output.startswith("pandoc ")
    assert "--incremental" in output
    assert "duration=5" in output
    assert "footer=Acme" in output
    assert "--css a.css --css b.css" in output
    assert "slidy-url=" in output
    assert "--highlight-style pygments" in output
    assert not (tmp_path / "talk.html").exists()


def test_render_option_values_are_parsed(tmp_path: Path, assets: AssetsRoot) -> None:
    config_path = _write_config(tmp_path, assets)
    input_file = _write_input(tmp_path)

    runner = CliRunner()
    result = runner.invoke(
        cli.cli,
        [
            "-c",
            str(config_path),
            "render",
            str(input_file),
            "--dry-run",
            "-O",
            "highlight=none",
            "-O",
            "font-adjustment=-1",
            "-O",
            "mathjax=none",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "--no-highlight" in result.output
    assert "font-size-adjustment=-1" in result.output
    assert "--mathjax" not in result.output



def test_render_text_options_are_not_coerced(tmp_path: Path, assets: AssetsRoot) -> None:
    config_path = _write_config(tmp_path, assets)
    input_file = _write_input(tmp_path)

    runner = CliRunner()
    result = runner.invoke(
        cli.cli,
        [
            "-c",
            str(config_path),
            "render",
            str(input_file),
            "--dry-run",
            "-O",
            "footer=No",
            "-O",
            "highlight=off",
            "-O",
            "incremental=yes",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "footer=No" in result.output
    assert "footer=False" not in result.output
    assert "--highlight-style off" in result.output
    assert "--incremental" in result.output

def test_render_runs_pandoc(tmp_path: Path, assets: AssetsRoot, monkeypatch) -> None:
    config_path = _write_config(tmp_path, assets, 'pandoc = "my-pandoc"\n')
    input_file = _write_input(tmp_path)
    seen: dict[str, list[str]] = {}

    def fake_run(args, **kwargs):
        seen["args"] = args
        return subprocess.CompletedProcess(args, 0, "", "")

    monkeypatch.setattr(render_service.subprocess, "run", fake_run)

    runner = CliRunner()
    result = runner.invoke(
        cli.cli,
        ["-c", str(config_path), "render", str(input_file), "-o", str(tmp_path / "o.html")],
    )

    assert result.exit_code == 0, result.output
    assert seen["args"][0] == "my-pandoc"
    assert f"Rendered {input_file} to {tmp_path / 'o.html'}" in result.output


def test_render_reports_invalid_duration(tmp_path: Path, assets: AssetsRoot) -> None:
    config_path = _write_config(tmp_path, assets)
    input_file = _write_input(tmp_path)

    runner = CliRunner()
    result = runner.invoke(
        cli.cli,
        ["-c", str(config_path), "render", str(input_file), "-O", "duration=-4"],
    )

    assert result.exit_code == 1
    assert "positive number" in result.output


def test_render_rejects_malformed_option(tmp_path: Path, assets: AssetsRoot) -> None:
    config_path = _write_config(tmp_path, assets)
    input_file = _write_input(tmp_path)

    runner = CliRunner()
    result = runner.invoke(
        cli.cli,
        ["-c", str(config_path), "render", str(input_file), "-O", "incremental"],
    )

    assert result.exit_code == 1
    assert "Expected KEY=VALUE" in result.output


def test_formats_lists_builtin_formats(tmp_path: Path, assets: AssetsRoot) -> None:
    config_path = _write_config(tmp_path, assets)

    runner = CliRunner()
    result = runner.invoke(cli.cli, ["-c", str(config_path), "formats"])

    assert result.exit_code == 0, result.output
    assert "  - html: Standalone HTML document" in result.output
    assert "  - slidy: Slidy HTML slide presentation" in result.output


def test_missing_explicit_config_is_reported(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(cli.cli, ["-c", str(tmp_path / "nope.toml"), "formats"])

    assert result.exit_code == 1
    assert "Configuration file not found" in result.output


def test_config_command_bootstraps_file(tmp_path: Path, monkeypatch) -> None:
    config_path = tmp_path / "slidemill" / "config.toml"
    monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATH", config_path)

    runner = CliRunner()
    result = runner.invoke(cli.cli, ["config", "--no-edit"])

    assert result.exit_code == 0, result.output
    assert config_path.exists()
    assert f"Created configuration at {config_path}" in result.output


def test_main_returns_exit_code(tmp_path: Path) -> None:
    assert cli.main(["-c", str(tmp_path / "nope.toml"), "formats"]) == 1
