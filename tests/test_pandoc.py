from __future__ import annotations

from pathlib import Path

from slidemill import pandoc
from slidemill.pandoc import (
    Includes,
    copy_supporting_files,
    format_command,
    from_markdown,
    includes_to_pandoc_args,
    pandoc_highlight_args,
    pandoc_path_arg,
    pandoc_variable_arg,
    relative_to,
)


def test_variable_arg_pairs_name_and_value() -> None:
    assert pandoc_variable_arg("duration", 5) == ["--variable", "duration=5"]


def test_highlight_args_use_format_default() -> None:
    assert pandoc_highlight_args("default") == ["--highlight-style", "tango"]
    assert pandoc_highlight_args("default", default="pygments") == [
        "--highlight-style",
        "pygments",
    ]
    assert pandoc_highlight_args("zenburn") == ["--highlight-style", "zenburn"]
    assert pandoc_highlight_args("none") == ["--no-highlight"]
    assert pandoc_highlight_args(None) == ["--no-highlight"]


def test_path_arg_expands_home(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setattr(pandoc, "is_windows", lambda: False)

    assert pandoc_path_arg("~/talk.css") == f"{tmp_path}/talk.css"


def test_path_arg_uses_backslashes_on_windows(monkeypatch) -> None:
    monkeypatch.setattr(pandoc, "is_windows", lambda: True)

    assert pandoc_path_arg("lib/runtime") == "lib\\runtime"


def test_includes_expand_in_fixed_order() -> None:
    includes = Includes(
        in_header=("a.html", "b.html"),
        before_body=("c.html",),
        after_body=("d.html",),
    )

    assert includes_to_pandoc_args(includes) == [
        "--include-in-header",
        "a.html",
        "--include-in-header",
        "b.html",
        "--include-before-body",
        "c.html",
        "--include-after-body",
        "d.html",
    ]
    assert includes_to_pandoc_args(None) == []


def test_includes_from_mapping_accepts_scalars() -> None:
    includes = Includes.from_mapping({"in_header": "head.html"})

    assert includes == Includes(in_header=("head.html",))
    assert Includes.from_mapping(None) is None


def test_from_markdown_toggles_implicit_figures() -> None:
    assert from_markdown(False).endswith("-implicit_figures")
    assert "implicit_figures" not in from_markdown(True)
    assert from_markdown(True, ["-smart"]).endswith("-smart")


def test_relative_to_strips_directory_prefix(tmp_path: Path) -> None:
    assert relative_to(tmp_path, tmp_path / "lib" / "runtime") == "lib/runtime"
    assert relative_to(tmp_path / "out", "/elsewhere/runtime") == "/elsewhere/runtime"
    assert relative_to(".", "lib/runtime") == "lib/runtime"


def test_copy_supporting_files_reuses_existing_copy(tmp_path: Path) -> None:
    source = tmp_path / "runtime"
    source.mkdir()
    (source / "slidy.js").write_text("one", encoding="utf-8")
    files_dir = tmp_path / "out" / "talk_files"

    target = copy_supporting_files(source, files_dir)
    (source / "slidy.js").write_text("two", encoding="utf-8")
    again = copy_supporting_files(source, files_dir)

    assert target == again == files_dir / "runtime"
    assert (target / "slidy.js").read_text(encoding="utf-8") == "one"


def test_format_command_quotes_arguments() -> None:
    assert format_command(["pandoc", "--variable", "footer=Acme Corp"]) == (
        "pandoc --variable 'footer=Acme Corp'"
    )
