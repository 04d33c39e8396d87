from __future__ import annotations

import pytest
from slidemill.errors import FormatError
from slidemill.formats.html import (
    DEFAULT_MATHJAX_URL,
    HtmlOptions,
    html_document,
    html_document_base,
    mathjax_args,
)


def _pre_process(fmt, tmp_path) -> list[str]:
    return fmt.pre_processor({}, tmp_path / "doc.md", "static", [], tmp_path, tmp_path)


def test_base_self_contained_embeds_resources(tmp_path) -> None:
    fmt = html_document_base(self_contained=True)

    assert fmt.pandoc.args[:2] == ("--embed-resources", "--standalone")
    assert fmt.clean_supporting is True


def test_base_not_self_contained_is_standalone_only() -> None:
    fmt = html_document_base(self_contained=False, pandoc_args=["--toc"])

    assert fmt.pandoc.args == ("--standalone", "--toc")
    assert fmt.clean_supporting is False


def test_base_smart_disabled_adds_extension() -> None:
    assert html_document_base(smart=False).pandoc.extensions == ("-smart",)
    assert html_document_base(smart=True).pandoc.extensions == ()


def test_base_rejects_unknown_options() -> None:
    with pytest.raises(FormatError) as exc_info:
        html_document_base(toc_float=True)

    assert "toc_float" in str(exc_info.value)


def test_base_pre_processor_emits_mathjax(tmp_path) -> None:
    assert _pre_process(html_document_base(), tmp_path) == [
        f"--mathjax={DEFAULT_MATHJAX_URL}"
    ]
    assert _pre_process(html_document_base(mathjax=None), tmp_path) == []


def test_mathjax_args() -> None:
    assert mathjax_args("none") == []
    assert mathjax_args("https://example.org/mathjax.js") == [
        "--mathjax=https://example.org/mathjax.js"
    ]


def test_html_document_arguments() -> None:
    fmt = html_document(HtmlOptions(toc=True, css=("site.css",), highlight="kate"))

    assert fmt.pandoc.to == "html"
    assert fmt.pandoc.args == (
        "--toc",
        "--css",
        "site.css",
        "--highlight-style",
        "kate",
    )
    assert fmt.base_format is not None


def test_html_options_from_mapping() -> None:
    options = HtmlOptions.from_mapping({"css": "a.css", "toc": True})

    assert options.css == ("a.css",)
    assert options.toc is True

    with pytest.raises(FormatError):
        HtmlOptions.from_mapping({"incremental": True})
