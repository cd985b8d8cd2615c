"""Tests for the end-to-end compiler."""

from __future__ import annotations

from pathlib import Path

import pytest

from pagebuilder.config import ExportConfig, PageBuilderConfig
from pagebuilder.enrichment import ColorPalette
from pagebuilder.exporters.base import Exporter
from pagebuilder.pipeline import Compiler
from pagebuilder.validators import ExportValidationError
from tests._fixtures.component_builder import make_component


def _components():
    return [
        make_component("heading", tag="h1", text="Welcome", element_id="title", style={"color": "#0073e6"}),
        make_component("button", text="Sign Up", href="/signup", style={"padding": "10px 20px"}),
        make_component("mystery", html="<canvas></canvas>"),
    ]


def test_compile_produces_valid_elementor_document(tmp_path: Path) -> None:
    compiler = Compiler(PageBuilderConfig(root=tmp_path))
    result = compiler.compile(
        _components(),
        title="Home",
        palette=ColorPalette(primary=["#0073e6"]),
    )

    assert result.target == "elementor"
    assert result.report is not None and result.report.is_valid
    widgets = result.document["content"][0]["elements"][0]["elements"]
    assert [widget["widgetType"] for widget in widgets] == ["heading", "button", "html"]
    assert widgets[0]["settings"]["title"] == "Welcome"
    assert result.widgets[0].enrichment.tokens == {"color": "primary-1"}
    assert result.document["title"] == "Home"


def test_compile_uses_configured_target_and_optimisation(tmp_path: Path) -> None:
    config = PageBuilderConfig(root=tmp_path, export=ExportConfig(target="bricks", optimize=True))
    result = Compiler(config).compile(_components())

    assert result.target == "bricks"
    assert result.document["title"] == "Imported Page"
    assert "globalClasses" not in result.document
    names = [element["name"] for element in result.document["content"]]
    assert names == ["section", "container", "heading", "button", "code"]


def test_each_compile_gets_a_fresh_context(tmp_path: Path) -> None:
    compiler = Compiler(PageBuilderConfig(root=tmp_path))
    first = compiler.compile(_components())
    second = compiler.compile(_components())
    assert first.document["content"][0]["id"] == second.document["content"][0]["id"]
    assert first.context is not second.context


class _BrokenExporter(Exporter):
    name = "broken"

    def render(self, sections, title, context, *, page_css=None):  # type: ignore[override]
        return {"version": "1", "content": [{"id": "dup"}, {"id": "dup"}]}


def test_strict_mode_raises_on_validation_errors(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    compiler = Compiler(PageBuilderConfig(root=tmp_path))
    monkeypatch.setattr(compiler, "exporter", lambda target=None: _BrokenExporter())

    lenient = compiler.compile(_components())
    assert lenient.report.errors == ["Duplicate ID found: dup"]

    with pytest.raises(ExportValidationError) as excinfo:
        compiler.compile(_components(), strict=True)
    assert excinfo.value.report.errors == ["Duplicate ID found: dup"]


def test_validation_can_be_disabled(tmp_path: Path) -> None:
    result = Compiler(PageBuilderConfig(root=tmp_path)).compile(_components(), validate=False)
    assert result.report is None


def test_custom_css_pairs_follow_component_order(tmp_path: Path) -> None:
    blocks = Compiler(PageBuilderConfig(root=tmp_path)).custom_css(_components())
    assert [selector for selector, _ in blocks] == ["#title", ".element"]
    assert blocks[0][1].startswith("#title {")


def test_custom_css_keeps_blocks_with_shared_selector(tmp_path: Path) -> None:
    components = [
        make_component("button", text="Buy", classes=["btn"], style={"color": "red"}),
        make_component("button", text="Sell", classes=["btn"], style={"color": "blue"}),
    ]

    blocks = Compiler(PageBuilderConfig(root=tmp_path)).custom_css(components)

    assert [selector for selector, _ in blocks] == [".btn", ".btn"]
    assert "color: red;" in blocks[0][1]
    assert "color: blue;" in blocks[1][1]
