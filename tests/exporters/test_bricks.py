"""Tests for the Bricks renderer."""

from __future__ import annotations

from pagebuilder.assembler import build_widget
from pagebuilder.context import ExportContext
from pagebuilder.exporters import BricksExporter
from pagebuilder.exporters.bricks import bricks_animation
from pagebuilder.models import AnimationInfo
from tests._fixtures.component_builder import make_component


def test_animation_names_are_kebab_case() -> None:
    assert bricks_animation("slideInUp") == "slide-in-up"
    assert bricks_animation("fadeIn") == "fade-in"


def test_flat_elements_link_parents_and_children(context: ExportContext) -> None:
    heading = make_component(
        "heading",
        tag="h1",
        text="Hello",
        style={"color": "#123456"},
        animations=[AnimationInfo(name="slideInUp", duration="600ms")],
        responsive={"mobile": {"font_size": "20px"}},
    )
    widget = build_widget(heading, context)
    exporter = BricksExporter()
    document = exporter.export_document([widget], "Page", context)

    elements = document["content"]
    assert [element["name"] for element in elements] == ["section", "container", "heading"]
    section, column, rendered = elements
    assert section["parent"] == "0"
    assert section["children"] == [column["id"]]
    assert column["parent"] == section["id"]
    assert column["settings"]["_width"] == "100%"
    assert rendered["parent"] == column["id"]
    assert rendered["label"] == "Hello"
    assert rendered["settings"]["text"] == "Hello"
    assert rendered["settings"]["tag"] == "h1"
    assert rendered["settings"]["_font_size:mobile_portrait"] == "20px"
    assert rendered["settings"]["_interactions"][0]["animationType"] == "slide-in-up"
    assert document["globalColors"][0]["raw"] == "#123456"
    assert exporter.check_structure(document).is_valid


def test_check_structure_flags_dangling_references() -> None:
    report = BricksExporter().check_structure(
        {"content": [{"id": "a", "name": "section", "parent": "zz", "children": ["b"]}]}
    )
    assert report.errors == [
        "Element a references missing parent zz",
        "Element a references missing child b",
    ]


def test_sticky_offset_is_rendered_on_the_pinned_edge(context: ExportContext) -> None:
    bar = make_component("heading", tag="h2", text="Notice", style={"position": "sticky", "bottom": "12px"})
    document = BricksExporter().export_document([build_widget(bar, context)], "Page", context)
    settings = document["content"][-1]["settings"]

    assert settings["_position"] == "sticky"
    assert settings["_bottom"] == "12px"
