"""Tests for the Elementor renderer."""

from __future__ import annotations

import pytest

from pagebuilder.assembler import assemble_hierarchy, build_widget
from pagebuilder.config import ExportConfig
from pagebuilder.context import ExportContext
from pagebuilder.exporters import BricksExporter, ElementorExporter, get_exporter
from pagebuilder.models import AnimationInfo, LayoutNode
from tests._fixtures.component_builder import make_component


def _button():
    return make_component(
        "button",
        text="Buy",
        href="/buy",
        style={"background_color": "#ff0000", "transition": "all 300ms ease"},
        hover={"background_color": "#00ff00", "transform": "scale(1.1)"},
        responsive={"mobile": {"display": "none"}, "tablet": {"padding": "5px 10px"}},
        animations=[AnimationInfo(name="fadeInUp", duration="2s", delay="100ms")],
    )


def test_document_envelope(context: ExportContext) -> None:
    exporter = ElementorExporter(ExportConfig(schema_version="3.20.0"))
    widget = build_widget(_button(), context)
    document = exporter.export_document([widget], "Landing", context, page_css="body { margin: 0; }")

    assert document["version"] == "3.20.0"
    assert document["title"] == "Landing"
    assert document["type"] == "page"
    section = document["content"][0]
    assert section["elType"] == "section"
    assert section["settings"]["layout"] == "boxed"
    assert section["settings"]["content_width"] == {"size": 1140, "unit": "px"}
    column = section["elements"][0]
    assert column["elType"] == "column"
    assert column["settings"]["_column_size"] == 100
    rendered = column["elements"][0]
    assert rendered["widgetType"] == "button"
    assert rendered["elements"] == []
    assert document["page_settings"]["page_custom_css"] == "body { margin: 0; }"
    assert document["page_settings"]["custom_colors"][0]["color"] == "#ff0000"


def test_enrichment_is_rendered_into_settings(context: ExportContext) -> None:
    exporter = ElementorExporter()
    document = exporter.export_document([build_widget(_button(), context)], "Page", context)
    settings = document["content"][0]["elements"][0]["elements"][0]["settings"]

    assert settings["hide_mobile"] == "hidden-mobile"
    assert settings["_padding_tablet"]["right"] == 10
    assert settings["_hover_animation"] == "grow"
    assert settings["hover_transition_duration"] == {"size": 300, "unit": "ms"}
    assert settings["_background_hover_color"] == "#00ff00"
    assert settings["_animation"] == "fadeIn"
    assert settings["animation_duration"] == "slow"
    assert settings["_animation_delay"] == 100
    assert settings["__globals__"]["button_background_color"].startswith("globals/colors?id=color_")
    assert "_custom_css" in settings


def test_hierarchy_splits_columns_evenly(context: ExportContext) -> None:
    nodes = [
        LayoutNode(
            kind="section",
            component=make_component(style={"background_color": "#eeeeee", "padding": "40px 0"}),
            children=[
                LayoutNode(kind="column", children=[LayoutNode(kind="widget", component=make_component("heading", tag="h2", text="A"))]),
                LayoutNode(kind="column", children=[LayoutNode(kind="widget", component=make_component("text", text="B"))]),
                LayoutNode(kind="column"),
            ],
        ),
        LayoutNode(kind="widget", component=make_component("divider")),
    ]
    sections = assemble_hierarchy(nodes, context)

    assert len(sections) == 2
    first, second = sections
    assert first.settings["structure"] == "30"
    assert [column.settings["_column_size"] for column in first.elements] == [33, 33, 33]
    assert first.settings["background_background"] == "classic"
    assert first.settings["padding"]["top"] == 40
    assert second.elements[0].elements[0].widget_type == "divider"


def test_check_structure_reports_problems() -> None:
    exporter = ElementorExporter()
    report = exporter.check_structure(
        {
            "content": [
                {"id": "1", "elType": "section", "elements": []},
                {"id": "2", "elType": "column"},
            ]
        }
    )
    assert "Missing version" in report.errors
    assert "Section 1 has no columns" in report.errors
    assert "Content item 1 must be a section" in report.errors
    assert exporter.check_structure({"version": "1"}).errors == ["No content sections"]


def test_registry_resolves_builtins_and_rejects_unknown() -> None:
    assert isinstance(get_exporter("Elementor"), ElementorExporter)
    assert isinstance(get_exporter("bricks"), BricksExporter)
    with pytest.raises(ValueError):
        get_exporter("wix")


def test_empty_layout_section_keeps_one_full_width_column(context: ExportContext) -> None:
    exporter = ElementorExporter()
    document = exporter.export_hierarchy([LayoutNode(kind="section")], "Empty", context)

    section = document["content"][0]
    assert [column["settings"]["_column_size"] for column in section["elements"]] == [100]
    assert exporter.check_structure(document).is_valid


def test_sticky_top_becomes_sticky_offset(context: ExportContext) -> None:
    header = make_component("heading", tag="h2", text="Menu", style={"position": "sticky", "top": "20px"})
    document = ElementorExporter().export_document([build_widget(header, context)], "Page", context)
    settings = document["content"][0]["elements"][0]["elements"][0]["settings"]

    assert settings["sticky"] == "top"
    assert settings["sticky_offset"] == 20
