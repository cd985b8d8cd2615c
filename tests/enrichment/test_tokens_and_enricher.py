"""Tests for design tokens, dynamic content and the enrichment pass."""

from __future__ import annotations

from pagebuilder.context import ExportContext
from pagebuilder.enrichment import (
    ColorPalette,
    TypographySystem,
    build_design_token_reference,
    detect_dynamic_content,
    enrich_widget,
    link_to_design_tokens,
)
from pagebuilder.mappers import map_component
from tests._fixtures.component_builder import make_component


def _reference():
    return build_design_token_reference(
        ColorPalette(primary=["#0073E6", "rgb(255, 0, 0)"], neutral=["#fff"], success="#28a745"),
        TypographySystem(font_families=["'Inter', sans-serif"], type_scale={"h1": "3rem", "body": "16px"}),
    )


def test_token_reference_names() -> None:
    reference = _reference()
    assert reference.colors == {
        "#0073e6": "primary-1",
        "#ff0000": "primary-2",
        "#ffffff": "neutral-1",
        "#28a745": "success",
    }
    assert reference.fonts == {"inter": "Inter"}
    assert reference.sizes == {"48px": "h1", "16px": "body"}


def test_link_to_design_tokens_uses_css_property_names() -> None:
    component = make_component(
        style={"color": "#FFF", "background_color": "rgb(0, 115, 230)", "font_family": "Inter, Arial", "font_size": "16px"}
    )
    assert link_to_design_tokens(component, _reference()) == {
        "color": "neutral-1",
        "background-color": "primary-1",
        "font-family": "Inter",
        "font-size": "body",
    }


def test_dynamic_content_detection() -> None:
    assert detect_dynamic_content(make_component(text="Hello {{ user.name }}")).source == "Hello {{ user.name }}"
    assert detect_dynamic_content(make_component(text="[gallery ids=1,2]")) is not None
    attribute = detect_dynamic_content(
        make_component(text="Fallback", attributes={"data-dynamic-content": "price"})
    )
    assert attribute.source == "price"
    assert attribute.fallback == "Fallback"
    assert detect_dynamic_content(make_component(text="Plain text")) is None


def test_enrich_widget_registers_colours_once(context: ExportContext) -> None:
    first = make_component(
        "heading",
        tag="h2",
        text="A",
        style={"color": "#333333", "font_family": "Inter", "font_weight": "700"},
    )
    second = make_component("heading", tag="h3", text="B", style={"color": "#333", "font_family": "inter"})

    widget_a = enrich_widget(map_component(first, context), first, context)
    widget_b = enrich_widget(map_component(second, context), second, context)

    assert widget_a.enrichment.global_colors == widget_b.enrichment.global_colors
    assert len(context.colors) == 1
    assert context.colors[0].color == "#333333"
    assert len(context.fonts) == 2
    assert widget_a.enrichment.global_font != widget_b.enrichment.global_font


def test_enrich_widget_can_skip_custom_css(context: ExportContext) -> None:
    component = make_component("button", text="Go", style={"color": "#fff"})
    widget = enrich_widget(map_component(component, context), component, context, custom_css=False)
    assert widget.enrichment.custom_css == ""
    assert widget.enrichment.hover is None


def test_enrich_widget_ignores_colour_mode_keywords(context: ExportContext) -> None:
    social = make_component(
        "social-icons",
        children=[make_component(tag="a", href="https://github.com/acme")],
    )
    widget = enrich_widget(map_component(social, context), social, context)

    assert widget.settings["icon_color"] == "custom"
    assert "icon_color" not in widget.enrichment.global_colors
    assert all(entry.color != "custom" for entry in context.colors)
