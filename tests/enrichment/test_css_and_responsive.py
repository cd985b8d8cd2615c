"""Tests for custom CSS generation and responsive projection."""

from __future__ import annotations

from pagebuilder.enrichment import css_property_name, extract_responsive_settings, generate_custom_css
from tests._fixtures.component_builder import make_component


def test_css_property_name() -> None:
    assert css_property_name("fontSize") == "font-size"
    assert css_property_name("background_color") == "background-color"


def test_custom_css_blocks() -> None:
    component = make_component(
        element_id="cta",
        style={"color": "#fff", "padding": "10px"},
        hover={"color": "#000", "padding": "10px"},
        responsive={"mobile": {"padding": "4px"}},
    )
    css = generate_custom_css(component)

    assert css == (
        "#cta {\n  padding: 10px;\n  color: #fff;\n}\n\n"
        "#cta:hover {\n  color: #000;\n}\n\n"
        "@media (max-width: 767px) {\n  #cta {\n    padding: 4px;\n  }\n}"
    )


def test_custom_css_selector_falls_back_to_class_then_generic() -> None:
    assert generate_custom_css(make_component(classes=["hero", "big"], style={"color": "red"})).startswith(
        ".hero {"
    )
    assert generate_custom_css(make_component(style={"color": "red"})).startswith(".element {")


def test_custom_css_empty_without_styles() -> None:
    assert generate_custom_css(make_component()) == ""


def test_responsive_settings_only_for_captured_breakpoints() -> None:
    component = make_component(
        responsive={
            "tablet": {"padding": "8px", "color": "red"},
            "mobile": {"display": "none", "font_size": "14px"},
            "laptop": {"color": "blue"},
        }
    )
    result = extract_responsive_settings(component)

    assert result == {
        "mobile": {"display": "none", "font-size": "14px"},
        "tablet": {"padding": "8px"},
        "laptop": {},
    }
