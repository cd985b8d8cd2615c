"""Table-driven mapping for the basic component types."""

from __future__ import annotations

import re
from html import escape
from typing import TYPE_CHECKING, Any, Dict, FrozenSet, Mapping

from ..logging import get_logger
from ..models import PROP_FIELDS, STYLE_FIELDS, ComponentType, RecognizedComponent, WidgetNode
from ..parsers.dimensions import dimension_set_setting, parse_shorthand_dimension, size_setting
from .base import (
    extract_url,
    find_icon_class,
    icon_setting,
    image_setting,
    link_setting,
    lookup,
    make_widget,
    set_path,
)

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from ..context import ExportContext

_LOGGER = get_logger("mappers.generic")

PASSTHROUGH_WIDGET = "html"

WIDGET_TYPES: Mapping[ComponentType, str] = {
    ComponentType.BUTTON: "button",
    ComponentType.HEADING: "heading",
    ComponentType.TEXT: "text-editor",
    ComponentType.PARAGRAPH: "text-editor",
    ComponentType.IMAGE: "image",
    ComponentType.ICON: "icon",
    ComponentType.SPACER: "spacer",
    ComponentType.DIVIDER: "divider",
}

# source field -> target setting path
PROPERTY_MAPS: Mapping[ComponentType, Mapping[str, str]] = {
    ComponentType.BUTTON: {
        "text_content": "text",
        "href": "link.url",
        "background_color": "button_background_color",
        "color": "button_text_color",
        "font_size": "typography_font_size",
        "font_family": "typography_font_family",
        "font_weight": "typography_font_weight",
        "text_align": "align",
        "border_radius": "border_radius",
    },
    ComponentType.HEADING: {
        "text_content": "title",
        "color": "title_color",
        "font_size": "typography_font_size",
        "font_family": "typography_font_family",
        "font_weight": "typography_font_weight",
        "line_height": "typography_line_height",
        "letter_spacing": "typography_letter_spacing",
        "text_align": "align",
        "text_transform": "typography_text_transform",
    },
    ComponentType.TEXT: {
        "inner_html": "editor",
        "color": "text_color",
        "font_size": "typography_font_size",
        "font_family": "typography_font_family",
        "text_align": "align",
    },
    ComponentType.IMAGE: {
        "src": "image.url",
        "alt": "image_alt",
        "object_fit": "object_fit",
        "href": "link.url",
    },
    ComponentType.ICON: {
        "icon_class": "selected_icon.value",
        "color": "primary_color",
        "font_size": "size",
        "href": "link.url",
    },
    ComponentType.SPACER: {
        "height": "space",
    },
    ComponentType.DIVIDER: {
        "border_color": "color",
        "border_width": "weight",
        "border_style": "style",
        "width": "width",
    },
}
PROPERTY_MAPS = {**PROPERTY_MAPS, ComponentType.PARAGRAPH: PROPERTY_MAPS[ComponentType.TEXT]}

# Fields parsed through the dimension grammar into ``{size, unit}`` settings.
DIMENSION_FIELDS: FrozenSet[str] = frozenset(
    {"font_size", "width", "height", "border_width", "border_radius", "letter_spacing"}
)

DEFAULT_SETTINGS: Mapping[ComponentType, Mapping[str, Any]] = {
    ComponentType.BUTTON: {"button_type": "primary", "size": "md"},
    ComponentType.HEADING: {"header_size": "h2"},
    ComponentType.DIVIDER: {"style": "solid"},
}

_HEADING_TAG = re.compile(r"^h([1-6])$", re.IGNORECASE)


def _validate_tables() -> None:
    known = PROP_FIELDS | STYLE_FIELDS
    for component_type, table in PROPERTY_MAPS.items():
        unknown = sorted(set(table) - known)
        if unknown:
            raise ValueError(
                f"Property map for '{component_type.value}' references unknown fields: {', '.join(unknown)}"
            )


_validate_tables()


def apply_property_map(component: RecognizedComponent, table: Mapping[str, str]) -> Dict[str, Any]:
    """Walk a property table, reading props before styles and skipping absent fields."""
    settings: Dict[str, Any] = {}
    for source, target in table.items():
        value = lookup(component, source)
        if value is None:
            continue
        if source in DIMENSION_FIELDS:
            parsed = size_setting(value)
            if parsed is None:
                _LOGGER.debug("Skipping unparsable %s=%r on %s", source, value, component.tag)
                continue
            set_path(settings, target, parsed)
        else:
            set_path(settings, target, value)
    return settings


def map_generic(component: RecognizedComponent, context: "ExportContext") -> WidgetNode:
    """Map button/heading/text/image/icon/spacer/divider components."""
    component_type = component.component_type
    settings: Dict[str, Any] = dict(DEFAULT_SETTINGS.get(component_type, {}))
    settings.update(apply_property_map(component, PROPERTY_MAPS[component_type]))

    refine = _REFINEMENTS.get(component_type)
    if refine is not None:
        refine(component, settings)
    if settings.get("typography_font_size") or settings.get("typography_font_family"):
        settings["typography_typography"] = "custom"
    return make_widget(context, WIDGET_TYPES[component_type], settings)


def map_passthrough(component: RecognizedComponent, context: "ExportContext") -> WidgetNode:
    """Fallback for components without a dedicated widget: keep the raw markup."""
    html = component.props.inner_html or component.html or component.text
    _LOGGER.debug("Passing %s through as raw HTML", component.tag)
    return make_widget(context, PASSTHROUGH_WIDGET, {"html": html or ""})


def _refine_button(component: RecognizedComponent, settings: Dict[str, Any]) -> None:
    padding = dimension_set_setting(parse_shorthand_dimension(component.styles.padding))
    if padding is not None:
        settings["button_padding"] = padding

    radius = size_setting(component.styles.border_radius)
    if radius is not None:
        settings["border_radius"] = radius

    link = link_setting(component.props.href, component.props.target)
    if link is not None:
        settings["link"] = link

    if component.text:
        settings["text"] = component.text


def _refine_heading(component: RecognizedComponent, settings: Dict[str, Any]) -> None:
    match = _HEADING_TAG.match(component.tag)
    settings["header_size"] = f"h{match.group(1)}" if match else "h2"
    if not settings.get("title") and component.text:
        settings["title"] = component.text

    line_height = component.styles.line_height
    if line_height:
        parsed = size_setting(line_height)
        # Unitless line heights are multipliers, not pixels.
        if parsed is not None and not any(char.isalpha() or char == "%" for char in line_height):
            parsed["unit"] = ""
        if parsed is not None:
            settings["typography_line_height"] = parsed

    if component.styles.text_align:
        settings["align"] = component.styles.text_align


def _refine_image(component: RecognizedComponent, settings: Dict[str, Any]) -> None:
    source = component.props.src or extract_url(component.styles.background_image)
    image = image_setting(source)
    if image is not None:
        settings["image"] = image
    else:
        settings.pop("image", None)

    alt = component.props.alt or component.attributes.get("alt")
    if alt:
        settings["image_alt"] = alt

    width = size_setting(component.styles.width)
    height = size_setting(component.styles.height)
    if width is not None or height is not None:
        settings["image_size"] = "custom"
        settings["image_custom_dimension"] = {
            "width": width["size"] if width else "",
            "height": height["size"] if height else "",
        }

    radius = size_setting(component.styles.border_radius)
    if radius is not None:
        settings["image_border_radius"] = radius

    link = link_setting(component.props.href, component.props.target)
    if link is not None:
        settings["link_to"] = "custom"
        settings["link"] = link


def _refine_text(component: RecognizedComponent, settings: Dict[str, Any]) -> None:
    if not settings.get("editor") and component.text:
        settings["editor"] = f"<p>{escape(component.text)}</p>"


def _refine_icon(component: RecognizedComponent, settings: Dict[str, Any]) -> None:
    icon = icon_setting(find_icon_class(component))
    if icon is not None:
        settings["selected_icon"] = icon
    link = link_setting(component.props.href, component.props.target)
    if link is not None:
        settings["link"] = link


_REFINEMENTS = {
    ComponentType.BUTTON: _refine_button,
    ComponentType.HEADING: _refine_heading,
    ComponentType.TEXT: _refine_text,
    ComponentType.PARAGRAPH: _refine_text,
    ComponentType.IMAGE: _refine_image,
    ComponentType.ICON: _refine_icon,
}


__all__ = [
    "DIMENSION_FIELDS",
    "PASSTHROUGH_WIDGET",
    "PROPERTY_MAPS",
    "WIDGET_TYPES",
    "apply_property_map",
    "map_generic",
    "map_passthrough",
]
