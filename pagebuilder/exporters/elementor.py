"""Elementor page-document renderer."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Sequence, Union
from urllib.parse import quote

from ..context import ExportContext
from ..enrichment.models import HoverEffects, MotionEffects, WidgetEnrichment
from ..enrichment.motion import parse_duration
from ..logging import get_logger
from ..models import WidgetNode
from ..parsers.dimensions import (
    dimension_set_setting,
    parse_shorthand_dimension,
    size_setting,
)
from ..validators import ValidationReport
from .base import Exporter

_LOGGER = get_logger("exporters.elementor")

# Breakpoint -> Elementor setting suffix; desktop values live in the base settings.
BREAKPOINT_SUFFIXES = {"mobile": "mobile", "tablet": "tablet", "laptop": "laptop"}

HOVER_ANIMATIONS = (("scale", "grow"), ("translatey", "float"), ("rotate", "rotate"))

TEXT_SETTING_KEYS = {
    "heading": "title",
    "text-editor": "editor",
    "button": "text",
    "html": "html",
}


def create_page_settings(context: ExportContext, page_css: Optional[str] = None) -> Dict[str, Any]:
    """Page-level settings carrying the colour and font registries of the run."""
    settings: Dict[str, Any] = {
        "post_status": "draft",
        "template": "default",
        "custom_colors": [
            {"_id": entry.id, "title": entry.title, "color": entry.color} for entry in context.colors
        ],
        "custom_fonts": [
            {
                "_id": entry.id,
                "title": entry.title,
                "typography_typography": "custom",
                "typography_font_family": entry.family,
                "typography_font_weight": entry.weight,
            }
            for entry in context.fonts
        ],
    }
    if page_css:
        settings["page_custom_css"] = page_css
    return settings


def _number(value: float) -> Union[int, float]:
    return int(value) if float(value).is_integer() else value


def hover_animation(effects: HoverEffects) -> Optional[str]:
    transform = (effects.transform or "").lower()
    for needle, name in HOVER_ANIMATIONS:
        if needle in transform:
            return name
    return None


def animation_speed(duration_ms: int) -> str:
    if duration_ms >= 1500:
        return "slow"
    if 0 < duration_ms <= 600:
        return "fast"
    return ""


def dynamic_tag(source: str, fallback: str) -> str:
    """Render an Elementor custom-field dynamic tag."""
    payload = json.dumps({"key": source, "fallback": fallback}, separators=(",", ":"))
    return f'[elementor-tag id="" name="post-custom-field" settings="{quote(payload)}"]'


def apply_enrichment(settings: Dict[str, Any], widget_type: str, enrichment: WidgetEnrichment) -> None:
    """Fold enrichment results into Elementor setting keys."""
    for breakpoint, values in enrichment.responsive.items():
        _apply_responsive(settings, breakpoint, values)

    if enrichment.hover is not None:
        _apply_hover(settings, enrichment.hover)

    entrance = enrichment.entrance
    if entrance is not None:
        settings["_animation"] = entrance.name
        settings["animation_duration"] = animation_speed(entrance.duration_ms)
        if entrance.delay_ms:
            settings["_animation_delay"] = entrance.delay_ms

    if enrichment.motion is not None:
        _apply_motion(settings, enrichment.motion)

    if enrichment.global_colors or enrichment.global_font:
        globals_: Dict[str, str] = {
            key: f"globals/colors?id={color_id}" for key, color_id in enrichment.global_colors.items()
        }
        if enrichment.global_font:
            globals_["typography_typography"] = f"globals/typography?id={enrichment.global_font}"
        settings["__globals__"] = globals_

    if enrichment.custom_css:
        settings["_custom_css"] = enrichment.custom_css

    if enrichment.dynamic is not None:
        key = TEXT_SETTING_KEYS.get(widget_type, "text")
        settings["__dynamic__"] = {
            key: dynamic_tag(enrichment.dynamic.source, enrichment.dynamic.fallback)
        }


def _apply_responsive(settings: Dict[str, Any], breakpoint: str, values: Dict[str, str]) -> None:
    if breakpoint == "desktop":
        if values.get("display") == "none":
            settings["hide_desktop"] = "hidden-desktop"
        return
    suffix = BREAKPOINT_SUFFIXES[breakpoint]
    padding = dimension_set_setting(parse_shorthand_dimension(values.get("padding")))
    if padding is not None:
        settings[f"_padding_{suffix}"] = padding
    margin = dimension_set_setting(parse_shorthand_dimension(values.get("margin")))
    if margin is not None:
        settings[f"_margin_{suffix}"] = margin
    font_size = size_setting(values.get("font-size"))
    if font_size is not None:
        settings[f"typography_font_size_{suffix}"] = font_size
    if values.get("text-align"):
        settings[f"align_{suffix}"] = values["text-align"]
    if values.get("display") == "none":
        settings[f"hide_{suffix}"] = f"hidden-{suffix}"


def _apply_hover(settings: Dict[str, Any], effects: HoverEffects) -> None:
    animation = hover_animation(effects)
    if animation:
        settings["_hover_animation"] = animation
    if effects.transition is not None:
        duration = parse_duration(effects.transition.duration)
        if duration:
            settings["hover_transition_duration"] = {"size": duration, "unit": "ms"}
    if effects.background_color:
        settings["_background_hover_background"] = "classic"
        settings["_background_hover_color"] = effects.background_color
    if effects.color:
        settings["hover_color"] = effects.color
    if effects.border_color:
        settings["_border_hover_color"] = effects.border_color
    if effects.box_shadow is not None:
        shadow = effects.box_shadow
        settings["_box_shadow_hover_box_shadow_type"] = "yes"
        settings["_box_shadow_hover_box_shadow"] = {
            "horizontal": _number(shadow.horizontal.value),
            "vertical": _number(shadow.vertical.value),
            "blur": _number(shadow.blur.value),
            "spread": _number(shadow.spread.value),
            "color": shadow.color,
        }


def _apply_motion(settings: Dict[str, Any], motion: MotionEffects) -> None:
    if motion.parallax is not None:
        effect = motion.parallax
        settings["background_motion_fx_motion_fx_scrolling"] = "yes"
        settings["background_motion_fx_translateY_effect"] = "yes"
        settings["background_motion_fx_translateY_speed"] = {"unit": "px", "size": effect.speed}
        settings["background_motion_fx_translateY_affectedRange"] = {
            "unit": "%",
            "sizes": {"start": effect.viewport_start, "end": effect.viewport_end},
        }
    if motion.scroll is not None:
        effect = motion.scroll
        settings["motion_fx_motion_fx_scrolling"] = "yes"
        settings["motion_fx_opacity_effect"] = "yes"
        settings["motion_fx_opacity_range"] = {
            "unit": "%",
            "sizes": {"start": effect.viewport_start, "end": effect.viewport_end},
        }
    if motion.sticky is not None:
        settings["sticky"] = motion.sticky.edge
        settings["sticky_offset"] = motion.sticky.offset
        settings["sticky_on"] = ["desktop", "tablet", "mobile"]


class ElementorExporter(Exporter):
    """Render sections, columns and widgets as an Elementor page document."""

    name = "elementor"

    def render(
        self,
        sections: Sequence[WidgetNode],
        title: str,
        context: ExportContext,
        *,
        page_css: Optional[str] = None,
    ) -> Dict[str, Any]:
        content = [self.render_node(section) for section in sections]
        _LOGGER.debug("Rendered %d Elementor sections", len(content))
        return {
            "version": self.config.schema_version,
            "title": title,
            "type": "page",
            "content": content,
            "page_settings": create_page_settings(context, page_css),
        }

    def render_node(self, node: WidgetNode) -> Dict[str, Any]:
        settings = dict(node.settings)
        if node.el_type != "widget":
            return {
                "id": node.id,
                "elType": node.el_type,
                "isInner": False,
                "settings": settings,
                "elements": [self.render_node(child) for child in node.elements],
            }
        if node.enrichment is not None:
            apply_enrichment(settings, node.widget_type or "", node.enrichment)
        return {
            "id": node.id,
            "elType": "widget",
            "widgetType": node.widget_type,
            "settings": settings,
            "elements": [],
        }

    def check_structure(self, document: Dict[str, Any]) -> ValidationReport:
        """Check the envelope and the section > column > widget nesting."""
        report = ValidationReport()
        if not isinstance(document, dict):
            report.errors.append("Elementor export must be a mapping")
            return report
        if not document.get("version"):
            report.errors.append("Missing version")
        content = document.get("content")
        if not isinstance(content, list) or not content:
            report.errors.append("No content sections")
            return report
        for index, section in enumerate(content):
            report = report.merge(_check_section(index, section))
        return report


def _check_section(index: int, section: Any) -> ValidationReport:
    report = ValidationReport()
    if not isinstance(section, dict) or section.get("elType") != "section":
        report.errors.append(f"Content item {index} must be a section")
        return report
    columns: List[Any] = section.get("elements") or []
    if not columns:
        report.errors.append(f"Section {section.get('id')} has no columns")
    for column in columns:
        if not isinstance(column, dict) or column.get("elType") != "column":
            report.errors.append(f"Section {section.get('id')} contains a non-column element")
            continue
        for element in column.get("elements") or []:
            if not isinstance(element, dict) or element.get("elType") not in ("widget", "section"):
                report.errors.append(f"Column {column.get('id')} contains an invalid element")
            elif element.get("elType") == "widget" and not element.get("widgetType"):
                report.errors.append(f"Widget {element.get('id')} has no widgetType")
    return report


__all__ = ["ElementorExporter", "apply_enrichment", "create_page_settings"]
