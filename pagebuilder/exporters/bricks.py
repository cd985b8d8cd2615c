"""Bricks Builder renderer: a flat element list linked by parent/children ids."""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Sequence

from ..context import ExportContext
from ..enrichment.models import HoverEffects, MotionEffects, WidgetEnrichment
from ..logging import get_logger
from ..models import WidgetNode
from ..validators import ValidationReport
from .base import Exporter

_LOGGER = get_logger("exporters.bricks")

BRICKS_VERSION = "1.9"

ELEMENT_NAMES = {
    "section": "section",
    "column": "container",
    "heading": "heading",
    "text-editor": "text-basic",
    "button": "button",
    "image": "image",
    "icon": "icon",
    "spacer": "div",
    "divider": "divider",
    "counter": "counter",
    "progress": "progress-bar",
    "testimonial": "testimonials",
    "price-table": "pricing-tables",
    "posts": "posts",
    "tabs": "tabs",
    "toggle": "accordion",
    "image-carousel": "carousel",
    "social-icons": "social-icons",
    "image-gallery": "image-gallery",
    "icon-box": "icon-box",
    "alert": "alert",
    "html": "code",
}

BREAKPOINT_KEYS = {
    "tablet": "tablet_portrait",
    "mobile": "mobile_portrait",
    "laptop": "mobile_landscape",
}

# Elementor-vocabulary setting -> Bricks setting.
SETTING_RENAMES = {
    "title": "text",
    "editor": "text",
    "header_size": "tag",
    "html": "code",
}

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def bricks_animation(name: str) -> str:
    """``slideInUp`` -> ``slide-in-up``."""
    return _CAMEL_BOUNDARY.sub("-", name).lower()


def element_name(node: WidgetNode) -> str:
    if node.el_type != "widget":
        return ELEMENT_NAMES[node.el_type]
    return ELEMENT_NAMES.get(node.widget_type or "", node.widget_type or "div")


def element_label(node: WidgetNode) -> str:
    settings = node.settings
    for key in ("title", "text", "title_text"):
        value = settings.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()[:40]
    return element_name(node).replace("-", " ").title()


def translate_settings(node: WidgetNode) -> Dict[str, Any]:
    settings: Dict[str, Any] = {}
    for key, value in node.settings.items():
        settings[SETTING_RENAMES.get(key, key)] = value
    if node.el_type == "widget" and node.widget_type == "heading" and "tag" not in settings:
        settings["tag"] = "h2"
    if node.el_type == "column" and "_column_size" in settings:
        settings["_width"] = f"{settings.pop('_column_size')}%"
        settings.pop("_inline_size", None)
    return settings


def apply_enrichment(settings: Dict[str, Any], element_id: str, enrichment: WidgetEnrichment) -> None:
    """Fold enrichment results into Bricks control keys."""
    settings["_cssId"] = f"brxe-{element_id}"
    for breakpoint, values in enrichment.responsive.items():
        suffix = BREAKPOINT_KEYS.get(breakpoint)
        if suffix is None:
            continue
        for css_name, value in values.items():
            settings[f"_{css_name.replace('-', '_')}:{suffix}"] = value

    if enrichment.hover is not None:
        _apply_hover(settings, enrichment.hover)

    interactions: List[Dict[str, Any]] = []
    entrance = enrichment.entrance
    if entrance is not None:
        interaction: Dict[str, Any] = {
            "id": f"{element_id}-enter",
            "trigger": "enterView",
            "action": "startAnimation",
            "animationType": bricks_animation(entrance.name),
        }
        if entrance.duration_ms:
            interaction["animationDuration"] = f"{entrance.duration_ms}ms"
        if entrance.delay_ms:
            interaction["animationDelay"] = f"{entrance.delay_ms}ms"
        interactions.append(interaction)
    if interactions:
        settings["_interactions"] = interactions

    if enrichment.motion is not None:
        _apply_motion(settings, enrichment.motion)

    if enrichment.tokens:
        settings["_designTokens"] = dict(enrichment.tokens)
    if enrichment.global_colors:
        settings["_globalColors"] = dict(enrichment.global_colors)
    if enrichment.global_font:
        settings["_globalFont"] = enrichment.global_font

    if enrichment.custom_css:
        settings["_cssCustom"] = enrichment.custom_css

    if enrichment.dynamic is not None:
        settings["dynamicData"] = {
            "type": enrichment.dynamic.type,
            "source": enrichment.dynamic.source,
            "fallback": enrichment.dynamic.fallback,
        }


def _apply_hover(settings: Dict[str, Any], effects: HoverEffects) -> None:
    if effects.transform:
        settings["_transform:hover"] = effects.transform
    if effects.background_color:
        settings["_background:hover"] = {"color": {"raw": effects.background_color}}
    if effects.color:
        settings["_typography:hover"] = {"color": {"raw": effects.color}}
    if effects.border_color:
        settings["_border:hover"] = {"color": {"raw": effects.border_color}}
    if effects.box_shadow is not None:
        settings["_boxShadow:hover"] = effects.box_shadow.original
    if effects.opacity:
        settings["_opacity:hover"] = effects.opacity
    if effects.transition is not None:
        transition = effects.transition
        settings["_cssTransition"] = (
            f"{transition.property} {transition.duration} {transition.timing_function} {transition.delay}"
        )


def _apply_motion(settings: Dict[str, Any], motion: MotionEffects) -> None:
    if motion.sticky is not None:
        settings["_position"] = "sticky"
        settings[f"_{motion.sticky.edge}"] = f"{motion.sticky.offset}px"
    if motion.parallax is not None:
        settings["_motionParallax"] = {"speed": motion.parallax.speed}
    if motion.scroll is not None:
        settings["_motionScroll"] = {
            "effect": bricks_animation(motion.scroll.kind),
            "start": motion.scroll.viewport_start,
            "end": motion.scroll.viewport_end,
        }


class BricksExporter(Exporter):
    """Flatten the section > column > widget tree into Bricks elements."""

    name = "bricks"

    def render(
        self,
        sections: Sequence[WidgetNode],
        title: str,
        context: ExportContext,
        *,
        page_css: Optional[str] = None,
    ) -> Dict[str, Any]:
        elements: List[Dict[str, Any]] = []
        for section in sections:
            self._flatten(section, "0", elements)
        _LOGGER.debug("Rendered %d Bricks elements", len(elements))
        document: Dict[str, Any] = {
            "version": BRICKS_VERSION,
            "title": title,
            "content": elements,
            "globalClasses": [],
            "globalColors": [
                {"id": entry.id, "name": entry.title, "raw": entry.color} for entry in context.colors
            ],
            "globalFonts": [
                {"id": entry.id, "name": entry.title, "family": entry.family, "weight": entry.weight}
                for entry in context.fonts
            ],
        }
        if page_css:
            document["pageSettings"] = {"customCss": page_css}
        return document

    def _flatten(self, node: WidgetNode, parent: str, out: List[Dict[str, Any]]) -> None:
        settings = translate_settings(node)
        if node.enrichment is not None:
            apply_enrichment(settings, node.id, node.enrichment)
        element = {
            "id": node.id,
            "name": element_name(node),
            "parent": parent,
            "children": [child.id for child in node.elements],
            "label": element_label(node),
            "settings": settings,
        }
        out.append(element)
        for child in node.elements:
            self._flatten(child, node.id, out)

    def check_structure(self, document: Dict[str, Any]) -> ValidationReport:
        """Every parent and child reference must resolve to an element in the list."""
        report = ValidationReport()
        content = document.get("content") if isinstance(document, dict) else None
        if not isinstance(content, list):
            report.errors.append("Bricks export must contain a content list")
            return report
        ids = {element.get("id") for element in content if isinstance(element, dict)}
        for element in content:
            if not isinstance(element, dict) or not element.get("name"):
                report.errors.append("Bricks element without a name")
                continue
            parent = element.get("parent")
            if parent not in ("0", 0) and parent not in ids:
                report.errors.append(f"Element {element.get('id')} references missing parent {parent}")
            for child in element.get("children") or []:
                if child not in ids:
                    report.errors.append(f"Element {element.get('id')} references missing child {child}")
        return report


__all__ = ["BricksExporter", "bricks_animation", "element_name"]
