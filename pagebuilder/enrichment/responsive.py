"""Per-breakpoint responsive setting extraction."""

from __future__ import annotations

from typing import Dict, Tuple

from ..models import RecognizedComponent
from .css import css_property_name

RESPONSIVE_FIELDS: Tuple[str, ...] = (
    "display",
    "flex_direction",
    "justify_content",
    "align_items",
    "width",
    "height",
    "min_width",
    "max_width",
    "margin",
    "padding",
    "font_size",
    "line_height",
    "text_align",
)


def extract_responsive_settings(component: RecognizedComponent) -> Dict[str, Dict[str, str]]:
    """Project the allow-listed properties of every captured breakpoint.

    Breakpoints that were not captured are omitted rather than synthesised.
    """
    result: Dict[str, Dict[str, str]] = {}
    for breakpoint, snapshot in component.responsive.present():
        projected: Dict[str, str] = {}
        for name in RESPONSIVE_FIELDS:
            value = snapshot.get(name)
            if value not in (None, ""):
                projected[css_property_name(name)] = value
        result[breakpoint] = projected
    return result


__all__ = ["RESPONSIVE_FIELDS", "extract_responsive_settings"]
