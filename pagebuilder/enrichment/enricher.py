"""Attach enrichment results to mapped widgets."""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict

from ..logging import get_logger
from ..models import RecognizedComponent, WidgetNode
from ..parsers.colors import is_transparent
from .css import generate_custom_css
from .dynamic import detect_dynamic_content
from .interactions import extract_focus_effects, extract_hover_effects
from .models import WidgetEnrichment
from .motion import extract_entrance_animation, extract_motion_effects
from .responsive import extract_responsive_settings
from .tokens import link_to_design_tokens

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from ..context import ExportContext

_LOGGER = get_logger("enrichment")

# Setting values on *_color keys that select a mode rather than name a colour.
_COLOR_KEYWORDS = frozenset({"default", "custom", "inherit", "initial", "unset", "currentcolor"})


def _register_colors(widget: WidgetNode, context: "ExportContext") -> Dict[str, str]:
    globals_: Dict[str, str] = {}
    for key, value in widget.settings.items():
        if not isinstance(value, str) or is_transparent(value) or value.lower() in _COLOR_KEYWORDS:
            continue
        if key == "color" or key.endswith("_color"):
            globals_[key] = context.register_color(value)
    return globals_


def enrich_widget(
    widget: WidgetNode,
    component: RecognizedComponent,
    context: "ExportContext",
    *,
    custom_css: bool = True,
) -> WidgetNode:
    """Populate ``widget.enrichment`` from the component it was mapped from."""
    enrichment = WidgetEnrichment(
        responsive=extract_responsive_settings(component),
        hover=extract_hover_effects(component),
        focus=extract_focus_effects(component),
        entrance=extract_entrance_animation(component),
        motion=extract_motion_effects(component),
        tokens=link_to_design_tokens(component, context.tokens),
        custom_css=generate_custom_css(component) if custom_css else "",
        dynamic=detect_dynamic_content(component),
        global_colors=_register_colors(widget, context),
    )
    if component.styles.font_family:
        enrichment.global_font = context.register_font(
            component.styles.font_family, component.styles.font_weight or "400"
        )
    if enrichment.dynamic is not None:
        _LOGGER.debug("Widget %s carries dynamic content", widget.id)
    widget.enrichment = enrichment
    return widget


__all__ = ["enrich_widget"]
