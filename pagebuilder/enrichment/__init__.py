"""Enrichment pass: responsive, interaction, motion, token, CSS and dynamic-content extraction."""

from .css import component_selector, css_property_name, generate_custom_css
from .dynamic import detect_dynamic_content
from .enricher import enrich_widget
from .interactions import extract_focus_effects, extract_hover_effects, parse_transition
from .models import (
    ColorPalette,
    DesignTokenReference,
    DynamicContent,
    EntranceAnimation,
    HoverEffects,
    MotionEffects,
    ScrollEffect,
    StickyEffect,
    TransitionSpec,
    TypographySystem,
    WidgetEnrichment,
)
from .motion import classify_entrance, extract_entrance_animation, extract_motion_effects, parse_duration
from .responsive import extract_responsive_settings
from .tokens import build_design_token_reference, link_to_design_tokens

__all__ = [
    "ColorPalette",
    "DesignTokenReference",
    "DynamicContent",
    "EntranceAnimation",
    "HoverEffects",
    "MotionEffects",
    "ScrollEffect",
    "StickyEffect",
    "TransitionSpec",
    "TypographySystem",
    "WidgetEnrichment",
    "build_design_token_reference",
    "classify_entrance",
    "component_selector",
    "css_property_name",
    "detect_dynamic_content",
    "enrich_widget",
    "extract_entrance_animation",
    "extract_focus_effects",
    "extract_hover_effects",
    "extract_motion_effects",
    "extract_responsive_settings",
    "generate_custom_css",
    "link_to_design_tokens",
    "parse_duration",
    "parse_transition",
]
