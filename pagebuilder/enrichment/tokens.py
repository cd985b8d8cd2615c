"""Design-token reference building and linking."""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Tuple

from ..models import RecognizedComponent
from ..parsers.colors import normalize_color_to_hex
from ..parsers.dimensions import format_number, parse_pixels
from .models import ColorPalette, DesignTokenReference, TypographySystem

_COLOR_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("color", "color"),
    ("background_color", "background-color"),
    ("border_color", "border-color"),
)


def primary_font_family(value: Optional[str]) -> Optional[str]:
    """Return the first family of a font stack, unquoted and lowercased."""
    if not value:
        return None
    first = value.split(",")[0].strip().strip("'\"").strip()
    return first.lower() or None


def build_design_token_reference(
    palette: Optional[ColorPalette] = None,
    typography: Optional[TypographySystem] = None,
) -> DesignTokenReference:
    colors: Dict[str, str] = {}
    fonts: Dict[str, str] = {}
    sizes: Dict[str, str] = {}

    if palette is not None:
        buckets: Iterable[Tuple[str, list]] = (
            ("primary", palette.primary),
            ("secondary", palette.secondary),
            ("accent", palette.accent),
            ("neutral", palette.neutral),
        )
        for prefix, values in buckets:
            for index, value in enumerate(values, start=1):
                key = normalize_color_to_hex(value)
                if key:
                    colors[key] = f"{prefix}-{index}"
        for name in ("success", "error", "warning", "info"):
            key = normalize_color_to_hex(getattr(palette, name))
            if key:
                colors[key] = name

    if typography is not None:
        for family in typography.font_families:
            key = primary_font_family(family)
            if key:
                fonts[key] = family.split(",")[0].strip().strip("'\"")
        for name, size in typography.type_scale.items():
            pixels = parse_pixels(size)
            if pixels:
                sizes[f"{format_number(pixels)}px"] = name

    return DesignTokenReference(colors=colors, fonts=fonts, sizes=sizes)


def link_to_design_tokens(
    component: RecognizedComponent, reference: DesignTokenReference
) -> Dict[str, str]:
    """Return ``{css-property: token}`` for every style value found in the reference."""
    links: Dict[str, str] = {}
    styles = component.styles
    for field_name, css_name in _COLOR_FIELDS:
        key = normalize_color_to_hex(styles.get(field_name))
        if key and key in reference.colors:
            links[css_name] = reference.colors[key]

    family = primary_font_family(styles.font_family)
    if family and family in reference.fonts:
        links["font-family"] = reference.fonts[family]

    if styles.font_size and styles.font_size.strip() in reference.sizes:
        links["font-size"] = reference.sizes[styles.font_size.strip()]
    return links


__all__ = ["build_design_token_reference", "link_to_design_tokens", "primary_font_family"]
