"""Typed results produced by the enrichment pass."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..parsers.dimensions import ParsedDimension
from ..parsers.shadows import ParsedBoxShadow


@dataclass(frozen=True)
class TransitionSpec:
    property: str = "all"
    duration: str = "0.3s"
    timing_function: str = "ease"
    delay: str = "0s"


@dataclass(frozen=True)
class HoverEffects:
    """Tracked properties that change between the normal and an interactive state."""

    transform: Optional[str] = None
    background_color: Optional[str] = None
    color: Optional[str] = None
    border_color: Optional[str] = None
    box_shadow: Optional[ParsedBoxShadow] = None
    opacity: Optional[str] = None
    transition: Optional[TransitionSpec] = None


@dataclass(frozen=True)
class EntranceAnimation:
    name: str
    duration_ms: int = 0
    delay_ms: int = 0
    timing_function: Optional[str] = None


@dataclass(frozen=True)
class ScrollEffect:
    kind: str
    speed: int = 5
    viewport_start: int = 0
    viewport_end: int = 100


@dataclass(frozen=True)
class StickyEffect:
    top: Optional[ParsedDimension] = None
    bottom: Optional[ParsedDimension] = None
    offset: int = 0

    @property
    def edge(self) -> str:
        return "bottom" if self.top is None and self.bottom is not None else "top"


@dataclass(frozen=True)
class MotionEffects:
    parallax: Optional[ScrollEffect] = None
    sticky: Optional[StickyEffect] = None
    scroll: Optional[ScrollEffect] = None


@dataclass(frozen=True)
class DynamicContent:
    source: str
    fallback: str
    type: str = "custom_field"


@dataclass
class WidgetEnrichment:
    """Everything the enrichment pass learned about one widget."""

    responsive: Dict[str, Dict[str, str]] = field(default_factory=dict)
    hover: Optional[HoverEffects] = None
    focus: Optional[HoverEffects] = None
    entrance: Optional[EntranceAnimation] = None
    motion: Optional[MotionEffects] = None
    tokens: Dict[str, str] = field(default_factory=dict)
    custom_css: str = ""
    dynamic: Optional[DynamicContent] = None
    global_colors: Dict[str, str] = field(default_factory=dict)
    global_font: Optional[str] = None


@dataclass
class ColorPalette:
    """Site colour palette supplied by the design-system extractor."""

    primary: List[str] = field(default_factory=list)
    secondary: List[str] = field(default_factory=list)
    accent: List[str] = field(default_factory=list)
    neutral: List[str] = field(default_factory=list)
    success: Optional[str] = None
    error: Optional[str] = None
    warning: Optional[str] = None
    info: Optional[str] = None


@dataclass
class TypographySystem:
    font_families: List[str] = field(default_factory=list)
    type_scale: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class DesignTokenReference:
    """Value-to-token lookups built once per run and never mutated afterwards."""

    colors: Dict[str, str] = field(default_factory=dict)
    fonts: Dict[str, str] = field(default_factory=dict)
    sizes: Dict[str, str] = field(default_factory=dict)


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
]
