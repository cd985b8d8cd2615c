"""Entrance animation classification and scroll/sticky motion detection."""

from __future__ import annotations

from typing import Optional, Tuple

from ..models import AnimationInfo, RecognizedComponent
from ..parsers.dimensions import parse_dimension, parse_pixels
from .models import EntranceAnimation, MotionEffects, ScrollEffect, StickyEffect

# Checked in order; the first substring hit wins.
ENTRANCE_TYPES: Tuple[Tuple[str, str], ...] = (
    ("fadein", "fadeIn"),
    ("fadeout", "fadeOut"),
    ("slideinup", "slideInUp"),
    ("slideindown", "slideInDown"),
    ("slideinleft", "slideInLeft"),
    ("slideinright", "slideInRight"),
    ("zoomin", "zoomIn"),
    ("zoomout", "zoomOut"),
    ("rotatein", "rotateIn"),
    ("flipin", "flipIn"),
    ("bouncein", "bounceIn"),
)

SCROLL_LIBRARY_MARKERS: Tuple[str, ...] = ("aos-", "scroll-", "wow", "animate__")


def classify_entrance(name: Optional[str]) -> Optional[str]:
    if not name:
        return None
    lowered = name.lower().replace("-", "").replace("_", "")
    for needle, animation in ENTRANCE_TYPES:
        if needle in lowered:
            return animation
    return None


def parse_duration(value: Optional[str]) -> int:
    """Normalise ``300ms`` / ``0.3s`` to milliseconds; anything else is 0."""
    if not value:
        return 0
    text = value.strip().lower()
    try:
        if text.endswith("ms"):
            return int(round(float(text[:-2])))
        if text.endswith("s"):
            return int(round(float(text[:-1]) * 1000))
    except ValueError:
        return 0
    return 0


def _declared_animation(component: RecognizedComponent) -> Optional[AnimationInfo]:
    if component.behavior.animations:
        return component.behavior.animations[0]
    if component.styles.animation_name and component.styles.animation_name != "none":
        return AnimationInfo(
            name=component.styles.animation_name,
            duration=component.styles.animation_duration,
            delay=component.styles.animation_delay,
        )
    return None


def extract_entrance_animation(component: RecognizedComponent) -> Optional[EntranceAnimation]:
    animation = _declared_animation(component)
    if animation is None:
        return None
    name = classify_entrance(animation.name)
    if name is None:
        return None
    return EntranceAnimation(
        name=name,
        duration_ms=parse_duration(animation.duration),
        delay_ms=parse_duration(animation.delay),
        timing_function=animation.timing_function,
    )


def extract_motion_effects(component: RecognizedComponent) -> Optional[MotionEffects]:
    """Combine parallax, sticky and scroll-library signals; None when none fire."""
    styles = component.styles
    parallax = None
    if (styles.background_attachment or "").lower() == "fixed":
        parallax = ScrollEffect(kind="parallax", speed=5, viewport_start=0, viewport_end=100)

    sticky = None
    if (styles.position or "").lower() in ("sticky", "fixed"):
        top = parse_dimension(styles.top)
        bottom = parse_dimension(styles.bottom)
        # The offset is measured from the edge the element sticks to.
        edge_value = styles.bottom if top is None and bottom is not None else styles.top
        offset = max(0, int(round(parse_pixels(edge_value))))
        sticky = StickyEffect(top=top, bottom=bottom, offset=offset)

    scroll = None
    class_name = component.class_name.lower()
    if any(marker in class_name for marker in SCROLL_LIBRARY_MARKERS) or "data-aos" in component.attributes:
        scroll = ScrollEffect(kind="fadeIn", speed=5, viewport_start=0, viewport_end=80)

    if parallax is None and sticky is None and scroll is None:
        return None
    return MotionEffects(parallax=parallax, sticky=sticky, scroll=scroll)


__all__ = [
    "ENTRANCE_TYPES",
    "classify_entrance",
    "extract_entrance_animation",
    "extract_motion_effects",
    "parse_duration",
]
