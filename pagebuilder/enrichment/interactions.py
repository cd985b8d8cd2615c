"""Hover and focus state diffing."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from ..models import RecognizedComponent, StyleSnapshot
from ..parsers.shadows import parse_box_shadow, split_top_level
from .models import HoverEffects, TransitionSpec

TRACKED_FIELDS: Tuple[str, ...] = (
    "transform",
    "background_color",
    "color",
    "border_color",
    "box_shadow",
    "opacity",
)


def parse_transition(value: Optional[str]) -> Optional[TransitionSpec]:
    """Parse the first transition in a list; missing parts take CSS-like defaults."""
    if not value or not value.strip():
        return None
    first = split_top_level(value)[0]
    parts = split_top_level(first, " ")
    defaults = TransitionSpec()
    return TransitionSpec(
        property=parts[0] if len(parts) > 0 else defaults.property,
        duration=parts[1] if len(parts) > 1 else defaults.duration,
        timing_function=parts[2] if len(parts) > 2 else defaults.timing_function,
        delay=parts[3] if len(parts) > 3 else defaults.delay,
    )


def _diff_state(
    component: RecognizedComponent, state: Optional[StyleSnapshot]
) -> Optional[HoverEffects]:
    if state is None:
        return None
    normal = component.states.normal or component.styles

    changed: Dict[str, object] = {}
    for name in TRACKED_FIELDS:
        after = state.get(name)
        if after in (None, "") or after == normal.get(name):
            continue
        if name == "box_shadow":
            shadow = parse_box_shadow(after)
            if shadow is None:
                continue
            changed[name] = shadow
        else:
            changed[name] = after
    if not changed:
        return None

    transition = parse_transition(
        state.transition
        or normal.transition
        or (component.behavior.transitions[0] if component.behavior.transitions else None)
    )
    return HoverEffects(transition=transition, **changed)  # type: ignore[arg-type]


def extract_hover_effects(component: RecognizedComponent) -> Optional[HoverEffects]:
    """Return the tracked properties that change on hover, or None when nothing changes."""
    return _diff_state(component, component.states.hover)


def extract_focus_effects(component: RecognizedComponent) -> Optional[HoverEffects]:
    return _diff_state(component, component.states.focus)


__all__ = ["TRACKED_FIELDS", "extract_focus_effects", "extract_hover_effects", "parse_transition"]
