"""Custom CSS generation for components."""

from __future__ import annotations

import re
from typing import Dict, List, Optional

from ..models import RecognizedComponent, StyleSnapshot

MOBILE_QUERY = "@media (max-width: 767px)"
TABLET_QUERY = "@media (min-width: 768px) and (max-width: 1023px)"

_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")


def css_property_name(name: str) -> str:
    """Convert ``fontSize`` or ``font_size`` to ``font-size``."""
    return _CAMEL_BOUNDARY.sub(r"\1-\2", name).replace("_", "-").lower()


def component_selector(component: RecognizedComponent) -> str:
    if component.element_id:
        return f"#{component.element_id}"
    if component.classes:
        return f".{component.classes[0]}"
    return ".element"


def _declarations(values: Dict[str, str], indent: str) -> List[str]:
    return [f"{indent}{css_property_name(name)}: {value};" for name, value in values.items()]


def _block(selector: str, values: Dict[str, str]) -> Optional[str]:
    lines = _declarations(values, "  ")
    if not lines:
        return None
    body = "\n".join(lines)
    return f"{selector} {{\n{body}\n}}"


def _media_block(query: str, selector: str, snapshot: Optional[StyleSnapshot]) -> Optional[str]:
    if snapshot is None:
        return None
    lines = _declarations(snapshot.declarations(), "    ")
    if not lines:
        return None
    body = "\n".join(lines)
    return f"{query} {{\n  {selector} {{\n{body}\n  }}\n}}"


def _hover_changes(component: RecognizedComponent) -> Dict[str, str]:
    hover = component.states.hover
    if hover is None:
        return {}
    normal = component.states.normal or component.styles
    baseline = normal.declarations()
    return {name: value for name, value in hover.declarations().items() if baseline.get(name) != value}


def generate_custom_css(component: RecognizedComponent) -> str:
    """Emit base, hover, pseudo-element and media-query rules; empty when nothing applies."""
    selector = component_selector(component)
    blocks = [
        _block(selector, component.styles.declarations()),
        _block(f"{selector}:hover", _hover_changes(component)),
        _block(f"{selector}::before", component.pseudo.before.declarations()) if component.pseudo.before else None,
        _block(f"{selector}::after", component.pseudo.after.declarations()) if component.pseudo.after else None,
        _media_block(MOBILE_QUERY, selector, component.responsive.mobile),
        _media_block(TABLET_QUERY, selector, component.responsive.tablet),
    ]
    return "\n\n".join(block for block in blocks if block)


__all__ = ["component_selector", "css_property_name", "generate_custom_css"]
