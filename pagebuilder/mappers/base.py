"""Shared helpers for widget builders."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, Mapping, MutableMapping, Optional

from ..models import PROP_FIELDS, STYLE_FIELDS, RecognizedComponent, WidgetNode

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from ..context import ExportContext

WidgetBuilder = Callable[[RecognizedComponent, "ExportContext"], WidgetNode]

_NUMBER_PATTERN = re.compile(r"-?\d+(?:\.\d+)?")
_URL_PATTERN = re.compile(r"url\(\s*['\"]?(.*?)['\"]?\s*\)", re.IGNORECASE)


def lookup(component: RecognizedComponent, name: str) -> Optional[str]:
    """Read ``name`` from the component props, then from its computed styles."""
    if name not in PROP_FIELDS and name not in STYLE_FIELDS:
        raise KeyError(f"'{name}' is neither a property nor a style field")
    if name in PROP_FIELDS:
        value = component.props.get(name)
        if value not in (None, ""):
            return value
    if name in STYLE_FIELDS:
        value = component.styles.get(name)
        if value not in (None, ""):
            return value
    return None


def set_path(settings: MutableMapping[str, Any], path: str, value: Any) -> None:
    """Assign ``value`` at a dot-notation ``path``, creating nested mappings."""
    keys = path.split(".")
    target = settings
    for key in keys[:-1]:
        nested = target.get(key)
        if not isinstance(nested, dict):
            nested = {}
            target[key] = nested
        target = nested
    target[keys[-1]] = value


def make_widget(
    context: "ExportContext", widget_type: str, settings: Dict[str, Any]
) -> WidgetNode:
    return WidgetNode(el_type="widget", id=context.next_id(), widget_type=widget_type, settings=settings)


def link_setting(href: Optional[str], target: Optional[str] = None) -> Optional[Dict[str, str]]:
    if not href:
        return None
    return {
        "url": href,
        "is_external": "on" if target == "_blank" else "",
        "nofollow": "",
    }


def icon_setting(icon_class: Optional[str], library: str = "fa-solid") -> Optional[Dict[str, str]]:
    if not icon_class:
        return None
    if "fab " in f"{icon_class} " or icon_class.startswith("fab"):
        library = "fa-brands"
    elif icon_class.startswith("far"):
        library = "fa-regular"
    return {"value": icon_class, "library": library}


def image_setting(url: Optional[str]) -> Optional[Dict[str, str]]:
    if not url:
        return None
    return {"url": url, "id": ""}


def extract_url(background_image: Optional[str]) -> Optional[str]:
    """Unwrap ``url(...)`` from a background-image value."""
    if not background_image:
        return None
    match = _URL_PATTERN.search(background_image)
    return match.group(1) if match else None


def first_number(text: Optional[str]) -> Optional[float]:
    if not text:
        return None
    match = _NUMBER_PATTERN.search(text.replace(",", ""))
    return float(match.group(0)) if match else None


def text_of(component: Optional[RecognizedComponent], default: str = "") -> str:
    if component is None:
        return default
    return component.text or default


def find_icon_class(component: RecognizedComponent) -> Optional[str]:
    """Return the first Font Awesome / dashicons class on the component or its descendants."""
    candidates: Iterable[RecognizedComponent] = [component, *component.walk()]
    for node in candidates:
        if node.props.icon_class:
            return node.props.icon_class
        classes = [cls for cls in node.classes if cls.startswith(("fa-", "dashicons-"))]
        if classes:
            prefix = [cls for cls in node.classes if cls in {"fa", "fas", "far", "fab"}]
            return " ".join(prefix[:1] + classes[:1]) if prefix else f"fas {classes[0]}"
    return None


def yes_no(flag: bool) -> str:
    return "yes" if flag else ""


def compact(settings: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop ``None`` values while keeping falsy scalars like 0 and ''."""
    return {key: value for key, value in settings.items() if value is not None}


__all__ = [
    "WidgetBuilder",
    "compact",
    "extract_url",
    "find_icon_class",
    "first_number",
    "icon_setting",
    "image_setting",
    "link_setting",
    "lookup",
    "make_widget",
    "set_path",
    "text_of",
    "yes_no",
]
