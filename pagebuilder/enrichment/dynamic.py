"""Detection of template placeholders and shortcodes in component text."""

from __future__ import annotations

import re
from typing import Optional

from ..models import RecognizedComponent
from .models import DynamicContent

_SHORTCODE = re.compile(r"\[[A-Za-z_][\w-]*(?:\s[^\]]*)?\]")
DYNAMIC_ATTRIBUTE = "data-dynamic-content"


def detect_dynamic_content(component: RecognizedComponent) -> Optional[DynamicContent]:
    text = component.props.text_content or ""
    if "{{" in text or "{%" in text:
        return DynamicContent(source=text, fallback=text)
    if _SHORTCODE.search(text):
        return DynamicContent(source=text, fallback=text)
    attribute = component.attributes.get(DYNAMIC_ATTRIBUTE)
    if attribute:
        return DynamicContent(source=attribute, fallback=text)
    return None


__all__ = ["DYNAMIC_ATTRIBUTE", "detect_dynamic_content"]
