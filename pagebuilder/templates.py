"""Cross-page detection of recurring header, footer and sidebar regions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Sequence

from .config import TemplatePolicy
from .context import ExportContext
from .logging import get_logger
from .models import RecognizedComponent

_LOGGER = get_logger("templates")

PART_TYPES = ("header", "footer", "sidebar")
PART_TITLES = {"header": "Site Header", "footer": "Site Footer", "sidebar": "Sidebar"}
COPYRIGHT_MARKERS = ("©", "copyright", "all rights reserved")
SOCIAL_MARKERS = ("social", "facebook", "twitter", "instagram", "linkedin", "youtube")
ENTIRE_SITE = [{"type": "include", "name": "general", "sub_name": "entire_site"}]


@dataclass
class TemplatePosition:
    top: bool = False
    bottom: bool = False
    left: bool = False
    right: bool = False
    sticky: bool = False


@dataclass
class TemplatePart:
    """A candidate structural region and the pages it was observed on."""

    type: str
    name: str
    html: str
    components: List[RecognizedComponent] = field(default_factory=list)
    confidence: int = 0
    position: TemplatePosition = field(default_factory=TemplatePosition)
    recurring: bool = False
    page_ids: List[str] = field(default_factory=list)
    theme_export: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "name": self.name,
            "html": self.html,
            "confidence": self.confidence,
            "position": vars(self.position).copy(),
            "recurring": self.recurring,
            "page_ids": list(self.page_ids),
            "component_count": len(self.components),
            "theme_export": self.theme_export,
        }


@dataclass
class TemplateStatistics:
    total_pages: int = 0
    has_header: bool = False
    has_footer: bool = False
    has_sidebar: bool = False
    consistency: int = 0


@dataclass
class TemplateParts:
    header: Optional[TemplatePart] = None
    footer: Optional[TemplatePart] = None
    sidebar: Optional[TemplatePart] = None
    other: List[TemplatePart] = field(default_factory=list)
    statistics: TemplateStatistics = field(default_factory=TemplateStatistics)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "header": self.header.to_dict() if self.header else None,
            "footer": self.footer.to_dict() if self.footer else None,
            "sidebar": self.sidebar.to_dict() if self.sidebar else None,
            "other": [part.to_dict() for part in self.other],
            "statistics": vars(self.statistics).copy(),
        }


def _contains(value: Optional[str], *needles: str) -> bool:
    haystack = (value or "").lower()
    return any(needle in haystack for needle in needles)


def _class_text(component: RecognizedComponent) -> str:
    return component.class_name.lower()


def _has_nav(component: RecognizedComponent) -> bool:
    return any(node.tag.lower() == "nav" for node in component.walk())


def _has_copyright(component: RecognizedComponent) -> bool:
    return any(_contains(child.text, *COPYRIGHT_MARKERS) for child in component.children)


def _has_social(component: RecognizedComponent) -> bool:
    return any(_contains(child.class_name, *SOCIAL_MARKERS) for child in component.children)


def _has_widgets(component: RecognizedComponent) -> bool:
    return any(child.has_class("widget") for child in component.children)


def _is_sticky(component: RecognizedComponent) -> bool:
    return (component.styles.position or "").lower() in ("fixed", "sticky")


def is_header(component: RecognizedComponent) -> bool:
    if component.tag.lower() == "header":
        return True
    if _contains(component.element_id, "header", "masthead"):
        return True
    if _contains(_class_text(component), "site-header", "main-header"):
        return True
    return component.depth <= 2 and _has_nav(component)


def is_footer(component: RecognizedComponent) -> bool:
    if component.tag.lower() == "footer":
        return True
    if _contains(component.element_id, "footer", "colophon"):
        return True
    if _contains(_class_text(component), "site-footer", "main-footer"):
        return True
    return _has_copyright(component)


def is_sidebar(component: RecognizedComponent) -> bool:
    if component.tag.lower() == "aside":
        return True
    if _contains(component.element_id, "sidebar", "aside"):
        return True
    if _contains(_class_text(component), "sidebar", "aside"):
        return True
    return _has_widgets(component)


class TemplatePartDetector:
    """Find the best header/footer/sidebar candidate across a batch of pages."""

    def __init__(
        self,
        policy: Optional[TemplatePolicy] = None,
        context: Optional[ExportContext] = None,
    ) -> None:
        self.policy = policy or TemplatePolicy()
        self.context = context or ExportContext()
        self._matchers: Dict[str, Callable[[RecognizedComponent], bool]] = {
            "header": is_header,
            "footer": is_footer,
            "sidebar": is_sidebar,
        }
        self._scorers: Dict[str, Callable[[RecognizedComponent], int]] = {
            "header": self.score_header,
            "footer": self.score_footer,
            "sidebar": self.score_sidebar,
        }

    def score_header(self, component: RecognizedComponent) -> int:
        weights = self.policy.scores
        score = 0
        if component.tag.lower() == "header":
            score += weights.tag
        if _contains(component.element_id, "header"):
            score += weights.id
        if _contains(_class_text(component), "header"):
            score += weights.class_
        if _has_nav(component):
            score += weights.navigation
        if _is_sticky(component):
            score += weights.sticky
        if component.depth <= 1:
            score += weights.top_level
        return min(score, 100)

    def score_footer(self, component: RecognizedComponent) -> int:
        weights = self.policy.scores
        score = 0
        if component.tag.lower() == "footer":
            score += weights.tag
        if _contains(component.element_id, "footer"):
            score += weights.id
        if _contains(_class_text(component), "footer"):
            score += weights.class_
        if _has_copyright(component):
            score += weights.copyright
        if _has_social(component):
            score += weights.social_links
        if component.depth <= 2:
            score += weights.top_level
        return min(score, 100)

    def score_sidebar(self, component: RecognizedComponent) -> int:
        weights = self.policy.scores
        score = 0
        if component.tag.lower() == "aside":
            score += weights.tag
        if _contains(component.element_id, "sidebar"):
            score += weights.id
        if _contains(_class_text(component), "sidebar"):
            score += weights.class_
        if _has_widgets(component):
            score += weights.widgets
        return min(score, 100)

    def detect(self, pages: Mapping[str, Sequence[RecognizedComponent]]) -> TemplateParts:
        """Run detection over ``page id -> top-level components``."""
        total = len(pages)
        result = TemplateParts(statistics=TemplateStatistics(total_pages=total))
        if total == 0:
            return result

        for part_type in PART_TYPES:
            candidates = self._collect(part_type, pages)
            best = self._select(candidates, total)
            setattr(result, part_type, best)
            if best is not None:
                _LOGGER.debug(
                    "%s candidate on %d/%d pages (confidence %d)",
                    part_type,
                    len(best.page_ids),
                    total,
                    best.confidence,
                )

        result.statistics = self._statistics(result, total)
        return result

    def _iter_candidates(self, components: Sequence[RecognizedComponent]) -> Iterator[RecognizedComponent]:
        for component in components:
            if component.depth <= self.policy.max_depth:
                yield component
            for node in component.walk():
                if node.depth <= self.policy.max_depth:
                    yield node

    def _collect(
        self, part_type: str, pages: Mapping[str, Sequence[RecognizedComponent]]
    ) -> Dict[str, TemplatePart]:
        matcher = self._matchers[part_type]
        scorer = self._scorers[part_type]
        candidates: Dict[str, TemplatePart] = {}
        for page_id, components in pages.items():
            for component in self._iter_candidates(components):
                if not matcher(component):
                    continue
                key = signature(component)
                candidate = candidates.get(key)
                if candidate is None:
                    candidate = TemplatePart(
                        type=part_type,
                        name=PART_TITLES[part_type],
                        html=component.props.inner_html or component.html or "",
                        components=[component],
                        confidence=scorer(component),
                        position=detect_position(component),
                    )
                    candidates[key] = candidate
                if page_id not in candidate.page_ids:
                    candidate.page_ids.append(page_id)
        return candidates

    def _select(self, candidates: Dict[str, TemplatePart], total: int) -> Optional[TemplatePart]:
        if not candidates:
            return None
        # max() keeps the first candidate seen on ties.
        best = max(candidates.values(), key=lambda part: len(part.page_ids) * 10 + part.confidence)
        best.recurring = len(best.page_ids) >= total * self.policy.recurring_ratio
        best.theme_export = self.theme_export(best)
        return best

    def theme_export(self, part: TemplatePart) -> Dict[str, Any]:
        """Build a theme-builder template document for the part."""
        widgets = [
            {
                "id": self.context.next_id(),
                "elType": "widget",
                "widgetType": "html",
                "settings": {"html": component.props.inner_html or component.html or ""},
            }
            for component in part.components
        ]
        return {
            "type": part.type,
            "title": part.name,
            "content": {
                "id": f"template_{part.type}",
                "elType": "section",
                "settings": {"layout": "full_width" if part.type == "header" else "boxed"},
                "elements": [
                    {
                        "id": f"{part.type}_column",
                        "elType": "column",
                        "settings": {},
                        "elements": widgets,
                    }
                ],
            },
            "conditions": [dict(item) for item in ENTIRE_SITE] if part.type in ("header", "footer") else [],
        }

    def _statistics(self, parts: TemplateParts, total: int) -> TemplateStatistics:
        threshold = self.policy.presence_threshold
        stats = TemplateStatistics(total_pages=total)
        consistency = 0.0
        for part_type in PART_TYPES:
            part: Optional[TemplatePart] = getattr(parts, part_type)
            present = part is not None and part.confidence >= threshold
            setattr(stats, f"has_{part_type}", present)
            if present and part is not None:
                consistency += (len(part.page_ids) / total) * 33.33
        stats.consistency = int(round(consistency))
        return stats


def signature(component: RecognizedComponent) -> str:
    """Structural identity used to group the same region across pages."""
    return "::".join(
        [
            component.tag.lower(),
            component.element_id or "",
            component.class_name,
            str(len(component.children)),
        ]
    )


def detect_position(component: RecognizedComponent) -> TemplatePosition:
    styles = component.styles
    position = TemplatePosition()
    if _is_sticky(component):
        position.sticky = True
        if (styles.top or "").strip() in ("0", "0px"):
            position.top = True
        if (styles.bottom or "").strip() in ("0", "0px"):
            position.bottom = True
    if component.depth <= 1:
        tag = component.tag.lower()
        if tag == "header":
            position.top = True
        if tag == "footer":
            position.bottom = True
    if component.tag.lower() == "aside" or component.has_class("sidebar"):
        if component.has_class("left"):
            position.left = True
        else:
            position.right = True
    return position


def detect_template_parts(
    pages: Mapping[str, Sequence[RecognizedComponent]],
    policy: Optional[TemplatePolicy] = None,
    context: Optional[ExportContext] = None,
) -> TemplateParts:
    return TemplatePartDetector(policy, context).detect(pages)


__all__ = [
    "TemplatePart",
    "TemplatePartDetector",
    "TemplateParts",
    "TemplatePosition",
    "TemplateStatistics",
    "detect_position",
    "detect_template_parts",
    "signature",
]
