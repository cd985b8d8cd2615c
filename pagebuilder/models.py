"""Core data models shared across pagebuilder components."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, FrozenSet, Iterator, List, Optional, Tuple

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from .enrichment.models import WidgetEnrichment


class ComponentType(str, Enum):
    """Closed set of component kinds recognised upstream."""

    BUTTON = "button"
    HEADING = "heading"
    TEXT = "text"
    PARAGRAPH = "paragraph"
    IMAGE = "image"
    ICON = "icon"
    SPACER = "spacer"
    DIVIDER = "divider"
    ICON_BOX = "icon-box"
    STAR_RATING = "star-rating"
    SOCIAL_ICONS = "social-icons"
    PROGRESS_BAR = "progress-bar"
    COUNTER = "counter"
    TESTIMONIAL = "testimonial"
    IMAGE_CAROUSEL = "image-carousel"
    POSTS_GRID = "posts-grid"
    CALL_TO_ACTION = "call-to-action"
    PRICE_LIST = "price-list"
    PRICE_TABLE = "price-table"
    ALERT = "alert"
    TABS = "tabs"
    TOGGLE = "toggle"
    FLIP_BOX = "flip-box"
    IMAGE_GALLERY = "image-gallery"
    VIDEO_PLAYLIST = "video-playlist"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Any) -> "ComponentType":
        """Resolve a raw type name (including synonyms) to a member, defaulting to UNKNOWN."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return cls.UNKNOWN
        key = value.strip().lower().replace("_", "-")
        key = _TYPE_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            return cls.UNKNOWN


_TYPE_ALIASES = {
    "progress": "progress-bar",
    "carousel": "image-carousel",
    "slider": "image-carousel",
    "posts": "posts-grid",
    "blog-grid": "posts-grid",
    "cta": "call-to-action",
    "accordion": "toggle",
    "flipbox": "flip-box",
    "pricing-table": "price-table",
    "gallery": "image-gallery",
    "playlist": "video-playlist",
}


@dataclass(frozen=True)
class StyleSnapshot:
    """Flat computed-style snapshot for one element; every field is optional."""

    display: Optional[str] = None
    position: Optional[str] = None
    top: Optional[str] = None
    right: Optional[str] = None
    bottom: Optional[str] = None
    left: Optional[str] = None
    z_index: Optional[str] = None
    overflow: Optional[str] = None
    flex_direction: Optional[str] = None
    justify_content: Optional[str] = None
    align_items: Optional[str] = None
    gap: Optional[str] = None
    width: Optional[str] = None
    height: Optional[str] = None
    min_width: Optional[str] = None
    max_width: Optional[str] = None
    min_height: Optional[str] = None
    max_height: Optional[str] = None
    margin: Optional[str] = None
    margin_top: Optional[str] = None
    margin_right: Optional[str] = None
    margin_bottom: Optional[str] = None
    margin_left: Optional[str] = None
    padding: Optional[str] = None
    padding_top: Optional[str] = None
    padding_right: Optional[str] = None
    padding_bottom: Optional[str] = None
    padding_left: Optional[str] = None
    border_width: Optional[str] = None
    border_top_width: Optional[str] = None
    border_right_width: Optional[str] = None
    border_bottom_width: Optional[str] = None
    border_left_width: Optional[str] = None
    border_style: Optional[str] = None
    border_color: Optional[str] = None
    border_radius: Optional[str] = None
    color: Optional[str] = None
    background_color: Optional[str] = None
    background_image: Optional[str] = None
    background_size: Optional[str] = None
    background_position: Optional[str] = None
    background_attachment: Optional[str] = None
    font_family: Optional[str] = None
    font_size: Optional[str] = None
    font_weight: Optional[str] = None
    font_style: Optional[str] = None
    line_height: Optional[str] = None
    letter_spacing: Optional[str] = None
    text_align: Optional[str] = None
    text_transform: Optional[str] = None
    text_decoration: Optional[str] = None
    text_shadow: Optional[str] = None
    box_shadow: Optional[str] = None
    opacity: Optional[str] = None
    transform: Optional[str] = None
    transition: Optional[str] = None
    object_fit: Optional[str] = None
    animation_name: Optional[str] = None
    animation_duration: Optional[str] = None
    animation_delay: Optional[str] = None

    def get(self, name: str) -> Optional[str]:
        if name not in STYLE_FIELDS:
            raise KeyError(f"Unknown style field '{name}'")
        return getattr(self, name)

    def declarations(self) -> Dict[str, str]:
        """Return the populated fields in declaration order."""
        result: Dict[str, str] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if value not in (None, ""):
                result[item.name] = value
        return result

    def is_empty(self) -> bool:
        return not self.declarations()


STYLE_FIELDS: FrozenSet[str] = frozenset(item.name for item in fields(StyleSnapshot))


@dataclass(frozen=True)
class ComponentProps:
    """Typed element properties read from the markup rather than from styles."""

    text_content: Optional[str] = None
    inner_html: Optional[str] = None
    href: Optional[str] = None
    target: Optional[str] = None
    src: Optional[str] = None
    alt: Optional[str] = None
    icon_class: Optional[str] = None

    def get(self, name: str) -> Optional[str]:
        if name not in PROP_FIELDS:
            raise KeyError(f"Unknown property field '{name}'")
        return getattr(self, name)


PROP_FIELDS: FrozenSet[str] = frozenset(item.name for item in fields(ComponentProps))


@dataclass(frozen=True)
class InteractiveStates:
    """Style snapshots captured in the normal, hover and focus states."""

    normal: Optional[StyleSnapshot] = None
    hover: Optional[StyleSnapshot] = None
    focus: Optional[StyleSnapshot] = None


@dataclass(frozen=True)
class PseudoElements:
    before: Optional[StyleSnapshot] = None
    after: Optional[StyleSnapshot] = None


BREAKPOINTS: Tuple[str, ...] = ("mobile", "tablet", "laptop", "desktop")


@dataclass(frozen=True)
class ResponsiveStyles:
    """Per-breakpoint style overrides."""

    mobile: Optional[StyleSnapshot] = None
    tablet: Optional[StyleSnapshot] = None
    laptop: Optional[StyleSnapshot] = None
    desktop: Optional[StyleSnapshot] = None

    def present(self) -> Iterator[Tuple[str, StyleSnapshot]]:
        for name in BREAKPOINTS:
            snapshot = getattr(self, name)
            if snapshot is not None:
                yield name, snapshot


@dataclass(frozen=True)
class AnimationInfo:
    """Animation declared on an element."""

    name: str
    duration: Optional[str] = None
    delay: Optional[str] = None
    timing_function: Optional[str] = None
    iteration_count: Optional[str] = None


@dataclass(frozen=True)
class BehavioralAnalysis:
    animations: Tuple[AnimationInfo, ...] = ()
    transitions: Tuple[str, ...] = ()


@dataclass
class RecognizedComponent:
    """A recognised UI element with its styles and owned child components."""

    component_type: ComponentType = ComponentType.UNKNOWN
    tag: str = "div"
    element_id: Optional[str] = None
    classes: List[str] = field(default_factory=list)
    attributes: Dict[str, str] = field(default_factory=dict)
    props: ComponentProps = field(default_factory=ComponentProps)
    styles: StyleSnapshot = field(default_factory=StyleSnapshot)
    states: InteractiveStates = field(default_factory=InteractiveStates)
    pseudo: PseudoElements = field(default_factory=PseudoElements)
    responsive: ResponsiveStyles = field(default_factory=ResponsiveStyles)
    behavior: BehavioralAnalysis = field(default_factory=BehavioralAnalysis)
    depth: int = 0
    html: Optional[str] = None
    children: List["RecognizedComponent"] = field(default_factory=list)

    @property
    def text(self) -> str:
        return (self.props.text_content or "").strip()

    @property
    def class_name(self) -> str:
        return " ".join(self.classes)

    def has_class(self, fragment: str) -> bool:
        """Return True when any class contains ``fragment`` (case-insensitive)."""
        needle = fragment.lower()
        return any(needle in cls.lower() for cls in self.classes)

    def walk(self) -> Iterator["RecognizedComponent"]:
        """Yield every descendant depth-first, excluding self."""
        for child in self.children:
            yield child
            yield from child.walk()

    def find_all(
        self,
        *,
        tags: Tuple[str, ...] = (),
        class_contains: Tuple[str, ...] = (),
        attribute: Optional[str] = None,
    ) -> List["RecognizedComponent"]:
        """Return descendants matching any of the given tags, class fragments or attribute."""
        matches: List[RecognizedComponent] = []
        wanted_tags = {tag.lower() for tag in tags}
        for node in self.walk():
            if wanted_tags and node.tag.lower() in wanted_tags:
                matches.append(node)
            elif class_contains and any(node.has_class(item) for item in class_contains):
                matches.append(node)
            elif attribute is not None and attribute in node.attributes:
                matches.append(node)
        return matches

    def find(
        self,
        *,
        tags: Tuple[str, ...] = (),
        class_contains: Tuple[str, ...] = (),
        attribute: Optional[str] = None,
    ) -> Optional["RecognizedComponent"]:
        found = self.find_all(tags=tags, class_contains=class_contains, attribute=attribute)
        return found[0] if found else None


LAYOUT_KINDS: Tuple[str, ...] = ("section", "column", "widget")


@dataclass
class WidgetNode:
    """Output tree node: a section, a column or a widget leaf."""

    el_type: str
    id: str
    widget_type: Optional[str] = None
    settings: Dict[str, Any] = field(default_factory=dict)
    elements: List["WidgetNode"] = field(default_factory=list)
    enrichment: Optional["WidgetEnrichment"] = None

    def __post_init__(self) -> None:
        if self.el_type not in LAYOUT_KINDS:
            raise ValueError(f"Unsupported element type '{self.el_type}'")
        if self.el_type == "widget" and self.elements:
            raise ValueError("Widgets cannot own structural children")
        if self.el_type == "widget" and not self.widget_type:
            raise ValueError("Widgets require a widget type")

    def iter_widgets(self) -> Iterator["WidgetNode"]:
        if self.el_type == "widget":
            yield self
            return
        for element in self.elements:
            yield from element.iter_widgets()


@dataclass
class LayoutNode:
    """Pre-grouped page layout: sections own columns, columns own widget components."""

    kind: str
    component: Optional[RecognizedComponent] = None
    children: List["LayoutNode"] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.kind not in LAYOUT_KINDS:
            raise ValueError(f"Unsupported layout node kind '{self.kind}'")
        if self.kind == "widget" and self.component is None:
            raise ValueError("Widget layout nodes require a component")
