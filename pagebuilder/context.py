"""Per-run export state: id allocation and global style registries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .enrichment.models import DesignTokenReference
from .parsers.colors import normalize_color_to_hex

DEFAULT_ID_START = 1000


@dataclass(frozen=True)
class GlobalColor:
    id: str
    title: str
    color: str


@dataclass(frozen=True)
class GlobalFont:
    id: str
    title: str
    family: str
    weight: str


class ExportContext:
    """Caller-owned state for one export run.

    Ids are allocated from a counter that starts at ``id_start`` and are
    rendered as lowercase hex. Two contexts never share ids or registries.
    """

    def __init__(
        self,
        tokens: Optional[DesignTokenReference] = None,
        *,
        id_start: int = DEFAULT_ID_START,
        base_font_size: float = 16.0,
    ) -> None:
        self.tokens = tokens or DesignTokenReference()
        self.base_font_size = base_font_size
        self._counter = id_start
        self._colors: Dict[str, GlobalColor] = {}
        self._fonts: Dict[Tuple[str, str], GlobalFont] = {}

    def next_id(self) -> str:
        self._counter += 1
        return format(self._counter, "x")

    def register_color(self, color: str, title: Optional[str] = None) -> str:
        """Register a colour once per distinct value and return its global id."""
        key = normalize_color_to_hex(color) or color
        existing = self._colors.get(key)
        if existing is not None:
            return existing.id
        entry = GlobalColor(
            id=f"color_{self.next_id()}",
            title=title or f"Color {len(self._colors) + 1}",
            color=key,
        )
        self._colors[key] = entry
        return entry.id

    def register_font(self, family: str, weight: str = "400", title: Optional[str] = None) -> str:
        """Register a font family/weight pair once and return its global id."""
        clean_family = family.split(",")[0].strip().strip("'\"")
        key = (clean_family.lower(), str(weight))
        existing = self._fonts.get(key)
        if existing is not None:
            return existing.id
        entry = GlobalFont(
            id=f"font_{self.next_id()}",
            title=title or clean_family,
            family=clean_family,
            weight=str(weight),
        )
        self._fonts[key] = entry
        return entry.id

    @property
    def colors(self) -> List[GlobalColor]:
        return list(self._colors.values())

    @property
    def fonts(self) -> List[GlobalFont]:
        return list(self._fonts.values())


__all__ = ["ExportContext", "GlobalColor", "GlobalFont"]
