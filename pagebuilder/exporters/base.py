"""Base classes for export-schema renderers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Sequence

from ..assembler import assemble_document, assemble_hierarchy
from ..config import ExportConfig
from ..context import ExportContext
from ..models import LayoutNode, WidgetNode
from ..validators import ValidationReport


class Exporter(ABC):
    """Contract for renderers that turn the widget tree into one builder's schema."""

    name: str = ""

    def __init__(self, config: Optional[ExportConfig] = None) -> None:
        self.config = config or ExportConfig()

    @abstractmethod
    def render(
        self,
        sections: Sequence[WidgetNode],
        title: str,
        context: ExportContext,
        *,
        page_css: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Serialise assembled sections into the target document."""

    def check_structure(self, document: Dict[str, Any]) -> ValidationReport:
        """Schema-specific structural checks; none by default."""
        return ValidationReport()

    def export_document(
        self,
        widgets: Sequence[WidgetNode],
        title: str,
        context: ExportContext,
        *,
        page_css: Optional[str] = None,
    ) -> Dict[str, Any]:
        sections = assemble_document(widgets, context, content_width=self.config.content_width)
        return self.render(sections, title, context, page_css=page_css)

    def export_hierarchy(
        self,
        nodes: Sequence[LayoutNode],
        title: str,
        context: ExportContext,
        *,
        page_css: Optional[str] = None,
    ) -> Dict[str, Any]:
        sections = assemble_hierarchy(
            nodes,
            context,
            content_width=self.config.content_width,
            custom_css=self.config.custom_css,
        )
        return self.render(sections, title, context, page_css=page_css)
