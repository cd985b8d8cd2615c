"""Compile recognised components into a page-builder export."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from .assembler import build_widget
from .config import PageBuilderConfig, load_config
from .context import ExportContext
from .enrichment import build_design_token_reference, generate_custom_css
from .enrichment.css import component_selector
from .enrichment.models import ColorPalette, TypographySystem
from .exporters import Exporter, get_exporter
from .logging import get_logger, target_logger
from .models import LayoutNode, RecognizedComponent, WidgetNode
from .templates import TemplatePartDetector, TemplateParts
from .validators import ExportValidationError, ValidationReport, optimize_export, validate_export


@dataclass
class CompileResult:
    """Rendered document plus the state that produced it."""

    document: Any
    target: str
    context: ExportContext
    widgets: List[WidgetNode] = field(default_factory=list)
    report: Optional[ValidationReport] = None


class Compiler:
    """Coordinates mapping, enrichment, assembly, rendering and validation."""

    def __init__(self, config: Optional[PageBuilderConfig] = None) -> None:
        self.config = config or PageBuilderConfig(root=Path.cwd())
        self.logger = get_logger("pipeline")

    @classmethod
    def from_path(cls, path: Path) -> "Compiler":
        return cls(load_config(path))

    def new_context(
        self,
        palette: Optional[ColorPalette] = None,
        typography: Optional[TypographySystem] = None,
    ) -> ExportContext:
        tokens = build_design_token_reference(palette, typography)
        return ExportContext(tokens, base_font_size=self.config.base_font_size)

    def exporter(self, target: Optional[str] = None) -> Exporter:
        return get_exporter(target or self.config.export.target, self.config.export)

    def build_widgets(
        self, components: Sequence[RecognizedComponent], context: ExportContext
    ) -> List[WidgetNode]:
        return [
            build_widget(component, context, custom_css=self.config.export.custom_css)
            for component in components
        ]

    def compile(
        self,
        components: Sequence[RecognizedComponent],
        *,
        title: Optional[str] = None,
        target: Optional[str] = None,
        palette: Optional[ColorPalette] = None,
        typography: Optional[TypographySystem] = None,
        layout: Optional[Sequence[LayoutNode]] = None,
        page_css: Optional[str] = None,
        validate: Optional[bool] = None,
        optimize: Optional[bool] = None,
        strict: bool = False,
    ) -> CompileResult:
        """Compile one page.

        ``layout`` switches to hierarchical assembly; otherwise every component
        becomes one widget inside a single full-width section. With ``strict``
        a report containing errors raises :class:`ExportValidationError`.
        """
        export = self.config.export
        exporter = self.exporter(target)
        context = self.new_context(palette, typography)
        page_title = title or export.title
        log = target_logger("pipeline", exporter.name)

        widgets: List[WidgetNode] = []
        if layout is not None:
            document = exporter.export_hierarchy(layout, page_title, context, page_css=page_css)
        else:
            widgets = self.build_widgets(components, context)
            document = exporter.export_document(widgets, page_title, context, page_css=page_css)
        log.info(
            "Compiled %d %s (%d colours, %d fonts)",
            len(components) if layout is None else len(layout),
            "components" if layout is None else "layout nodes",
            len(context.colors),
            len(context.fonts),
        )

        report: Optional[ValidationReport] = None
        if export.validate if validate is None else validate:
            report = validate_export(document).merge(exporter.check_structure(document))
            for warning in report.warnings:
                log.warning("%s", warning)
            if not report.is_valid:
                for error in report.errors:
                    log.error("%s", error)
                if strict:
                    raise ExportValidationError(
                        f"Export failed validation with {len(report.errors)} error(s)", report
                    )

        if export.optimize if optimize is None else optimize:
            document = optimize_export(document)

        return CompileResult(
            document=document,
            target=exporter.name,
            context=context,
            widgets=widgets,
            report=report,
        )

    def detect_template_parts(
        self, pages: Mapping[str, Sequence[RecognizedComponent]]
    ) -> TemplateParts:
        detector = TemplatePartDetector(self.config.templates, ExportContext())
        parts = detector.detect(pages)
        stats = parts.statistics
        self.logger.info(
            "Template detection over %d pages: header=%s footer=%s sidebar=%s",
            stats.total_pages,
            stats.has_header,
            stats.has_footer,
            stats.has_sidebar,
        )
        return parts

    def custom_css(self, components: Sequence[RecognizedComponent]) -> List[Tuple[str, str]]:
        """Return ``(selector, css)`` pairs in component order.

        Components sharing a selector each keep their own block.
        """
        blocks: List[Tuple[str, str]] = []
        for component in components:
            for node in [component, *component.walk()]:
                css = generate_custom_css(node)
                if css:
                    blocks.append((component_selector(node), css))
        return blocks


__all__ = ["CompileResult", "Compiler"]
