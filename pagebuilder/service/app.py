"""FastAPI application entrypoint for pagebuilder service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional, TypeVar

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..loader import InputError, parse_page, parse_pages
from ..pipeline import CompileResult, Compiler
from ..templates import TemplateParts
from ..validators import ExportValidationError, ValidationReport, validate_export

_T = TypeVar("_T")


class CompileRequest(BaseModel):
    page: Dict[str, Any] = Field(default_factory=dict)
    components: Optional[List[Dict[str, Any]]] = None
    target: Optional[str] = None
    title: Optional[str] = None
    validate_export: Optional[bool] = None
    optimize: Optional[bool] = None
    strict: bool = False


class ReportModel(BaseModel):
    is_valid: bool
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class CompileResponse(BaseModel):
    target: str
    document: Any
    report: Optional[ReportModel] = None


class TemplatePartsRequest(BaseModel):
    pages: Dict[str, List[Dict[str, Any]]]


class ValidateRequest(BaseModel):
    document: Any = None


class HealthResponse(BaseModel):
    status: str


def _default_compiler() -> Compiler:
    return Compiler()


def _report_model(report: Optional[ValidationReport]) -> Optional[ReportModel]:
    if report is None:
        return None
    return ReportModel(**report.to_dict())


async def _run_blocking(func: Callable[[], _T]) -> _T:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, func)


def create_app(
    compiler_factory: Callable[[], Compiler] = _default_compiler,
) -> FastAPI:
    """Create the FastAPI application exposing pagebuilder operations."""

    app = FastAPI(title="PageBuilder Service", version="1.0.0")

    async def get_compiler() -> Compiler:
        # Each request gets its own compiler so export contexts never leak between runs.
        return compiler_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/compile", response_model=CompileResponse)
    async def compile_page(
        payload: CompileRequest,
        compiler: Compiler = Depends(get_compiler),
    ) -> CompileResponse:
        def _run_compile() -> CompileResult:
            raw: Any = payload.page
            if payload.components is not None:
                raw = {**payload.page, "components": payload.components}
            page = parse_page(raw)
            return compiler.compile(
                page.components,
                title=payload.title or page.title,
                target=payload.target,
                palette=page.palette,
                typography=page.typography,
                layout=page.layout,
                page_css=page.page_css,
                validate=payload.validate_export,
                optimize=payload.optimize,
                strict=payload.strict,
            )

        result = await _run_blocking(_run_compile)
        return CompileResponse(
            target=result.target,
            document=result.document,
            report=_report_model(result.report),
        )

    @app.post("/template-parts")
    async def template_parts(
        payload: TemplatePartsRequest,
        compiler: Compiler = Depends(get_compiler),
    ) -> Dict[str, Any]:
        def _run_detect() -> TemplateParts:
            return compiler.detect_template_parts(parse_pages(payload.pages))

        parts = await _run_blocking(_run_detect)
        return parts.to_dict()

    @app.post("/validate", response_model=ReportModel)
    async def validate(payload: ValidateRequest) -> ReportModel:
        report = validate_export(payload.document)
        return ReportModel(**report.to_dict())

    @app.exception_handler(InputError)
    async def input_error_handler(_: Any, exc: InputError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(ExportValidationError)
    async def export_validation_handler(_: Any, exc: ExportValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"detail": str(exc), "report": exc.report.to_dict()},
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(_: Any, exc: ValueError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(RuntimeError)
    async def runtime_error_handler(_: Any, exc: RuntimeError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "0.0.0.0", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port)
