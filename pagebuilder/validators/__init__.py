"""Validation package for export outputs."""

from .base import ExportValidationError, ValidationReport, optimize_export, validate_export

__all__ = [
    "ExportValidationError",
    "ValidationReport",
    "optimize_export",
    "validate_export",
]
