"""Compile recognised web-page components into page-builder exports."""

__version__ = "0.1.0"
