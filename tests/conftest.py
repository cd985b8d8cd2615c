from __future__ import annotations

import pytest

from pagebuilder.context import ExportContext


@pytest.fixture
def context() -> ExportContext:
    """Provide a fresh export context per test so ids start from the same point."""
    return ExportContext()
