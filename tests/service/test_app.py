"""Tests for the FastAPI service mode."""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from pagebuilder.config import PageBuilderConfig
from pagebuilder.pipeline import Compiler
from pagebuilder.service import create_app


@pytest.fixture
def client(tmp_path: Path) -> TestClient:
    app = create_app(lambda: Compiler(PageBuilderConfig(root=tmp_path)))
    return TestClient(app)


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_compile_endpoint_returns_document_and_report(client: TestClient) -> None:
    response = client.post(
        "/compile",
        json={
            "components": [{"componentType": "button", "textContent": "Go", "href": "/go"}],
            "title": "API Page",
        },
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["target"] == "elementor"
    assert payload["document"]["title"] == "API Page"
    assert payload["report"]["is_valid"] is True
    widget = payload["document"]["content"][0]["elements"][0]["elements"][0]
    assert widget["settings"]["link"]["url"] == "/go"


def test_compile_endpoint_rejects_bad_input(client: TestClient) -> None:
    response = client.post("/compile", json={"page": {"components": "nope"}})
    assert response.status_code == 422
    assert response.json()["detail"] == "components must be a list"


def test_compile_endpoint_rejects_unknown_target(client: TestClient) -> None:
    response = client.post("/compile", json={"components": [], "target": "wix"})
    assert response.status_code == 400
    assert "Unknown export target" in response.json()["detail"]


def test_template_parts_endpoint(client: TestClient) -> None:
    footer = {"tagName": "footer", "depth": 1, "textContent": "", "children": [{"tagName": "p", "textContent": "© Acme"}]}
    response = client.post("/template-parts", json={"pages": {"a": [footer], "b": [footer]}})
    assert response.status_code == 200
    data = response.json()
    assert data["footer"]["page_ids"] == ["a", "b"]
    assert data["statistics"]["total_pages"] == 2


def test_validate_endpoint_reports_duplicates(client: TestClient) -> None:
    response = client.post("/validate", json={"document": {"content": [{"id": "x"}, {"id": "x"}]}})
    assert response.status_code == 200
    assert response.json() == {"is_valid": False, "errors": ["Duplicate ID found: x"], "warnings": []}
