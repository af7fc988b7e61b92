"""Integration tests for the validator API routers using FastAPI TestClient."""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from src.shared.constants import INVALID_MESSAGE, VALID_MESSAGE
from src.shared.logging import TRACE_HEADER
from src.swagger_validator.services.staging import list_artifacts
from tests.fixtures import (
    INVALID_YAML,
    MINIMAL_OPENAPI_YAML,
    MISSING_INFO_YAML,
    load_openapi,
    load_swagger,
)


class TestHealthRouter:
    """Tests for the health check endpoint."""

    def test_health_returns_200(self, client):
        resp = client.get("/health")

        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "healthy"
        assert data["service_name"] == "swagger-validator"
        assert data["strategy"] == "memory"
        assert "uptime_seconds" in data

    def test_health_reports_staged_artifacts(self, file_client):
        data = file_client.get("/health").json()
        assert data["strategy"] == "file"
        assert data["details"]["staged_artifacts"] == 0


class TestValidationRouter:
    """Tests for POST /validate."""

    def test_minimal_document_is_valid(self, client):
        resp = client.post("/validate", json={"content": MINIMAL_OPENAPI_YAML})

        assert resp.status_code == 200
        data = resp.json()
        assert data["message"] == VALID_MESSAGE
        assert "error" not in data
        assert data["api"]["openapi"] == "3.0.0"
        assert data["api"]["info"]["title"] == "Test"
        assert data["api"]["info"]["version"] == "1.0.0"
        assert data["api"]["paths"] == {}

    def test_full_dereferenced_document_is_returned(self, client):
        resp = client.post("/validate", json={"content": load_openapi()})

        assert resp.status_code == 200
        api = resp.json()["api"]
        assert api["info"]["description"].startswith("Sample pet store")
        assert set(api["paths"]) == {"/pets", "/pets/{petId}"}
        schema = api["paths"]["/pets/{petId}"]["get"]["responses"]["200"]["content"][
            "application/json"
        ]["schema"]
        assert schema["properties"]["name"] == {"type": "string"}
        assert "components" in api

    def test_swagger_document_is_valid(self, client):
        resp = client.post("/validate", json={"content": load_swagger()})

        assert resp.status_code == 200
        api = resp.json()["api"]
        assert api["swagger"] == "2.0"
        assert "openapi" not in api
        assert api["info"]["title"] == "Legacy"

    def test_invalid_yaml(self, client):
        resp = client.post("/validate", json={"content": INVALID_YAML})

        assert resp.status_code == 400
        data = resp.json()
        assert data["message"] == INVALID_MESSAGE
        assert "api" not in data
        assert data["error"]
        assert "line 1, column" in data["error"]

    def test_schema_violation(self, client):
        resp = client.post("/validate", json={"content": MISSING_INFO_YAML})

        assert resp.status_code == 400
        data = resp.json()
        assert "api" not in data
        assert "info" in data["error"]

    def test_external_reference_is_refused(self, client, tmp_path):
        target = tmp_path / "schemas.yaml"
        target.write_text("Pet:\n  type: object\n", encoding="utf-8")
        missing = tmp_path / "absent.yaml"

        errors = []
        for ref in (f"{target.as_uri()}#/Pet", f"{missing.as_uri()}#/Pet"):
            content = (
                "openapi: 3.0.0\n"
                "info: {title: Test, version: 1.0.0}\n"
                "paths: {}\n"
                "components:\n"
                "  schemas:\n"
                f"    Pet: {{$ref: '{ref}'}}\n"
            )
            resp = client.post("/validate", json={"content": content})
            assert resp.status_code == 400
            errors.append(resp.json()["error"])

        assert all("External references are not supported" in e for e in errors)

    def test_alias_bomb_is_refused(self, client):
        lines = ["a0: &a0 [x, x, x, x, x, x, x, x, x, x]"]
        for level in range(1, 10):
            refs = ", ".join([f"*a{level - 1}"] * 10)
            lines.append(f"a{level}: &a{level} [{refs}]")

        resp = client.post("/validate", json={"content": "\n".join(lines) + "\n"})

        assert resp.status_code == 400
        data = resp.json()
        assert data["message"] == INVALID_MESSAGE
        assert "expands to more than" in data["error"]

    def test_missing_content_field(self, client):
        resp = client.post("/validate", json={"text": MINIMAL_OPENAPI_YAML})

        assert resp.status_code == 400
        assert resp.json() == {
            "message": INVALID_MESSAGE,
            "error": "Missing required field 'content'",
        }

    def test_body_is_not_json(self, client):
        resp = client.post(
            "/validate",
            content=b"openapi: 3.0.0",
            headers={"Content-Type": "application/json"},
        )

        assert resp.status_code == 400
        data = resp.json()
        assert data["message"] == INVALID_MESSAGE
        assert "not valid JSON" in data["error"]

    def test_trace_id_header(self, client):
        resp = client.post("/validate", json={"content": MINIMAL_OPENAPI_YAML})
        assert resp.headers[TRACE_HEADER]

    def test_trace_id_is_propagated(self, client):
        resp = client.get("/health", headers={TRACE_HEADER: "abc-123"})
        assert resp.headers[TRACE_HEADER] == "abc-123"

    def test_same_document_twice(self, client):
        first = client.post("/validate", json={"content": load_openapi()})
        second = client.post("/validate", json={"content": load_openapi()})
        assert first.status_code == second.status_code == 200
        assert first.json() == second.json()


class TestFileStrategyRouter:
    """POST /validate with documents staged on disk."""

    def test_valid_and_cleaned_up(self, file_client, file_config):
        resp = file_client.post("/validate", json={"content": MINIMAL_OPENAPI_YAML})

        assert resp.status_code == 200
        assert resp.json()["api"]["info"]["title"] == "Test"
        assert list_artifacts(file_config.temp_dir) == []

    def test_concurrent_mixed_submissions(self, file_client, file_config):
        texts = [MINIMAL_OPENAPI_YAML, INVALID_YAML, MISSING_INFO_YAML, load_openapi()] * 4

        def _submit(text):
            return file_client.post("/validate", json={"content": text}).status_code

        with ThreadPoolExecutor(max_workers=8) as pool:
            statuses = list(pool.map(_submit, texts))

        assert statuses == [200, 400, 400, 200] * 4
        assert list_artifacts(file_config.temp_dir) == []


class TestEditorPage:
    def test_index_is_served(self, client):
        resp = client.get("/")

        assert resp.status_code == 200
        assert "text/html" in resp.headers["content-type"]
        assert "Swagger Validator" in resp.text
