"""API tests for system endpoints, request ids and the route-level 404."""

import pytest


@pytest.mark.api
class TestSystemEndpoints:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_api_index_lists_auth_endpoints(self, client):
        response = client.get("/")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert "POST /auth/login" in body["data"]["endpoints"]


@pytest.mark.api
class TestRequestIdAndErrors:
    def test_unknown_route(self, client):
        response = client.get("/nope")

        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["error"]["code"] == "NOT_FOUND"
        assert body["error"]["message"] == "Route not found: GET /nope"
        assert body["error"]["path"] == "/nope"

    def test_config_dump_is_not_exposed(self, client):
        response = client.get("/config")

        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["error"]["code"] == "NOT_FOUND"

    def test_client_request_id_is_echoed(self, client):
        response = client.get("/nope", headers={"x-request-id": "req_abc"})

        assert response.headers["X-Request-Id"] == "req_abc"
        assert response.json()["error"]["requestId"] == "req_abc"

    def test_request_id_generated_when_absent(self, client):
        response = client.get("/health")

        request_id = response.headers["X-Request-Id"]
        assert request_id.startswith("req_")
        prefix, millis, suffix = request_id.split("_")
        assert millis.isdigit()
        assert len(suffix) == 7
