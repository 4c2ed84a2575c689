"""Tests for health, metrics and request ID handling."""

import pytest
from httpx import AsyncClient
from starlette.requests import Request

from app.core.observability import route_template
from app.main import app


def make_request(method: str, path: str) -> Request:
    return Request(
        {
            "type": "http",
            "method": method,
            "path": path,
            "root_path": "",
            "headers": [],
            "query_string": b"",
            "app": app,
        }
    )


@pytest.mark.parametrize(
    ("method", "path", "expected"),
    [
        ("GET", "/api/links", "/api/links"),
        ("POST", "/api/links", "/api/links"),
        ("GET", "/api/links/Ab3dE9", "/api/links/{code}"),
        ("DELETE", "/api/links/Ab3dE9", "/api/links/{code}"),
        ("GET", "/Ab3dE9", "/{code}"),
        ("GET", "/healthz", "/healthz"),
        ("GET", "/metrics", "/metrics"),
        ("GET", "/redoc", "/redoc"),
        ("GET", "/a/b/c", "unmatched"),
    ],
)
async def test_route_template(method, path, expected):
    assert route_template(make_request(method, path)) == expected


async def test_route_template_wrong_method_keeps_template():
    assert route_template(make_request("PUT", "/api/links/Ab3dE9")) == "/api/links/{code}"


async def test_healthz(client: AsyncClient):
    response = await client.get("/healthz")

    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is True
    assert data["version"] == "1.0.0"
    assert data["uptimeMs"] >= 0
    assert "timestamp" in data


async def test_healthz_not_treated_as_code(client: AsyncClient):
    await client.post("/api/links", json={"targetUrl": "https://example.com", "code": "healthz"})

    response = await client.get("/healthz")
    assert response.status_code == 200


async def test_request_id_generated(client: AsyncClient):
    response = await client.get("/healthz")
    assert response.headers.get("X-Request-ID")


async def test_request_id_echoed(client: AsyncClient):
    response = await client.get("/healthz", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


async def test_metrics_exposes_redirect_counter(client: AsyncClient):
    await client.post("/api/links", json={"targetUrl": "https://example.com", "code": "Metric1"})
    await client.get("/Metric1")

    response = await client.get("/metrics")

    assert response.status_code == 200
    assert 'redirects_total{status_code="302"}' in response.text
    assert 'link_operations_total{operation="create"}' in response.text
    assert 'endpoint="/{code}"' in response.text
