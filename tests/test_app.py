"""Tests transverses de l'application: santé, métriques, erreurs génériques et middlewares."""

from fastapi.testclient import TestClient

from horoscope_api.api.deps import get_horoscope_service
from horoscope_api.app.main import create_app
from horoscope_api.core.http_constants import (
    HTTP_INTERNAL_SERVER_ERROR,
    HTTP_NOT_FOUND,
    HTTP_OK,
)


def test_health(client):
    """Teste que l'endpoint de santé retourne un statut OK."""
    r = client.get("/health")
    assert r.status_code == HTTP_OK
    assert r.json()["status"] == "ok"
    assert r.json()["storage"] in {"memory", "memory-fallback", "redis"}


def test_metrics_exposed(client):
    client.get("/api/v1/horoscope?birthdate=1995-12-15")
    r = client.get("/metrics")
    assert r.status_code == HTTP_OK
    assert b"http_requests_total" in r.content
    assert b'horoscope_lookups_total{outcome="ok"}' in r.content


def test_unknown_route(client):
    r = client.get("/api/v1/unknown")
    assert r.status_code == HTTP_NOT_FOUND
    assert r.json() == {"status": "404", "message": "The route /api/v1/unknown does not exist."}


def test_unexpected_error_is_masked():
    """Teste qu'une exception imprévue donne un 500 générique sans détail interne."""

    class BrokenService:
        def get_horoscope(self, birthdate):
            raise RuntimeError("boom")

    app = create_app()
    app.dependency_overrides[get_horoscope_service] = BrokenService
    c = TestClient(app, raise_server_exceptions=False)
    r = c.get("/api/v1/horoscope?birthdate=1995-12-15")
    assert r.status_code == HTTP_INTERNAL_SERVER_ERROR
    assert r.json() == {"error": "InternalServerError", "message": "Something went wrong!"}


def test_request_id_is_propagated(client):
    r = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert r.headers["X-Request-ID"] == "req-123"
    assert r.headers["X-Process-Time-ms"].isdigit()


def test_request_id_is_generated(client):
    r = client.get("/health")
    assert r.headers["X-Request-ID"]


def test_security_headers(client):
    r = client.get("/api/v1/horoscope?birthdate=1995-12-15")
    assert r.headers["X-Content-Type-Options"] == "nosniff"
    assert r.headers["X-Frame-Options"] == "SAMEORIGIN"


def test_cors_allows_configured_origin(client):
    r = client.options(
        "/api/v1/horoscope",
        headers={"Origin": "http://localhost", "Access-Control-Request-Method": "GET"},
    )
    assert r.status_code == HTTP_OK
    assert r.headers["access-control-allow-origin"] == "http://localhost"


def test_openapi_docs_available(client):
    r = client.get("/openapi.json")
    assert r.status_code == HTTP_OK
    assert "/api/v1/horoscope" in r.json()["paths"]
