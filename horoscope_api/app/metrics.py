"""
Métriques Prometheus pour l'application.

Ce module définit les métriques Prometheus de l'API horoscope, le middleware qui mesure les requêtes
HTTP et la route `/metrics` qui les expose.
"""

import time

from fastapi import APIRouter, Request
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Histogram,
    generate_latest,
)
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

metrics_router = APIRouter(tags=["metrics"])

REQUEST_COUNT = Counter(
    "http_requests_total", "Total HTTP requests", ["method", "route", "status"]
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds", "Latency of HTTP requests", ["route"]
)

# Métier: issue des calculs de zodiaque (ok | invalid_format | invalid_leap_day | invalid_date)
HOROSCOPE_LOOKUPS = Counter(
    "horoscope_lookups_total",
    "Total zodiac lookups by outcome",
    ["outcome"],
)

# Authentification: register | login | login_failed | api_key_generated
AUTH_EVENTS = Counter(
    "auth_events_total",
    "Authentication events",
    ["event"],
)

RATE_LIMIT_BLOCKS = Counter(
    "rate_limit_blocks_total",
    "Total requests blocked by rate limiting",
    ["reason"],
)


def route_label(request: Request) -> str:
    """Label de route à faible cardinalité (gabarit de route, sinon `unmatched`)."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or "unmatched"


@metrics_router.get("/metrics", include_in_schema=False)
def metrics():
    """
    Expose les métriques Prometheus au format texte.

    Returns:
        Response: Réponse HTTP contenant les métriques au format Prometheus.
    """
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    Middleware Prometheus pour mesurer les métriques HTTP.

    Collecte les métriques de comptage des requêtes et de latence par route pour l'exposition
    Prometheus.
    """

    async def dispatch(self, request: Request, call_next):
        """
        Traite une requête HTTP et collecte les métriques.

        Args:
            request: Requête HTTP entrante.
            call_next: Fonction pour appeler le middleware suivant.

        Returns:
            Response: Réponse HTTP avec métriques collectées.
        """
        start = time.perf_counter()
        response: Response = await call_next(request)
        route = route_label(request)
        REQUEST_COUNT.labels(request.method, route, str(response.status_code)).inc()
        REQUEST_LATENCY.labels(route).observe(time.perf_counter() - start)
        return response
