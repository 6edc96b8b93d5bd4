"""
Application principale FastAPI.

Ce module assemble tous les composants de l'API horoscope : middlewares, routes, gestion des
erreurs, métriques et documentation OpenAPI.

Responsabilités du module:
- Initialiser le logging structuré
- Construire l'application FastAPI avec son titre/debug et la documentation `/docs`
- Ajouter les middlewares (sécurité, rate limit, métriques, request id, timing, gzip, CORS)
- Monter les routers (santé, auth, horoscope, métriques)
"""

from __future__ import annotations

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from horoscope_api.api.routes_auth import router as auth_router
from horoscope_api.api.routes_health import router as health_router
from horoscope_api.api.routes_horoscope import router as horoscope_router
from horoscope_api.apigw.errors import register_error_handlers
from horoscope_api.app.metrics import PrometheusMiddleware, metrics_router
from horoscope_api.app.middleware_rate_limit import RateLimitMiddleware
from horoscope_api.core.container import container
from horoscope_api.core.logging import setup_logging
from horoscope_api.middlewares.request_id import RequestIDMiddleware
from horoscope_api.middlewares.security_headers import SecurityHeadersMiddleware
from horoscope_api.middlewares.timing import TimingMiddleware


def create_app() -> FastAPI:
    """
    Construit et retourne l'application FastAPI prête à l'usage.

    Étapes:
    - Configure le logging structuré (structlog)
    - Lit les paramètres d'exécution
    - Ajoute les middlewares (le dernier ajouté est le plus externe)
    - Publie les routes et les gestionnaires d'erreurs
    """
    settings = container.settings
    setup_logging(debug=settings.APP_DEBUG)
    app = FastAPI(
        title="Horoscope API",
        description="API for retrieving zodiac signs based on birthdate.",
        version=settings.APP_VERSION,
        debug=settings.APP_DEBUG,
        docs_url="/docs",
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(PrometheusMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(TimingMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=settings.GZIP_MIN_SIZE)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(o).rstrip("/") for o in settings.CORS_ORIGINS],
        allow_methods=settings.CORS_METHODS,
        allow_headers=["*"],
    )
    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(horoscope_router)
    app.include_router(metrics_router)
    return app


app = create_app()


def main():
    """Point d'entrée: lance uvicorn sur `APP_HOST:APP_PORT`."""
    settings = container.settings
    structlog.get_logger(__name__).info(
        "server_starting", url=settings.BACKEND_URL, port=settings.APP_PORT
    )
    uvicorn.run(app, host=settings.APP_HOST, port=settings.APP_PORT, reload=False)


if __name__ == "__main__":
    main()
