"""Rate limiting par client (adresse IP) à fenêtre glissante.

Limite par défaut: 100 requêtes par fenêtre de 15 minutes, configurable via
`RATE_LIMIT_MAX_REQUESTS` / `RATE_LIMIT_WINDOW_SECONDS`, désactivable via
`RATE_LIMIT_ENABLED`.

En cas de dépassement: réponse 429 `{"error": "Too many requests, please try again later."}`
avec en-tête `Retry-After`, et incrément du compteur Prometheus
`rate_limit_blocks_total{reason="window"}`. Les réponses autorisées portent les en-têtes
`X-RateLimit-Limit` / `X-RateLimit-Remaining` / `X-RateLimit-Reset`.
"""

from __future__ import annotations

import threading
import time
from collections import deque
from dataclasses import dataclass

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from horoscope_api.apigw.errors import create_error_response
from horoscope_api.app.metrics import RATE_LIMIT_BLOCKS
from horoscope_api.core.http_constants import HTTP_TOO_MANY_REQUESTS, MSG_RATE_LIMITED
from horoscope_api.core.settings import get_settings

log = structlog.get_logger(__name__)

EXEMPT_PREFIXES = ("/health", "/metrics")


@dataclass
class RateLimitConfig:
    """Configuration du rate limiting par client."""

    max_requests: int = 100
    window_seconds: int = 15 * 60


@dataclass
class RateLimitResult:
    """Résultat d'une vérification de rate limit."""

    allowed: bool
    remaining: int
    reset_time: float
    retry_after: int | None = None


class SlidingWindowRateLimiter:
    """Rate limiter basé sur une fenêtre glissante (horodatages par client)."""

    def __init__(self, config: RateLimitConfig, clock=time.time) -> None:
        self.config = config
        self._clock = clock
        self._windows: dict[str, deque[float]] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def _sweep(self, now: float) -> None:
        # Retire les clients dont toutes les requêtes sont sorties de la fenêtre.
        if now - self._last_sweep < self.config.window_seconds:
            return
        cutoff = now - self.config.window_seconds
        for client in [c for c, w in self._windows.items() if not w or w[-1] <= cutoff]:
            del self._windows[client]
        self._last_sweep = now

    def tracked_clients(self) -> int:
        """Nombre de clients ayant une fenêtre active en mémoire."""
        with self._lock:
            return len(self._windows)

    def check(self, client: str) -> RateLimitResult:
        """Enregistre la requête si elle est autorisée et retourne la décision."""
        with self._lock:
            now = self._clock()
            self._sweep(now)
            window = self._windows.setdefault(client, deque())
            cutoff = now - self.config.window_seconds
            while window and window[0] <= cutoff:
                window.popleft()

            if len(window) >= self.config.max_requests:
                retry_after = max(1, int(window[0] + self.config.window_seconds - now))
                return RateLimitResult(
                    allowed=False,
                    remaining=0,
                    reset_time=now + retry_after,
                    retry_after=retry_after,
                )

            window.append(now)
            return RateLimitResult(
                allowed=True,
                remaining=max(0, self.config.max_requests - len(window)),
                reset_time=window[0] + self.config.window_seconds,
            )


def client_key(request: Request) -> str:
    return request.client.host if request.client else "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, limiter: SlidingWindowRateLimiter | None = None) -> None:  # type: ignore[no-untyped-def]
        super().__init__(app)
        settings = get_settings()
        self.enabled = settings.RATE_LIMIT_ENABLED
        self.limiter = limiter or SlidingWindowRateLimiter(
            RateLimitConfig(
                max_requests=max(1, settings.RATE_LIMIT_MAX_REQUESTS),
                window_seconds=max(1, settings.RATE_LIMIT_WINDOW_SECONDS),
            )
        )

    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[no-untyped-def]
        if not self.enabled or request.url.path.startswith(EXEMPT_PREFIXES):
            return await call_next(request)

        client = client_key(request)
        result = self.limiter.check(client)
        if not result.allowed:
            RATE_LIMIT_BLOCKS.labels(reason="window").inc()
            log.warning(
                "rate_limit_exceeded",
                client=client,
                path=request.url.path,
                retry_after=result.retry_after,
            )
            return create_error_response(
                HTTP_TOO_MANY_REQUESTS,
                MSG_RATE_LIMITED,
                headers={"Retry-After": str(result.retry_after)},
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(self.limiter.config.max_requests)
        response.headers["X-RateLimit-Remaining"] = str(result.remaining)
        response.headers["X-RateLimit-Reset"] = str(int(result.reset_time))
        return response
