"""Configuration de test pour pytest avec gestion des chemins.

Ce module configure pytest pour résoudre les imports `horoscope_api` depuis la racine du projet et
fournit un client HTTP neuf par test (dépôt utilisateurs en mémoire, rate limiter réinitialisé).
"""

import os
import sys

import pytest
from fastapi.testclient import TestClient

# Ensure project root is on sys.path so that
# imports like `from horoscope_api...` resolve.
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from horoscope_api.app.main import create_app  # noqa: E402
from horoscope_api.core.container import container  # noqa: E402
from horoscope_api.domain.auth import create_access_token  # noqa: E402
from horoscope_api.infra.repositories import InMemoryUserRepo  # noqa: E402

TEST_JWT_SECRET = "test-secret-for-hs256-signing-32b"


@pytest.fixture(autouse=True)
def user_repo(monkeypatch):
    """Remplace le dépôt du conteneur par un dépôt mémoire vide et fixe le secret JWT."""
    repo = InMemoryUserRepo()
    monkeypatch.setattr(container, "user_repo", repo)
    monkeypatch.setattr(container.settings, "JWT_SECRET", TEST_JWT_SECRET)
    monkeypatch.setattr(container.settings, "JWT_ALG", "HS256")
    return repo


@pytest.fixture
def client():
    """Client HTTP sur une application neuve (middlewares et limiteur réinitialisés)."""
    return TestClient(create_app())


@pytest.fixture
def make_token():
    """Fabrique de JWT signés avec le secret de test."""

    def _make(payload: dict, expires_min: int = 60, secret: str = TEST_JWT_SECRET) -> str:
        return create_access_token(
            secret=secret, alg="HS256", expires_min=expires_min, payload=payload
        )

    return _make
