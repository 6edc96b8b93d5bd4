"""
Endpoint de santé pour vérifier la disponibilité de l'API et du backend.

Expose `/health` pour signaler l'état général de l'application et du stockage des utilisateurs.
"""


from fastapi import APIRouter

from horoscope_api.core.container import container

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    """Vérifie la disponibilité de l'API et le backend de stockage."""
    return {
        "status": "ok",
        "version": container.settings.APP_VERSION,
        "storage": getattr(container, "storage_backend", "unknown"),
    }
