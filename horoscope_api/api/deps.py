"""Dépendances partagées pour les routes de l'API.

But du module
-------------
- Centraliser la création des services utilisés par les endpoints, à partir du
  `container` (dépôt utilisateurs, paramètres JWT).
- Fournir les gardes d'accès: JWT `Authorization: Bearer ...` et clé d'API
  (en-tête `horoscope-api-key` par défaut).
- Valider la présence du paramètre `birthdate`.

Les gardes lèvent des `HoroscopeError`; leur traduction en réponse JSON est
assurée par `horoscope_api.apigw.errors`.
"""

from fastapi import Depends, Header, Query, Request

from horoscope_api.core.container import container
from horoscope_api.core.http_constants import (
    MSG_API_KEY_REQUIRED,
    MSG_BIRTHDATE_REQUIRED,
    MSG_INVALID_TOKEN,
    MSG_UNAUTHORIZED,
)
from horoscope_api.domain.auth import TokenData, decode_token
from horoscope_api.domain.errors import ForbiddenError, UnauthorizedError, ValidationError
from horoscope_api.domain.services import HoroscopeService, UserService

horoscope_service = HoroscopeService()


def get_horoscope_service() -> HoroscopeService:
    return horoscope_service


def get_user_service() -> UserService:
    """Construit le service utilisateurs sur le dépôt courant du conteneur."""
    return UserService(container.user_repo, container.settings)


def get_token_data(authorization: str = Header(None)) -> TokenData:
    """Extrait et valide le JWT porté par l'en-tête `Authorization`."""
    if not authorization or not authorization.lower().startswith("bearer "):
        raise UnauthorizedError(MSG_UNAUTHORIZED)
    token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise UnauthorizedError(MSG_UNAUTHORIZED)
    data = decode_token(token, container.settings.JWT_SECRET, container.settings.JWT_ALG)
    if data is None:
        raise ForbiddenError(MSG_INVALID_TOKEN)
    return data


def get_api_key_user(
    request: Request, users: UserService = Depends(get_user_service)
) -> dict:
    """Authentifie la requête par clé d'API et retourne son propriétaire."""
    api_key = request.headers.get(container.settings.API_KEY_HEADER)
    if not api_key:
        raise UnauthorizedError(MSG_API_KEY_REQUIRED)
    return users.authenticate_api_key(api_key)


def get_birthdate(birthdate: str | None = Query(None)) -> str:
    """Retourne le paramètre `birthdate` brut, obligatoire et non vide."""
    if not birthdate:
        raise ValidationError(MSG_BIRTHDATE_REQUIRED)
    return birthdate
