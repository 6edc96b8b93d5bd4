"""
Routes d'authentification pour l'API.

Ce module fournit les endpoints d'inscription, de connexion et de génération de clé d'API.
"""

from fastapi import APIRouter, Depends

from horoscope_api.api.deps import get_token_data, get_user_service
from horoscope_api.api.schemas import (
    ApiKeyResponse,
    ErrorResponse,
    LoginPayload,
    MessageResponse,
    RegisterPayload,
    TokenResponse,
)
from horoscope_api.core.http_constants import HTTP_CREATED
from horoscope_api.domain.auth import TokenData
from horoscope_api.domain.services import UserService

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])
user_service_dep = Depends(get_user_service)
token_dep = Depends(get_token_data)


@router.post(
    "/register",
    status_code=HTTP_CREATED,
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def register(p: RegisterPayload | None = None, users: UserService = user_service_dep):
    """Inscrit un nouvel utilisateur (email et nom d'utilisateur uniques)."""
    p = p or RegisterPayload()
    return users.register(p.username, p.email, p.password)


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
def login(p: LoginPayload | None = None, users: UserService = user_service_dep):
    """Authentifie un utilisateur et retourne un JWT valable `JWT_EXPIRES_MIN` minutes."""
    p = p or LoginPayload()
    return users.login(p.email, p.password)


@router.post(
    "/generate-api-key",
    response_model=ApiKeyResponse,
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
def generate_api_key(token: TokenData = token_dep, users: UserService = user_service_dep):
    """Génère une nouvelle clé d'API pour l'utilisateur du JWT (l'ancienne est révoquée)."""
    return users.generate_api_key(token.id)
