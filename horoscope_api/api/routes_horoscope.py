"""
Routes liées aux horoscopes: signe occidental et animal chinois d'une date de naissance.

Trois variantes exposent le même calcul: publique, protégée par JWT et protégée par clé d'API.
La réponse nomme l'animal chinois `zodiac` (compatibilité avec les clients existants).
"""

from fastapi import APIRouter, Depends

from horoscope_api.api.deps import (
    get_api_key_user,
    get_birthdate,
    get_horoscope_service,
    get_token_data,
)
from horoscope_api.api.schemas import ErrorResponse, ZodiacResponse
from horoscope_api.domain.services import HoroscopeService

router = APIRouter(prefix="/api/v1/horoscope", tags=["horoscope"])
birthdate_dep = Depends(get_birthdate)
service_dep = Depends(get_horoscope_service)

_ERRORS = {400: {"model": ErrorResponse}}
_AUTH_ERRORS = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
}


def _respond(service: HoroscopeService, birthdate: str) -> ZodiacResponse:
    result = service.get_horoscope(birthdate)
    return ZodiacResponse(sign=result.sign, zodiac=result.animal)


@router.get("", response_model=ZodiacResponse, responses=_ERRORS)
def get_horoscope(
    birthdate: str = birthdate_dep, service: HoroscopeService = service_dep
):
    """
    Retourne le signe et l'animal pour `birthdate` (format `YYYY-MM-DD`).

    Exemple: `?birthdate=1995-12-15` -> `{"sign": "Sagittarius", "zodiac": "Pig"}`.
    """
    return _respond(service, birthdate)


@router.get(
    "/secure-data",
    response_model=ZodiacResponse,
    responses=_AUTH_ERRORS,
    dependencies=[Depends(get_token_data)],
)
def get_horoscope_jwt(
    birthdate: str = birthdate_dep, service: HoroscopeService = service_dep
):
    """Même calcul que `/api/v1/horoscope`, protégé par JWT (`Authorization: Bearer`)."""
    return _respond(service, birthdate)


@router.get(
    "/secure-api-key-data",
    response_model=ZodiacResponse,
    responses=_AUTH_ERRORS,
    dependencies=[Depends(get_api_key_user)],
)
def get_horoscope_api_key(
    birthdate: str = birthdate_dep, service: HoroscopeService = service_dep
):
    """Même calcul que `/api/v1/horoscope`, protégé par clé d'API (`horoscope-api-key`)."""
    return _respond(service, birthdate)
