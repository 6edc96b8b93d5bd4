from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

import structlog

from horoscope_api.app.metrics import AUTH_EVENTS, HOROSCOPE_LOOKUPS
from horoscope_api.core.http_constants import MSG_INVALID_API_KEY
from horoscope_api.domain.auth import (
    create_access_token,
    hash_password,
    new_api_key,
    verify_password,
)
from horoscope_api.domain.dates import (
    DateError,
    InvalidFormatError,
    InvalidLeapDayError,
    parse_date,
)
from horoscope_api.domain.errors import (
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)
from horoscope_api.domain.validators import validate_login, validate_register
from horoscope_api.domain.zodiac import ZodiacResult, zodiac_for_date

log = structlog.get_logger(__name__)


def _outcome(err: DateError) -> str:
    if isinstance(err, InvalidFormatError):
        return "invalid_format"
    if isinstance(err, InvalidLeapDayError):
        return "invalid_leap_day"
    return "invalid_date"


class HoroscopeService:
    """Service métier: date de naissance brute -> signe occidental et animal chinois."""

    def get_horoscope(self, birthdate: str) -> ZodiacResult:
        """
        Analyse la date puis calcule le zodiaque.

        Paramètres:
        - birthdate: chaîne `YYYY-MM-DD`.

        Retour: `ZodiacResult` (sign, animal).

        Les `DateError` sont propagées telles quelles (message public inchangé).
        """
        try:
            parsed = parse_date(birthdate)
        except DateError as err:
            HOROSCOPE_LOOKUPS.labels(outcome=_outcome(err)).inc()
            raise
        HOROSCOPE_LOOKUPS.labels(outcome="ok").inc()
        return zodiac_for_date(parsed)


class UserService:
    """Service métier des comptes utilisateurs.

    Responsabilités:
    - Inscription (validation, unicité email/nom d'utilisateur, hachage du mot de passe).
    - Connexion et émission d'un JWT signé.
    - Émission/rotation des clés d'API et authentification par clé.
    """

    def __init__(self, user_repo, settings):
        """Initialise le service avec son dépôt et la configuration JWT."""
        self.users = user_repo
        self.settings = settings

    def register(self, username: Any, email: Any, password: Any) -> dict[str, str]:
        data = validate_register(
            {"username": username, "email": email, "password": password}
        )
        user = {
            "id": uuid4().hex,
            "username": data.username,
            "email": str(data.email),
            "password_hash": hash_password(data.password),
            "api_key": new_api_key(),
            "created_at": datetime.now(UTC).isoformat(),
        }
        # L'unicité email/nom est garantie par le dépôt (ConflictError).
        self.users.create(user)
        AUTH_EVENTS.labels(event="register").inc()
        log.info("user_registered", user_id=user["id"])
        return {"message": "User registered successfully."}

    def login(self, email: Any, password: Any) -> dict[str, str]:
        """Vérifie les identifiants et retourne `{"token": <jwt>}`."""
        data = validate_login({"email": email, "password": password})
        user = self.users.get_by_email(str(data.email))
        if not user or not verify_password(data.password, user.get("password_hash", "")):
            AUTH_EVENTS.labels(event="login_failed").inc()
            log.info("login_failed")
            raise UnauthorizedError("Invalid credentials.")
        token = create_access_token(
            secret=self.settings.JWT_SECRET,
            alg=self.settings.JWT_ALG,
            expires_min=self.settings.JWT_EXPIRES_MIN,
            payload={"id": user["id"]},
        )
        AUTH_EVENTS.labels(event="login").inc()
        return {"token": token}

    def generate_api_key(self, user_id: str | None) -> dict[str, str]:
        """Remplace la clé d'API de l'utilisateur et retourne `{"apiKey": ...}`."""
        user = self.users.get(user_id) if user_id else None
        if not user:
            raise NotFoundError("User not found")
        user["api_key"] = new_api_key()
        self.users.save(user)
        AUTH_EVENTS.labels(event="api_key_generated").inc()
        log.info("api_key_generated", user_id=user["id"])
        return {"apiKey": user["api_key"]}

    def authenticate_api_key(self, api_key: str) -> dict[str, Any]:
        """Retourne le propriétaire de la clé, ou lève `ForbiddenError`."""
        user = self.users.get_by_api_key(api_key)
        if not user:
            raise ForbiddenError(MSG_INVALID_API_KEY)
        return user
