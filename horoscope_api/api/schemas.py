# Schémas Pydantic exposés par l'API (requêtes et réponses).

from typing import Any

from pydantic import BaseModel, ConfigDict


class RegisterPayload(BaseModel):
    """Payload d'inscription.

    Les champs sont facultatifs au niveau du schéma: les règles (présence, longueurs, email) sont
    appliquées par `UserService` afin de renvoyer un message d'erreur unique en 400.
    """

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "username": "stargazer",
            "email": "user@example.com",
            "password": "securePassword123",
        }
    })

    username: Any = None
    email: Any = None
    password: Any = None


class LoginPayload(BaseModel):
    """Payload de connexion (email + mot de passe)."""

    model_config = ConfigDict(json_schema_extra={
        "example": {"email": "user@example.com", "password": "securePassword123"}
    })

    email: Any = None
    password: Any = None


class ZodiacResponse(BaseModel):
    """Réponse du calcul de zodiaque.

    Champs:
    - sign: str (signe occidental, ex. "Sagittarius")
    - zodiac: str (animal chinois, ex. "Pig")
    """

    sign: str
    zodiac: str


class MessageResponse(BaseModel):
    message: str


class TokenResponse(BaseModel):
    token: str


class ApiKeyResponse(BaseModel):
    apiKey: str


class ErrorResponse(BaseModel):
    error: str
