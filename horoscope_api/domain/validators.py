"""
Validation des payloads d'inscription et de connexion.

Les règles sont exprimées par des modèles Pydantic; la première erreur rencontrée est traduite en un
message lisible (un seul par requête) et levée sous forme de `ValidationError` (HTTP 400).
"""

from typing import Any

from pydantic import BaseModel, EmailStr, Field
from pydantic import ValidationError as PydanticValidationError

from horoscope_api.domain.errors import ValidationError


class RegisterInput(BaseModel):
    username: str = Field(min_length=3, max_length=30)
    email: EmailStr
    password: str = Field(min_length=8)


class LoginInput(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)


# (champ, type d'erreur pydantic) -> message public
REGISTER_MESSAGES = {
    ("username", "string_type"): "Username must be a string.",
    ("username", "empty"): "Username cannot be empty.",
    ("username", "string_too_short"): "Username must be at least 3 characters long.",
    ("username", "string_too_long"): "Username must be at most 30 characters long.",
    ("username", "missing"): "Username is required.",
    ("email", "string_type"): "Email must be a string.",
    ("email", "empty"): "Email cannot be empty.",
    ("email", "value_error"): "Email must be a valid email address.",
    ("email", "missing"): "Email is required.",
    ("password", "string_type"): "Password must be a string.",
    ("password", "empty"): "Password cannot be empty.",
    ("password", "string_too_short"): "Password must be at least 8 characters long.",
    ("password", "missing"): "Password is required.",
}

LOGIN_MESSAGES = {
    ("email", "string_type"): "Email should be a string",
    ("email", "empty"): "Email is required",
    ("email", "value_error"): "Email must be a valid email address",
    ("email", "missing"): "Email is required",
    ("password", "string_type"): "Password should be a string",
    ("password", "empty"): "Password is required",
    ("password", "string_too_short"): "Password must be at least 6 characters long",
    ("password", "missing"): "Password is required",
}


def first_error_message(exc: PydanticValidationError, messages: dict) -> str:
    """Traduit la première erreur Pydantic en message public."""
    err = exc.errors()[0]
    field = str(err["loc"][0]) if err.get("loc") else ""
    kind = "empty" if err.get("input") == "" else err["type"]
    return messages.get((field, kind), messages.get((field, err["type"]), err["msg"]))


def _validate(model: type[BaseModel], messages: dict, data: dict[str, Any]):
    # Une valeur `None` équivaut à un champ absent.
    cleaned = {k: v for k, v in data.items() if v is not None}
    try:
        return model.model_validate(cleaned)
    except PydanticValidationError as exc:
        raise ValidationError(first_error_message(exc, messages)) from exc


def validate_register(data: dict[str, Any]) -> RegisterInput:
    return _validate(RegisterInput, REGISTER_MESSAGES, data)


def validate_login(data: dict[str, Any]) -> LoginInput:
    return _validate(LoginInput, LOGIN_MESSAGES, data)
