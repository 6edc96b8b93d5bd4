"""Tests pour la validation des payloads d'inscription et de connexion."""

import pytest

from horoscope_api.domain.errors import ValidationError
from horoscope_api.domain.validators import validate_login, validate_register

VALID = {"username": "stargazer", "email": "user@stars.io", "password": "securePassword123"}


def test_valid_register_payload():
    data = validate_register(VALID)
    assert data.username == "stargazer"
    assert str(data.email) == "user@stars.io"


@pytest.mark.parametrize(
    "override, message",
    [
        ({"username": None}, "Username is required."),
        ({"username": ""}, "Username cannot be empty."),
        ({"username": "ab"}, "Username must be at least 3 characters long."),
        ({"username": "x" * 31}, "Username must be at most 30 characters long."),
        ({"username": 42}, "Username must be a string."),
        ({"email": None}, "Email is required."),
        ({"email": "not-an-email"}, "Email must be a valid email address."),
        ({"password": None}, "Password is required."),
        ({"password": "short"}, "Password must be at least 8 characters long."),
    ],
)
def test_register_messages(override, message):
    """Teste qu'une seule erreur, lisible, est levée pour le premier champ invalide."""
    with pytest.raises(ValidationError) as exc_info:
        validate_register({**VALID, **override})
    assert exc_info.value.message == message
    assert exc_info.value.status_code == 400


def test_register_reports_first_invalid_field_only():
    with pytest.raises(ValidationError) as exc_info:
        validate_register({"email": "not-an-email", "password": "short"})
    assert exc_info.value.message == "Username is required."


@pytest.mark.parametrize(
    "payload, message",
    [
        ({"password": "secret1"}, "Email is required"),
        ({"email": "bad", "password": "secret1"}, "Email must be a valid email address"),
        ({"email": "user@stars.io"}, "Password is required"),
        ({"email": "user@stars.io", "password": ""}, "Password is required"),
        ({"email": "user@stars.io", "password": "abc"}, "Password must be at least 6 characters long"),
    ],
)
def test_login_messages(payload, message):
    with pytest.raises(ValidationError) as exc_info:
        validate_login(payload)
    assert exc_info.value.message == message
