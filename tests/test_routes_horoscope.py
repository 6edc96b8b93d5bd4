"""Tests d'intégration des routes horoscope (publique, JWT et clé d'API)."""

from horoscope_api.core.http_constants import (
    HTTP_BAD_REQUEST,
    HTTP_FORBIDDEN,
    HTTP_OK,
    HTTP_UNAUTHORIZED,
)

BASE = "/api/v1/horoscope"
EXPECTED = {"sign": "Sagittarius", "zodiac": "Pig"}


def test_returns_sign_and_zodiac(client):
    """Teste le calcul pour une date valide."""
    r = client.get(f"{BASE}?birthdate=1995-12-15")
    assert r.status_code == HTTP_OK
    assert r.json() == EXPECTED


def test_missing_birthdate(client):
    r = client.get(BASE)
    assert r.status_code == HTTP_BAD_REQUEST
    assert r.json() == {"error": "Birthdate query parameter is required."}


def test_empty_birthdate(client):
    r = client.get(f"{BASE}?birthdate=")
    assert r.status_code == HTTP_BAD_REQUEST
    assert r.json()["error"] == "Birthdate query parameter is required."


def test_invalid_format(client):
    r = client.get(f"{BASE}?birthdate=invalid-date")
    assert r.status_code == HTTP_BAD_REQUEST
    assert r.json() == {"error": "Invalid birthdate format. Use YYYY-MM-DD."}


def test_leap_day_on_non_leap_year(client):
    r = client.get(f"{BASE}?birthdate=2019-02-29")
    assert r.status_code == HTTP_BAD_REQUEST
    assert r.json() == {"error": "Invalid date: February 29 on a non-leap year."}


def test_impossible_date(client):
    r = client.get(f"{BASE}?birthdate=2019-04-31")
    assert r.status_code == HTTP_BAD_REQUEST
    assert r.json() == {"error": "Invalid date"}


def test_leap_day_on_leap_year(client):
    r = client.get(f"{BASE}?birthdate=2020-02-29")
    assert r.status_code == HTTP_OK
    assert r.json() == {"sign": "Pisces", "zodiac": "Rat"}


class TestSecureJWTEndpoint:
    url = f"{BASE}/secure-data"

    def test_valid_token(self, client, make_token):
        """Teste qu'un JWT signé suffit (aucune revendication requise)."""
        token = make_token({"userId": "test"})
        r = client.get(
            f"{self.url}?birthdate=1995-12-15", headers={"Authorization": f"Bearer {token}"}
        )
        assert r.status_code == HTTP_OK
        assert r.json() == EXPECTED

    def test_missing_token(self, client):
        r = client.get(f"{self.url}?birthdate=1995-12-15")
        assert r.status_code == HTTP_UNAUTHORIZED
        assert r.json() == {"error": "Unauthorized"}

    def test_invalid_token(self, client, make_token):
        token = make_token({"id": "u1"}, secret="another-secret-for-hs256-signing-32b")
        r = client.get(
            f"{self.url}?birthdate=1995-12-15", headers={"Authorization": f"Bearer {token}"}
        )
        assert r.status_code == HTTP_FORBIDDEN
        assert r.json() == {"error": "Invalid token"}

    def test_expired_token(self, client, make_token):
        token = make_token({"id": "u1"}, expires_min=-5)
        r = client.get(
            f"{self.url}?birthdate=1995-12-15", headers={"Authorization": f"Bearer {token}"}
        )
        assert r.status_code == HTTP_FORBIDDEN

    def test_valid_token_invalid_birthdate(self, client, make_token):
        token = make_token({"id": "u1"})
        r = client.get(
            f"{self.url}?birthdate=invalid-date", headers={"Authorization": f"Bearer {token}"}
        )
        assert r.status_code == HTTP_BAD_REQUEST
        assert r.json() == {"error": "Invalid birthdate format. Use YYYY-MM-DD."}


class TestSecureApiKeyEndpoint:
    url = f"{BASE}/secure-api-key-data"

    def _seed(self, repo, api_key="mockApiKey"):
        repo.save(
            {
                "id": "mockUserId",
                "username": "mock",
                "email": "test@test.io",
                "password_hash": "",
                "api_key": api_key,
            }
        )

    def test_valid_api_key(self, client, user_repo):
        self._seed(user_repo)
        r = client.get(
            f"{self.url}?birthdate=1995-12-15", headers={"horoscope-api-key": "mockApiKey"}
        )
        assert r.status_code == HTTP_OK
        assert r.json() == EXPECTED

    def test_missing_api_key(self, client, user_repo):
        self._seed(user_repo)
        r = client.get(f"{self.url}?birthdate=1995-12-15")
        assert r.status_code == HTTP_UNAUTHORIZED
        assert r.json() == {"error": "API key is required"}

    def test_unknown_api_key(self, client, user_repo):
        self._seed(user_repo)
        r = client.get(f"{self.url}?birthdate=1995-12-15", headers={"horoscope-api-key": "nope"})
        assert r.status_code == HTTP_FORBIDDEN
        assert r.json() == {"error": "Invalid API key"}

    def test_valid_api_key_invalid_birthdate(self, client, user_repo):
        self._seed(user_repo)
        r = client.get(
            f"{self.url}?birthdate=invalid-date", headers={"horoscope-api-key": "mockApiKey"}
        )
        assert r.status_code == HTTP_BAD_REQUEST
        assert r.json() == {"error": "Invalid birthdate format. Use YYYY-MM-DD."}
