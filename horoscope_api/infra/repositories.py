"""
Repositories pour la gestion des utilisateurs.

Ce module fournit des implémentations du dépôt utilisateurs en mémoire et Redis. Un enregistrement
est un dict JSON-sérialisable: `id`, `username`, `email`, `password_hash`, `api_key`, `created_at`.

`create` réserve atomiquement l'email et le nom d'utilisateur: deux inscriptions concurrentes sur
la même identité ne peuvent pas aboutir toutes les deux.
"""

import json
import threading
from typing import Any

import redis

from horoscope_api.domain.errors import ConflictError

MSG_EMAIL_TAKEN = "Email is already in use."
MSG_USERNAME_TAKEN = "Username is already in use."


class InMemoryUserRepo:
    """Dépôt utilisateurs en mémoire (index par scan simple, dev/tests)."""

    def __init__(self):
        """Initialise une base mémoire vide."""
        self._db: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()

    def _find(self, field: str, value: str) -> dict[str, Any] | None:
        return next((u for u in list(self._db.values()) if u.get(field) == value), None)

    def get(self, user_id: str) -> dict[str, Any] | None:
        """Retourne un utilisateur par id, ou None s'il est absent."""
        return self._db.get(user_id)

    def get_by_email(self, email: str) -> dict[str, Any] | None:
        """Recherche un utilisateur par email."""
        return self._find("email", email)

    def get_by_username(self, username: str) -> dict[str, Any] | None:
        return self._find("username", username)

    def get_by_api_key(self, api_key: str) -> dict[str, Any] | None:
        """Recherche le propriétaire d'une clé d'API."""
        return self._find("api_key", api_key)

    def create(self, user: dict[str, Any]) -> dict[str, Any]:
        """Insère un nouvel utilisateur, ou lève `ConflictError` si l'email ou le nom est pris."""
        with self._lock:
            if self._find("email", user["email"]):
                raise ConflictError(MSG_EMAIL_TAKEN)
            if self._find("username", user["username"]):
                raise ConflictError(MSG_USERNAME_TAKEN)
            self._db[user["id"]] = dict(user)
        return user

    def save(self, user: dict[str, Any]) -> dict[str, Any]:
        """Sauvegarde (ou écrase) un utilisateur."""
        with self._lock:
            self._db[user["id"]] = dict(user)
        return user


class RedisUserRepo:
    """
    Dépôt utilisateurs via Redis.

    Clés:
    - `user:{id}`: enregistrement JSON
    - `user:idx:email`, `user:idx:username`, `user:idx:apikey`: hashes valeur -> id
    """

    def __init__(self, url: str):
        """Crée un client Redis à partir de l'URL fournie."""
        self.client = redis.Redis.from_url(url, decode_responses=True)
        self.email_idx = "user:idx:email"
        self.username_idx = "user:idx:username"
        self.api_key_idx = "user:idx:apikey"

    def _by_index(self, idx_key: str, value: str) -> dict[str, Any] | None:
        user_id = self.client.hget(idx_key, value)
        if not user_id:
            return None
        return self.get(user_id)

    def get(self, user_id: str) -> dict[str, Any] | None:
        """Charge et désérialise `user:{id}`, si présent."""
        raw = self.client.get(f"user:{user_id}")
        return json.loads(raw) if raw else None

    def get_by_email(self, email: str) -> dict[str, Any] | None:
        """Recherche un utilisateur par email via l'index Redis."""
        return self._by_index(self.email_idx, email)

    def get_by_username(self, username: str) -> dict[str, Any] | None:
        return self._by_index(self.username_idx, username)

    def get_by_api_key(self, api_key: str) -> dict[str, Any] | None:
        return self._by_index(self.api_key_idx, api_key)

    def create(self, user: dict[str, Any]) -> dict[str, Any]:
        """
        Insère un nouvel utilisateur après avoir réservé son email et son nom via `HSETNX`.

        Si l'une des réservations échoue, celles déjà posées sont annulées et `ConflictError` est
        levée. L'enregistrement n'est écrit qu'une fois les deux index acquis.
        """
        if not self.client.hsetnx(self.email_idx, user["email"], user["id"]):
            raise ConflictError(MSG_EMAIL_TAKEN)
        if not self.client.hsetnx(self.username_idx, user["username"], user["id"]):
            self.client.hdel(self.email_idx, user["email"])
            raise ConflictError(MSG_USERNAME_TAKEN)
        pipe = self.client.pipeline()
        pipe.set(f"user:{user['id']}", json.dumps(user))
        if user.get("api_key"):
            pipe.hset(self.api_key_idx, user["api_key"], user["id"])
        pipe.execute()
        return user

    def save(self, user: dict[str, Any]) -> dict[str, Any]:
        """Sauvegarde un utilisateur et met à jour les index (l'ancienne clé d'API est retirée)."""
        key = f"user:{user['id']}"
        previous = self.get(user["id"])
        pipe = self.client.pipeline()
        if previous and previous.get("api_key") and previous["api_key"] != user.get("api_key"):
            pipe.hdel(self.api_key_idx, previous["api_key"])
        pipe.set(key, json.dumps(user))
        pipe.hset(self.email_idx, user["email"], user["id"])
        pipe.hset(self.username_idx, user["username"], user["id"])
        if user.get("api_key"):
            pipe.hset(self.api_key_idx, user["api_key"], user["id"])
        pipe.execute()
        return user
