"""
Fakes pour les tests unitaires.

`FakeRedis` reproduit le sous-ensemble de l'API redis-py utilisé par `RedisUserRepo` (chaînes,
hashes, pipeline) sur des dicts en mémoire.
"""

from __future__ import annotations


class FakePipeline:
    """Pipeline qui enregistre les commandes et les rejoue sur `execute()`."""

    def __init__(self, client: FakeRedis) -> None:
        self._client = client
        self._ops: list[tuple[str, tuple]] = []

    def __getattr__(self, name: str):
        def _queue(*args):
            self._ops.append((name, args))
            return self

        return _queue

    def execute(self) -> list:
        return [getattr(self._client, name)(*args) for name, args in self._ops]


class FakeRedis:
    def __init__(self) -> None:
        self.strings: dict[str, str] = {}
        self.hashes: dict[str, dict[str, str]] = {}

    def get(self, key: str) -> str | None:
        return self.strings.get(key)

    def set(self, key: str, value: str) -> bool:
        self.strings[key] = value
        return True

    def hget(self, key: str, field: str) -> str | None:
        return self.hashes.get(key, {}).get(field)

    def hset(self, key: str, field: str, value: str) -> int:
        self.hashes.setdefault(key, {})[field] = value
        return 1

    def hsetnx(self, key: str, field: str, value: str) -> bool:
        bucket = self.hashes.setdefault(key, {})
        if field in bucket:
            return False
        bucket[field] = value
        return True

    def hdel(self, key: str, field: str) -> int:
        return 1 if self.hashes.get(key, {}).pop(field, None) is not None else 0

    def pipeline(self) -> FakePipeline:
        return FakePipeline(self)
