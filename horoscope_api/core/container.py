"""
Conteneur d'injection de dépendances et configuration application.

Instancie les composants centraux (settings, dépôt utilisateurs) et expose un singleton `container`
utilisé par le reste de l'application.
"""

from horoscope_api.core.settings import get_settings
from horoscope_api.infra.repositories import InMemoryUserRepo, RedisUserRepo


class Container:
    def __init__(self):
        self.settings = get_settings()
        if self.settings.REDIS_URL:
            try:
                self.user_repo = RedisUserRepo(self.settings.REDIS_URL)
                self.storage_backend = "redis"
            except Exception as err:
                if self.settings.REQUIRE_REDIS:
                    raise RuntimeError("Redis required but unavailable") from err
                self.user_repo = InMemoryUserRepo()
                self.storage_backend = "memory-fallback"
        else:
            if self.settings.REQUIRE_REDIS:
                raise RuntimeError("Redis required but REDIS_URL not set")
            self.user_repo = InMemoryUserRepo()
            self.storage_backend = "memory"


container = Container()
