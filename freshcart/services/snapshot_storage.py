# freshcart/services/snapshot_storage.py
import redis
from typing import Dict, Protocol

from freshcart.utils.retry import redis_retry
from freshcart.utils.settings import REDIS_URL, SNAPSHOT_BACKEND, SNAPSHOT_KEY_PREFIX
from freshcart.utils.logging import get_logger

logger = get_logger(__name__)


class SnapshotStorage(Protocol):
    """Prosty magazyn klucz -> string (odpowiednik localStorage klienta)."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


def snapshot_key(client_id: str, slot: str) -> str:
    #klucz per instalacja klienta, nie per konto
    return f"{SNAPSHOT_KEY_PREFIX}:{client_id}:{slot}"


class InMemorySnapshotStorage:
    def __init__(self):
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class RedisSnapshotStorage:
    def __init__(self, url: str | None = None, client: redis.Redis | None = None):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @redis_retry()
    def get(self, key: str) -> str | None:
        return self.redis.get(key)

    @redis_retry()
    def set(self, key: str, value: str) -> None:
        self.redis.set(key, value)

    @redis_retry()
    def delete(self, key: str) -> None:
        self.redis.delete(key)


def create_snapshot_storage(backend: str | None = None) -> SnapshotStorage:
    backend = (backend or SNAPSHOT_BACKEND).lower()
    logger.info(f"Snapshot storage backend: {backend}")
    if backend == "memory":
        return InMemorySnapshotStorage()
    if backend == "redis":
        return RedisSnapshotStorage()
    raise ValueError(f"Unknown snapshot backend: {backend}")
