import threading
import time
from typing import Dict

import redis
from freshcart.utils.retry import redis_retry
from freshcart.utils.settings import REDIS_URL, CHECKOUT_LOCK_TTL_SECONDS
from freshcart.utils.logging import get_logger

logger = get_logger(__name__)

#LUA porownaj i usun, atomicity
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""

#redis wykonuje skrypt lua atomowo, nie mozna wcisnac sie miedzy GET a DEL


class LockService:
    """
    -blokada skladania zamowienia per uzytkownik (podwojne klikniecie)
    -zwalnianie locka tylko przez wlasciciela tokena
    -atomowosc przy pomocy lua
    """

    def __init__(self, url: str | None = None, client: redis.Redis | None = None):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @staticmethod
    def _key(user_id: str) -> str:
        return f"checkout:{user_id}:lock"

    @redis_retry()
    def acquire_checkout_lock(self, user_id: str, token: str, ttl: int = CHECKOUT_LOCK_TTL_SECONDS) -> bool:
        key = self._key(user_id)
        logger.info(f"Acquire lock {key}")
        #SET checkout:u1:lock "<token>" NX EX 30
        return bool(self.redis.set(
            name=key,
            value=token,
            nx=True, #jak klucz juz jest to nic nie rob i None
            ex=ttl, #wygasa sam, nawet jak proces padnie w trakcie
        ))

    @redis_retry()
    def release_checkout_lock(self, user_id: str, token: str) -> bool:
        key = self._key(user_id)
        logger.info(f"Release lock {key}")
        res = self.redis.eval(_RELEASE_LUA, 1, key, token)
        return bool(res)


class LocalLockService:
    """
    Ta sama blokada bez Redisa, dla trybu jednego procesu (SNAPSHOT_BACKEND=memory).
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[str, tuple[str, float]] = {}

    def acquire_checkout_lock(self, user_id: str, token: str, ttl: int = CHECKOUT_LOCK_TTL_SECONDS) -> bool:
        now = time.monotonic()
        with self._guard:
            held = self._locks.get(user_id)
            if held and held[1] > now:
                return False
            self._locks[user_id] = (token, now + ttl)
            return True

    def release_checkout_lock(self, user_id: str, token: str) -> bool:
        with self._guard:
            held = self._locks.get(user_id)
            if not held or held[0] != token:
                return False
            del self._locks[user_id]
            return True
