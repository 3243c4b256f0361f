# doccart/services/lock_service.py
import uuid
from contextlib import contextmanager
from threading import Lock

import redis
from redis.exceptions import RedisError
from tenacity import retry, stop_after_attempt, wait_fixed, retry_if_result

from doccart.domain.errors import CartBusyError
from doccart.utils.retry import redis_retry
from doccart.utils.settings import REDIS_URL, CART_LOCK_TTL_SECONDS
from doccart.utils.logging import get_logger

logger = get_logger(__name__)

#LUA porownaj i usun, atomicity
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""

#redis wykonuje atomowo przez lua, skrypt dziala jako jedna nieprzerywalna operacja
#nie mozna wcisnac sie miedzy GET a DEL, wiec tu jest get + porownanie + del wszystko naraz


def lock_key(cart_key: str) -> str:
    return f"cart:{cart_key}:lock"


class LockService:
    """
    -blokada koszyka (jeden request modyfikuje koszyk na raz)
    -zwalnianie locka tylko przez wlasciciela (token)
    -atomowosc przy pomocy lua
    """

    def __init__(
        self,
        url: str | None = None,
        client: redis.Redis | None = None,
        ttl: int = CART_LOCK_TTL_SECONDS,
        attempts: int = 50,
        wait_seconds: float = 0.1,
    ):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )
        self.ttl = ttl
        self.attempts = attempts
        self.wait_seconds = wait_seconds

    @redis_retry()
    def acquire_cart_lock(self, cart_key: str, token: str, ttl: int) -> bool:
        key = lock_key(cart_key)
        #SET cart:abc:lock "token" NX EX 10
        return bool(self.redis.set(name=key, value=token, nx=True, ex=ttl))

    @redis_retry()
    def release_cart_lock(self, cart_key: str, token: str) -> bool:
        key = lock_key(cart_key)
        res = self.redis.eval(_RELEASE_LUA, 1, key, token)
        return bool(res)

    def _wait_for_lock(self, cart_key: str, token: str) -> bool:
        waiter = retry(
            stop=stop_after_attempt(self.attempts),
            wait=wait_fixed(self.wait_seconds),
            retry=retry_if_result(lambda acquired: not acquired),
            retry_error_callback=lambda state: False,
        )
        return waiter(self.acquire_cart_lock)(cart_key, token, self.ttl)

    @contextmanager
    def hold(self, cart_key: str):
        token = uuid.uuid4().hex
        if not self._wait_for_lock(cart_key, token):
            raise CartBusyError(cart_key)

        try:
            yield
        finally:
            try:
                if not self.release_cart_lock(cart_key, token):
                    logger.warning(f"Lock for cart {cart_key} expired before release")
            except RedisError as e:
                logger.warning(f"Failed to release lock for cart {cart_key}: {e}")


class LocalLockService:
    """
    Blokada per klucz koszyka w obrebie jednego procesu.
    Wpis dla klucza zyje tylko dopoki ktos trzyma lub czeka na lock.
    """

    def __init__(self, timeout: float = CART_LOCK_TTL_SECONDS):
        self.timeout = timeout
        #cart_key -> [lock, liczba trzymajacych + czekajacych]
        self._locks: dict[str, list] = {}
        self._guard = Lock()

    def _checkout(self, cart_key: str) -> Lock:
        with self._guard:
            entry = self._locks.setdefault(cart_key, [Lock(), 0])
            entry[1] += 1
            return entry[0]

    def _checkin(self, cart_key: str) -> None:
        with self._guard:
            entry = self._locks[cart_key]
            entry[1] -= 1
            if entry[1] == 0:
                del self._locks[cart_key]

    def __len__(self) -> int:
        return len(self._locks)

    @contextmanager
    def hold(self, cart_key: str):
        lock = self._checkout(cart_key)
        try:
            if not lock.acquire(timeout=self.timeout):
                raise CartBusyError(cart_key)
            try:
                yield
            finally:
                lock.release()
        finally:
            self._checkin(cart_key)
