# doccart/backends/__init__.py
from sqlalchemy.orm import Session

from doccart.backends.base import CartBackend
from doccart.backends.session import SessionBackend, SessionStore
from doccart.backends.redis_backend import RedisBackend
from doccart.backends.database import DatabaseBackend
from doccart.domain.errors import UnknownBackendError
from doccart.utils.settings import CART_BACKEND

BACKENDS = ("session", "redis", "database")


def build_backend(
    session_key: str,
    kind: str | None = None,
    *,
    session_store: SessionStore | None = None,
    db: Session | None = None,
    redis_client=None,
) -> CartBackend:
    """
    Fabryka backendu koszyka wybieranego ustawieniem CART_BACKEND.
    Zaleznosci (magazyn sesji, sesja bazy, klient redis) podaje wywolujacy.
    """
    kind = (kind or CART_BACKEND).lower()

    if kind == "session":
        if session_store is None:
            raise ValueError("session backend requires a SessionStore")
        return SessionBackend(session_store, session_key)

    if kind == "redis":
        return RedisBackend(session_key, client=redis_client)

    if kind == "database":
        if db is None:
            raise ValueError("database backend requires a db session")
        return DatabaseBackend(db, session_key)

    raise UnknownBackendError(kind)


__all__ = [
    "CartBackend",
    "SessionBackend",
    "SessionStore",
    "RedisBackend",
    "DatabaseBackend",
    "build_backend",
    "BACKENDS",
]
