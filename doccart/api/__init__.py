# doccart/api/__init__.py
import redis
from fastapi import FastAPI

from doccart.api.routers import cart, submissions
from doccart.api.routers.health import router as health_router
from doccart.backends import BACKENDS
from doccart.backends.session import SessionStore
from doccart.domain.errors import UnknownBackendError
from doccart.domain.validation import CartValidator, default_validator
from doccart.services.lock_service import LockService, LocalLockService
from doccart.utils.settings import CART_BACKEND, CART_LOCK_ENABLED, REDIS_URL
from doccart.utils.logging import get_logger

logger = get_logger(__name__)


def _default_lock_service(cart_backend: str, redis_client):
    if not CART_LOCK_ENABLED:
        return None
    #sesja w pamieci procesu -> lock lokalny, reszta moze byc wspoldzielona miedzy procesami
    if cart_backend == "session":
        return LocalLockService()
    return LockService(client=redis_client)


def create_app(
    cart_backend: str | None = None,
    *,
    session_store: SessionStore | None = None,
    redis_client=None,
    lock_service=None,
    validator: CartValidator | None = None,
    lifespan=None,
) -> FastAPI:
    cart_backend = (cart_backend or CART_BACKEND).lower()
    if cart_backend not in BACKENDS:
        raise UnknownBackendError(cart_backend)

    if redis_client is None and cart_backend == "redis":
        redis_client = redis.Redis.from_url(REDIS_URL, decode_responses=True)

    app = FastAPI(
        title="Document Cart Service",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.cart_backend = cart_backend
    app.state.session_store = session_store if session_store is not None else SessionStore()
    app.state.redis_client = redis_client
    if lock_service is None:
        lock_service = _default_lock_service(cart_backend, redis_client)
    app.state.lock_service = lock_service
    app.state.validator = validator if validator is not None else default_validator

    app.include_router(health_router)
    app.include_router(cart.router)
    app.include_router(submissions.router)

    logger.info(f"Cart service created with '{cart_backend}' backend")
    return app
