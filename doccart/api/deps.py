# doccart/api/deps.py
import uuid
from dataclasses import dataclass

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from doccart.backends import build_backend
from doccart.backends.session import SessionStore
from doccart.data.database import get_db
from doccart.domain.documents import DocumentCatalog
from doccart.repos.document_repo import DocumentRepo
from doccart.services.cart import Cart
from doccart.services.cart_service import CartService
from doccart.services.document_client import DocumentClient
from doccart.services.notification_service import NotificationService
from doccart.services.submission_service import SubmissionRecorder
from doccart.utils.settings import DOCUMENT_SERVICE_URL, SESSION_COOKIE_NAME, CART_TTL_SECONDS

CART_SESSION_HEADER = "X-Cart-Session"


@dataclass
class CartSessionKey:
    key: str
    is_new: bool = False


def get_cart_session(request: Request) -> CartSessionKey:
    key = request.headers.get(CART_SESSION_HEADER) or request.cookies.get(SESSION_COOKIE_NAME)
    if key:
        return CartSessionKey(key=key)
    return CartSessionKey(key=uuid.uuid4().hex, is_new=True)


def remember_cart_session(response, cart_session: CartSessionKey):
    """Ustawia cookie sesji koszyka jesli klucz zostal dopiero wygenerowany."""
    if cart_session.is_new:
        response.set_cookie(
            SESSION_COOKIE_NAME,
            cart_session.key,
            max_age=CART_TTL_SECONDS,
            httponly=True,
            samesite="lax",
        )
    return response


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def get_catalog(db: Session = Depends(get_db)) -> DocumentCatalog:
    if DOCUMENT_SERVICE_URL:
        return DocumentClient(DOCUMENT_SERVICE_URL)
    return DocumentRepo(db)


def get_recorder(
    db: Session = Depends(get_db),
    catalog: DocumentCatalog = Depends(get_catalog),
) -> SubmissionRecorder:
    return SubmissionRecorder(db, catalog, notification_service=NotificationService())


def get_cart(
    request: Request,
    cart_session: CartSessionKey = Depends(get_cart_session),
    db: Session = Depends(get_db),
    recorder: SubmissionRecorder = Depends(get_recorder),
) -> Cart:
    backend = build_backend(
        cart_session.key,
        request.app.state.cart_backend,
        session_store=request.app.state.session_store,
        db=db,
        redis_client=request.app.state.redis_client,
    )
    return Cart(backend, recorder=recorder)


def get_cart_service(
    request: Request,
    cart: Cart = Depends(get_cart),
    catalog: DocumentCatalog = Depends(get_catalog),
    cart_session: CartSessionKey = Depends(get_cart_session),
) -> CartService:
    return CartService(
        cart,
        catalog,
        validator=request.app.state.validator,
        lock_service=request.app.state.lock_service,
        cart_key=cart_session.key,
    )
