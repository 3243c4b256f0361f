"""Pytest configuration and fixtures"""
import os

# Set test environment variables (przed importem doccart)
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CART_BACKEND", "session")
os.environ.setdefault("CELERY_TASK_ALWAYS_EAGER", "1")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from doccart.backends import build_backend
from doccart.backends.session import SessionStore
from doccart.data.database import Base
from doccart.data.models import DocumentModel
import doccart.data.models  # noqa: F401
from doccart.domain.documents import Document
from doccart.repos.document_repo import DocumentRepo
from doccart.services.cart import Cart
from doccart.services.submission_service import SubmissionRecorder


class FakeRedis:
    """Minimalny klient redis w pamieci (get/set/delete/eval dla locka)."""

    def __init__(self):
        self.data = {}
        self.ttls = {}

    def get(self, name):
        return self.data.get(name)

    def set(self, name, value, ex=None, nx=False):
        if nx and name in self.data:
            return None
        self.data[name] = value
        if ex is not None:
            self.ttls[name] = ex
        return True

    def delete(self, *names):
        removed = 0
        for name in names:
            if self.data.pop(name, None) is not None:
                removed += 1
            self.ttls.pop(name, None)
        return removed

    def eval(self, script, numkeys, key, token):
        #tylko skrypt zwalniania locka: GET == token -> DEL
        if self.data.get(key) == token:
            return self.delete(key)
        return 0


def make_document(
    document_id: int,
    title: str = "Document",
    allowed: bool = True,
    limit: int | None = None,
) -> Document:
    return Document(
        id=document_id,
        title=title,
        allowed_in_cart=allowed,
        has_quantity_limit=limit is not None,
        maximum_quantity=limit,
    )


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def documents(db):
    """A bez limitu, B z limitem 3, C niedozwolony w koszyku."""
    rows = [
        DocumentModel(id=1, title="Annual Report", allowed_in_cart=True,
                      has_quantity_limit=False, print_request_count=0),
        DocumentModel(id=2, title="Planning Guidelines", allowed_in_cart=True,
                      has_quantity_limit=True, maximum_quantity=3, print_request_count=0),
        DocumentModel(id=3, title="Internal Memo", allowed_in_cart=False,
                      has_quantity_limit=False, print_request_count=0),
    ]
    db.add_all(rows)
    db.commit()
    return {row.id: row for row in rows}


@pytest.fixture
def catalog(db, documents):
    return DocumentRepo(db)


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def session_store():
    return SessionStore()


@pytest.fixture(params=["session", "redis", "database"])
def backend(request, session_store, fake_redis, db):
    return build_backend(
        "test-session",
        request.param,
        session_store=session_store,
        db=db,
        redis_client=fake_redis,
    )


@pytest.fixture
def recorder(db, catalog):
    return SubmissionRecorder(db, catalog)


@pytest.fixture
def cart(backend, recorder):
    return Cart(backend, recorder=recorder)
