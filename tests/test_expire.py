"""
Tests for expiring database cart sessions
"""

from datetime import datetime, timedelta, timezone

from conftest import make_document
from doccart.backends.database import DatabaseBackend
from doccart.data.models import CartItemModel, CartSessionModel
from doccart.domain.cart_item import CartItem
from doccart.repos.cart_repo import CartRepo


def test_delete_expired_sessions(db):
    old = DatabaseBackend(db, "old")
    fresh = DatabaseBackend(db, "fresh")
    old.add_item(CartItem(make_document(1), 1))
    fresh.add_item(CartItem(make_document(1), 1))

    stale = db.get(CartSessionModel, "old")
    stale.updated_at = datetime.now(timezone.utc) - timedelta(hours=2)
    db.commit()

    repo = CartRepo(db)
    assert repo.delete_expired_sessions(3600) == 1
    repo.commit()

    assert db.get(CartSessionModel, "old") is None
    assert db.query(CartItemModel).filter_by(session_key="old").count() == 0
    assert fresh.get_item(1).quantity == 1


def test_nothing_to_expire(db):
    DatabaseBackend(db, "fresh").set_back_url("/docs")

    assert CartRepo(db).delete_expired_sessions(3600) == 0
