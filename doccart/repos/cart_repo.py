# doccart/repos/cart_repo.py
from datetime import datetime, timezone, timedelta

from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from doccart.data.models.cart_session import CartSessionModel
from doccart.data.models.cart_item import CartItemModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_session(self, session_key: str) -> CartSessionModel | None:
        return self.db.get(CartSessionModel, session_key)

    def get_or_create_session(self, session_key: str) -> CartSessionModel:
        cart_session = self.get_session(session_key)
        if cart_session is None:
            cart_session = CartSessionModel(session_key=session_key)
            self.db.add(cart_session)
            self.db.flush()
        return cart_session

    def touch(self, cart_session: CartSessionModel) -> None:
        cart_session.updated_at = datetime.now(timezone.utc)

    def get_cart_items(self, session_key: str) -> list[CartItemModel]:
        return list(
            self.db.execute(
                select(CartItemModel)
                .where(CartItemModel.session_key == session_key)
                .order_by(CartItemModel.id)
            ).scalars()
        )

    def get_cart_item(self, session_key: str, document_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.session_key == session_key,
                CartItemModel.document_id == document_id,
            )
        ).scalar_one_or_none()

    def add_cart_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        return item

    def delete_cart_item(self, session_key: str, document_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel).where(
                CartItemModel.session_key == session_key,
                CartItemModel.document_id == document_id,
            )
        )
        return result.rowcount

    def delete_cart_items(self, session_key: str) -> int:
        result = self.db.execute(
            delete(CartItemModel).where(CartItemModel.session_key == session_key)
        )
        return result.rowcount

    def delete_expired_sessions(self, ttl_seconds: int) -> int:
        cutoff = datetime.now(timezone.utc) - timedelta(seconds=ttl_seconds)
        expired = list(
            self.db.execute(
                select(CartSessionModel.session_key).where(CartSessionModel.updated_at < cutoff)
            ).scalars()
        )
        if not expired:
            return 0
        self.db.execute(delete(CartItemModel).where(CartItemModel.session_key.in_(expired)))
        self.db.execute(delete(CartSessionModel).where(CartSessionModel.session_key.in_(expired)))
        return len(expired)

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
