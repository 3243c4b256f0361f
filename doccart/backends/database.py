# doccart/backends/database.py
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from doccart.data.models.cart_item import CartItemModel
from doccart.domain.cart_item import CartItem
from doccart.repos.cart_repo import CartRepo


def _to_item(row: CartItemModel) -> CartItem:
    return CartItem.from_dict(
        {"document_id": row.document_id, "quantity": row.quantity, "document": row.document}
    )


class DatabaseBackend:
    """
    Koszyk w bazie: wiersz cart_sessions + wiersze cart_items.
    Kazda operacja zapisu konczy sie commitem, bledy SQLAlchemy ida wyzej.
    """

    def __init__(self, db: Session, session_key: str):
        self.session_key = session_key
        self.repo = CartRepo(db)

    def get_items(self) -> List[CartItem]:
        return [_to_item(row) for row in self.repo.get_cart_items(self.session_key)]

    def get_item(self, document_id: int) -> Optional[CartItem]:
        row = self.repo.get_cart_item(self.session_key, int(document_id))
        return _to_item(row) if row else None

    def add_item(self, item: CartItem) -> None:
        cart_session = self.repo.get_or_create_session(self.session_key)
        row = self.repo.get_cart_item(self.session_key, item.document_id)
        data = item.to_dict()

        #podmiana istniejacego wiersza zachowuje jego pozycje (id)
        if row:
            row.quantity = data["quantity"]
            row.document = data["document"]
        else:
            self.repo.add_cart_item(
                CartItemModel(
                    session_key=self.session_key,
                    document_id=item.document_id,
                    quantity=data["quantity"],
                    document=data["document"],
                )
            )
        self.repo.touch(cart_session)
        self.repo.commit()

    def remove_item(self, item: CartItem) -> None:
        self.remove_item_by_id(item.document_id)

    def remove_item_by_id(self, document_id: int) -> None:
        if self.repo.delete_cart_item(self.session_key, int(document_id)):
            self.repo.commit()

    def empty_cart(self) -> None:
        self.repo.delete_cart_items(self.session_key)
        self.repo.commit()

    def set_back_url(self, url: Optional[str]) -> None:
        cart_session = self.repo.get_or_create_session(self.session_key)
        cart_session.back_url = url
        self.repo.touch(cart_session)
        self.repo.commit()

    def get_back_url(self) -> Optional[str]:
        cart_session = self.repo.get_session(self.session_key)
        return cart_session.back_url if cart_session else None

    def set_receiver_info(self, info: Optional[Dict[str, str]]) -> None:
        cart_session = self.repo.get_or_create_session(self.session_key)
        cart_session.receiver_info = dict(info) if info is not None else None
        self.repo.touch(cart_session)
        self.repo.commit()

    def get_receiver_info(self) -> Optional[Dict[str, str]]:
        cart_session = self.repo.get_session(self.session_key)
        if not cart_session or cart_session.receiver_info is None:
            return None
        return dict(cart_session.receiver_info)
