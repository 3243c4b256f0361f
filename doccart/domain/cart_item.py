# doccart/domain/cart_item.py
from typing import Any, Dict

from doccart.domain.documents import Document


class CartItem:
    """
    Pozycja koszyka: dokument + ilosc.
    Tozsamosc wyznacza tylko document_id, ilosc jest zawsze >= 1.
    """

    __slots__ = ("document", "_quantity")

    def __init__(self, document: Document, quantity: int = 1):
        self.document = document
        self.quantity = quantity

    @property
    def document_id(self) -> int:
        return self.document.id

    @property
    def quantity(self) -> int:
        return self._quantity

    @quantity.setter
    def quantity(self, value: int) -> None:
        value = int(value)
        if value < 1:
            raise ValueError("Quantity must be at least 1")
        self._quantity = value

    def set_quantity(self, value: int) -> "CartItem":
        self.quantity = value
        return self

    def copy(self) -> "CartItem":
        return CartItem(self.document, self._quantity)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CartItem):
            return NotImplemented
        return self.document_id == other.document_id

    def __hash__(self) -> int:
        return hash(self.document_id)

    def __repr__(self) -> str:
        return f"CartItem(document_id={self.document_id}, quantity={self._quantity})"

    #serializacja dla backendow (redis / baza), razem ze snapshotem dokumentu
    def to_dict(self) -> Dict[str, Any]:
        return {
            "document_id": self.document_id,
            "quantity": self._quantity,
            "document": self.document.model_dump(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CartItem":
        return cls(
            document=Document.model_validate(data["document"]),
            quantity=int(data["quantity"]),
        )
