# doccart/services/cart.py
from typing import Dict, Optional, Tuple

from doccart.backends.base import CartBackend
from doccart.domain.cart_item import CartItem
from doccart.domain.errors import MissingRecorderError
from doccart.utils.logging import get_logger

logger = get_logger(__name__)


class Cart:
    """
    Koszyk dokumentow na czas jednego requestu.
    Nie trzyma stanu, wszystko deleguje do backendu (ktory jest trwaly).

    Dwie rozne konwencje zmiany ilosci:
    - add_item podmienia cala pozycje (ilosc = ilosc z itemu)
    - update_item_quantity dodaje delte do biezacej ilosci
    """

    def __init__(self, backend: CartBackend, recorder=None):
        self.backend = backend
        self.recorder = recorder
        #tylko dla widoku, nie jest zapisywane
        self.view_only = False

    #query
    def get_items(self) -> Tuple[CartItem, ...]:
        return tuple(self.backend.get_items())

    def get_item(self, document_id: int) -> Optional[CartItem]:
        return self.backend.get_item(document_id)

    def is_in_cart(self, document_id: int) -> bool:
        return self.get_item(document_id) is not None

    def is_cart_empty(self) -> bool:
        return not self.get_items()

    #commands
    def add_item(self, item: CartItem) -> "Cart":
        self.backend.add_item(item)
        return self

    def remove_item(self, item: CartItem) -> "Cart":
        self.backend.remove_item(item)
        return self

    def remove_item_by_id(self, document_id: int) -> "Cart":
        self.backend.remove_item_by_id(document_id)
        return self

    def update_item_quantity(self, document_id: int, quantity: int) -> "Cart":
        """
        Zmienia ilosc o `quantity` (dodatnia zwieksza, ujemna zmniejsza).
        Pozycja z wynikiem <= 0 jest usuwana, brak pozycji to no-op.
        """
        item = self.get_item(document_id)
        if not item:
            return self

        new_quantity = item.quantity + int(quantity)
        if new_quantity <= 0:
            logger.info(f"Document {document_id} quantity dropped to {new_quantity}, removing")
            self.remove_item_by_id(document_id)
        else:
            item.quantity = new_quantity
            self.add_item(item)

        return self

    def empty_cart(self) -> "Cart":
        self.backend.empty_cart()
        return self

    def set_back_url(self, url: Optional[str]) -> "Cart":
        self.backend.set_back_url(url)
        return self

    def get_back_url(self) -> Optional[str]:
        return self.backend.get_back_url()

    def set_receiver_info(self, info: Optional[Dict[str, str]]) -> "Cart":
        self.backend.set_receiver_info(info)
        return self

    def get_receiver_info(self) -> Optional[Dict[str, str]]:
        return self.backend.get_receiver_info()

    def save_submission(self, receiver_info: Optional[Dict[str, str]] = None) -> int:
        """Zapisuje koszyk jako zamowienie. Koszyk NIE jest czyszczony."""
        if self.recorder is None:
            raise MissingRecorderError()

        if receiver_info is None:
            receiver_info = self.get_receiver_info()

        return self.recorder.record(self.get_items(), receiver_info)
