# doccart/backends/base.py
from typing import Dict, List, Optional, Protocol, runtime_checkable

from doccart.domain.cart_item import CartItem


@runtime_checkable
class CartBackend(Protocol):
    """
    Kontrakt przechowywania koszyka.

    add_item zastepuje cala pozycje dla danego document_id (last write wins),
    logika sumowania ilosci jest w Cart, nie tutaj.
    Usuwanie nieistniejacej pozycji to no-op.
    Bledy I/O magazynu nie sa tu lapane, ida do wywolujacego.
    """

    def get_items(self) -> List[CartItem]: ...

    def get_item(self, document_id: int) -> Optional[CartItem]: ...

    def add_item(self, item: CartItem) -> None: ...

    def remove_item(self, item: CartItem) -> None: ...

    def remove_item_by_id(self, document_id: int) -> None: ...

    def empty_cart(self) -> None: ...

    def set_back_url(self, url: Optional[str]) -> None: ...

    def get_back_url(self) -> Optional[str]: ...

    def set_receiver_info(self, info: Optional[Dict[str, str]]) -> None: ...

    def get_receiver_info(self) -> Optional[Dict[str, str]]: ...
