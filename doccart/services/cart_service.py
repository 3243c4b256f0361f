# doccart/services/cart_service.py
from contextlib import nullcontext
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Optional

from doccart.domain.cart_item import CartItem
from doccart.domain.documents import DocumentCatalog
from doccart.domain.errors import ERROR_QUANTITY_EXCEEDED
from doccart.domain.validation import CartValidator, ValidationResult, default_validator
from doccart.services.cart import Cart
from doccart.utils.logging import get_logger
from doccart.utils.settings import CART_MAX_QUANTITY

logger = get_logger(__name__)

#zakres BIGINT w bazie
MAX_DOCUMENT_ID = 2**63 - 1


@dataclass
class AddOutcome:
    result: bool = True
    errors: List[str] = field(default_factory=list)
    message: str = ""


@dataclass
class BulkUpdateOutcome:
    errors: List[str] = field(default_factory=list)
    redirect_to: Optional[str] = None

    @property
    def ok(self) -> bool:
        return not self.errors

    def message(self, separator: str = "<br>") -> str:
        return separator.join(self.errors)


def is_relative_url(url: Optional[str]) -> bool:
    """Tylko sciezki z tej samej domeny: '/...' ale nie '//host/...'."""
    return bool(url) and url.startswith("/") and not url.startswith("//") and "\\" not in url


def _as_int(value: Any, limit: int) -> Optional[int]:
    """Liczba calkowita z |x| <= limit albo None (wartosc pomijana)."""
    #bool to tez int w pythonie, nie traktujemy go jak ilosci
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)
    elif isinstance(value, str):
        try:
            number = Decimal(value.strip())
        except InvalidOperation:
            return None
        if not number.is_finite() or abs(number) > limit or number != number.to_integral_value():
            return None
        value = int(number)
    elif not isinstance(value, int):
        return None
    return value if abs(value) <= limit else None


def _check_quantity(quantity: int) -> None:
    if quantity <= 0:
        raise ValueError("Quantity must be greater than 0")
    if quantity > CART_MAX_QUANTITY:
        raise ValueError(f"Quantity must not exceed {CART_MAX_QUANTITY}")


class CartService:
    """
    Use case'y koszyka dokumentow: add, deduct, remove, bulk update, view, submit.
    Schemat: walidacja (bramka) -> Cart (mutacja) -> backend (zapis).
    """

    def __init__(
        self,
        cart: Cart,
        catalog: DocumentCatalog,
        validator: CartValidator | None = None,
        lock_service=None,
        cart_key: str | None = None,
    ):
        self.cart = cart
        self.catalog = catalog
        self.validator = validator if validator is not None else default_validator
        self.lock_service = lock_service
        self.cart_key = cart_key

    def _locked(self):
        if self.lock_service is None or self.cart_key is None:
            return nullcontext()
        return self.lock_service.hold(self.cart_key)

    #commands
    def add(
        self,
        document_id: int,
        quantity: int = 1,
        back_url: Optional[str] = None,
    ) -> AddOutcome:
        """
        Dodanie dokumentu (lub zwiekszenie ilosci istniejacej pozycji).
        Nieznany dokument -> nic sie nie dzieje.
        """
        _check_quantity(quantity)

        outcome = AddOutcome()

        document = self.catalog.get_document(document_id)
        if not document:
            logger.info(f"Document {document_id} not found, nothing added")
            return outcome

        validation = self.validator.validate(quantity, document)
        if not validation.valid:
            logger.info(f"Add of document {document_id} x{quantity} rejected: {validation.errors}")
            outcome.result = False
            outcome.errors = list(validation.errors)
            outcome.message = validation.message()
            return outcome

        with self._locked():
            item = self.cart.get_item(document_id)
            if item and item.quantity + quantity > CART_MAX_QUANTITY:
                error = ERROR_QUANTITY_EXCEEDED.format(max=CART_MAX_QUANTITY, title=document.title)
                outcome.result = False
                outcome.errors = [error]
                outcome.message = ValidationResult([error]).message()
                return outcome

            if item:
                self.cart.update_item_quantity(document_id, quantity)
            else:
                self.cart.add_item(CartItem(document, quantity))

            if back_url is not None:
                if is_relative_url(back_url):
                    self.cart.set_back_url(back_url)
                else:
                    logger.warning(f"Ignoring non-relative back url {back_url!r}")

        logger.info(f"Document {document_id} x{quantity} added to cart")
        return outcome

    def deduct(self, document_id: int, quantity: int = 1) -> bool:
        _check_quantity(quantity)

        #zmniejszanie nie moze zlamac limitow, wiec bez walidacji
        with self._locked():
            self.cart.update_item_quantity(document_id, -quantity)
        return True

    def remove(self, document_id: int) -> bool:
        """Usuwa pozycje, zwraca True jesli w koszyku cos jeszcze zostalo."""
        with self._locked():
            self.cart.remove_item_by_id(document_id)
        return not self.cart.is_cart_empty()

    def update_quantities(self, quantities: Mapping[Any, Any]) -> BulkUpdateOutcome:
        """
        Formularz "zapisz zmiany": document_id -> nowa (absolutna) ilosc.

        - nienumeryczne wartosci sa pomijane
        - brak pozycji albo ta sama ilosc -> pomijane
        - ilosc <= 0 -> usuniecie
        - niepoprawna ilosc -> blad, pozycja bez zmian
        Zmiany innych pozycji NIE sa cofane gdy wystapi blad.
        """
        outcome = BulkUpdateOutcome()

        with self._locked():
            for raw_id, raw_quantity in (quantities or {}).items():
                document_id = _as_int(raw_id, MAX_DOCUMENT_ID)
                quantity = _as_int(raw_quantity, CART_MAX_QUANTITY)
                if document_id is None or quantity is None:
                    continue

                item = self.cart.get_item(document_id)
                if not item or item.quantity == quantity:
                    continue

                if quantity <= 0:
                    self.cart.remove_item(item)
                    continue

                validation = self.validator.validate(quantity, item.document)
                if validation.valid:
                    self.cart.remove_item(item)
                    self.cart.add_item(item.set_quantity(quantity))
                else:
                    outcome.errors.append(validation.message())

        if outcome.errors:
            logger.info(f"Cart update finished with {len(outcome.errors)} error(s)")
        else:
            outcome.redirect_to = self.cart.get_back_url()

        return outcome

    def set_receiver_info(self, info: Optional[Dict[str, str]]) -> None:
        with self._locked():
            self.cart.set_receiver_info(info)

    def submit(self, receiver_info: Optional[Dict[str, str]] = None, empty_after: bool = False) -> int:
        with self._locked():
            submission_id = self.cart.save_submission(receiver_info)
            if empty_after:
                self.cart.empty_cart()
        return submission_id

    #query
    def view(self) -> Cart:
        self.cart.view_only = True
        return self.cart
