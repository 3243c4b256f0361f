# doccart/domain/errors.py
"""Wyjatki domeny koszyka i stale komunikatow dla uzytkownika."""

ERROR_NOT_ALLOWED = "You are not allowed to add this document"
ERROR_QUANTITY_EXCEEDED = (
    'Maximum of {max} documents exceeded for "{title}", please select a lower quantity.'
)
ERROR_SUBMISSION_NOT_FOUND = "Submission not found"
ERROR_DOCUMENT_NOT_FOUND = "Document not found"
ERROR_CART_BUSY = "Cart is being modified by another request"


class CartError(Exception):
    """Bazowy wyjatek koszyka."""


class CartBusyError(CartError):
    """Nie udalo sie zablokowac koszyka (inny request go modyfikuje)."""

    def __init__(self, cart_key: str):
        super().__init__(ERROR_CART_BUSY)
        self.cart_key = cart_key


class UnknownBackendError(CartError, ValueError):
    def __init__(self, kind: str):
        super().__init__(f"Unknown cart backend: {kind!r}")
        self.kind = kind


class MissingRecorderError(CartError, RuntimeError):
    def __init__(self):
        super().__init__("Cart was created without a submission recorder")
