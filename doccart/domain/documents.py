# doccart/domain/documents.py
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field


class Document(BaseModel):
    """
    Dokument, ktory mozna zamowic (wydruk).
    Koszyk tylko referuje dokument, nigdy go nie modyfikuje.
    """

    id: int
    title: str
    allowed_in_cart: bool = True
    has_quantity_limit: bool = False
    maximum_quantity: int | None = Field(default=None, ge=0)
    print_request_count: int = 0

    model_config = ConfigDict(from_attributes=True, frozen=True)

    def is_allowed_in_cart(self) -> bool:
        return self.allowed_in_cart


class DocumentCatalog(Protocol):
    """Lookup dokumentow po ID + licznik zamowien wydruku."""

    def get_document(self, document_id: int) -> Document | None: ...

    def increment_print_request(self, document_id: int) -> None: ...
