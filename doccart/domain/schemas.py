# doccart/domain/schemas.py
from datetime import datetime
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class CartItemOut(BaseModel):
    """Schema dla pozycji koszyka (response)."""

    document_id: int
    title: str
    quantity: int
    maximum_quantity: int | None = None


class CartOut(BaseModel):
    """Schema dla widoku koszyka (response)."""

    view_only: bool = False
    is_empty: bool
    items: List[CartItemOut]
    back_url: str | None = None
    receiver_info: Dict[str, str] | None = None
    validation_message: str | None = None


class AddResultOut(BaseModel):
    result: bool
    message: str = ""


class ResultOut(BaseModel):
    result: bool


class UpdateCartItemsIn(BaseModel):
    """Formularz zbiorczej zmiany ilosci: {"ItemQuantity": {"12": "3", ...}}."""

    #wartosci surowe, nienumeryczne pomija dopiero serwis
    item_quantity: Dict[str, Any] = Field(
        default_factory=dict,
        alias="ItemQuantity",
    )

    model_config = ConfigDict(populate_by_name=True)


class UpdateCartItemsOut(BaseModel):
    result: bool
    message: str = ""
    redirect: str | None = None


class SubmitIn(BaseModel):
    receiver_info: Dict[str, str] | None = None
    empty_cart: bool = False


class SubmitOut(BaseModel):
    submission_id: int


class SubmissionItemOut(BaseModel):
    document_id: int
    quantity: int

    model_config = ConfigDict(from_attributes=True)


class SubmissionOut(BaseModel):
    id: int
    receiver_info: Dict[str, str] | None = None
    created_at: datetime
    items: List[SubmissionItemOut]

    model_config = ConfigDict(from_attributes=True)


class DocumentOut(BaseModel):
    id: int
    title: str
    allowed_in_cart: bool
    has_quantity_limit: bool
    maximum_quantity: int | None = None
    print_request_count: int = 0

    model_config = ConfigDict(from_attributes=True)
