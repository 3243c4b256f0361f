#doccart/api/routers/cart.py
from typing import Dict

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Request
from fastapi.responses import JSONResponse, RedirectResponse

from doccart.api.deps import (
    CartSessionKey,
    get_cart_session,
    get_cart_service,
    get_session_store,
    remember_cart_session,
)
from doccart.backends.session import SessionStore
from doccart.domain.errors import CartBusyError
from doccart.domain.schemas import (
    AddResultOut,
    CartItemOut,
    CartOut,
    ResultOut,
    SubmitIn,
    SubmitOut,
    UpdateCartItemsIn,
    UpdateCartItemsOut,
)
from doccart.services.cart_service import MAX_DOCUMENT_ID, CartService, is_relative_url
from doccart.utils.settings import CART_MAX_QUANTITY

router = APIRouter(prefix="/cart", tags=["cart"])

VALIDATION_MESSAGE = "validation_message"


def wants_json(request: Request) -> bool:
    #odpowiednik isAjax - wolajacy z JS dostaje json zamiast redirecta
    if request.headers.get("X-Requested-With", "").lower() == "xmlhttprequest":
        return True
    return "application/json" in request.headers.get("Accept", "")


def redirect_back(request: Request, back_url: str | None = None) -> RedirectResponse:
    target = back_url if is_relative_url(back_url) else None
    target = target or request.headers.get("Referer") or "/cart/view"
    return RedirectResponse(target, status_code=303)


def _reply(request, cart_session, payload: dict, back_url: str | None = None):
    if wants_json(request):
        response = JSONResponse(payload)
    else:
        response = redirect_back(request, back_url)
    return remember_cart_session(response, cart_session)


def _busy(e: CartBusyError):
    return HTTPException(status_code=409, detail=str(e))


@router.post("/add/{document_id}", response_model=AddResultOut)
def add_item(
    request: Request,
    document_id: int = Path(le=MAX_DOCUMENT_ID),
    quantity: int = Query(1, ge=1, le=CART_MAX_QUANTITY),
    back_url: str | None = Query(None, alias="BackURL"),
    svc: CartService = Depends(get_cart_service),
    cart_session: CartSessionKey = Depends(get_cart_session),
    store: SessionStore = Depends(get_session_store),
):
    try:
        outcome = svc.add(document_id, quantity, back_url=back_url)
    except CartBusyError as e:
        raise _busy(e)

    if not outcome.result and not wants_json(request):
        store.get(cart_session.key)[VALIDATION_MESSAGE] = outcome.message

    payload = AddResultOut(result=outcome.result, message=outcome.message).model_dump()
    return _reply(request, cart_session, payload, back_url)


@router.post("/deduct/{document_id}", response_model=ResultOut)
def deduct_item(
    request: Request,
    document_id: int = Path(le=MAX_DOCUMENT_ID),
    quantity: int = Query(1, ge=1, le=CART_MAX_QUANTITY),
    back_url: str | None = Query(None, alias="BackURL"),
    svc: CartService = Depends(get_cart_service),
    cart_session: CartSessionKey = Depends(get_cart_session),
):
    try:
        result = svc.deduct(document_id, quantity)
    except CartBusyError as e:
        raise _busy(e)
    return _reply(request, cart_session, {"result": result}, back_url)


@router.post("/remove/{document_id}", response_model=ResultOut)
def remove_item(
    request: Request,
    document_id: int = Path(le=MAX_DOCUMENT_ID),
    svc: CartService = Depends(get_cart_service),
    cart_session: CartSessionKey = Depends(get_cart_session),
):
    try:
        not_empty = svc.remove(document_id)
    except CartBusyError as e:
        raise _busy(e)
    return _reply(request, cart_session, {"result": not_empty})


@router.get("/view", response_model=CartOut)
def view_cart(
    svc: CartService = Depends(get_cart_service),
    cart_session: CartSessionKey = Depends(get_cart_session),
    store: SessionStore = Depends(get_session_store),
):
    cart = svc.view()
    items = cart.get_items()
    message = store.pop(cart_session.key, VALIDATION_MESSAGE)

    out = CartOut(
        view_only=cart.view_only,
        is_empty=not items,
        items=[
            CartItemOut(
                document_id=i.document_id,
                title=i.document.title,
                quantity=i.quantity,
                maximum_quantity=i.document.maximum_quantity if i.document.has_quantity_limit else None,
            )
            for i in items
        ],
        back_url=cart.get_back_url(),
        receiver_info=cart.get_receiver_info(),
        validation_message=message,
    )
    return remember_cart_session(JSONResponse(out.model_dump()), cart_session)


@router.post("/update", response_model=UpdateCartItemsOut)
def update_cart_items(
    payload: UpdateCartItemsIn,
    svc: CartService = Depends(get_cart_service),
    cart_session: CartSessionKey = Depends(get_cart_session),
):
    try:
        outcome = svc.update_quantities(payload.item_quantity)
    except CartBusyError as e:
        raise _busy(e)

    if not outcome.ok:
        out = UpdateCartItemsOut(result=False, message=outcome.message())
        return remember_cart_session(JSONResponse(out.model_dump(), status_code=400), cart_session)

    out = UpdateCartItemsOut(result=True, redirect=outcome.redirect_to)
    return remember_cart_session(JSONResponse(out.model_dump()), cart_session)


@router.put("/receiver", response_model=ResultOut)
def set_receiver_info(
    info: Dict[str, str],
    svc: CartService = Depends(get_cart_service),
    cart_session: CartSessionKey = Depends(get_cart_session),
):
    try:
        svc.set_receiver_info(info)
    except CartBusyError as e:
        raise _busy(e)
    return remember_cart_session(JSONResponse({"result": True}), cart_session)


@router.post("/submit", response_model=SubmitOut, status_code=201)
def submit_cart(
    payload: SubmitIn,
    svc: CartService = Depends(get_cart_service),
    cart_session: CartSessionKey = Depends(get_cart_session),
):
    try:
        submission_id = svc.submit(payload.receiver_info, empty_after=payload.empty_cart)
    except CartBusyError as e:
        raise _busy(e)
    out = SubmitOut(submission_id=submission_id)
    return remember_cart_session(JSONResponse(out.model_dump(), status_code=201), cart_session)
