# freshcart/api/routers/checkout.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from freshcart.api.deps import get_checkout_service, get_current_user, get_toasts
from freshcart.domain.checkout import AddressIn, CheckoutSession, PaymentIn
from freshcart.domain.schemas import Toast, TotalsOut, UserRead
from freshcart.services.checkout_service import CheckoutService
from freshcart.services.pricing import format_money
from freshcart.services.toasts import ToastFeed
from freshcart.utils.settings import CURRENCY

router = APIRouter(prefix="/checkout", tags=["checkout"])


class CheckoutOut(BaseModel):
    session: CheckoutSession
    toasts: List[Toast] = Field(default_factory=list)


class PlacedOrderOut(BaseModel):
    order_id: str
    status: str
    totals: TotalsOut
    redirect: str
    duplicate: bool = False
    toasts: List[Toast] = Field(default_factory=list)


@router.post("", response_model=CheckoutOut)
def begin_checkout(
    user: Optional[UserRead] = Depends(get_current_user),
    svc: CheckoutService = Depends(get_checkout_service),
    toasts: ToastFeed = Depends(get_toasts),
):
    return CheckoutOut(session=svc.begin(user), toasts=toasts.drain())


@router.get("", response_model=CheckoutOut)
def get_checkout(svc: CheckoutService = Depends(get_checkout_service)):
    session = svc.get_session()
    if session is None:
        raise HTTPException(status_code=404, detail="Checkout not started")
    return CheckoutOut(session=session)


@router.post("/address", response_model=CheckoutOut)
def submit_address(
    payload: AddressIn,
    svc: CheckoutService = Depends(get_checkout_service),
):
    return CheckoutOut(session=svc.submit_address(payload))


@router.post("/back", response_model=CheckoutOut)
def back_to_address(svc: CheckoutService = Depends(get_checkout_service)):
    return CheckoutOut(session=svc.back())


@router.post("/payment", response_model=PlacedOrderOut, status_code=201)
def submit_payment(
    payload: PaymentIn,
    user: Optional[UserRead] = Depends(get_current_user),
    svc: CheckoutService = Depends(get_checkout_service),
    toasts: ToastFeed = Depends(get_toasts),
):
    placed = svc.submit_payment(user, payload)
    totals = placed.totals
    return PlacedOrderOut(
        order_id=placed.order_id,
        status=placed.status,
        totals=TotalsOut(
            subtotal=totals.subtotal,
            shipping=totals.shipping,
            tax=totals.tax,
            total=totals.total,
            currency=CURRENCY,
            display_total=format_money(totals.total),
        ),
        redirect=placed.redirect,
        duplicate=placed.duplicate,
        toasts=toasts.drain(),
    )
