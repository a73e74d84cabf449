# freshcart/api/routers/orders.py
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from freshcart.api.deps import (
    get_confirmation_service,
    get_current_user,
    get_order_service,
    get_toasts,
)
from freshcart.domain.schemas import OrderOut, OrderStatusIn, Toast, UserRead
from freshcart.services.confirmation_service import ConfirmationService
from freshcart.services.order_service import OrderService
from freshcart.services.toasts import ToastFeed

router = APIRouter(prefix="/orders", tags=["orders"])


class ConfirmationOut(BaseModel):
    order_id: str
    sent: bool = True
    toasts: List[Toast] = Field(default_factory=list)


@router.get("", response_model=List[OrderOut])
def list_orders(
    user: Optional[UserRead] = Depends(get_current_user),
    svc: OrderService = Depends(get_order_service),
):
    """
    Historia zamowien zalogowanego uzytkownika, najnowsze pierwsze.
    """
    return svc.list_orders(user)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: str,
    user: Optional[UserRead] = Depends(get_current_user),
    svc: OrderService = Depends(get_order_service),
):
    return svc.get_order(order_id, user)


@router.post("/{order_id}/confirmation-email", response_model=ConfirmationOut)
def send_confirmation(
    order_id: str,
    user: Optional[UserRead] = Depends(get_current_user),
    svc: ConfirmationService = Depends(get_confirmation_service),
    toasts: ToastFeed = Depends(get_toasts),
):
    """
    Mail z potwierdzeniem. Przy bledzie 502 + retryable, zamowienie zostaje.
    """
    order = svc.send_confirmation(user, order_id)
    return ConfirmationOut(order_id=order.id, toasts=toasts.drain())


@router.patch("/{order_id}/status", response_model=OrderOut)
def update_status(
    order_id: str,
    payload: OrderStatusIn,
    user: Optional[UserRead] = Depends(get_current_user),
    svc: OrderService = Depends(get_order_service),
):
    return svc.update_status(order_id, payload.status, user)
