# freshcart/api/deps.py
from functools import lru_cache

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from freshcart.data.database import get_db
from freshcart.domain.schemas import UserRead
from freshcart.repos.profile_repo import ProfileRepo
from freshcart.services.auth import HeaderAuthProvider
from freshcart.services.cart_store import CartStore
from freshcart.services.checkout_service import CheckoutService
from freshcart.services.confirmation_service import ConfirmationService
from freshcart.services.email_client import EmailClient
from freshcart.services.lock_service import LocalLockService, LockService
from freshcart.services.order_service import OrderService
from freshcart.services.product_client import ProductClient
from freshcart.services.snapshot_storage import SnapshotStorage, create_snapshot_storage
from freshcart.services.toasts import ToastFeed
from freshcart.utils.settings import SNAPSHOT_BACKEND

DEFAULT_CLIENT_ID = "anonymous"


#jeden obiekt na proces, tworzony leniwie
@lru_cache
def get_storage() -> SnapshotStorage:
    return create_snapshot_storage()


@lru_cache
def get_lock_service() -> LockService | LocalLockService:
    if SNAPSHOT_BACKEND == "memory":
        return LocalLockService()
    return LockService()


@lru_cache
def get_product_client() -> ProductClient:
    return ProductClient()


def get_email_client() -> EmailClient:
    return EmailClient()


def get_toasts() -> ToastFeed:
    # nowy feed per request
    return ToastFeed()


def get_current_user(request: Request, db: Session = Depends(get_db)) -> UserRead | None:
    return HeaderAuthProvider(db).current_user(request)


def get_cart_store(
    x_client_id: str = Header(DEFAULT_CLIENT_ID),
    storage: SnapshotStorage = Depends(get_storage),
    toasts: ToastFeed = Depends(get_toasts),
) -> CartStore:
    return CartStore(storage, x_client_id, toasts)


def get_order_service(
    db: Session = Depends(get_db),
    lock_service=Depends(get_lock_service),
    toasts: ToastFeed = Depends(get_toasts),
) -> OrderService:
    return OrderService(db, lock_service, toasts)


def get_checkout_service(
    db: Session = Depends(get_db),
    storage: SnapshotStorage = Depends(get_storage),
    cart: CartStore = Depends(get_cart_store),
    order_service: OrderService = Depends(get_order_service),
) -> CheckoutService:
    return CheckoutService(storage, cart, ProfileRepo(db), order_service)


def get_confirmation_service(
    db: Session = Depends(get_db),
    email_client: EmailClient = Depends(get_email_client),
    toasts: ToastFeed = Depends(get_toasts),
) -> ConfirmationService:
    return ConfirmationService(db, email_client, toasts)
