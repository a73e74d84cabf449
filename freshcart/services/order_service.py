# freshcart/services/order_service.py
import uuid
from dataclasses import dataclass
from typing import List

from redis import RedisError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from freshcart.data.models.order import OrderModel
from freshcart.data.models.order_item import OrderItemModel
from freshcart.domain.checkout import CheckoutDraft, OrderStatus
from freshcart.domain.errors import (
    AdminRequiredError,
    AuthRequiredError,
    CheckoutInProgressError,
    CheckoutUnavailableError,
    EmptyCartError,
    OrderCreateError,
    OrderLinesError,
    OrderNotFoundError,
    ProfileSyncError,
)
from freshcart.domain.schemas import CartLine, UserRead
from freshcart.repos.order_repo import OrderRepo
from freshcart.repos.profile_repo import ProfileRepo
from freshcart.services.cart_store import CartStore
from freshcart.services.lock_service import LocalLockService, LockService
from freshcart.services.notification_service import NotificationService
from freshcart.services.pricing import CartTotals, compute_totals
from freshcart.services.toasts import Notifier, ToastFeed
from freshcart.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PlacedOrder:
    order_id: str
    status: str
    totals: CartTotals
    redirect: str
    duplicate: bool = False


def confirmation_path(order_id: str) -> str:
    return f"/order-success/{order_id}"


def order_totals(order: OrderModel) -> CartTotals:
    """Sumy zapisane przy skladaniu zamowienia, nigdy nie liczone od nowa."""
    return CartTotals(
        subtotal=order.subtotal,
        shipping=order.shipping,
        tax=order.tax,
        total=order.total,
    )


class OrderService:
    """
    Serwis odpowiedzialny za domene zamowien.

    place_order to pipeline skladania zamowienia:
    auth -> sumy -> lock -> profil (best effort) -> zamowienie + pozycje -> czyszczenie koszyka
    """

    def __init__(
        self,
        db: Session,
        lock_service: LockService | LocalLockService,
        notifier: Notifier | None = None,
        notification_service: NotificationService | None = None,
    ):
        self.db = db
        self.repo = OrderRepo(db)
        self.profiles = ProfileRepo(db)
        self.lock_service = lock_service
        self.notifier = notifier or ToastFeed()
        self.notification_service = notification_service or NotificationService()

    def place_order(
        self,
        user: UserRead | None,
        draft: CheckoutDraft,
        cart: CartStore,
        idempotency_key: str | None = None,
    ) -> PlacedOrder:
        # 1. bez uzytkownika nic nie robimy
        if user is None:
            raise AuthRequiredError("Please sign in to place your order")

        # ponowione wyslanie tego samego formularza
        existing = self._find_duplicate(user, idempotency_key)
        if existing:
            return existing

        # 2. sumy liczone raz, potem juz tylko z nich korzystamy
        if cart.is_empty():
            raise EmptyCartError()

        lines = cart.items
        totals = compute_totals(cart.get_cart_subtotal())

        # 3. blokada na podwojne klikniecie
        token = uuid.uuid4().hex
        try:
            acquired = self.lock_service.acquire_checkout_lock(user.id, token)
        except RedisError as e:
            logger.error(f"Lock dla {user.id} niedostepny: {e}")
            raise CheckoutUnavailableError(e) from e

        if not acquired:
            logger.warning(f"Uzytkownik {user.id} juz sklada zamowienie")
            raise CheckoutInProgressError()

        try:
            #drugi request mogl skonczyc miedzy sprawdzeniem a lockiem
            existing = self._find_duplicate(user, idempotency_key)
            if existing:
                return existing

            # 4. profil - blad tylko logujemy
            try:
                self._sync_profile(user, draft)
            except ProfileSyncError as e:
                logger.warning(f"{e} (user {user.id}): {e.cause}")

            # 5 + 6. zamowienie i pozycje w jednej transakcji
            order = self._create_order(user, draft, lines, totals, idempotency_key)
        finally:
            self._release_lock(user.id, token)

        # 7. koszyk czyscimy dopiero po commicie
        cart.clear_cart()

        logger.info(f"Order {order.id} created for user {user.id}, total {totals.total}")
        self.notifier.notify(
            "Order placed successfully!",
            f"Thank you for your order. Your order number is #{order.id[:8]}",
        )

        return PlacedOrder(
            order_id=order.id,
            status=order.status,
            totals=totals,
            redirect=confirmation_path(order.id),
        )

    def _release_lock(self, user_id: str, token: str) -> None:
        # zamowienie moze byc juz zapisane, lock i tak wygasnie po TTL
        try:
            self.lock_service.release_checkout_lock(user_id, token)
        except RedisError as e:
            logger.warning(f"Nie udalo sie zwolnic locka dla {user_id}: {e}")

    def _find_duplicate(self, user: UserRead, idempotency_key: str | None) -> PlacedOrder | None:
        if not idempotency_key:
            return None

        existing = self.repo.find_by_idempotency_key(user.id, idempotency_key)
        if not existing:
            return None

        logger.info(f"Zamowienie {existing.id} juz istnieje dla klucza {idempotency_key}, nie tworze drugiego")
        return PlacedOrder(
            order_id=existing.id,
            status=existing.status,
            totals=order_totals(existing),
            redirect=confirmation_path(existing.id),
            duplicate=True,
        )

    def _sync_profile(self, user: UserRead, draft: CheckoutDraft) -> None:
        try:
            self.profiles.update_profile(
                user.id,
                {
                    "full_name": draft.full_name,
                    "phone": draft.phone,
                    "street": draft.street,
                    "city": draft.city,
                    "state": draft.state,
                    "postal_code": draft.postal_code,
                },
            )
        except SQLAlchemyError as e:
            self.profiles.rollback()
            raise ProfileSyncError("Profile sync failed", e) from e

    def _create_order(
        self,
        user: UserRead,
        draft: CheckoutDraft,
        lines: List[CartLine],
        totals: CartTotals,
        idempotency_key: str | None,
    ) -> OrderModel:
        order = OrderModel(
            user_id=user.id,
            status=OrderStatus.for_payment(draft.payment_method).value,
            subtotal=totals.subtotal,
            shipping=totals.shipping,
            tax=totals.tax,
            total=totals.total,
            shipping_address=draft.formatted_address(),
            payment_method=draft.payment_method.value,
            idempotency_key=idempotency_key,
        )

        try:
            self.repo.add_order(order)
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Nie udalo sie utworzyc zamowienia dla {user.id}: {e}")
            raise OrderCreateError(e) from e

        items = [
            OrderItemModel(
                product_id=line.product.id,
                product_name=line.product.name,
                product_image=line.product.image or None,
                quantity=line.quantity,
                price=line.product.price,
            )
            for line in lines
        ]

        try:
            self.repo.add_items(order, items)
        except SQLAlchemyError as e:
            # rollback zabiera tez naglowek zamowienia
            self.repo.rollback()
            logger.error(f"Nie udalo sie zapisac pozycji zamowienia dla {user.id}: {e}")
            raise OrderLinesError(e) from e

        try:
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Commit zamowienia nie powiodl sie dla {user.id}: {e}")
            raise OrderCreateError(e) from e

        return order

    #query
    def list_orders(self, user: UserRead | None) -> List[OrderModel]:
        if user is None:
            raise AuthRequiredError()
        return self.repo.list_orders(user.id)

    def get_order(self, order_id: str, user: UserRead | None) -> OrderModel:
        if user is None:
            raise AuthRequiredError()

        order = self.repo.get_user_order(order_id, user.id)
        if not order:
            raise OrderNotFoundError(order_id)
        return order

    def update_status(self, order_id: str, status: OrderStatus, actor: UserRead | None) -> OrderModel:
        """Zmiana statusu przez admina + powiadomienie mailowe (async)."""
        if actor is None:
            raise AuthRequiredError()
        if not actor.is_admin:
            raise AdminRequiredError()

        order = self.repo.update_order_status(order_id, status.value)
        if not order:
            raise OrderNotFoundError(order_id)

        logger.info(f"Order {order.id} status -> {order.status}")
        self.notification_service.send_status_notification(order.user_id, order.id)
        return order
