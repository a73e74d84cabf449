# freshcart/services/checkout_service.py
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from freshcart.domain.checkout import (
    CARD_FIELDS,
    AddressIn,
    CardDetails,
    CheckoutDraft,
    CheckoutSession,
    CheckoutStep,
    PaymentIn,
    PaymentMethod,
)
from freshcart.domain.errors import (
    CheckoutStateError,
    CheckoutValidationError,
    EmptyCartError,
    FreshCartError,
)
from freshcart.domain.schemas import UserRead
from freshcart.repos.profile_repo import ProfileRepo
from freshcart.services.cart_store import CartStore
from freshcart.services.order_service import OrderService, PlacedOrder
from freshcart.services.snapshot_storage import SnapshotStorage, snapshot_key
from freshcart.utils.logging import get_logger

logger = get_logger(__name__)

CHECKOUT_SLOT = "checkout"


class CheckoutService:
    """
    Dwa kroki: adres -> platnosc -> zamowienie.

    Sesja checkoutu (krok + szkic) lezy w tym samym storage co koszyk.
    Dane karty sa tylko sprawdzane i od razu porzucane, nigdy nie trafiaja do sesji.
    """

    def __init__(
        self,
        storage: SnapshotStorage,
        cart: CartStore,
        profiles: ProfileRepo,
        order_service: OrderService,
    ):
        self.storage = storage
        self.cart = cart
        self.profiles = profiles
        self.order_service = order_service
        self._key = snapshot_key(cart.client_id, CHECKOUT_SLOT)

    # ---- sesja ----

    def get_session(self) -> CheckoutSession | None:
        raw = self.storage.get(self._key)
        if not raw:
            return None
        try:
            return CheckoutSession.model_validate_json(raw)
        except ValidationError:
            logger.warning(f"Uszkodzona sesja checkoutu {self._key}, zaczynam od nowa")
            self.storage.delete(self._key)
            return None

    def _save(self, session: CheckoutSession) -> CheckoutSession:
        self.storage.set(self._key, session.model_dump_json())
        return session

    def _require_session(self, action: str, step: CheckoutStep) -> CheckoutSession:
        session = self.get_session()
        if session is None:
            raise CheckoutStateError(action, None)
        if session.step != step:
            raise CheckoutStateError(action, session.step.value)
        return session

    def discard(self) -> None:
        self.storage.delete(self._key)

    # ---- kroki ----

    def begin(self, user: UserRead | None) -> CheckoutSession:
        if self.cart.is_empty():
            raise EmptyCartError()

        draft = CheckoutDraft()
        if user is not None:
            first, _, last = user.name.strip().partition(" ")
            draft.first_name = first
            draft.last_name = last.strip()
            draft.email = user.email
            self._apply_profile(user, draft)

        logger.info(f"Checkout start dla klienta {self.cart.client_id}")
        return self._save(CheckoutSession(step=CheckoutStep.ADDRESS, draft=draft))

    def _apply_profile(self, user: UserRead, draft: CheckoutDraft) -> None:
        # best effort - brak profilu albo blad bazy nie blokuje checkoutu
        try:
            profile = self.profiles.get_profile(user.id)
        except SQLAlchemyError as e:
            logger.warning(f"Nie udalo sie wczytac profilu {user.id}: {e}")
            return

        if profile is None:
            return

        if profile.full_name:
            first, _, last = profile.full_name.strip().partition(" ")
            draft.first_name = first
            draft.last_name = last.strip()

        for field in ("phone", "street", "city", "state", "postal_code"):
            value = getattr(profile, field)
            if value:
                setattr(draft, field, value)

    def submit_address(self, address: AddressIn) -> CheckoutSession:
        session = self._require_session("submit the address", CheckoutStep.ADDRESS)

        draft = session.draft.model_copy(update=address.model_dump())
        missing = draft.missing_address_fields()

        session.draft = draft
        if missing:
            self._save(session)
            raise CheckoutValidationError(missing)

        session.step = CheckoutStep.PAYMENT
        session.last_error = None
        return self._save(session)

    def back(self) -> CheckoutSession:
        session = self._require_session("go back", CheckoutStep.PAYMENT)
        session.step = CheckoutStep.ADDRESS
        return self._save(session)

    def submit_payment(self, user: UserRead | None, payment: PaymentIn) -> PlacedOrder:
        session = self._require_session("submit the payment", CheckoutStep.PAYMENT)

        self._validate_payment(payment)

        draft = session.draft
        draft.payment_method = payment.method
        draft.wallet_id = payment.wallet_id.strip() if payment.method.is_upi else None

        try:
            placed = self.order_service.place_order(
                user,
                draft,
                self.cart,
                idempotency_key=payment.idempotency_key,
            )
        except FreshCartError as e:
            # zostajemy na kroku platnosci, mozna ponowic
            session.last_error = str(e)
            self._save(session)
            raise

        self.discard()
        return placed

    @staticmethod
    def _validate_payment(payment: PaymentIn) -> None:
        missing = []

        if payment.method.is_upi and not (payment.wallet_id or "").strip():
            missing.append("wallet_id")

        if payment.method is PaymentMethod.CARD:
            card = payment.card or CardDetails()
            missing.extend(name for name in CARD_FIELDS if not getattr(card, name).strip())

        if missing:
            raise CheckoutValidationError(missing)
