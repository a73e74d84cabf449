# freshcart/domain/checkout.py
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class PaymentMethod(str, Enum):
    CARD = "card"
    PAYPAL = "paypal"
    APPLE_PAY = "apple"
    PHONEPE = "phonepe"
    PAYTM = "paytm"
    GOOGLE_PAY = "googlepay"
    CASH = "cash"

    @property
    def is_upi(self) -> bool:
        return self in UPI_METHODS

    @property
    def label(self) -> str:
        return _PAYMENT_LABELS[self]


UPI_METHODS = frozenset({PaymentMethod.PHONEPE, PaymentMethod.PAYTM, PaymentMethod.GOOGLE_PAY})

_PAYMENT_LABELS = {
    PaymentMethod.CARD: "Credit/Debit Card",
    PaymentMethod.PAYPAL: "PayPal",
    PaymentMethod.APPLE_PAY: "Apple Pay",
    PaymentMethod.PHONEPE: "PhonePe UPI",
    PaymentMethod.PAYTM: "Paytm UPI",
    PaymentMethod.GOOGLE_PAY: "Google Pay UPI",
    PaymentMethod.CASH: "Cash on Delivery",
}


class OrderStatus(str, Enum):
    PENDING = "pending"
    PENDING_COD = "pending_cod"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @property
    def label(self) -> str:
        if self is OrderStatus.PENDING_COD:
            return "Pending (Cash on Delivery)"
        return self.value.capitalize()

    @classmethod
    def for_payment(cls, method: PaymentMethod) -> "OrderStatus":
        return cls.PENDING_COD if method is PaymentMethod.CASH else cls.PENDING


def payment_label(method: str) -> str:
    try:
        return PaymentMethod(method).label
    except ValueError:
        return method.capitalize()


def status_label(status: str) -> str:
    try:
        return OrderStatus(status).label
    except ValueError:
        return status.capitalize()


class CheckoutStep(str, Enum):
    ADDRESS = "address"
    PAYMENT = "payment"


ADDRESS_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "phone",
    "street",
    "city",
    "state",
    "postal_code",
)

CARD_FIELDS = ("card_number", "expiry", "cvv", "card_name")


class AddressIn(BaseModel):
    """Formularz adresu. Puste wartosci dozwolone, walidacja w CheckoutService."""

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    street: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""


class CardDetails(BaseModel):
    # nigdy nie zapisywane ani nie wysylane dalej
    card_number: str = ""
    expiry: str = ""
    cvv: str = ""
    card_name: str = ""


class PaymentIn(BaseModel):
    method: PaymentMethod
    wallet_id: Optional[str] = None
    card: Optional[CardDetails] = None
    idempotency_key: Optional[str] = Field(None, max_length=64)


class CheckoutDraft(AddressIn):
    """Szkic zamowienia: adres + wybrana platnosc."""

    payment_method: PaymentMethod = PaymentMethod.CARD
    wallet_id: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def formatted_address(self) -> str:
        return f"{self.street}, {self.city}, {self.state} {self.postal_code}".strip()

    def missing_address_fields(self) -> list[str]:
        return [name for name in ADDRESS_FIELDS if not getattr(self, name).strip()]


class CheckoutSession(BaseModel):
    step: CheckoutStep = CheckoutStep.ADDRESS
    draft: CheckoutDraft = Field(default_factory=CheckoutDraft)
    last_error: Optional[str] = None
