# freshcart/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional
from decimal import Decimal
from datetime import datetime

from freshcart.domain.checkout import OrderStatus


class Product(BaseModel):
    """Produkt z katalogu (tylko odczyt)."""

    id: str
    name: str
    price: Decimal = Field(..., ge=0)
    stock: int = Field(0, ge=0)
    category: str = ""
    image: str = ""
    description: str = ""
    rating: float = 0
    reviews: int = 0
    badges: List[str] = Field(default_factory=list)
    is_express: bool = False
    is_newly_added: bool = False


class CartLine(BaseModel):
    """Jedna pozycja koszyka: produkt + ilosc."""

    product: Product
    quantity: int = Field(..., ge=1)

    @property
    def line_total(self) -> Decimal:
        return self.product.price * self.quantity


class Toast(BaseModel):
    """Krotkie powiadomienie dla uzytkownika."""

    title: str
    description: str = ""
    variant: str = "default"  # default, destructive


class ItemIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    product_id: str = Field(..., min_length=1, description="ID produktu")
    quantity: int = Field(1, gt=0, description="Ilosc produktu (musi byc > 0)")


class QuantityIn(BaseModel):
    # <= 0 usuwa pozycje
    quantity: int


class WishlistIn(BaseModel):
    product_id: str = Field(..., min_length=1)


class TotalsOut(BaseModel):
    subtotal: Decimal
    shipping: Decimal
    tax: Decimal
    total: Decimal
    currency: str
    display_total: str


class CartOut(BaseModel):
    """Schema dla koszyka (response)."""

    items: List[CartLine]
    count: int
    totals: TotalsOut
    toasts: List[Toast] = Field(default_factory=list)


class WishlistOut(BaseModel):
    items: List[Product]
    toasts: List[Toast] = Field(default_factory=list)


class UserCreate(BaseModel):
    """Schema dla tworzenia uzytkownika."""

    id: str = Field(..., min_length=1, max_length=64, description="ID uzytkownika z providera auth")
    name: str = Field(..., min_length=1, max_length=100, description="Imie i nazwisko")
    email: str = Field(..., min_length=3, max_length=254)
    is_admin: bool = False


class UserRead(BaseModel):
    """Schema dla uzytkownika (response)."""

    id: str
    name: str
    email: str
    is_admin: bool = False

    model_config = ConfigDict(from_attributes=True)


class ProfileIn(BaseModel):
    full_name: Optional[str] = None
    phone: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None


class ProfileOut(ProfileIn):
    id: str

    model_config = ConfigDict(from_attributes=True)


class OrderItemOut(BaseModel):
    product_id: str
    product_name: str
    product_image: Optional[str] = None
    quantity: int
    price: Decimal

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    """Schema dla zamowienia (response)."""

    id: str
    user_id: str
    status: str
    subtotal: Decimal
    shipping: Decimal
    tax: Decimal
    total: Decimal
    shipping_address: str
    payment_method: str
    created_at: datetime
    items: List[OrderItemOut] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class OrderStatusIn(BaseModel):
    status: OrderStatus
