# freshcart/services/pricing.py
"""
Sumy koszyka: subtotal, dostawa, podatek, razem.

Czyste funkcje na Decimal, bez stanu. Stale w settings.
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from freshcart.utils.settings import (
    CURRENCY,
    FREE_SHIPPING_THRESHOLD,
    SHIPPING_FEE,
    TAX_RATE,
)

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

CURRENCY_SYMBOLS = {
    "USD": "$",
    "INR": "₹",
    "EUR": "€",
    "GBP": "£",
    "PLN": "zł",
}

# symbol za kwota
_SUFFIX_SYMBOLS = {"PLN"}


def quantize(amount: Decimal) -> Decimal:
    return Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def shipping(subtotal: Decimal) -> Decimal:
    # darmowa dostawa dopiero POWYZEJ progu, rowne 50.00 placi
    if subtotal > FREE_SHIPPING_THRESHOLD:
        return ZERO
    return SHIPPING_FEE


def tax(subtotal: Decimal) -> Decimal:
    return subtotal * TAX_RATE


def total(subtotal: Decimal, shipping_cost: Decimal, tax_amount: Decimal) -> Decimal:
    return subtotal + shipping_cost + tax_amount


@dataclass(frozen=True)
class CartTotals:
    subtotal: Decimal
    shipping: Decimal
    tax: Decimal
    total: Decimal


def compute_totals(subtotal: Decimal) -> CartTotals:
    subtotal = quantize(subtotal)
    shipping_cost = quantize(shipping(subtotal))
    tax_amount = quantize(tax(subtotal))

    return CartTotals(
        subtotal=subtotal,
        shipping=shipping_cost,
        tax=tax_amount,
        total=total(subtotal, shipping_cost, tax_amount),
    )


def format_money(amount: Decimal, currency: str | None = None) -> str:
    code = (currency or CURRENCY).upper()
    value = f"{quantize(amount):,.2f}"
    symbol = CURRENCY_SYMBOLS.get(code)

    if symbol is None:
        return f"{value} {code}"
    if code in _SUFFIX_SYMBOLS:
        return f"{value} {symbol}"
    return f"{symbol}{value}"
