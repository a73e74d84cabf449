#freshcart/api/routers/carts.py
from fastapi import APIRouter, Depends

from freshcart.api.deps import get_cart_store, get_product_client, get_toasts
from freshcart.domain.schemas import CartOut, ItemIn, QuantityIn, TotalsOut
from freshcart.services.cart_store import CartStore
from freshcart.services.pricing import compute_totals, format_money
from freshcart.services.product_client import ProductClient
from freshcart.services.toasts import ToastFeed
from freshcart.utils.settings import CURRENCY

router = APIRouter(prefix="/cart", tags=["cart"])


def cart_response(cart: CartStore, toasts: ToastFeed) -> CartOut:
    totals = compute_totals(cart.get_cart_subtotal())
    return CartOut(
        items=cart.items,
        count=cart.get_cart_count(),
        totals=TotalsOut(
            subtotal=totals.subtotal,
            shipping=totals.shipping,
            tax=totals.tax,
            total=totals.total,
            currency=CURRENCY,
            display_total=format_money(totals.total),
        ),
        toasts=toasts.drain(),
    )


@router.get("", response_model=CartOut)
def get_cart(
    cart: CartStore = Depends(get_cart_store),
    toasts: ToastFeed = Depends(get_toasts),
):
    return cart_response(cart, toasts)


@router.post("/items", response_model=CartOut)
def add_item(
    payload: ItemIn,
    cart: CartStore = Depends(get_cart_store),
    products: ProductClient = Depends(get_product_client),
    toasts: ToastFeed = Depends(get_toasts),
):
    product = products.fetch_product(payload.product_id)
    cart.add_to_cart(product, payload.quantity)
    return cart_response(cart, toasts)


@router.put("/items/{product_id}", response_model=CartOut)
def update_item(
    product_id: str,
    payload: QuantityIn,
    cart: CartStore = Depends(get_cart_store),
    toasts: ToastFeed = Depends(get_toasts),
):
    cart.update_quantity(product_id, payload.quantity)
    return cart_response(cart, toasts)


@router.delete("/items/{product_id}", response_model=CartOut)
def remove_item(
    product_id: str,
    cart: CartStore = Depends(get_cart_store),
    toasts: ToastFeed = Depends(get_toasts),
):
    cart.remove_from_cart(product_id)
    return cart_response(cart, toasts)


@router.delete("", response_model=CartOut)
def clear_cart(
    cart: CartStore = Depends(get_cart_store),
    toasts: ToastFeed = Depends(get_toasts),
):
    cart.clear_cart()
    return cart_response(cart, toasts)
