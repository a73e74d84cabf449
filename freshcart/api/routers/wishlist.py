# freshcart/api/routers/wishlist.py
from fastapi import APIRouter, Depends

from freshcart.api.deps import get_cart_store, get_product_client, get_toasts
from freshcart.domain.schemas import WishlistIn, WishlistOut
from freshcart.services.cart_store import CartStore
from freshcart.services.product_client import ProductClient
from freshcart.services.toasts import ToastFeed

router = APIRouter(prefix="/wishlist", tags=["wishlist"])


def wishlist_response(cart: CartStore, toasts: ToastFeed) -> WishlistOut:
    return WishlistOut(items=cart.wishlist, toasts=toasts.drain())


@router.get("", response_model=WishlistOut)
def get_wishlist(
    cart: CartStore = Depends(get_cart_store),
    toasts: ToastFeed = Depends(get_toasts),
):
    return wishlist_response(cart, toasts)


@router.post("", response_model=WishlistOut)
def add_to_wishlist(
    payload: WishlistIn,
    cart: CartStore = Depends(get_cart_store),
    products: ProductClient = Depends(get_product_client),
    toasts: ToastFeed = Depends(get_toasts),
):
    cart.add_to_wishlist(products.fetch_product(payload.product_id))
    return wishlist_response(cart, toasts)


@router.post("/toggle", response_model=WishlistOut)
def toggle_wishlist(
    payload: WishlistIn,
    cart: CartStore = Depends(get_cart_store),
    products: ProductClient = Depends(get_product_client),
    toasts: ToastFeed = Depends(get_toasts),
):
    """Stare zachowanie przycisku serduszka: drugi klik usuwa."""
    cart.toggle_wishlist(products.fetch_product(payload.product_id))
    return wishlist_response(cart, toasts)


@router.delete("/{product_id}", response_model=WishlistOut)
def remove_from_wishlist(
    product_id: str,
    cart: CartStore = Depends(get_cart_store),
    toasts: ToastFeed = Depends(get_toasts),
):
    cart.remove_from_wishlist(product_id)
    return wishlist_response(cart, toasts)
