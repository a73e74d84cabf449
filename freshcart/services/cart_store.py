# freshcart/services/cart_store.py
from decimal import Decimal
from typing import Dict, List

from pydantic import TypeAdapter, ValidationError
from redis.exceptions import RedisError

from freshcart.domain.schemas import CartLine, Product
from freshcart.services.snapshot_storage import SnapshotStorage, snapshot_key
from freshcart.services.toasts import Notifier, ToastFeed
from freshcart.utils.logging import get_logger

logger = get_logger(__name__)

CART_SLOT = "cart"
WISHLIST_SLOT = "wishlist"

_cart_adapter = TypeAdapter(List[CartLine])
_wishlist_adapter = TypeAdapter(List[Product])


class CartStore:
    """
    Koszyk i lista zyczen jednej instalacji klienta.

    Stan w pamieci, po kazdej zmianie caly snapshot leci do storage.
    Przy starcie wczytujemy snapshot, uszkodzony = pusty koszyk.
    Sklep nie sprawdza stanu magazynowego, to robi UI.
    """

    def __init__(
        self,
        storage: SnapshotStorage,
        client_id: str,
        notifier: Notifier | None = None,
    ):
        self.storage = storage
        self.client_id = client_id
        self.notifier = notifier or ToastFeed()

        self._items: Dict[str, CartLine] = {}
        self._wishlist: Dict[str, Product] = {}
        self._load()

    # ---- odczyt ----

    @property
    def items(self) -> List[CartLine]:
        return list(self._items.values())

    @property
    def wishlist(self) -> List[Product]:
        return list(self._wishlist.values())

    def is_empty(self) -> bool:
        return not self._items

    def get_cart_subtotal(self) -> Decimal:
        return sum((line.line_total for line in self._items.values()), Decimal("0.00"))

    def get_cart_count(self) -> int:
        return sum(line.quantity for line in self._items.values())

    def is_in_wishlist(self, product_id: str) -> bool:
        return product_id in self._wishlist

    # ---- koszyk ----

    def add_to_cart(self, product: Product, quantity: int = 1) -> CartLine:
        existing = self._items.get(product.id)

        if existing:
            logger.info(
                f"Produkt {product.id} juz jest w koszyku, zwiekszam ilosc "
                f"z {existing.quantity} do {existing.quantity + quantity}"
            )
            existing.quantity += quantity
            line = existing
        else:
            line = CartLine(product=product, quantity=quantity)
            self._items[product.id] = line

        self._persist_cart()
        self.notifier.notify(
            "Added to cart",
            f"{quantity} x {product.name} added to your cart",
        )
        return line

    def remove_from_cart(self, product_id: str) -> None:
        if self._items.pop(product_id, None) is None:
            return

        self._persist_cart()
        self.notifier.notify("Removed from cart", "Item removed from your cart")

    def update_quantity(self, product_id: str, quantity: int) -> None:
        if quantity <= 0:
            self.remove_from_cart(product_id)
            return

        line = self._items.get(product_id)
        if line is None:
            return

        line.quantity = quantity
        self._persist_cart()

    def clear_cart(self) -> None:
        self._items.clear()
        self._persist_cart()
        self.notifier.notify("Cart cleared", "All items have been removed from your cart")

    # ---- lista zyczen ----

    def add_to_wishlist(self, product: Product) -> None:
        if product.id in self._wishlist:
            return

        self._wishlist[product.id] = product
        self._persist_wishlist()
        self.notifier.notify("Added to wishlist", f"{product.name} added to your wishlist")

    def toggle_wishlist(self, product: Product) -> bool:
        """Dodaje albo usuwa produkt. Zwraca True jesli po operacji jest na liscie."""
        if product.id in self._wishlist:
            self.remove_from_wishlist(product.id)
            return False

        self.add_to_wishlist(product)
        return True

    def remove_from_wishlist(self, product_id: str) -> None:
        if self._wishlist.pop(product_id, None) is None:
            return

        self._persist_wishlist()
        self.notifier.notify("Removed from wishlist", "Item removed from your wishlist")

    # ---- snapshot ----

    def _load(self) -> None:
        for line in self._read_slot(CART_SLOT, _cart_adapter):
            self._items.setdefault(line.product.id, line)

        for product in self._read_slot(WISHLIST_SLOT, _wishlist_adapter):
            self._wishlist.setdefault(product.id, product)

    def _read_slot(self, slot: str, adapter: TypeAdapter) -> list:
        key = snapshot_key(self.client_id, slot)
        raw = self.storage.get(key)
        if not raw:
            return []

        try:
            return adapter.validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Uszkodzony snapshot {key}, zaczynam od pustego stanu: {e.error_count()} bledow")
            self.storage.delete(key)
            return []

    def _persist_cart(self) -> None:
        self._write_slot(CART_SLOT, _cart_adapter.dump_json(self.items))

    def _persist_wishlist(self) -> None:
        self._write_slot(WISHLIST_SLOT, _wishlist_adapter.dump_json(self.wishlist))

    def _write_slot(self, slot: str, payload: bytes) -> None:
        key = snapshot_key(self.client_id, slot)
        try:
            self.storage.set(key, payload.decode())
        except RedisError as e:
            #zapis snapshotu nie blokuje akcji uzytkownika
            logger.error(f"Nie udalo sie zapisac snapshotu {key}: {e}")
