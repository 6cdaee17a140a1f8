"""Cart manager: the only owner of the cart."""
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Optional, Union

from pydantic import BaseModel

from eventhub.config import CART_BACKEND_MEMORY, CART_BACKEND_REDIS, get_settings
from eventhub.logging import get_logger, sanitize_id_for_logging
from eventhub.services.money import parse_decimal

from .models import Cart, CartLine
from .storage import CartStorage, FileCartStorage, MemoryCartStorage, RedisCartStorage

logger = get_logger(__name__)

CartItemSource = Union[BaseModel, Mapping[str, Any]]


def snapshot_of(item: CartItemSource) -> dict[str, Any]:
    """Denormalized copy of an event's fields, taken at add time."""
    if isinstance(item, BaseModel):
        data = item.model_dump(mode="json")
    else:
        data = dict(item)
    data.pop("quantity", None)
    if data.get("id") is None:
        raise ValueError("Cannot add an item without an id to the cart")
    data["id"] = str(data["id"])
    try:
        data["price"] = parse_decimal(data.get("price"))
    except ValueError as e:
        raise ValueError(f"Cannot add {data['id']} to the cart: {e}") from e
    return data


class CartManager:
    """
    Maintains the cart and persists it after every mutation.

    All operations are synchronous. Mutations save the whole cart to storage
    afterwards; a failing save propagates to the caller.
    """

    def __init__(self, storage: CartStorage):
        self.storage = storage
        self._cart = storage.load()

    @property
    def lines(self) -> list[CartLine]:
        return list(self._cart.lines)

    def snapshot(self) -> Cart:
        """Independent copy of the current cart."""
        return self._cart.copy()

    def is_empty(self) -> bool:
        return self._cart.is_empty

    def item_count(self) -> int:
        return self._cart.total_items

    def total(self) -> Decimal:
        """Σ(snapshot price × quantity), never cached."""
        return self._cart.total

    def add_item(self, item: CartItemSource, quantity: int = 1) -> Cart:
        """
        Add `quantity` of an event.

        An event already in the cart has `quantity` added to its line;
        otherwise a line is appended. The sign of `quantity` is not checked.
        """
        snapshot = snapshot_of(item)
        existing = self._cart.find(snapshot["id"])
        if existing:
            existing.quantity += quantity
        else:
            self._cart.lines.append(
                CartLine(item_id=snapshot["id"], snapshot=snapshot, quantity=quantity)
            )
        self._persist()
        return self._cart

    def remove_item(self, item_id: str) -> Cart:
        """Drop the line for `item_id`; absent ids are ignored."""
        self._cart.lines = [line for line in self._cart.lines if line.item_id != item_id]
        self._persist()
        return self._cart

    def update_quantity(self, item_id: str, quantity: int) -> Cart:
        """Set a line's quantity; `quantity <= 0` removes the line."""
        if quantity <= 0:
            return self.remove_item(item_id)

        line = self._cart.find(item_id)
        if line:
            line.quantity = quantity
        self._persist()
        return self._cart

    def clear(self) -> Cart:
        self._cart = Cart()
        self._persist()
        return self._cart

    def summary(self) -> dict:
        """Cart view for the presentation layer."""
        return {
            "is_empty": self._cart.is_empty,
            "total_items": self._cart.total_items,
            "items": [
                {
                    "id": line.item_id,
                    "name": line.name,
                    "date": line.snapshot.get("date"),
                    "price": line.price,
                    "quantity": line.quantity,
                    "total": line.line_total,
                }
                for line in self._cart.lines
            ],
            "subtotal": self._cart.total,
        }

    def _persist(self) -> None:
        self.storage.save(self._cart)
        logger.debug(
            "Cart saved: %d line(s) [%s]",
            len(self._cart.lines),
            ", ".join(sanitize_id_for_logging(line.item_id) for line in self._cart.lines),
        )


def storage_from_settings() -> CartStorage:
    """Build the configured cart storage backend."""
    settings = get_settings()
    if settings.cart_backend == CART_BACKEND_REDIS:
        from eventhub.db import get_redis_sync
        return RedisCartStorage(get_redis_sync())
    if settings.cart_backend == CART_BACKEND_MEMORY:
        return MemoryCartStorage()
    return FileCartStorage(settings.cart_dir)


# Singleton instance
_cart_manager: Optional[CartManager] = None


def get_cart_manager() -> CartManager:
    """Get CartManager singleton."""
    global _cart_manager
    if _cart_manager is None:
        _cart_manager = CartManager(storage_from_settings())
    return _cart_manager
