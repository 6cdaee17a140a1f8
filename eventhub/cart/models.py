"""Cart models with Decimal-based pricing."""
import copy
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Optional

from eventhub.services.money import multiply, parse_decimal, to_decimal


class MalformedCart(ValueError):
    """Persisted records do not describe a valid cart."""


@dataclass
class CartLine:
    """
    One event in the cart.

    `snapshot` is a copy of the event's fields taken when it was added; later
    price changes on the remote event do not reach it.
    """
    item_id: str
    snapshot: dict[str, Any]
    quantity: int

    @property
    def price(self) -> Decimal:
        """Unit price from the snapshot."""
        return to_decimal(self.snapshot.get("price"))

    @property
    def name(self) -> Optional[str]:
        return self.snapshot.get("name")

    @property
    def line_total(self) -> Decimal:
        return multiply(self.price, self.quantity)

    def to_record(self) -> dict:
        """Flat persisted record: id, snapshot fields, quantity."""
        record = {key: value for key, value in self.snapshot.items() if key not in ("id", "quantity")}
        if isinstance(record.get("price"), Decimal):
            record["price"] = str(record["price"])
        return {"id": self.item_id, **record, "quantity": self.quantity}

    @classmethod
    def from_record(cls, data: dict) -> "CartLine":
        """
        Parse a persisted record.

        Raises:
            MalformedCart: missing id, non-integer quantity or bad price
        """
        if not isinstance(data, dict):
            raise MalformedCart(f"cart record is not an object: {type(data).__name__}")
        item_id = data.get("id")
        if item_id is None or item_id == "":
            raise MalformedCart("cart record without id")
        quantity = data.get("quantity")
        # Restored as saved: add_item does not reject non-positive quantities
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise MalformedCart(f"invalid quantity {quantity!r}")
        try:
            price = parse_decimal(data.get("price"))
        except ValueError as e:
            raise MalformedCart(str(e)) from e

        snapshot = {key: value for key, value in data.items() if key != "quantity"}
        snapshot["id"] = str(item_id)
        snapshot["price"] = price
        return cls(item_id=str(item_id), snapshot=snapshot, quantity=quantity)


@dataclass
class Cart:
    """Insertion-ordered cart lines, at most one per item id."""
    lines: list[CartLine] = field(default_factory=list)

    def find(self, item_id: str) -> Optional[CartLine]:
        return next((line for line in self.lines if line.item_id == item_id), None)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def total_items(self) -> int:
        """Sum of quantities (cart badge count)."""
        return sum(line.quantity for line in self.lines)

    @property
    def total(self) -> Decimal:
        """Σ price × quantity, recomputed on every read."""
        return sum((line.line_total for line in self.lines), Decimal("0"))

    def copy(self) -> "Cart":
        return Cart(lines=copy.deepcopy(self.lines))

    def to_records(self) -> list[dict]:
        return [line.to_record() for line in self.lines]

    @classmethod
    def from_records(cls, data: Any) -> "Cart":
        """
        Build a cart from the persisted list.

        Raises:
            MalformedCart: not a list, a bad record, or a duplicated id
        """
        if not isinstance(data, list):
            raise MalformedCart(f"cart is not a list: {type(data).__name__}")
        lines = [CartLine.from_record(record) for record in data]
        seen = set()
        for line in lines:
            if line.item_id in seen:
                raise MalformedCart(f"duplicate cart line {line.item_id}")
            seen.add(line.item_id)
        return cls(lines=lines)
