"""Order Repository - orders, order items and vendor sales.

Checkout writes go through `create`, `create_items` and `delete`; they let
Supabase errors propagate so the checkout sequencer can classify them.
"""
from decimal import Decimal
from typing import Any, Optional

from eventhub.db import Tables
from eventhub.services.models import Order, OrderItem, VendorSale
from eventhub.services.money import to_decimal, to_float

from .base import BaseRepository


class OrderRepository(BaseRepository):
    """Order database operations."""

    async def create(self, user_id: str, total_price: Decimal) -> Order:
        """Insert one order row and return it with its generated id."""
        data = {"user_id": user_id, "total_price": to_float(total_price)}
        result = await self.client.table(Tables.ORDERS).insert(data).execute()
        if not result.data:
            raise RuntimeError("Order insert returned no row")
        return Order(**result.data[0])

    async def create_items(self, items: list[dict[str, Any]]) -> list[OrderItem]:
        """
        Insert all order items in one bulk call.

        Each item is `{order_id, event_id, quantity, price}`; Decimal prices
        are converted at this boundary.
        """
        rows = [{**item, "price": to_float(item["price"])} for item in items]
        result = await self.client.table(Tables.ORDER_ITEMS).insert(rows).execute()
        return [OrderItem(**row) for row in (result.data or [])]

    async def delete(self, order_id: str) -> None:
        await self.client.table(Tables.ORDERS).delete().eq("id", order_id).execute()

    async def create_with_items(
        self,
        rpc_name: str,
        user_id: str,
        total_price: Decimal,
        items: list[dict[str, Any]],
    ) -> Order:
        """Create order and items in one transactional stored procedure."""
        params = {
            "p_user_id": user_id,
            "p_total_price": to_float(total_price),
            "p_items": [
                {
                    "event_id": item["event_id"],
                    "quantity": item["quantity"],
                    "price": to_float(item["price"]),
                }
                for item in items
            ],
        }
        result = await self.client.rpc(rpc_name, params).execute()
        data = result.data
        if isinstance(data, list):
            data = data[0] if data else None
        if not data:
            raise RuntimeError(f"{rpc_name} returned no order")
        return Order(**data)

    async def get_by_id(self, order_id: str) -> Optional[Order]:
        result = (
            await self.client.table(Tables.ORDERS)
            .select("*, order_items(*)")
            .eq("id", order_id)
            .execute()
        )
        return Order(**result.data[0]) if result.data else None

    async def list_by_user(self, user_id: str, limit: int = 50) -> list[Order]:
        """Actor's orders with their items, newest first."""
        result = (
            await self.client.table(Tables.ORDERS)
            .select("*, order_items(*)")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [Order(**o) for o in result.data]

    async def list_all(self) -> list[Order]:
        """Every order with the buyer's name and item count, newest first (admin)."""
        result = (
            await self.client.table(Tables.ORDERS)
            .select("*, profiles(full_name), order_items(count)")
            .order("created_at", desc=True)
            .execute()
        )
        return [Order(**o) for o in result.data]

    async def list_vendor_sales(self, vendor_id: str) -> list[VendorSale]:
        """Order items sold on the vendor's events."""
        result = (
            await self.client.table(Tables.ORDER_ITEMS)
            .select("*, orders!inner(created_at, profiles(full_name)), events!inner(name)")
            .eq("events.vendor_id", vendor_id)
            .execute()
        )
        return [VendorSale(**row) for row in result.data]

    async def count(self) -> int:
        result = await self.client.table(Tables.ORDERS).select("id", count="exact").execute()
        return result.count or 0

    async def revenue(self) -> Decimal:
        """Σ total_price over all orders visible to the actor."""
        result = await self.client.table(Tables.ORDERS).select("total_price").execute()
        return sum((to_decimal(o.get("total_price")) for o in result.data), Decimal("0"))
