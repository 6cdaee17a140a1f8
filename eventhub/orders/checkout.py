"""
Checkout sequencer.

Turns the cart into one `orders` row plus its `order_items` rows:

1. insert the order with the cart total
2. bulk-insert the items, unit prices copied from the cart snapshot
3. if the items fail, delete the order again and report the failure

The cart is cleared only after both inserts succeed. On any failure it is left
as it was, so re-invoking checkout is the retry path. There is no automatic
retry of the checkout itself.
"""
from decimal import Decimal
from typing import Any, Optional

from tenacity import retry, stop_after_attempt, wait_exponential

from eventhub.auth.session import SessionResolver
from eventhub.cart import Cart, CartManager
from eventhub.config import get_settings
from eventhub.errors import (
    CheckoutInProgress,
    EmptyCart,
    OrderCreateFailed,
    OrderItemsCreateFailed,
    Unauthenticated,
)
from eventhub.logging import ActorLogger, actor_logger, get_logger, sanitize_id_for_logging
from eventhub.services.models import Order
from eventhub.services.repositories import OrderRepository

logger = get_logger(__name__)

COMPENSATION_ATTEMPTS = 3


def build_order_items(order_id: Optional[str], cart: Cart) -> list[dict[str, Any]]:
    """One order item per cart line, priced from the line snapshot."""
    items = []
    for line in cart.lines:
        item = {
            "event_id": line.item_id,
            "quantity": line.quantity,
            "price": line.price,
        }
        if order_id is not None:
            item = {"order_id": order_id, **item}
        items.append(item)
    return items


class CheckoutSequencer:
    """
    Places orders for the current actor from the cart.

    At most one checkout runs at a time per sequencer; a second call while one
    is awaiting the backend fails with `CheckoutInProgress`.
    """

    def __init__(
        self,
        cart: CartManager,
        session: SessionResolver,
        orders: OrderRepository,
        rpc_name: Optional[str] = None,
    ):
        self.cart = cart
        self.session = session
        self.orders = orders
        self.rpc_name = rpc_name
        self._in_progress = False

    @property
    def in_progress(self) -> bool:
        return self._in_progress

    async def checkout(self) -> Order:
        """
        Place an order for everything in the cart.

        Returns:
            The created order

        Raises:
            Unauthenticated: no signed-in actor
            EmptyCart: nothing to order
            CheckoutInProgress: another checkout has not finished
            OrderCreateFailed: the order row was not created
            OrderItemsCreateFailed: items failed after the order was created
        """
        actor_id = self.session.actor_id
        if actor_id is None:
            raise Unauthenticated()
        if self.cart.is_empty():
            raise EmptyCart()
        if self._in_progress:
            actor_logger(logger, actor_id).warning("Rejected concurrent checkout")
            raise CheckoutInProgress()

        # Set before the first await so a re-entrant call sees it
        self._in_progress = True
        try:
            snapshot = self.cart.snapshot()
            total = snapshot.total
            if self.rpc_name:
                order = await self._place_atomic(actor_id, total, snapshot)
            else:
                order = await self._place_sequenced(actor_id, total, snapshot)
            # Overwrites anything added to the cart while checkout was awaiting
            self.cart.clear()
            return order
        finally:
            self._in_progress = False

    async def _place_sequenced(self, actor_id: str, total: Decimal, snapshot: Cart) -> Order:
        log = actor_logger(logger, actor_id)
        try:
            order = await self.orders.create(actor_id, total)
        except Exception as e:
            log.error(f"Order creation failed: {e}")
            raise OrderCreateFailed(e) from e

        log.info(f"Order {sanitize_id_for_logging(order.id)} created, total {total}")

        items = build_order_items(order.id, snapshot)
        try:
            created = await self.orders.create_items(items)
        except Exception as e:
            log.error(f"Order items failed for order {sanitize_id_for_logging(order.id)}: {e}")
            compensation_error = await self._compensate(order.id, log)
            raise OrderItemsCreateFailed(
                e, order_id=order.id, compensation_error=compensation_error
            ) from e

        log.info(f"Order {sanitize_id_for_logging(order.id)}: {len(items)} item(s) saved")
        return order.model_copy(update={"items": created}) if created else order

    async def _place_atomic(self, actor_id: str, total: Decimal, snapshot: Cart) -> Order:
        log = actor_logger(logger, actor_id)
        try:
            order = await self.orders.create_with_items(
                self.rpc_name, actor_id, total, build_order_items(None, snapshot)
            )
        except Exception as e:
            log.error(f"{self.rpc_name} failed: {e}")
            raise OrderCreateFailed(e) from e
        log.info(f"Order {sanitize_id_for_logging(order.id)} created via {self.rpc_name}")
        return order

    async def _compensate(self, order_id: str, log: ActorLogger) -> Optional[BaseException]:
        """Delete the itemless order; return the error if it stays behind."""
        try:
            await self._delete_order(order_id)
        except Exception as e:
            log.error(
                f"Compensating delete failed, order {sanitize_id_for_logging(order_id)} "
                f"left without items: {e}"
            )
            return e
        log.info(f"Order {sanitize_id_for_logging(order_id)} rolled back")
        return None

    @retry(
        stop=stop_after_attempt(COMPENSATION_ATTEMPTS),
        wait=wait_exponential(multiplier=0.1, max=1),
        reraise=True,
    )
    async def _delete_order(self, order_id: str) -> None:
        await self.orders.delete(order_id)


def create_checkout_sequencer(
    cart: CartManager, session: SessionResolver, orders: OrderRepository
) -> CheckoutSequencer:
    """Sequencer configured from settings (transactional RPC when set)."""
    return CheckoutSequencer(cart, session, orders, rpc_name=get_settings().checkout_rpc)
