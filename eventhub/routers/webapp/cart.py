"""
WebApp Cart Router

The cart lives on this device; every endpoint works on the same CartManager.
Amounts are returned as floats.
"""
from fastapi import APIRouter, HTTPException

from eventhub.cart import CartManager
from eventhub.logging import get_logger, sanitize_id_for_logging
from eventhub.routers.deps import get_cart_manager_lazy
from eventhub.services.database import get_database
from eventhub.services.money import to_float

from .models import AddToCartRequest, UpdateCartItemRequest

logger = get_logger(__name__)

router = APIRouter(prefix="/cart", tags=["webapp-cart"])


def _format_cart_response(cart_manager: CartManager) -> dict:
    summary = cart_manager.summary()
    return {
        "items": [
            {**item, "price": to_float(item["price"]), "total": to_float(item["total"])}
            for item in summary["items"]
        ],
        "total_items": summary["total_items"],
        "subtotal": to_float(summary["subtotal"]),
        "is_empty": summary["is_empty"],
    }


@router.get("")
async def get_cart():
    return _format_cart_response(get_cart_manager_lazy())


@router.post("/items")
async def add_to_cart(request: AddToCartRequest):
    """Snapshot the event as it is now and add it to the cart."""
    event = await get_database().get_event(request.event_id)
    if event is None:
        raise HTTPException(status_code=404, detail="Event not found")

    cart_manager = get_cart_manager_lazy()
    cart_manager.add_item(event, request.quantity)
    logger.info(f"Added {request.quantity} x {sanitize_id_for_logging(event.id)} to cart")
    return _format_cart_response(cart_manager)


@router.patch("/items/{event_id}")
async def update_cart_item(event_id: str, request: UpdateCartItemRequest):
    cart_manager = get_cart_manager_lazy()
    cart_manager.update_quantity(event_id, request.quantity)
    return _format_cart_response(cart_manager)


@router.delete("/items/{event_id}")
async def remove_cart_item(event_id: str):
    cart_manager = get_cart_manager_lazy()
    cart_manager.remove_item(event_id)
    return _format_cart_response(cart_manager)


@router.delete("")
async def clear_cart():
    cart_manager = get_cart_manager_lazy()
    cart_manager.clear()
    return _format_cart_response(cart_manager)
