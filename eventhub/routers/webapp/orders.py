"""WebApp Orders Router: checkout and the customer's order history."""
from fastapi import APIRouter

from eventhub.routers.deps import get_checkout_sequencer
from eventhub.services.database import get_database

from .serializers import order_response

router = APIRouter(tags=["webapp-orders"])


@router.post("/checkout", status_code=201)
async def checkout():
    """Place an order for the whole cart; the cart is emptied on success."""
    order = await get_checkout_sequencer().checkout()
    return {
        "message": "Order placed successfully!",
        "order": order_response(order),
    }


@router.get("/orders")
async def list_my_orders():
    orders = await get_database().list_my_orders()
    return [order_response(o) for o in orders]
