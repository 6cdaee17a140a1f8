"""WebApp Vendor Router: event management and sales."""
from fastapi import APIRouter

from eventhub.services.database import get_database
from eventhub.services.models import EventInput

from .serializers import event_response, sale_response

router = APIRouter(prefix="/vendor", tags=["webapp-vendor"])


@router.get("/events")
async def list_vendor_events():
    events = await get_database().vendor_domain.list_events()
    return [event_response(e) for e in events]


@router.post("/events", status_code=201)
async def create_event(request: EventInput):
    event = await get_database().vendor_domain.create_event(request)
    return event_response(event)


@router.put("/events/{event_id}")
async def update_event(event_id: str, request: EventInput):
    event = await get_database().vendor_domain.update_event(event_id, request)
    return event_response(event)


@router.delete("/events/{event_id}", status_code=204)
async def delete_event(event_id: str):
    await get_database().vendor_domain.delete_event(event_id)


@router.get("/orders")
async def list_vendor_orders():
    sales = await get_database().vendor_domain.list_sales()
    return [sale_response(s) for s in sales]
