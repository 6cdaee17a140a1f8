"""WebApp Catalog Router: public event listing."""
from fastapi import APIRouter

from eventhub.services.database import get_database

from .serializers import event_response

router = APIRouter(tags=["webapp-catalog"])


@router.get("/events")
async def list_events():
    events = await get_database().list_events()
    return [event_response(e) for e in events]
