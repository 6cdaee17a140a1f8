"""WebApp Admin Router: platform-wide aggregates."""
from fastapi import APIRouter

from eventhub.services.database import get_database

from .serializers import event_response, order_response, profile_response, stats_response

router = APIRouter(prefix="/admin", tags=["webapp-admin"])


@router.get("/stats")
async def get_stats():
    stats = await get_database().admin_domain.platform_stats()
    return stats_response(stats)


@router.get("/users")
async def list_users():
    profiles = await get_database().admin_domain.list_users()
    return [profile_response(p) for p in profiles]


@router.get("/events")
async def list_events():
    events = await get_database().admin_domain.list_events()
    return [event_response(e) for e in events]


@router.get("/orders")
async def list_orders():
    orders = await get_database().admin_domain.list_orders()
    return [order_response(o) for o in orders]
