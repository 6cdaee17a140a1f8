"""
Database Module - Supabase and Redis Clients

Provides singleton instances of:
- Async Supabase client (auth + PostgREST tables) for the signed-in actor
- Sync Upstash Redis client for the optional redis-backed cart
"""

from typing import Optional

from supabase._async.client import AsyncClient
from supabase._async.client import create_client as acreate_client
from upstash_redis import Redis

from eventhub.config import get_settings

_async_supabase_client: Optional[AsyncClient] = None
_sync_redis_client: Optional[Redis] = None


async def get_supabase() -> AsyncClient:
    """
    Get async Supabase client (singleton).

    Created with the anon key: the backend's row-level security policies
    decide what the signed-in actor may read and write.
    """
    global _async_supabase_client

    if _async_supabase_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_anon_key:
            raise ValueError("SUPABASE_URL and SUPABASE_ANON_KEY must be set")
        _async_supabase_client = await acreate_client(
            settings.supabase_url, settings.supabase_anon_key
        )

    return _async_supabase_client


def get_redis_sync() -> Redis:
    """
    Get sync Upstash Redis client (singleton).

    Cart persistence is synchronous, so the redis cart backend uses the
    blocking REST client.
    """
    global _sync_redis_client

    if _sync_redis_client is None:
        settings = get_settings()
        if not settings.upstash_redis_rest_url or not settings.upstash_redis_rest_token:
            raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
        _sync_redis_client = Redis(
            url=settings.upstash_redis_rest_url,
            token=settings.upstash_redis_rest_token,
        )

    return _sync_redis_client


class Tables:
    """Remote table names."""

    PROFILES = "profiles"
    EVENTS = "events"
    ORDERS = "orders"
    ORDER_ITEMS = "order_items"
