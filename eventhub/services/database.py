"""
Supabase Database Service

Provides the Database class: one async Supabase client, the repositories
built on it, the session resolver for the signed-in actor, and the vendor
and admin domains.

Usage:
    from eventhub.services.database import get_database

    # At FastAPI startup (lifespan):
    await init_database()

    db = get_database()
    events = await db.list_events()
"""

import asyncio
from typing import Optional

from supabase._async.client import AsyncClient

from eventhub.auth.session import SessionResolver
from eventhub.db import get_supabase
from eventhub.errors import RemoteOperationFailed
from eventhub.logging import get_logger
from eventhub.services.domains import AdminDomain, VendorDomain
from eventhub.services.models import Event, Order
from eventhub.services.repositories import EventRepository, OrderRepository, ProfileRepository

logger = get_logger(__name__)


class Database:
    """
    Supabase client with all operations the client application needs.

    Must be created via `Database.create()` or `init_database()`.
    """

    def __init__(self, client: AsyncClient):
        self.client = client

        self.profiles_repo = ProfileRepository(self.client)
        self.events_repo = EventRepository(self.client)
        self.orders_repo = OrderRepository(self.client)

        self.session = SessionResolver(self.client, self.profiles_repo)

        self.vendor_domain = VendorDomain(self.session, self.events_repo, self.orders_repo)
        self.admin_domain = AdminDomain(
            self.session, self.profiles_repo, self.events_repo, self.orders_repo
        )

    @classmethod
    async def create(cls) -> "Database":
        """Async factory: create the Supabase client and restore the session."""
        client = await get_supabase()
        db = cls(client)
        await db.session.restore()
        return db

    # ==================== CATALOG ====================

    async def list_events(self) -> list[Event]:
        try:
            return await self.events_repo.list_public()
        except Exception as e:
            logger.error(f"Error fetching events: {e}")
            raise RemoteOperationFailed(e) from e

    async def get_event(self, event_id: str) -> Optional[Event]:
        try:
            return await self.events_repo.get_by_id(event_id)
        except Exception as e:
            raise RemoteOperationFailed(e) from e

    # ==================== CUSTOMER ORDERS ====================

    async def list_my_orders(self) -> list[Order]:
        actor_id = self.session.require_actor()
        try:
            return await self.orders_repo.list_by_user(actor_id)
        except Exception as e:
            logger.error(f"Error fetching orders: {e}")
            raise RemoteOperationFailed(e) from e


_database: Optional[Database] = None
_database_lock: Optional[asyncio.Lock] = None


def _get_lock() -> asyncio.Lock:
    global _database_lock
    if _database_lock is None:
        _database_lock = asyncio.Lock()
    return _database_lock


async def init_database() -> Database:
    """Initialize the Database singleton.

    Called from the FastAPI lifespan; safe to call more than once.
    """
    global _database
    if _database is not None:
        return _database

    async with _get_lock():
        if _database is None:
            logger.info("Initializing async Supabase client...")
            _database = await Database.create()
            logger.info("Async Supabase client initialized")
    return _database


def get_database() -> Database:
    """Get the Database singleton created by `init_database()`."""
    if _database is None:
        raise RuntimeError("Database not initialized. Call init_database() at startup.")
    return _database


def set_database(db: Optional[Database]) -> None:
    """Replace the singleton (tests, shutdown)."""
    global _database
    _database = db
