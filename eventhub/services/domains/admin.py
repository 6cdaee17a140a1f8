"""Admin domain: platform-wide aggregates."""
import asyncio

from eventhub.auth.session import SessionResolver
from eventhub.errors import RemoteOperationFailed
from eventhub.logging import get_logger
from eventhub.services.models import Event, Order, PlatformStats, Profile, Role
from eventhub.services.repositories import EventRepository, OrderRepository, ProfileRepository

logger = get_logger(__name__)


class AdminDomain:
    """Admin dashboard operations. Every call requires the admin role."""

    def __init__(
        self,
        session: SessionResolver,
        profiles: ProfileRepository,
        events: EventRepository,
        orders: OrderRepository,
    ) -> None:
        self.session = session
        self.profiles = profiles
        self.events = events
        self.orders = orders

    async def platform_stats(self) -> PlatformStats:
        self.session.require_role(Role.ADMIN)
        try:
            users, events, orders, revenue = await asyncio.gather(
                self.profiles.count(),
                self.events.count(),
                self.orders.count(),
                self.orders.revenue(),
            )
        except Exception as e:
            logger.error(f"Failed to load platform stats: {e}")
            raise RemoteOperationFailed(e) from e
        return PlatformStats(users=users, events=events, orders=orders, revenue=revenue)

    async def list_users(self) -> list[Profile]:
        self.session.require_role(Role.ADMIN)
        try:
            return await self.profiles.list_all()
        except Exception as e:
            raise RemoteOperationFailed(e) from e

    async def list_events(self) -> list[Event]:
        """Every event on the platform with its vendor's business name."""
        self.session.require_role(Role.ADMIN)
        try:
            return await self.events.list_public()
        except Exception as e:
            raise RemoteOperationFailed(e) from e

    async def list_orders(self) -> list[Order]:
        self.session.require_role(Role.ADMIN)
        try:
            return await self.orders.list_all()
        except Exception as e:
            raise RemoteOperationFailed(e) from e
