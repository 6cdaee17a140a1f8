"""Vendor domain: the vendor's own events and the sales on them."""

from eventhub.auth.session import SessionResolver
from eventhub.errors import PermissionDenied, RemoteOperationFailed
from eventhub.logging import get_logger, sanitize_id_for_logging
from eventhub.services.models import Event, EventInput, Role, VendorSale
from eventhub.services.repositories import EventRepository, OrderRepository

logger = get_logger(__name__)


class VendorDomain:
    """Vendor dashboard operations. Every call requires the vendor role."""

    def __init__(self, session: SessionResolver, events: EventRepository, orders: OrderRepository) -> None:
        self.session = session
        self.events = events
        self.orders = orders

    async def list_events(self) -> list[Event]:
        profile = self.session.require_role(Role.VENDOR)
        return await self._remote(self.events.list_by_vendor(profile.id))

    async def list_sales(self) -> list[VendorSale]:
        profile = self.session.require_role(Role.VENDOR)
        return await self._remote(self.orders.list_vendor_sales(profile.id))

    async def create_event(self, data: EventInput) -> Event:
        profile = self.session.require_role(Role.VENDOR)
        event = await self._remote(self.events.create(profile.id, data))
        logger.info(f"Vendor {sanitize_id_for_logging(profile.id)} created event {sanitize_id_for_logging(event.id)}")
        return event

    async def update_event(self, event_id: str, data: EventInput) -> Event:
        await self._require_owned(event_id)
        return await self._remote(self.events.update(event_id, data))

    async def delete_event(self, event_id: str) -> None:
        await self._require_owned(event_id)
        await self._remote(self.events.delete(event_id))
        logger.info(f"Event {sanitize_id_for_logging(event_id)} deleted")

    async def _require_owned(self, event_id: str) -> Event:
        profile = self.session.require_role(Role.VENDOR)
        event = await self._remote(self.events.get_by_id(event_id))
        if event is None or event.vendor_id != profile.id:
            raise PermissionDenied()
        return event

    @staticmethod
    async def _remote(awaitable):
        try:
            return await awaitable
        except RemoteOperationFailed:
            raise
        except Exception as e:
            logger.error(f"Vendor operation failed: {e}")
            raise RemoteOperationFailed(e) from e
