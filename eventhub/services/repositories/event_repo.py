"""Event Repository - catalog reads and vendor CRUD."""

from eventhub.db import Tables
from eventhub.errors import ERROR_EVENT_NOT_SAVED, RemoteOperationFailed
from eventhub.logging import get_logger, sanitize_id_for_logging
from eventhub.services.models import Event, EventInput

from .base import BaseRepository

logger = get_logger(__name__)


class EventRepository(BaseRepository):
    """Event database operations."""

    async def list_public(self) -> list[Event]:
        """All events with the vendor's business name, soonest first."""
        result = (
            await self.client.table(Tables.EVENTS)
            .select("*, profiles(business_name)")
            .order("date", desc=False)
            .execute()
        )
        return [Event(**e) for e in result.data]

    async def get_by_id(self, event_id: str) -> Event | None:
        result = await self.client.table(Tables.EVENTS).select("*").eq("id", event_id).execute()
        return Event(**result.data[0]) if result.data else None

    async def list_by_vendor(self, vendor_id: str) -> list[Event]:
        """Vendor's own events, latest date first."""
        result = (
            await self.client.table(Tables.EVENTS)
            .select("*")
            .eq("vendor_id", vendor_id)
            .order("date", desc=True)
            .execute()
        )
        return [Event(**e) for e in result.data]

    async def create(self, vendor_id: str, data: EventInput) -> Event:
        """Insert an event owned by `vendor_id`."""
        result = (
            await self.client.table(Tables.EVENTS)
            .insert({**data.to_row(), "vendor_id": vendor_id})
            .execute()
        )
        return self._single_row(result, "insert", vendor_id)

    async def update(self, event_id: str, data: EventInput) -> Event:
        result = (
            await self.client.table(Tables.EVENTS)
            .update(data.to_row())
            .eq("id", event_id)
            .execute()
        )
        return self._single_row(result, "update", event_id)

    async def delete(self, event_id: str) -> None:
        await self.client.table(Tables.EVENTS).delete().eq("id", event_id).execute()

    async def count(self) -> int:
        result = await self.client.table(Tables.EVENTS).select("id", count="exact").execute()
        return result.count or 0

    @staticmethod
    def _single_row(result, operation: str, ref: str) -> Event:
        # Row-level security rejects writes by returning no rows, not an error
        if not result.data:
            logger.error(
                f"Event {operation} returned no data for {sanitize_id_for_logging(ref)}; "
                "likely blocked by a row-level security policy"
            )
            raise RemoteOperationFailed(message=ERROR_EVENT_NOT_SAVED)
        return Event(**result.data[0])
