"""Profile Repository - profile rows keyed by auth user id."""

from eventhub.db import Tables
from eventhub.services.models import Profile

from .base import BaseRepository


class ProfileRepository(BaseRepository):
    """Profile database operations."""

    async def get_by_id(self, user_id: str) -> Profile | None:
        """Get profile for an auth user; None when the row does not exist yet."""
        result = (
            await self.client.table(Tables.PROFILES).select("*").eq("id", user_id).limit(1).execute()
        )
        return Profile(**result.data[0]) if result.data else None

    async def list_all(self) -> list[Profile]:
        result = (
            await self.client.table(Tables.PROFILES)
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
        return [Profile(**p) for p in result.data]

    async def count(self) -> int:
        result = await self.client.table(Tables.PROFILES).select("id", count="exact").execute()
        return result.count or 0
