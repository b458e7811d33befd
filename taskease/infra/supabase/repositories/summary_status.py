"""Daily summary status repository"""
from pydantic import BaseModel
from supabase import Client  # type: ignore

from taskease.models.summary import SummaryStatus, SummaryStatusCreate

from .base import BaseRepository


class SummaryStatusRepository(BaseRepository[SummaryStatus, SummaryStatusCreate, BaseModel]):
    """Remembers which users already received the summary for a given day"""

    def __init__(self, client: Client):
        super().__init__(client, "summary_status", SummaryStatus)

    async def has_sent(self, email: str, date: str) -> bool:
        return bool(await self.find_by_filters({"email": email, "date": date}, limit=1))

    async def mark_sent(self, email: str, date: str) -> SummaryStatus:
        return await self.create(SummaryStatusCreate(email=email, date=date))
