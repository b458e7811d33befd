"""Daily summary bookkeeping model"""
from pydantic import BaseModel


class SummaryStatusCreate(BaseModel):
    email: str
    date: str  # YYYY-MM-DD


class SummaryStatus(SummaryStatusCreate):
    id: int
