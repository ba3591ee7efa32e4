from typing import List, Optional
from datetime import datetime

from nexgig.schemas.base import CamelModel


class OverviewStats(CamelModel):
    active_jobs: int = 0
    total_spent: int = 0
    active_proposals: int = 0
    avg_response_hours: int = 0
    messages_count: int = 0


class RecentJob(CamelModel):
    id: int
    title: str
    budget: int
    created_at: datetime


class RecentMessage(CamelModel):
    chat_id: int
    last_message: str = ""
    time: Optional[int] = None  # epoch ms of the latest message


class Overview(CamelModel):
    stats: OverviewStats
    recent_jobs: List[RecentJob]
    recent_messages: List[RecentMessage]
