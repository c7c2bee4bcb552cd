# taskvibe/schemas/stats.py
from datetime import datetime
from typing import List

from pydantic import BaseModel

from taskvibe.schemas.achievement import Achievement


class UserStats(BaseModel):
    total_completed: int = 0
    today_completed: int = 0
    immediate_count: int = 0
    medium_count: int = 0
    delayed_count: int = 0
    recent_achievements: List[Achievement] = []


class DailyStat(BaseModel):
    id: str
    user_id: str
    date: datetime
    tasks_completed: int = 0
    immediate_completed: int = 0
    medium_completed: int = 0
    delayed_completed: int = 0
    xp_earned: int = 0

    class Config:
        from_attributes = True
