# taskvibe/schemas/achievement.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


# Shared properties
class AchievementBase(BaseModel):
    type: str
    title: str
    description: Optional[str] = None
    icon: str


# Properties used when unlocking an achievement
class AchievementCreate(AchievementBase):
    pass


class Achievement(AchievementBase):
    id: str
    user_id: str
    unlocked_at: datetime

    class Config:
        from_attributes = True
