# taskvibe/schemas/user.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from taskvibe.models.user import Theme


# Shared properties
class UserBase(BaseModel):
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    nickname: Optional[str] = None


# Identity fields accepted by upsert; gamification state is never taken from callers
class UserUpsert(UserBase):
    theme: Optional[Theme] = None


class UserThemeUpdate(BaseModel):
    theme: Theme


class OnboardingComplete(BaseModel):
    nickname: Optional[str] = Field(None, max_length=100)
    theme: Theme = Theme.SYSTEM


class UserInDBBase(UserBase):
    id: str
    theme: Theme = Theme.SYSTEM
    level: int = 1
    xp: int = 0
    streak: int = 0
    last_active_date: Optional[datetime] = None
    completed_onboarding: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# Additional properties to return via API
class User(UserInDBBase):
    xp_into_level: int = 0
    xp_for_next_level: int = 100
