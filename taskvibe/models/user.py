import enum
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from taskvibe.db.base import Base


class Theme(str, enum.Enum):
    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=True)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    profile_image_url = Column(String, nullable=True)
    nickname = Column(String, nullable=True)
    theme = Column(String, default=Theme.SYSTEM.value, nullable=False)
    completed_onboarding = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.now, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, nullable=False)

    # Gamification stats. level is a cache of xp and only written together with it.
    level = Column(Integer, default=1, nullable=False)
    xp = Column(Integer, default=0, nullable=False)
    streak = Column(Integer, default=0, nullable=False)
    last_active_date = Column(DateTime, nullable=True)

    # Relationships
    tasks = relationship("Task", back_populates="owner", cascade="all, delete-orphan")
    achievements = relationship(
        "Achievement", back_populates="user", cascade="all, delete-orphan"
    )
    daily_stats = relationship(
        "DailyStat", back_populates="user", cascade="all, delete-orphan"
    )
