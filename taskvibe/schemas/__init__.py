# taskvibe/schemas/__init__.py
from taskvibe.schemas.user import (
    User,
    UserUpsert,
    UserThemeUpdate,
    OnboardingComplete,
)
from taskvibe.schemas.token import Token
from taskvibe.schemas.task import Task, TaskCreate, TaskUpdate
from taskvibe.schemas.achievement import Achievement, AchievementCreate
from taskvibe.schemas.stats import UserStats, DailyStat
