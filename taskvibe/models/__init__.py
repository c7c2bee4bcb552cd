# taskvibe/models/__init__.py
from taskvibe.models.user import User, Theme
from taskvibe.models.task import Task, Urgency
from taskvibe.models.achievement import Achievement
from taskvibe.models.daily_stat import DailyStat
