# taskvibe/utils/clock.py
from datetime import datetime, timedelta
from typing import Callable

# Services take a clock so tests can pin "now"; timestamps are naive local time
Clock = Callable[[], datetime]


def local_now() -> datetime:
    return datetime.now()


def start_of_day(moment: datetime) -> datetime:
    """Local midnight of the day containing ``moment``."""
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def days_between(earlier: datetime, later: datetime) -> int:
    """Whole calendar days from ``earlier`` to ``later``."""
    return (start_of_day(later) - start_of_day(earlier)) // timedelta(days=1)
