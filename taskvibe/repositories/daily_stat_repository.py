# taskvibe/repositories/daily_stat_repository.py
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from taskvibe.models.daily_stat import DailyStat
from taskvibe.repositories.base_repository import BaseRepository


class DailyStatRepository(BaseRepository[DailyStat]):
    """Repository for per-user, per-day completion aggregates."""

    def __init__(self, db: Session):
        super().__init__(DailyStat, db)

    def get_for_day(
        self, user_id: str, day: datetime, for_update: bool = False
    ) -> Optional[DailyStat]:
        query = self.db.query(DailyStat).filter(
            DailyStat.user_id == user_id, DailyStat.date == day
        )
        if for_update:
            query = query.with_for_update()
        return query.first()

    def get_since(self, user_id: str, since: datetime) -> List[DailyStat]:
        return (
            self.db.query(DailyStat)
            .filter(DailyStat.user_id == user_id, DailyStat.date >= since)
            .order_by(DailyStat.date.desc())
            .all()
        )
