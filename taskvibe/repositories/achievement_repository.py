# taskvibe/repositories/achievement_repository.py
from typing import List, Optional

from sqlalchemy.orm import Session

from taskvibe.models.achievement import Achievement
from taskvibe.repositories.base_repository import BaseRepository


class AchievementRepository(BaseRepository[Achievement]):
    """Repository for achievement unlock records."""

    def __init__(self, db: Session):
        super().__init__(Achievement, db)

    def get_user_achievements(
        self, user_id: str, limit: Optional[int] = None
    ) -> List[Achievement]:
        """Get achievements unlocked by a user, newest first."""
        query = (
            self.db.query(Achievement)
            .filter(Achievement.user_id == user_id)
            .order_by(Achievement.unlocked_at.desc(), Achievement.id.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        return query.all()
