# taskvibe/services/achievement_service.py
import logging
from typing import Any, Dict, List, Optional

from taskvibe import models, schemas
from taskvibe.storage.base import EntityStore
from taskvibe.utils.clock import Clock, local_now

logger = logging.getLogger(__name__)


class AchievementService:
    """Unlocks and lists achievements. Unlocks are permanent."""

    def __init__(self, store: EntityStore, clock: Clock = local_now):
        self.store = store
        self.clock = clock

    def list_achievements(
        self, user_id: str, limit: Optional[int] = None
    ) -> List[models.Achievement]:
        """Get the user's achievements, most recently unlocked first."""
        return self.store.list_achievements(user_id, limit=limit)

    def get_achievement(self, user_id: str, achievement_id: str) -> models.Achievement:
        return self.store.get_achievement(achievement_id, user_id)

    def has_unlocked(self, user_id: str, achievement_type: str) -> bool:
        return any(
            achievement.type == achievement_type
            for achievement in self.store.list_achievements(user_id)
        )

    def unlock(self, user_id: str, payload: Dict[str, Any]) -> models.Achievement:
        """Record a new achievement for the user, stamped with the current time."""
        data = schemas.AchievementCreate(**payload)
        achievement = self.store.add_achievement(
            user_id, {**data.model_dump(), "unlocked_at": self.clock()}
        )
        logger.info(
            f"Unlocked achievement for user {user_id}: {achievement.title} "
            f"({achievement.description})"
        )
        return achievement
