# taskvibe/services/user_service.py
import logging
from typing import Any, Dict, Optional, Union

from taskvibe import models, schemas
from taskvibe.core.config import settings
from taskvibe.core.exceptions import ResourceNotFoundException, ValidationException
from taskvibe.models.user import Theme
from taskvibe.services.achievement_service import AchievementService
from taskvibe.services.gamification_service import level_progress, welcome_achievement
from taskvibe.storage.base import EntityStore
from taskvibe.utils.clock import Clock, local_now

logger = logging.getLogger(__name__)

THEMES = {theme.value for theme in Theme}

# Identity and preference fields; xp, level and streak only change through progression
UPSERT_FIELDS = ("email", "first_name", "last_name", "profile_image_url", "nickname", "theme")


class UserService:
    def __init__(self, store: EntityStore, clock: Clock = local_now):
        self.store = store
        self.clock = clock
        self.achievement_service = AchievementService(store, clock)

    def get_user_by_id(self, user_id: str) -> Optional[models.User]:
        """Get user by ID."""
        return self.store.get_user(user_id)

    def get_profile(self, user_id: str) -> schemas.User:
        """Get the user together with their progress inside the current level."""
        user = self.store.get_user(user_id)
        if not user:
            raise ResourceNotFoundException(f"User with ID {user_id} not found")

        profile = schemas.User.model_validate(user)
        profile.xp_into_level, profile.xp_for_next_level = level_progress(user.xp or 0)
        return profile

    def upsert_user(
        self, user_id: str, user_in: Union[schemas.UserUpsert, Dict[str, Any]]
    ) -> models.User:
        """Create the user or refresh their identity fields."""
        data = user_in if isinstance(user_in, dict) else user_in.model_dump(exclude_unset=True)
        fields = {key: data[key] for key in UPSERT_FIELDS if key in data}
        if fields.get("theme") is not None:
            fields["theme"] = self._clean_theme(fields["theme"])
        elif "theme" in fields:
            del fields["theme"]

        user = self.store.upsert_user(user_id, fields)
        logger.info(f"Upserted user {user_id}")
        return user

    def ensure_offline_user(self) -> models.User:
        """Return the single offline user, creating it on first login."""
        user = self.store.get_user(settings.OFFLINE_USER_ID)
        if user:
            return user

        logger.info(f"Creating offline user {settings.OFFLINE_USER_ID}")
        return self.upsert_user(
            settings.OFFLINE_USER_ID,
            {
                "email": settings.OFFLINE_USER_EMAIL,
                "first_name": "TaskVibe",
                "last_name": "User",
                "theme": Theme.SYSTEM.value,
            },
        )

    def update_user_theme(self, user_id: str, theme: Union[Theme, str]) -> models.User:
        user = self.store.update_user(user_id, {"theme": self._clean_theme(theme)})
        logger.info(f"User {user_id} switched theme to {user.theme}")
        return user

    def complete_onboarding(
        self, user_id: str, onboarding_in: Union[schemas.OnboardingComplete, Dict[str, Any]]
    ) -> models.User:
        """
        Store the nickname and theme chosen during onboarding and unlock the
        welcome achievement the first time it is completed.
        """
        if isinstance(onboarding_in, dict):
            onboarding_in = schemas.OnboardingComplete(**onboarding_in)

        with self.store.atomic():
            user = self.store.update_user(
                user_id,
                {
                    "nickname": onboarding_in.nickname,
                    "theme": self._clean_theme(onboarding_in.theme),
                    "completed_onboarding": True,
                },
            )
            if not self.achievement_service.has_unlocked(user_id, "welcome"):
                self.achievement_service.unlock(user_id, welcome_achievement())

        logger.info(f"User {user_id} completed onboarding")
        return user

    @staticmethod
    def _clean_theme(theme: Any) -> str:
        if isinstance(theme, Theme):
            return theme.value
        if theme not in THEMES:
            raise ValidationException(
                f"Theme must be one of {sorted(THEMES)}", details={"theme": theme}
            )
        return theme
