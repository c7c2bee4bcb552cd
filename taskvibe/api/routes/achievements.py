# taskvibe/api/routes/achievements.py
from typing import Any, List

from fastapi import APIRouter, Depends

from taskvibe import models, schemas
from taskvibe.api import deps
from taskvibe.services.achievement_service import AchievementService

router = APIRouter()


@router.get("/", response_model=List[schemas.Achievement])
def read_user_achievements(
    current_user: models.User = Depends(deps.get_current_user),
    achievement_service: AchievementService = Depends(deps.get_achievement_service()),
) -> Any:
    """
    Retrieve user's unlocked achievements, newest first.
    """
    return achievement_service.list_achievements(current_user.id)


@router.get("/{achievement_id}", response_model=schemas.Achievement)
def read_user_achievement(
    achievement_id: str,
    current_user: models.User = Depends(deps.get_current_user),
    achievement_service: AchievementService = Depends(deps.get_achievement_service()),
) -> Any:
    """
    Retrieve one of the user's achievements.
    """
    return achievement_service.get_achievement(current_user.id, achievement_id)
