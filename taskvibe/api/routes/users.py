# taskvibe/api/routes/users.py
import logging
from typing import Any

from fastapi import APIRouter, Depends

from taskvibe import models, schemas
from taskvibe.api import deps
from taskvibe.core.logging import log_context
from taskvibe.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/me", response_model=schemas.User)
def read_user_me(
    current_user: models.User = Depends(deps.get_current_user),
    user_service: UserService = Depends(deps.get_user_service()),
) -> Any:
    """
    Get current user with level progress.
    """
    with log_context(user_id=current_user.id, action="get_current_user"):
        return user_service.get_profile(current_user.id)


@router.patch("/me/theme", response_model=schemas.User)
def update_theme(
    *,
    theme_in: schemas.UserThemeUpdate,
    current_user: models.User = Depends(deps.get_current_user),
    user_service: UserService = Depends(deps.get_user_service()),
) -> Any:
    """
    Change the UI theme preference.
    """
    with log_context(user_id=current_user.id, action="update_theme", theme=theme_in.theme):
        user_service.update_user_theme(current_user.id, theme_in.theme)
        return user_service.get_profile(current_user.id)


@router.patch("/me/onboarding", response_model=schemas.User)
def complete_onboarding(
    *,
    onboarding_in: schemas.OnboardingComplete,
    current_user: models.User = Depends(deps.get_current_user),
    user_service: UserService = Depends(deps.get_user_service()),
) -> Any:
    """
    Finish onboarding with a nickname and theme.
    """
    with log_context(user_id=current_user.id, action="complete_onboarding"):
        logger.info(f"User {current_user.id} completing onboarding")
        user_service.complete_onboarding(current_user.id, onboarding_in)
        return user_service.get_profile(current_user.id)
