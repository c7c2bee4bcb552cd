# taskvibe/api/deps.py
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from taskvibe.core import security
from taskvibe.core.config import settings
from taskvibe.core.exceptions import AuthenticationException
from taskvibe.models.user import User
from taskvibe.services.achievement_service import AchievementService
from taskvibe.services.stats_service import StatsService
from taskvibe.services.task_service import TaskService
from taskvibe.services.user_service import UserService
from taskvibe.utils.dependencies import get_service

# Bearer token extraction; missing tokens are reported by get_current_user
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_V1_STR}/login/offline", auto_error=False
)


# Service dependencies - defined as functions that will be called at runtime
def get_task_service():
    return get_service(TaskService)


def get_stats_service():
    return get_service(StatsService)


def get_user_service():
    return get_service(UserService)


def get_achievement_service():
    return get_service(AchievementService)


def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    user_service: UserService = Depends(get_user_service()),
) -> User:
    """
    Resolve the user behind the bearer token.

    Raises:
        AuthenticationException: If there is no token, it is invalid, or its
            user no longer exists
    """
    if not token:
        raise AuthenticationException("Not authenticated")

    user_id = security.decode_access_token(token)
    user = user_service.get_user_by_id(user_id)
    if not user:
        raise AuthenticationException("Session user no longer exists")

    return user
