# taskvibe/api/routes/login.py
import logging
from typing import Any

from fastapi import APIRouter, Depends

from taskvibe import schemas
from taskvibe.api import deps
from taskvibe.core import security
from taskvibe.core.logging import log_context
from taskvibe.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/offline", response_model=schemas.Token)
def login_offline(
    user_service: UserService = Depends(deps.get_user_service()),
) -> Any:
    """
    Log in as the local offline user, creating it on first use, and get an
    access token for future requests.
    """
    with log_context(action="login_offline"):
        user = user_service.ensure_offline_user()
        logger.info(f"Offline login for user {user.id}")
        return {
            "access_token": security.create_access_token(user.id),
            "token_type": "bearer",
            "user": user_service.get_profile(user.id),
        }
