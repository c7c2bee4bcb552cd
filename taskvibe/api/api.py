# taskvibe/api/api.py
from fastapi import APIRouter

from taskvibe.api.routes import achievements, login, stats, tasks, users

api_router = APIRouter()
api_router.include_router(login.router, prefix="/login", tags=["login"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
api_router.include_router(stats.router, prefix="/stats", tags=["stats"])
api_router.include_router(
    achievements.router, prefix="/achievements", tags=["achievements"]
)
