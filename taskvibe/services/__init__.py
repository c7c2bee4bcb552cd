"""
Service registry module.

This module registers all services with the dependency injection system.
"""
from taskvibe.services.achievement_service import AchievementService
from taskvibe.services.stats_service import StatsService
from taskvibe.services.task_service import TaskService
from taskvibe.services.user_service import UserService


def register_services():
    """Register all services with the dependency injection system."""
    # Import register_service inside the function to avoid circular imports
    from taskvibe.utils.dependencies import register_service

    register_service(TaskService, lambda store: TaskService(store))
    register_service(StatsService, lambda store: StatsService(store))
    register_service(UserService, lambda store: UserService(store))
    register_service(AchievementService, lambda store: AchievementService(store))
