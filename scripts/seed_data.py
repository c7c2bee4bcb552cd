# scripts/seed_data.py
"""
Fill the configured database with an offline user and a handful of demo tasks.

Usage:
    python scripts/seed_data.py
"""
import logging
import sys
from pathlib import Path

# Add the parent directory to sys.path
sys.path.insert(0, str(Path(__file__).parent.parent))

from taskvibe.db.session import init_db
from taskvibe.storage import EntityStore, build_store_provider
from taskvibe.services.task_service import TaskService
from taskvibe.services.user_service import UserService

logger = logging.getLogger("taskvibe.seed")

DEMO_TASKS = [
    {"title": "Pay the electricity bill", "urgency": "immediate"},
    {"title": "Reply to the landlord", "urgency": "immediate"},
    {"title": "Book a dentist appointment", "urgency": "medium",
     "description": "Ask about the Thursday slots"},
    {"title": "Plan the weekend hike", "urgency": "medium"},
    {"title": "Sort old photos", "urgency": "delayed"},
    {"title": "Learn a new recipe", "urgency": "delayed"},
]

# Titles of demo tasks that start out completed
COMPLETED_TITLES = {"Reply to the landlord", "Sort old photos"}


def seed_demo_data(store: EntityStore) -> str:
    """Create the offline user with demo tasks unless they already have tasks."""
    user_service = UserService(store)
    task_service = TaskService(store)

    user = user_service.ensure_offline_user()
    if store.count_tasks(user.id):
        logger.info(f"User {user.id} already has tasks, skipping seed")
        return user.id

    for task_in in DEMO_TASKS:
        task = task_service.create_task(user.id, task_in)
        if task.title in COMPLETED_TITLES:
            task_service.complete_task(user.id, task.id)

    logger.info(f"Seeded {len(DEMO_TASKS)} tasks for user {user.id}")
    return user.id


def main():
    init_db()
    with build_store_provider("database")() as store:
        seed_demo_data(store)
    print("Demo data created!")


if __name__ == "__main__":
    main()
