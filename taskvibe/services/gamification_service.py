# taskvibe/services/gamification_service.py
"""
Point and level rules.

These are the only definitions of the XP table and the level formula; the
completion engine and the user profile both go through them.
"""
from typing import Dict, Optional, Tuple

from taskvibe.core.config import settings
from taskvibe.models.task import Urgency

LEVEL_UP_ICON = "fas fa-rocket"
WELCOME_ICON = "fas fa-rocket"


def xp_table() -> Dict[str, int]:
    return {
        Urgency.IMMEDIATE.value: settings.XP_IMMEDIATE_TASK,
        Urgency.MEDIUM.value: settings.XP_MEDIUM_TASK,
        Urgency.DELAYED.value: settings.XP_DELAYED_TASK,
    }


def xp_for_urgency(urgency: str) -> int:
    """
    XP awarded for completing a task of the given urgency.
    Unknown urgencies are worth the same as delayed ones.
    """
    return xp_table().get(urgency, settings.XP_DELAYED_TASK)


def level_for_xp(xp: int) -> int:
    """Level reached with ``xp`` points: one level per XP_PER_LEVEL, starting at 1."""
    return max(1, max(xp, 0) // settings.XP_PER_LEVEL + 1)


def level_progress(xp: int) -> Tuple[int, int]:
    """Return (xp earned inside the current level, xp needed for a full level)."""
    return max(xp, 0) % settings.XP_PER_LEVEL, settings.XP_PER_LEVEL


def daily_counter_for_urgency(urgency: str) -> Optional[str]:
    """Name of the DailyStat counter tracking completions of ``urgency``."""
    return f"{urgency}_completed" if urgency in xp_table() else None


def level_up_achievement(new_level: int) -> Dict[str, str]:
    return {
        "type": "level",
        "title": "Level Up!",
        "description": f"Reached Level {new_level}",
        "icon": LEVEL_UP_ICON,
    }


def welcome_achievement() -> Dict[str, str]:
    return {
        "type": "welcome",
        "title": "Welcome Aboard!",
        "description": "Started your TaskVibe journey",
        "icon": WELCOME_ICON,
    }
