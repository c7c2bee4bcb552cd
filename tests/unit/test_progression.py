import pytest

from taskvibe.core.config import settings
from taskvibe.core.exceptions import ResourceNotFoundException, ValidationException
from taskvibe.services.task_service import TaskService
from taskvibe.utils.clock import start_of_day


@pytest.fixture
def service(store, clock):
    return TaskService(store, clock)


def new_task(service, user_id, urgency="immediate", title="Task"):
    return service.create_task(user_id, {"title": title, "urgency": urgency})


class TestComplete:
    def test_complete_awards_xp_and_counts_the_day(self, service, store, user, clock):
        task = new_task(service, user.id, "immediate")

        completed = service.complete_task(user.id, task.id)

        assert completed.completed is True
        assert completed.completed_at == clock.now
        assert store.get_user(user.id).xp == 15

        stat = store.get_daily_stat(user.id, start_of_day(clock.now))
        assert stat.tasks_completed == 1
        assert stat.immediate_completed == 1
        assert stat.medium_completed == 0
        assert stat.xp_earned == 15

    def test_counters_accumulate_per_urgency(self, service, store, user, clock):
        for urgency in ("immediate", "medium", "medium", "delayed"):
            service.complete_task(user.id, new_task(service, user.id, urgency).id)

        stat = store.get_daily_stat(user.id, start_of_day(clock.now))
        assert stat.tasks_completed == 4
        assert stat.immediate_completed == 1
        assert stat.medium_completed == 2
        assert stat.delayed_completed == 1
        assert stat.xp_earned == 40
        assert store.get_user(user.id).xp == 40

    def test_seven_immediate_tasks_reach_level_two(self, service, store, user):
        for i in range(7):
            service.complete_task(user.id, new_task(service, user.id, title=f"T{i}").id)

        refreshed = store.get_user(user.id)
        assert refreshed.xp == 105
        assert refreshed.level == 2

        achievements = store.list_achievements(user.id)
        assert len(achievements) == 1
        assert achievements[0].title == "Level Up!"
        assert achievements[0].description == "Reached Level 2"

    def test_multi_level_jump_unlocks_one_achievement(
        self, service, store, user, monkeypatch
    ):
        monkeypatch.setattr(settings, "XP_PER_LEVEL", 5)

        service.complete_task(user.id, new_task(service, user.id, "immediate").id)

        assert store.get_user(user.id).level == 4
        achievements = store.list_achievements(user.id)
        assert [a.description for a in achievements] == ["Reached Level 4"]

    def test_completing_twice_awards_once(self, service, store, user, clock):
        task = new_task(service, user.id, "medium")
        service.complete_task(user.id, task.id)
        first_completed_at = clock.now
        clock.advance(hours=1)

        again = service.complete_task(user.id, task.id)

        assert again.completed_at == first_completed_at
        assert store.get_user(user.id).xp == 10
        assert store.get_daily_stat(user.id, start_of_day(clock.now)).tasks_completed == 1

    def test_cannot_complete_someone_elses_task(self, service, store, user, other_user):
        task = new_task(service, other_user.id)

        with pytest.raises(ResourceNotFoundException):
            service.complete_task(user.id, task.id)

        assert store.get_task(task.id, other_user.id).completed is False
        assert store.get_user(user.id).xp == 0

    def test_unknown_task(self, service, user):
        with pytest.raises(ResourceNotFoundException):
            service.complete_task(user.id, "missing")

    def test_last_active_date_is_set(self, service, store, user, clock):
        service.complete_task(user.id, new_task(service, user.id).id)

        assert store.get_user(user.id).last_active_date == clock.now


class TestUncomplete:
    def test_uncomplete_is_the_exact_inverse(self, service, store, user, clock):
        task = new_task(service, user.id, "delayed")
        service.complete_task(user.id, task.id)

        reopened = service.uncomplete_task(user.id, task.id)

        assert reopened.completed is False
        assert reopened.completed_at is None
        assert reopened.priority == task.priority
        assert store.get_user(user.id).xp == 0

        stat = store.get_daily_stat(user.id, start_of_day(clock.now))
        assert stat.tasks_completed == 0
        assert stat.delayed_completed == 0
        assert stat.xp_earned == 0

    def test_level_drops_but_achievement_stays(self, service, store, user):
        tasks = [new_task(service, user.id, title=f"T{i}") for i in range(7)]
        for task in tasks:
            service.complete_task(user.id, task.id)

        service.uncomplete_task(user.id, tasks[0].id)

        refreshed = store.get_user(user.id)
        assert refreshed.xp == 90
        assert refreshed.level == 1
        assert len(store.list_achievements(user.id)) == 1

    def test_recrossing_a_level_unlocks_it_again(self, service, store, user):
        tasks = [new_task(service, user.id, title=f"T{i}") for i in range(7)]
        for task in tasks:
            service.complete_task(user.id, task.id)

        service.uncomplete_task(user.id, tasks[0].id)
        service.complete_task(user.id, tasks[0].id)

        descriptions = [a.description for a in store.list_achievements(user.id)]
        assert descriptions == ["Reached Level 2", "Reached Level 2"]

    def test_uncompleting_an_active_task_changes_nothing(self, service, store, user):
        task = new_task(service, user.id)

        result = service.uncomplete_task(user.id, task.id)

        assert result.completed is False
        assert store.get_user(user.id).xp == 0

    def test_xp_is_floored_at_zero(self, service, store, user):
        task = new_task(service, user.id, "immediate")
        service.complete_task(user.id, task.id)
        store.update_user(user.id, {"xp": 4, "level": 1})

        service.uncomplete_task(user.id, task.id)

        assert store.get_user(user.id).xp == 0

    def test_daily_counters_are_floored_at_zero(self, service, store, user, clock):
        task = new_task(service, user.id, "medium")
        service.complete_task(user.id, task.id)
        day = start_of_day(clock.now)
        store.save_daily_stat(
            user.id, day, {"tasks_completed": 0, "medium_completed": 0, "xp_earned": 3}
        )

        service.uncomplete_task(user.id, task.id)

        stat = store.get_daily_stat(user.id, day)
        assert stat.tasks_completed == 0
        assert stat.medium_completed == 0
        assert stat.xp_earned == 0

    def test_reverses_the_day_it_was_completed_on(self, service, store, user, clock):
        task = new_task(service, user.id, "immediate")
        service.complete_task(user.id, task.id)
        completion_day = start_of_day(clock.now)
        clock.advance(days=1)

        service.uncomplete_task(user.id, task.id)

        assert store.get_daily_stat(user.id, completion_day).tasks_completed == 0
        assert store.get_daily_stat(user.id, start_of_day(clock.now)) is None

    def test_urgency_is_locked_while_completed(self, service, store, user, clock):
        task = new_task(service, user.id, "medium")
        service.complete_task(user.id, task.id)

        with pytest.raises(ValidationException):
            service.update_task(user.id, task.id, {"urgency": "immediate"})
        service.uncomplete_task(user.id, task.id)

        stat = store.get_daily_stat(user.id, start_of_day(clock.now))
        assert stat.medium_completed == 0
        assert stat.tasks_completed == (
            stat.immediate_completed + stat.medium_completed + stat.delayed_completed
        )
        assert stat.xp_earned == 0
        assert store.get_user(user.id).xp == 0
        assert store.get_task(task.id, user.id).urgency == "medium"

    def test_cannot_uncomplete_someone_elses_task(self, service, store, user, other_user):
        task = new_task(service, other_user.id)
        service.complete_task(other_user.id, task.id)

        with pytest.raises(ResourceNotFoundException):
            service.uncomplete_task(user.id, task.id)

        assert store.get_user(other_user.id).xp == 15


class TestDelete:
    def test_delete_keeps_awarded_progress(self, service, store, user, clock):
        task = new_task(service, user.id, "immediate")
        service.complete_task(user.id, task.id)

        service.delete_task(user.id, task.id)

        with pytest.raises(ResourceNotFoundException):
            store.get_task(task.id, user.id)
        assert store.get_user(user.id).xp == 15
        assert store.get_daily_stat(user.id, start_of_day(clock.now)).tasks_completed == 1


class TestStreaks:
    def test_streak_untouched_when_disabled(self, service, store, user):
        service.complete_task(user.id, new_task(service, user.id).id)

        assert store.get_user(user.id).streak == 0

    def test_streak_rules(self, service, store, user, clock, monkeypatch):
        monkeypatch.setattr(settings, "ENABLE_STREAKS", True)

        service.complete_task(user.id, new_task(service, user.id, title="day 1").id)
        assert store.get_user(user.id).streak == 1

        clock.advance(hours=3)
        service.complete_task(user.id, new_task(service, user.id, title="day 1 again").id)
        assert store.get_user(user.id).streak == 1

        clock.advance(days=1)
        service.complete_task(user.id, new_task(service, user.id, title="day 2").id)
        assert store.get_user(user.id).streak == 2

        clock.advance(days=3)
        service.complete_task(user.id, new_task(service, user.id, title="day 5").id)
        assert store.get_user(user.id).streak == 1

    def test_uncomplete_does_not_touch_streak(self, service, store, user, monkeypatch):
        monkeypatch.setattr(settings, "ENABLE_STREAKS", True)
        task = new_task(service, user.id)
        service.complete_task(user.id, task.id)

        service.uncomplete_task(user.id, task.id)

        assert store.get_user(user.id).streak == 1
