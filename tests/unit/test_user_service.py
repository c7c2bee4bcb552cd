import pytest

from taskvibe.core.config import settings
from taskvibe.core.exceptions import ResourceNotFoundException, ValidationException
from taskvibe.services.user_service import UserService


@pytest.fixture
def service(store, clock):
    return UserService(store, clock)


class TestOfflineUser:
    def test_created_once(self, service, store):
        first = service.ensure_offline_user()
        second = service.ensure_offline_user()

        assert first.id == second.id == settings.OFFLINE_USER_ID
        assert second.level == 1
        assert second.xp == 0
        assert second.theme == "system"
        assert second.completed_onboarding is False


class TestUpsert:
    def test_upsert_never_touches_progress(self, service, store, user):
        store.update_user(user.id, {"xp": 150, "level": 2})

        updated = service.upsert_user(user.id, {"first_name": "Ada", "xp": 0, "level": 1})

        assert updated.first_name == "Ada"
        assert updated.xp == 150
        assert updated.level == 2

    def test_invalid_theme(self, service, user):
        with pytest.raises(ValidationException):
            service.upsert_user(user.id, {"theme": "sepia"})


class TestProfile:
    def test_level_progress(self, service, store, user):
        store.update_user(user.id, {"xp": 105, "level": 2})

        profile = service.get_profile(user.id)

        assert profile.level == 2
        assert profile.xp_into_level == 5
        assert profile.xp_for_next_level == 100

    def test_missing_user(self, service):
        with pytest.raises(ResourceNotFoundException):
            service.get_profile("nobody")


class TestTheme:
    def test_update_theme(self, service, user):
        assert service.update_user_theme(user.id, "dark").theme == "dark"

    def test_invalid_theme(self, service, user):
        with pytest.raises(ValidationException):
            service.update_user_theme(user.id, "neon")


class TestOnboarding:
    def test_welcome_is_unlocked_once(self, service, store, user):
        updated = service.complete_onboarding(user.id, {"nickname": "Ace", "theme": "light"})
        service.complete_onboarding(user.id, {"nickname": "Ace again", "theme": "dark"})

        assert updated.completed_onboarding is True
        assert store.get_user(user.id).nickname == "Ace again"

        achievements = store.list_achievements(user.id)
        assert len(achievements) == 1
        assert achievements[0].type == "welcome"
        assert achievements[0].title == "Welcome Aboard!"
