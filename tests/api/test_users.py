from fastapi import status


class TestUsersAPI:
    def test_read_me(self, authorized_client):
        response = authorized_client.get("/api/v1/users/me")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["theme"] == "system"
        assert data["xp"] == 0
        assert data["xp_into_level"] == 0
        assert data["streak"] == 0

    def test_update_theme(self, authorized_client):
        response = authorized_client.patch("/api/v1/users/me/theme", json={"theme": "dark"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["theme"] == "dark"

    def test_update_theme_rejects_unknown_value(self, authorized_client):
        response = authorized_client.patch("/api/v1/users/me/theme", json={"theme": "neon"})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert "theme" in response.json()["details"]

    def test_onboarding_unlocks_welcome_once(self, authorized_client):
        payload = {"nickname": "Ace", "theme": "light"}

        first = authorized_client.patch("/api/v1/users/me/onboarding", json=payload)
        second = authorized_client.patch("/api/v1/users/me/onboarding", json=payload)

        assert first.status_code == second.status_code == status.HTTP_200_OK
        assert first.json()["completed_onboarding"] is True
        assert first.json()["nickname"] == "Ace"
        assert first.json()["theme"] == "light"

        achievements = authorized_client.get("/api/v1/achievements/").json()
        assert [a["type"] for a in achievements] == ["welcome"]
