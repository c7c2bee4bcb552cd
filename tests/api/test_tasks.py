from fastapi import status


def create(client, title, urgency="immediate", **extra):
    response = client.post("/api/v1/tasks/", json={"title": title, "urgency": urgency, **extra})
    assert response.status_code == status.HTTP_200_OK
    return response.json()


class TestTasksAPI:
    """
    Test cases for the task endpoints
    """

    def test_create_task(self, authorized_client):
        task = create(authorized_client, "  Buy milk  ", "medium", description="2 litres")

        assert task["title"] == "Buy milk"
        assert task["urgency"] == "medium"
        assert task["description"] == "2 litres"
        assert task["priority"] == 1
        assert task["completed"] is False
        assert task["completed_at"] is None

    def test_create_task_validation(self, authorized_client):
        response = authorized_client.post(
            "/api/v1/tasks/", json={"title": "   ", "urgency": "immediate"}
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["error"] == "validation_error"
        assert "title" in response.json()["details"]

        response = authorized_client.post(
            "/api/v1/tasks/", json={"title": "Task", "urgency": "whenever"}
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_list_tasks_in_display_order(self, authorized_client):
        delayed = create(authorized_client, "Later", "delayed")
        first = create(authorized_client, "First", "immediate")
        medium = create(authorized_client, "Soon", "medium")
        second = create(authorized_client, "Second", "immediate")

        response = authorized_client.get("/api/v1/tasks/")

        assert response.status_code == status.HTTP_200_OK
        assert [t["id"] for t in response.json()] == [
            first["id"],
            second["id"],
            medium["id"],
            delayed["id"],
        ]

    def test_complete_and_uncomplete(self, authorized_client):
        task = create(authorized_client, "Ship it", "immediate")

        response = authorized_client.post(f"/api/v1/tasks/{task['id']}/complete")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["completed"] is True
        assert response.json()["completed_at"] is not None

        assert authorized_client.get("/api/v1/users/me").json()["xp"] == 15
        assert [t["id"] for t in authorized_client.get("/api/v1/tasks/completed").json()] == [
            task["id"]
        ]
        assert authorized_client.get("/api/v1/tasks/?completed=true").json()[0]["id"] == task["id"]
        assert authorized_client.get("/api/v1/tasks/").json() == []

        response = authorized_client.post(f"/api/v1/tasks/{task['id']}/uncomplete")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["completed"] is False
        assert authorized_client.get("/api/v1/users/me").json()["xp"] == 0

    def test_update_task(self, authorized_client):
        task = create(authorized_client, "Draft", "delayed", description="v1")

        response = authorized_client.patch(
            f"/api/v1/tasks/{task['id']}", json={"urgency": "immediate"}
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["urgency"] == "immediate"
        assert data["title"] == "Draft"
        assert data["description"] == "v1"
        assert data["priority"] == task["priority"]

    def test_urgency_of_completed_task_is_locked(self, authorized_client):
        task = create(authorized_client, "Done", "medium")
        authorized_client.post(f"/api/v1/tasks/{task['id']}/complete")

        response = authorized_client.patch(
            f"/api/v1/tasks/{task['id']}", json={"urgency": "immediate"}
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["error"] == "validation_error"

        authorized_client.post(f"/api/v1/tasks/{task['id']}/uncomplete")
        daily = authorized_client.get("/api/v1/stats/daily?days=1").json()[0]
        assert daily["tasks_completed"] == daily["medium_completed"] == 0
        assert authorized_client.get("/api/v1/users/me").json()["xp"] == 0

    def test_delete_task(self, authorized_client):
        task = create(authorized_client, "Trash")

        response = authorized_client.delete(f"/api/v1/tasks/{task['id']}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"success": True}
        assert authorized_client.get("/api/v1/tasks/").json() == []

    def test_missing_task(self, authorized_client):
        response = authorized_client.post("/api/v1/tasks/missing/complete")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error"] == "resource_not_found"

    def test_foreign_task_is_not_found(self, authorized_client, other_user_headers):
        task = create(authorized_client, "Private")

        for method, path in [
            ("patch", f"/api/v1/tasks/{task['id']}"),
            ("delete", f"/api/v1/tasks/{task['id']}"),
            ("post", f"/api/v1/tasks/{task['id']}/complete"),
            ("post", f"/api/v1/tasks/{task['id']}/uncomplete"),
        ]:
            kwargs = {"json": {"title": "Hijacked"}} if method == "patch" else {}
            response = authorized_client.request(
                method.upper(), path, headers=other_user_headers, **kwargs
            )
            assert response.status_code == status.HTTP_404_NOT_FOUND

        response = authorized_client.get("/api/v1/tasks/", headers=other_user_headers)
        assert response.json() == []
        assert authorized_client.get("/api/v1/tasks/").json()[0]["title"] == "Private"
