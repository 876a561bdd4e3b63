"""Tests for the HTTP routes and error-to-status mapping."""

from fastapi import status


def create_person(client, name="Carol Poe", email="carol@example.com"):
    response = client.post("/persons", json={"name": name, "email": email})
    assert response.status_code == status.HTTP_201_CREATED
    return response.json()


def create_task(client, person_id, **overrides):
    payload = {
        "title": "Plan sprint",
        "dueDate": "2025-01-05T10:00:00",
        "priority": "HIGH",
        "category": "WORK",
    }
    payload.update(overrides)
    response = client.post(f"/tasks/{person_id}", json=payload)
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()


class TestServiceEndpoints:
    """Test health and root endpoints."""

    def test_health_check(self, client):
        response = client.get("/healthz")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["services"]["task_service"] == "initialized"

    def test_root(self, client):
        body = client.get("/").json()

        assert body["endpoints"] == {"persons": "/persons", "tasks": "/tasks"}


class TestPersonRoutes:
    """Test /persons endpoints."""

    def test_create_and_get_person(self, client, sample_person_data):
        created = client.post("/persons", json={**sample_person_data, "id": 500}).json()

        assert created["id"] != 500
        response = client.get(f"/persons/{created['id']}")
        assert response.status_code == 200
        assert response.json() == {"id": created["id"], **sample_person_data}

    def test_create_person_invalid_email(self, client):
        response = client.post("/persons", json={"name": "Dan", "email": "nope"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["field"] == "email"

    def test_create_person_missing_field(self, client):
        response = client.post("/persons", json={"name": "Dan"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "email" in response.json()["error"]

    def test_get_missing_person(self, client):
        response = client.get("/persons/41")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error"] == "Person with ID 41 not found."

    def test_patch_person(self, client):
        person = create_person(client)

        response = client.patch(f"/persons/{person['id']}", json={"name": "Carol Smith"})

        assert response.status_code == 200
        assert response.json()["name"] == "Carol Smith"
        assert response.json()["email"] == "carol@example.com"

    def test_list_persons_page(self, client):
        for i in range(7):
            create_person(client, name=f"P{i}", email=f"p{i}@example.com")

        body = client.get("/persons", params={"page": 1, "size": 5}).json()

        assert [p["name"] for p in body["content"]] == ["P5", "P6"]
        assert body["page"] == 1
        assert body["size"] == 5
        assert body["totalElements"] == 7
        assert body["totalPages"] == 2

    def test_list_persons_caps_page_size(self, client):
        body = client.get("/persons", params={"size": 500}).json()

        assert body["size"] == 10

    def test_list_persons_default_page_size(self, client):
        assert client.get("/persons").json()["size"] == 5

    def test_find_by_name_and_email(self, client):
        person = create_person(client)

        assert client.get("/persons/name/Carol Poe").json() == [person]
        assert client.get("/persons/name/Nobody").json() == []
        assert client.get("/persons/email/carol@example.com").json() == person

        missing = client.get("/persons/email/ghost@example.com")
        assert missing.status_code == status.HTTP_404_NOT_FOUND
        assert missing.json()["error"] == "Person not found with email: ghost@example.com"

    def test_delete_person_cascades(self, client):
        person = create_person(client)
        task = create_task(client, person["id"])

        response = client.delete(f"/persons/{person['id']}")

        assert response.status_code == 200
        assert response.json() == {"message": "Person deleted successfully."}
        assert client.get(f"/persons/{person['id']}").status_code == 404
        assert client.get(f"/tasks/{task['id']}").status_code == 404

    def test_delete_all_persons(self, client):
        create_person(client)

        assert client.delete("/persons").status_code == 200
        assert client.get("/persons").json()["totalElements"] == 0


class TestTaskRoutes:
    """Test /tasks endpoints."""

    def test_create_task_wire_format(self, client, sample_task_data):
        person = create_person(client)

        response = client.post(f"/tasks/{person['id']}", json={**sample_task_data, "finished": True})

        assert response.status_code == 201
        body = response.json()
        assert body["personId"] == person["id"]
        assert body["dueDate"] == "2025-01-05T10:00:00"
        assert body["finished"] is False
        assert body["completionDate"] is None
        assert body["creationTime"] == "2024-12-31T12:00:00"

    def test_create_task_for_missing_person(self, client, sample_task_data):
        response = client.post("/tasks/77", json=sample_task_data)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_create_task_with_past_due_date(self, client, sample_task_data):
        person = create_person(client)

        response = client.post(f"/tasks/{person['id']}", json={**sample_task_data, "dueDate": "2024-01-01T00:00:00"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["field"] == "dueDate"

    def test_invalid_enum_lists_allowed_values(self, client):
        response = client.get("/tasks/priority/URGENT")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "Allowed values are" in response.json()["error"]
        assert "MEDIUM" in response.json()["error"]

    def test_patch_task_ignores_owner(self, client):
        alice = create_person(client, "Alice", "alice@example.com")
        bob = create_person(client, "Bob", "bob@example.com")
        task = create_task(client, alice["id"])

        response = client.patch(f"/tasks/{task['id']}", json={"title": "Renamed", "personId": bob["id"]})

        assert response.status_code == 200
        assert response.json()["title"] == "Renamed"
        assert response.json()["personId"] == alice["id"]
        assert response.json()["priority"] == "HIGH"

    def test_finish_and_unfinish(self, client):
        person = create_person(client)
        task = create_task(client, person["id"])

        finished = client.patch(f"/tasks/{task['id']}/finish").json()
        unfinished = client.patch(f"/tasks/{task['id']}/unfinish").json()

        assert finished["finished"] is True
        assert finished["completionDate"] == "2024-12-31T12:00:00"
        assert unfinished["finished"] is False
        assert unfinished["completionDate"] == finished["completionDate"]

    def test_delete_task_ownership(self, client):
        """Test a non-owner gets 403 and the task remains."""
        alice = create_person(client, "Alice", "alice@example.com")
        bob = create_person(client, "Bob", "bob@example.com")
        task = create_task(client, alice["id"])

        forbidden = client.delete(f"/tasks/person/{bob['id']}/task/{task['id']}")

        assert forbidden.status_code == status.HTTP_403_FORBIDDEN
        assert forbidden.json()["error"] == f"Task with ID {task['id']} not owned by Person with ID {bob['id']}"
        assert client.get(f"/tasks/{task['id']}").status_code == 200

        allowed = client.delete(f"/tasks/person/{alice['id']}/task/{task['id']}")

        assert allowed.status_code == status.HTTP_204_NO_CONTENT
        assert client.get(f"/tasks/{task['id']}").status_code == 404

    def test_owner_scoped_patch(self, client):
        alice = create_person(client, "Alice", "alice@example.com")
        bob = create_person(client, "Bob", "bob@example.com")
        task = create_task(client, alice["id"])

        response = client.patch(f"/tasks/person/{bob['id']}/task/{task['id']}", json={"title": "Mine now"})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_list_tasks_pagination(self, client):
        person = create_person(client)
        for i in range(15):
            create_task(client, person["id"], title=f"Task {i}")

        first = client.get("/tasks", params={"page": 0, "size": 5}).json()
        last = client.get("/tasks", params={"page": 2, "size": 5}).json()

        assert len(first["content"]) == 5
        assert first["totalElements"] == 15
        assert first["totalPages"] == 3
        assert [t["title"] for t in last["content"]] == [f"Task {i}" for i in range(10, 15)]

    def test_filters(self, client):
        person = create_person(client)
        create_task(client, person["id"], title="start", dueDate="2025-01-01T00:00:00", category="STUDY")
        create_task(client, person["id"], title="end", dueDate="2025-01-31T00:00:00")
        create_task(client, person["id"], title="after", dueDate="2025-02-01T00:00:00", priority="LOW")

        in_range = client.get("/tasks/range", params={"startDate": "2025-01-01T00:00:00", "endDate": "2025-01-31T00:00:00"})
        for_person = client.get(
            f"/tasks/person/{person['id']}",
            params={"startDate": "2025-01-15T00:00:00", "endDate": "2025-02-15T00:00:00"},
        )

        assert [t["title"] for t in in_range.json()] == ["start", "end"]
        assert [t["title"] for t in for_person.json()] == ["end", "after"]
        assert [t["title"] for t in client.get(f"/tasks/person/{person['id']}").json()] == ["start", "end", "after"]
        assert [t["title"] for t in client.get("/tasks/due/2025-01-31T00:00:00").json()] == ["end"]
        assert [t["title"] for t in client.get("/tasks/category/STUDY").json()] == ["start"]
        assert [t["title"] for t in client.get("/tasks/priority/LOW").json()] == ["after"]

    def test_tasks_for_unknown_person(self, client):
        assert client.get("/tasks/person/1234").status_code == status.HTTP_404_NOT_FOUND

    def test_sort_endpoints(self, client):
        person = create_person(client)
        create_task(client, person["id"], title="jan1-low", dueDate="2025-01-01T00:00:00", priority="LOW")
        create_task(client, person["id"], title="jan3-low", dueDate="2025-01-03T00:00:00", priority="LOW")
        create_task(client, person["id"], title="jan1-high", dueDate="2025-01-01T00:00:00", priority="HIGH")

        multi = client.get("/tasks/sort", params=[("sort", "dueDate"), ("sort", "priority"), ("order", "asc"), ("order", "desc")])
        by_priority = client.get("/tasks/sort/priority", params={"order": "desc"})
        by_due = client.get("/tasks/sort/dueDate")
        combined = client.get("/tasks/sort/dueDate/priority", params={"dueDateOrder": "desc", "priorityOrder": "asc"})

        assert [t["title"] for t in multi.json()] == ["jan1-high", "jan1-low", "jan3-low"]
        assert [t["title"] for t in by_priority.json()] == ["jan1-high", "jan1-low", "jan3-low"]
        assert [t["title"] for t in by_due.json()] == ["jan1-low", "jan1-high", "jan3-low"]
        assert [t["title"] for t in combined.json()] == ["jan3-low", "jan1-low", "jan1-high"]

    def test_delete_all_tasks(self, client):
        person = create_person(client)
        create_task(client, person["id"])

        assert client.delete("/tasks/all").status_code == 200
        assert client.get("/tasks").json()["totalElements"] == 0
        assert client.get(f"/persons/{person['id']}").status_code == 200

    def test_utc_suffixed_due_dates_sort_and_filter(self, client):
        """Test Z-suffixed and plain due dates can be stored, sorted and range-queried together."""
        person = create_person(client)
        aware = create_task(client, person["id"], title="aware", dueDate="2025-01-01T10:00:00Z")
        create_task(client, person["id"], title="naive", dueDate="2025-01-02T10:00:00")

        by_due = client.get("/tasks/sort/dueDate", params={"order": "desc"})
        multi = client.get("/tasks/sort", params={"sort": "dueDate"})
        in_range = client.get("/tasks/range", params={"startDate": "2025-01-01T00:00:00Z", "endDate": "2025-01-01T23:59:59"})

        assert aware["dueDate"] == "2025-01-01T10:00:00"
        assert by_due.status_code == 200
        assert [t["title"] for t in by_due.json()] == ["naive", "aware"]
        assert [t["title"] for t in multi.json()] == ["aware", "naive"]
        assert [t["title"] for t in in_range.json()] == ["aware"]

    def test_snake_case_sort_field_is_ignored(self, client):
        person = create_person(client)
        create_task(client, person["id"], title="later", dueDate="2025-03-01T00:00:00")
        create_task(client, person["id"], title="sooner", dueDate="2025-02-01T00:00:00")

        response = client.get("/tasks/sort", params={"sort": "due_date"})

        assert [t["title"] for t in response.json()] == ["later", "sooner"]
