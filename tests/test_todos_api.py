from datetime import datetime

import pytest

from conftest import NOW, TOMORROW, YESTERDAY, todo_payload


def assert_todo_shape(todo: dict):
    for key in ["id", "name", "dueDate", "isComplete"]:
        assert key in todo
    assert isinstance(todo["id"], int)
    assert isinstance(todo["name"], str)
    assert isinstance(todo["isComplete"], bool)
    datetime.fromisoformat(todo["dueDate"].replace("Z", "+00:00"))


class TestGreeting:
    def test_root_returns_plain_text(self, client):
        res = client.get("/")
        assert res.status_code == 200
        assert res.text == "Hello World!"
        assert res.headers["content-type"].startswith("text/plain")


class TestTodosCRUD:
    def test_list_returns_seed_todos_in_order(self, client):
        res = client.get("/todos")
        assert res.status_code == 200
        todos = res.json()
        assert [t["id"] for t in todos] == [1, 2, 3]
        for todo in todos:
            assert_todo_shape(todo)
            assert todo["isComplete"] is False

    def test_create_get_delete_scenario(self, client):
        res_create = client.post("/todos", json=todo_payload())
        assert res_create.status_code == 201
        assert res_create.headers["location"] == "/todos/4"
        created = res_create.json()
        assert_todo_shape(created)
        assert created["id"] == 4
        assert created["name"] == "Go shopping"
        assert created["isComplete"] is False

        res_list = client.get("/todos")
        assert len(res_list.json()) == 4
        assert res_list.json()[-1] == created

        res_del = client.delete("/todos/4")
        assert res_del.status_code == 204
        assert res_del.text == ""

        res_get = client.get("/todos/4")
        assert res_get.status_code == 404
        assert res_get.text == ""

    def test_get_returns_exactly_what_was_posted(self, client):
        payload = todo_payload(id=42, name="Water plants", is_complete=True)
        created = client.post("/todos", json=payload).json()

        res_get = client.get("/todos/42")
        assert res_get.status_code == 200
        fetched = res_get.json()
        assert fetched == created
        assert fetched["name"] == "Water plants"
        assert fetched["isComplete"] is True
        assert datetime.fromisoformat(fetched["dueDate"].replace("Z", "+00:00")) == TOMORROW

    def test_is_complete_defaults_to_false(self, client):
        payload = todo_payload(id=7)
        del payload["isComplete"]
        res = client.post("/todos", json=payload)
        assert res.status_code == 201
        assert res.json()["isComplete"] is False

    def test_date_only_due_date_is_midnight(self, client):
        res = client.post("/todos", json=todo_payload(id=8, due_date="2099-12-25"))
        assert res.status_code == 201
        assert res.json()["dueDate"].startswith("2099-12-25T00:00:00")

    def test_get_unknown_id_is_404_with_empty_body(self, client):
        res = client.get("/todos/999999")
        assert res.status_code == 404
        assert res.content == b""

    @pytest.mark.parametrize("todo_id", [1, 999])
    def test_delete_always_204(self, client, todo_id):
        res = client.delete(f"/todos/{todo_id}")
        assert res.status_code == 204
        res_again = client.delete(f"/todos/{todo_id}")
        assert res_again.status_code == 204

    def test_duplicate_ids_are_kept_and_deleted_together(self, client, store):
        client.post("/todos", json=todo_payload(id=1, name="Second number one"))
        assert [t.id for t in store.list_all()] == [1, 2, 3, 1]

        # lookup returns the first match
        assert client.get("/todos/1").json()["name"] == "Learn C#"

        assert client.delete("/todos/1").status_code == 204
        assert [t.id for t in store.list_all()] == [2, 3]
        assert client.get("/todos/1").status_code == 404


class TestValidationErrors:
    def test_short_name_and_past_due_date_report_both_fields(self, client, store):
        res = client.post("/todos", json=todo_payload(id=5, name="Hi", due_date=YESTERDAY))
        assert res.status_code == 400
        body = res.json()
        assert body["status"] == 400
        assert body["title"] == "One or more validation errors occurred."
        assert body["errors"] == {
            "DueDate": ["Due date must be in the future"],
            "Name": ["Name must be at least 3 characters long"],
        }
        assert len(store) == 3
        assert client.get("/todos/5").status_code == 404

    def test_short_name_only(self, client, store):
        res = client.post("/todos", json=todo_payload(id=5, name="Hi"))
        assert res.status_code == 400
        assert list(res.json()["errors"]) == ["Name"]
        assert len(store) == 3

    def test_due_date_equal_to_now_is_rejected(self, client, store):
        res = client.post("/todos", json=todo_payload(id=5, due_date=NOW))
        assert res.status_code == 400
        assert list(res.json()["errors"]) == ["DueDate"]
        assert len(store) == 3

    def test_name_of_exactly_three_characters_is_accepted(self, client):
        res = client.post("/todos", json=todo_payload(id=6, name="Run"))
        assert res.status_code == 201

    def test_earliest_naive_due_date_is_a_field_error(self, client, store):
        res = client.post("/todos", json=todo_payload(id=9, due_date="0001-01-01T00:00:00"))
        assert res.status_code == 400
        assert list(res.json()["errors"]) == ["DueDate"]
        assert len(store) == 3

    @pytest.mark.parametrize("due_date", ["9999-12-31T23:59:59", "9999-12-31"])
    def test_latest_naive_due_dates_are_accepted(self, client, due_date):
        res = client.post("/todos", json=todo_payload(id=9, due_date=due_date))
        assert res.status_code == 201
        assert res.json()["dueDate"].startswith("9999-12-31T")


class TestMalformedRequests:
    def test_unparseable_json(self, client, store):
        res = client.post(
            "/todos",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )
        assert res.status_code == 400
        body = res.json()
        assert body["error"] == "MalformedRequest"
        assert body["message"] == "Request could not be parsed"
        assert isinstance(body["detail"], list)
        assert len(store) == 3

    def test_missing_required_field(self, client, store):
        payload = todo_payload()
        del payload["name"]
        res = client.post("/todos", json=payload)
        assert res.status_code == 400
        assert res.json()["error"] == "MalformedRequest"
        assert len(store) == 3

    def test_bad_due_date(self, client):
        res = client.post("/todos", json=todo_payload(due_date="not-a-date"))
        assert res.status_code == 400
        assert res.json()["error"] == "MalformedRequest"

    def test_non_integer_id_in_path(self, client):
        res = client.get("/todos/abc")
        assert res.status_code == 400
        assert res.json()["error"] == "MalformedRequest"

    @pytest.mark.parametrize("field,value", [("id", "4"), ("isComplete", "yes"), ("isComplete", 1)])
    def test_ill_typed_fields_are_not_coerced(self, client, store, field, value):
        payload = todo_payload()
        payload[field] = value
        res = client.post("/todos", json=payload)
        assert res.status_code == 400
        assert res.json()["error"] == "MalformedRequest"
        assert len(store) == 3
