"""API tests for todo endpoints."""

import json

from fastapi.testclient import TestClient

from todolist.api.dependencies import get_todo_store
from todolist.main import app
from todolist.services.todo_store import TodoStore


def _create(client: TestClient, name: str, age: str = "", expires_at: str = "") -> dict:
    response = client.post("/api/todos", json={"name": name, "age": age, "expiresAt": expires_at})
    assert response.status_code == 201
    return response.json()


class TestTodoAPI:
    """Test suite for Todo API endpoints."""

    def test_root_endpoint(self, client: TestClient) -> None:
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["message"] == "Todo List API"

    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_request_id_header(self, client: TestClient) -> None:
        response = client.get("/health", headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"
        assert client.get("/health").headers["X-Request-ID"]

    def test_list_empty(self, client: TestClient) -> None:
        response = client.get("/api/todos")
        assert response.status_code == 200
        assert response.json() == []

    def test_create_todo(self, client: TestClient, todo_store: TodoStore) -> None:
        todo = _create(client, "Alice", "30", "2020-01-01")

        assert todo["index"] == 0
        assert todo["position"] == 1
        assert todo["name"] == "Alice"
        assert todo["expiresAt"] == "2020-01-01"
        assert todo["expired"] is True
        assert todo["id"] == todo_store.todos[0].id

    def test_create_accepts_numeric_age(self, client: TestClient) -> None:
        response = client.post("/api/todos", json={"name": "Alice", "age": 30, "expiresAt": "2099-01-01"})
        assert response.status_code == 201
        assert response.json()["age"] == "30"
        assert response.json()["expired"] is False

    def test_create_strict_age(self, client: TestClient, todo_store: TodoStore) -> None:
        todo_store.strict_age = True
        response = client.post("/api/todos", json={"name": "Alice", "age": "thirty"})
        assert response.status_code == 400
        assert todo_store.todos == []

    def test_list_with_search(self, client: TestClient) -> None:
        for name in ("Alice", "Bob", "alicia"):
            _create(client, name)

        response = client.get("/api/todos", params={"search": "ALI"})

        assert response.status_code == 200
        results = response.json()
        assert [todo["name"] for todo in results] == ["Alice", "alicia"]
        assert [todo["index"] for todo in results] == [0, 2]

    def test_get_by_index(self, client: TestClient) -> None:
        _create(client, "Alice")
        assert client.get("/api/todos/0").json()["name"] == "Alice"
        assert client.get("/api/todos/1").status_code == 404

    def test_update_by_index(self, client: TestClient) -> None:
        created = _create(client, "Alice", "30", "2020-01-01")

        response = client.put("/api/todos/0", json={"name": "Alice", "age": "31", "expiresAt": "2099-12-31"})

        assert response.status_code == 200
        updated = response.json()
        assert updated["id"] == created["id"]
        assert updated["age"] == "31"
        assert updated["expired"] is False

    def test_update_out_of_range(self, client: TestClient) -> None:
        response = client.put("/api/todos/3", json={"name": "Nobody"})
        assert response.status_code == 404
        assert response.json()["detail"] == "Todo not found"

    def test_delete_by_index(self, client: TestClient) -> None:
        _create(client, "Alice")
        _create(client, "Bob")

        response = client.delete("/api/todos/0")
        assert response.status_code == 204

        remaining = client.get("/api/todos").json()
        assert [(todo["index"], todo["name"]) for todo in remaining] == [(0, "Bob")]
        assert client.delete("/api/todos/5").status_code == 404

    def test_patch_changes_only_given_fields(self, client: TestClient) -> None:
        created = _create(client, "Alice", "30", "2020-01-01")

        response = client.patch("/api/todos/0", json={"expiresAt": "2099-12-31"})

        assert response.status_code == 200
        patched = response.json()
        assert patched["id"] == created["id"]
        assert patched["name"] == "Alice"
        assert patched["age"] == "30"
        assert patched["expiresAt"] == "2099-12-31"
        assert patched["expired"] is False

    def test_patch_out_of_range(self, client: TestClient) -> None:
        _create(client, "Alice")
        assert client.patch("/api/todos/1", json={"name": "Bob"}).status_code == 404
        assert client.patch("/api/todos/-1", json={"name": "Bob"}).status_code == 404

    def test_patch_strict_age(self, client: TestClient, todo_store: TodoStore) -> None:
        _create(client, "Alice", "30")
        todo_store.strict_age = True

        response = client.patch("/api/todos/0", json={"age": "thirty"})

        assert response.status_code == 400
        assert todo_store.todos[0].age == "30"

    def test_negative_index_not_found(self, client: TestClient) -> None:
        _create(client, "Alice")
        assert client.delete("/api/todos/-1").status_code == 404

    def test_by_id_routes(self, client: TestClient) -> None:
        _create(client, "Alice")
        bob = _create(client, "Bob")

        response = client.get(f"/api/todos/by-id/{bob['id']}")
        assert response.status_code == 200
        assert response.json()["index"] == 1

        response = client.put(f"/api/todos/by-id/{bob['id']}", json={"name": "Robert"})
        assert response.status_code == 200
        assert response.json()["name"] == "Robert"

        assert client.delete(f"/api/todos/by-id/{bob['id']}").status_code == 204
        assert client.get(f"/api/todos/by-id/{bob['id']}").status_code == 404
        assert client.put("/api/todos/by-id/missing", json={"name": "x"}).status_code == 404
        assert client.delete("/api/todos/by-id/missing").status_code == 404

    def test_expired_check(self, client: TestClient) -> None:
        response = client.get("/api/todos/expired", params={"expires_at": "2000-01-01"})
        assert response.status_code == 200
        assert response.json() == {"expiresAt": "2000-01-01", "expired": True}

        response = client.get("/api/todos/expired", params={"expires_at": "2999-01-01"})
        assert response.json()["expired"] is False

    def test_scenario_persists_through_storage(self, client: TestClient, todo_store: TodoStore) -> None:
        _create(client, "Alice", "30", "2020-01-01")
        client.put("/api/todos/0", json={"name": "Alice", "age": "30", "expiresAt": "9999-12-31"})
        assert client.get("/api/todos").json()[0]["expired"] is False

        client.delete("/api/todos/0")

        assert client.get("/api/todos").json() == []
        assert todo_store.repository.storage.get_item("LC") == "[]"


def test_default_store_uses_file_storage(tmp_path, monkeypatch) -> None:
    """Without overrides the store is built from TODO_* settings."""
    path = tmp_path / "todos.json"
    monkeypatch.setenv("TODO_STORAGE_PATH", str(path))
    app.dependency_overrides.pop(get_todo_store, None)

    client = TestClient(app)
    response = client.post("/api/todos", json={"name": "Alice", "age": "30", "expiresAt": "2020-01-01"})
    assert response.status_code == 201

    stored = json.loads(json.loads(path.read_text(encoding="utf-8"))["LC"])
    assert [todo["name"] for todo in stored] == ["Alice"]


def test_lifespan_loads_store(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("TODO_STORAGE_PATH", str(tmp_path / "todos.json"))
    app.dependency_overrides.pop(get_todo_store, None)

    with TestClient(app) as client:
        assert client.get("/api/todos").json() == []
