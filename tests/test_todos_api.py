"""HTTP tests for todo routes (session backend)."""

import asyncio

import pytest

from todo_app.todos.helpers import is_list_complete

XHR = {"X-Requested-With": "XMLHttpRequest"}


@pytest.fixture
def groceries(client):
    """A list with id 1 named Groceries."""
    client.post("/lists", data={"list_name": "Groceries"})
    return 1


def add_todo(client, list_id, name):
    return client.post(f"/lists/{list_id}/todos", data={"todo": name}, follow_redirects=False)


def load_list(fake_redis, client, list_id):
    from todo_app.session.store import SessionRecord
    from todo_app.todos.session_store import SessionListStore

    session_id = client.cookies["todo_session"]
    store = SessionListStore(SessionRecord(fake_redis, session_id))
    return asyncio.run(store.find_list(list_id))


@pytest.mark.integration
class TestAddTodo:
    def test_add(self, client, groceries):
        response = add_todo(client, groceries, "Milk")

        assert response.status_code == 303
        assert response.headers["location"] == "/lists/1"
        page = client.get("/lists/1").text
        assert "The todo was added." in page
        assert "Milk" in page

    @pytest.mark.parametrize("name", ["", "t" * 101])
    def test_invalid_name_rerenders_list(self, client, groceries, name):
        response = add_todo(client, groceries, name)

        assert response.status_code == 422
        assert "Todo must be between 1 and 100 characters." in response.text
        assert "Groceries" in response.text

    def test_add_to_unknown_list(self, client):
        response = add_todo(client, 5, "Milk")

        assert response.status_code == 303
        assert response.headers["location"] == "/lists"


@pytest.mark.integration
class TestDeleteTodo:
    def test_delete_redirects_with_flash(self, client, groceries):
        add_todo(client, groceries, "Milk")

        response = client.post("/lists/1/todos/2/delete", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/lists/1"
        page = client.get("/lists/1").text
        assert "The todo has been deleted." in page
        assert "Milk" not in page

    def test_async_delete_is_no_content(self, client, groceries):
        add_todo(client, groceries, "Milk")
        client.get("/lists/1")

        response = client.post("/lists/1/todos/2/delete", headers=XHR, follow_redirects=False)

        assert response.status_code == 204
        assert response.content == b""
        page = client.get("/lists/1").text
        assert "Milk" not in page
        assert "The todo has been deleted." not in page

    def test_unknown_todo_redirects_to_list(self, client, groceries):
        response = client.post("/lists/1/todos/99/delete", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/lists/1"
        assert "The specified todo was not found." in client.get("/lists/1").text

    @pytest.mark.parametrize("path", ["/lists/1/todos/abc/delete", "/lists/1/todos/abc"])
    def test_non_numeric_todo_id_redirects_to_list(self, client, groceries, path):
        response = client.post(path, data={"completed": "true"}, follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/lists/1"
        assert "The specified todo was not found." in client.get("/lists/1").text

    def test_non_numeric_list_id_redirects_to_index(self, client):
        response = client.post("/lists/abc/todos/1/delete", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/lists"

    def test_async_delete_unknown_todo_returns_list_path(self, client, groceries):
        response = client.post("/lists/1/todos/99/delete", headers=XHR, follow_redirects=False)

        assert response.status_code == 200
        assert response.text == "/lists/1"


@pytest.mark.integration
class TestCompletion:
    def test_groceries_scenario(self, client, fake_redis, groceries):
        add_todo(client, groceries, "Milk")

        response = client.post("/lists/1/todos/2", data={"completed": "true"}, follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/lists/1"
        assert "The todo has been updated." in client.get("/lists/1").text
        assert is_list_complete(load_list(fake_redis, client, groceries))

    @pytest.mark.parametrize("value", ["false", "", "yes", "1"])
    def test_anything_but_true_marks_incomplete(self, client, fake_redis, groceries, value):
        add_todo(client, groceries, "Milk")
        client.post("/lists/1/todos/2", data={"completed": "true"})

        client.post("/lists/1/todos/2", data={"completed": value})

        todo_list = load_list(fake_redis, client, groceries)
        assert todo_list.todos[0].completed is False

    def test_complete_all(self, client, fake_redis, groceries):
        for name in ("Milk", "Eggs", "Bread"):
            add_todo(client, groceries, name)

        response = client.post("/lists/1/complete", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/lists/1"
        assert "All todos marked complete." in client.get("/lists/1").text
        assert is_list_complete(load_list(fake_redis, client, groceries))

    def test_complete_list_is_marked_in_index(self, client, groceries):
        add_todo(client, groceries, "Milk")
        client.post("/lists/1/complete")

        assert '<li class="complete">' in client.get("/lists").text

    def test_toggle_unknown_todo(self, client, groceries):
        response = client.post("/lists/1/todos/9", data={"completed": "true"}, follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/lists/1"
