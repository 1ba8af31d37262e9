"""HTTP tests for the blog post endpoints."""

from fastapi.testclient import TestClient

POSTS = "/api/v1/posts/"


def _create(client: TestClient, title: str = "Hi", author: str = "Bo", content: str = "World"):
    return client.post(POSTS, json={"title": title, "author": author, "content": content})


def test_create_and_list_posts(client: TestClient) -> None:
    first = _create(client, title="First")
    second = _create(client, title="Second", content="x" * 200)

    assert first.status_code == 201
    assert first.json()["id"] == 1
    assert second.json()["id"] == 2

    listing = client.get(POSTS)
    assert listing.status_code == 200
    body = listing.json()
    assert [post["title"] for post in body] == ["Second", "First"]
    assert body[0]["excerpt"] == "x" * 150 + "..."
    assert body[1]["created_display"]


def test_create_with_blank_field_is_rejected(client: TestClient) -> None:
    _create(client)

    response = _create(client, title="   ")

    assert response.status_code == 422
    assert response.json()["detail"] == {
        "error": "Fields cannot be empty or contain only whitespace.",
        "field": "title",
    }
    assert len(client.get(POSTS).json()) == 1


def test_create_with_missing_field_is_rejected(client: TestClient) -> None:
    response = client.post(POSTS, json={"title": "Hi", "author": "Bo"})

    assert response.status_code == 422
    assert response.json()["detail"]["error"] == "All fields are required. Please fill out the entire form."


def test_get_post_and_not_found(client: TestClient) -> None:
    created = _create(client).json()

    assert client.get(f"{POSTS}{created['id']}").json() == created
    missing = client.get(f"{POSTS}99")
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Post not found"


def test_update_post_via_put_and_form_alias(client: TestClient) -> None:
    created = _create(client).json()

    put = client.put(f"{POSTS}{created['id']}", json={"title": "Edited", "author": "Bo", "content": "World"})
    form = client.post(f"{POSTS}{created['id']}/edit", json={"title": "Again", "author": "Al", "content": "Text"})

    assert put.status_code == 200
    assert put.json()["title"] == "Edited"
    assert form.status_code == 200
    assert form.json()["author"] == "Al"
    assert form.json()["created_at"] == created["created_at"]


def test_failed_update_returns_current_post(client: TestClient) -> None:
    created = _create(client).json()

    response = client.put(f"{POSTS}{created['id']}", json={"title": "Changed", "author": "", "content": "World"})

    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["field"] == "author"
    assert detail["post"]["title"] == "Hi"
    assert client.get(f"{POSTS}{created['id']}").json() == created


def test_update_missing_post_returns_404(client: TestClient) -> None:
    response = client.put(f"{POSTS}5", json={"title": "a", "author": "b", "content": "c"})

    assert response.status_code == 404


def test_delete_post(client: TestClient) -> None:
    first = _create(client).json()
    second = _create(client).json()

    assert client.delete(f"{POSTS}{first['id']}").status_code == 204
    assert client.delete(f"{POSTS}{first['id']}").status_code == 404

    removed = client.post(f"{POSTS}{second['id']}/delete")
    assert removed.status_code == 200
    assert removed.json()["id"] == second["id"]
    assert client.get(POSTS).json() == []


def test_responses_carry_powered_by_header(client: TestClient) -> None:
    response = client.get(POSTS)

    assert response.headers["X-Powered-By"] == "FastAPI-Blog-Tracker"
