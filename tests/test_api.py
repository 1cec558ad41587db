"""Tests for the HTTP layer via FastAPI's TestClient (JSON backend in a temp dir)."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Make the blog_api package importable for local test runs
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from blog_api.app import create_app  # noqa: E402
from blog_api.core.config import Settings  # noqa: E402


@pytest.fixture()
def client(tmp_path):
    settings = Settings(storage_backend="json", data_dir=str(tmp_path / "data"), max_page_size=50)
    with TestClient(create_app(settings)) as c:
        yield c


def _create_post(client, **overrides) -> dict:
    body = {
        "title": "Hello world",
        "content": "Plenty of content for a post.",
        "author": "Jane Doe",
        "tags": ["python"],
    }
    body.update(overrides)
    resp = client.post("/api/posts", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()


class TestHealth:
    def test_health_reports_backend(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "backend": "json"}


class TestPosts:
    def test_create_and_get(self, client):
        post = _create_post(client, image="https://example.com/a.png")
        assert post["id"]
        assert post["createdAt"] == post["updatedAt"]
        resp = client.get(f"/api/posts/{post['id']}")
        assert resp.status_code == 200
        assert resp.json() == post

    def test_create_rejects_invalid_body(self, client):
        resp = client.post("/api/posts", json={"title": "x", "content": "short", "author": "J"})
        assert resp.status_code == 422
        resp = client.post(
            "/api/posts",
            json={"title": "Fine", "content": "Fine content", "author": "Jo", "image": "not a url"},
        )
        assert resp.status_code == 422

    def test_list_is_paged_with_filters(self, client):
        _create_post(client, title="First", tags=["a", "b"])
        _create_post(client, title="Second", tags=["b", "c"])
        _create_post(client, title="Third", tags=["c"])

        resp = client.get("/api/posts", params={"tag": "b"})
        assert resp.status_code == 200
        body = resp.json()
        assert sorted(p["title"] for p in body["data"]) == ["First", "Second"]
        assert body["meta"]["total"] == 2
        assert body["meta"]["page"] == 1
        assert body["meta"]["pageSize"] == 10

        resp = client.get("/api/posts", params={"pageSize": 2, "page": 2, "sortBy": "title", "sortOrder": "asc"})
        body = resp.json()
        assert [p["title"] for p in body["data"]] == ["Third"]
        assert body["meta"]["hasPreviousPage"] is True
        assert body["meta"]["hasNextPage"] is False

    def test_list_rejects_oversized_page(self, client):
        resp = client.get("/api/posts", params={"pageSize": 500})
        assert resp.status_code == 422
        assert resp.json()["error"] == "validation_failed"

    def test_tags(self, client):
        _create_post(client, tags=["web", "api"])
        _create_post(client, tags=["api"])
        assert client.get("/api/posts/tags").json() == ["api", "web"]

    def test_patch_updates_only_given_fields(self, client):
        post = _create_post(client)
        resp = client.patch(f"/api/posts/{post['id']}", json={"title": "New title"})
        assert resp.status_code == 200
        updated = resp.json()
        assert updated["title"] == "New title"
        assert updated["content"] == post["content"]
        assert updated["createdAt"] == post["createdAt"]

    def test_missing_post_is_404(self, client):
        for method, url in (
            ("get", "/api/posts/missing"),
            ("delete", "/api/posts/missing"),
        ):
            resp = getattr(client, method)(url)
            assert resp.status_code == 404
            assert resp.json() == {
                "ok": False,
                "error": "not_found",
                "message": 'Post with ID "missing" not found',
            }
        resp = client.patch("/api/posts/missing", json={"title": "Anything"})
        assert resp.status_code == 404

    def test_delete_cascades_to_comments(self, client):
        post = _create_post(client)
        for text in ("one", "two"):
            client.post(f"/api/posts/{post['id']}/comments", json={"author": "Ann", "content": text})
        assert client.get(f"/api/posts/{post['id']}/comments/count").json()["count"] == 2

        resp = client.delete(f"/api/posts/{post['id']}")
        assert resp.status_code == 204
        assert client.get(f"/api/posts/{post['id']}/comments/count").json()["count"] == 0
        assert client.get(f"/api/posts/{post['id']}").status_code == 404


class TestCategories:
    def test_create_conflict_is_409(self, client):
        resp = client.post("/api/categories", json={"name": "Tech"})
        assert resp.status_code == 201
        assert resp.json()["description"] == ""
        resp = client.post("/api/categories", json={"name": "tech"})
        assert resp.status_code == 409
        assert resp.json()["error"] == "conflict"
        assert len(client.get("/api/categories").json()) == 1

    def test_list_shape_depends_on_paging(self, client):
        for name in ("Alpha", "Beta", "Gamma"):
            client.post("/api/categories", json={"name": name})
        unpaged = client.get("/api/categories").json()
        assert isinstance(unpaged, list)
        assert [c["name"] for c in unpaged] == ["Alpha", "Beta", "Gamma"]

        paged = client.get("/api/categories", params={"pageSize": 2}).json()
        assert [c["name"] for c in paged["data"]] == ["Alpha", "Beta"]
        assert paged["meta"]["totalPages"] == 2

    def test_search_update_delete(self, client):
        created = client.post("/api/categories", json={"name": "Travel", "description": "Trips"}).json()
        assert [c["name"] for c in client.get("/api/categories/search", params={"q": "trip"}).json()] == ["Travel"]

        resp = client.patch(f"/api/categories/{created['id']}", json={"description": "Journeys"})
        assert resp.json()["description"] == "Journeys"
        assert resp.json()["name"] == "Travel"

        assert client.delete(f"/api/categories/{created['id']}").status_code == 204
        assert client.get(f"/api/categories/{created['id']}").status_code == 404
        assert client.delete(f"/api/categories/{created['id']}").status_code == 404


class TestComments:
    def test_comment_on_missing_post_is_404(self, client):
        resp = client.post("/api/posts/missing/comments", json={"author": "Ann", "content": "Hi"})
        assert resp.status_code == 404

    def test_list_get_delete(self, client):
        post = _create_post(client)
        first = client.post(f"/api/posts/{post['id']}/comments", json={"author": "Ann", "content": "first"}).json()
        assert first["postId"] == post["id"]

        listed = client.get(f"/api/posts/{post['id']}/comments").json()
        assert [c["id"] for c in listed] == [first["id"]]

        paged = client.get(f"/api/posts/{post['id']}/comments", params={"page": 1}).json()
        assert paged["meta"]["total"] == 1

        assert client.get(f"/api/comments/{first['id']}").json() == first
        assert client.delete(f"/api/comments/{first['id']}").status_code == 204
        assert client.get(f"/api/comments/{first['id']}").status_code == 404

    def test_listing_comments_of_missing_post_is_404(self, client):
        assert client.get("/api/posts/missing/comments").status_code == 404
