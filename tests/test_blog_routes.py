"""Tests for the blog endpoints."""

from __future__ import annotations

import pytest

from conftest import API, bearer, create_user, login

BASE = f"{API}/blog"
CONTENT = "Flask makes small services pleasant to write. " * 5


def _payload(**overrides) -> dict:
    body = {"title": "Writing Flask Services", "content": CONTENT}
    body.update(overrides)
    return body


@pytest.fixture()
def create_post(client, admin_headers):
    def _create(headers=None, **overrides) -> dict:
        response = client.post(BASE, json=_payload(**overrides), headers=headers or admin_headers)
        assert response.status_code == 201, response.get_json()
        return response.get_json()["data"]["blog"]

    return _create


def test_create_fills_author_slug_and_read_time(create_post, admin_id):
    post = create_post(status="published", tags=["flask", "python"])

    assert post["slug"] == "writing-flask-services"
    assert post["authorId"] == admin_id
    assert post["author"]["email"] == "admin@example.com"
    assert post["readTime"] == "1 min read"
    assert post["publishDate"] is not None
    assert post["tags"] == ["flask", "python"]


def test_draft_has_no_publish_date(create_post):
    assert create_post()["publishDate"] is None


def test_short_content_is_rejected(client, admin_headers):
    response = client.post(BASE, json=_payload(content="too short"), headers=admin_headers)

    assert response.status_code == 400
    assert response.get_json()["errors"][0]["field"] == "content"


def test_anonymous_reads_only_published(client, create_post):
    draft = create_post(title="Unfinished Thoughts")
    create_post(title="Finished Article", status="published")

    listing = client.get(BASE).get_json()["data"]
    assert [post["title"] for post in listing["blogs"]] == ["Finished Article"]
    assert client.get(f"{BASE}/{draft['id']}").status_code == 404
    assert client.get(f"{BASE}/slug/unfinished-thoughts").status_code == 404
    assert client.patch(f"{BASE}/{draft['id']}/views").status_code == 404


def test_slug_read_counts_anonymous_views_only(client, admin_headers, create_post):
    create_post(status="published")

    anonymous = client.get(f"{BASE}/slug/writing-flask-services").get_json()["data"]["blog"]
    admin = client.get(
        f"{BASE}/slug/writing-flask-services", headers=admin_headers
    ).get_json()["data"]["blog"]

    assert anonymous["views"] == 1
    assert admin["views"] == 1


def test_increment_views(client, create_post):
    post = create_post(status="published")

    first = client.patch(f"{BASE}/{post['id']}/views")
    second = client.patch(f"{BASE}/{post['id']}/views")

    assert first.get_json()["data"] == {"views": 1}
    assert second.get_json()["data"] == {"views": 2}


def test_tag_and_category_facets(client, admin_headers, create_post):
    create_post(title="Tagged Published", category="backend", tags=["flask", "sql"], status="published")
    create_post(title="Tagged Draft", category="drafts", tags=["secret"])
    create_post(title="Other Published", category="frontend", tags=["css"], status="published")

    assert client.get(f"{BASE}/tags").get_json()["data"]["tags"] == ["css", "flask", "sql"]
    assert client.get(f"{BASE}/categories").get_json()["data"]["categories"] == [
        "backend",
        "frontend",
    ]

    tagged = client.get(f"{BASE}?tag=flask", headers=admin_headers).get_json()["data"]["blogs"]
    assert [post["title"] for post in tagged] == ["Tagged Published"]

    # A tag must match a whole element, not a substring of one.
    partial = client.get(f"{BASE}?tag=fla", headers=admin_headers).get_json()["data"]["blogs"]
    assert partial == []


def test_update_recomputes_read_time_and_publish_date(client, admin_headers, create_post):
    post = create_post()
    long_content = "word " * 450

    response = client.put(
        f"{BASE}/{post['id']}",
        json={"content": long_content, "status": "published"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    updated = response.get_json()["data"]["blog"]
    assert updated["readTime"] == "3 min read"
    assert updated["publishDate"] is not None


def test_other_admin_may_edit_and_delete(app, client, create_post):
    post = create_post()
    create_user(app, "editor@example.com", name="Editor")
    editor = bearer(login(client, "editor@example.com")["token"])

    updated = client.put(
        f"{BASE}/{post['id']}", json={"title": "Edited By Someone Else"}, headers=editor
    )
    assert updated.status_code == 200

    first = client.delete(f"{BASE}/{post['id']}", headers=editor)
    second = client.delete(f"{BASE}/{post['id']}", headers=editor)
    assert first.status_code == 200
    assert second.status_code == 404


def test_post_shows_its_own_author(app, client, create_post):
    create_user(app, "writer@example.com", name="Writer")
    writer = bearer(login(client, "writer@example.com")["token"])
    post = create_post(headers=writer, status="published")

    assert post["author"]["name"] == "Writer"
    response = client.get(f"{BASE}/{post['id']}")
    assert response.status_code == 200
