"""Tests for the testimonial endpoints."""

from __future__ import annotations

import pytest

from conftest import API

BASE = f"{API}/testimonials"


@pytest.fixture()
def create_testimonial(client, admin_headers):
    def _create(**overrides) -> dict:
        body = {
            "name": "Jane Client",
            "company": "Acme",
            "content": "Delivered on time and the code was a pleasure to extend.",
            "rating": 5,
        }
        body.update(overrides)
        response = client.post(BASE, json=body, headers=admin_headers)
        assert response.status_code == 201, response.get_json()
        return response.get_json()["data"]["testimonial"]

    return _create


def test_create_defaults_to_pending(create_testimonial):
    testimonial = create_testimonial(projectType="website")

    assert testimonial["status"] == "pending"
    assert testimonial["featured"] is False
    assert testimonial["projectType"] == "website"


@pytest.mark.parametrize("rating", [0, 6])
def test_rating_out_of_range(client, admin_headers, rating):
    response = client.post(
        BASE,
        json={"name": "Jane", "content": "A long enough testimonial text.", "rating": rating},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.get_json()["errors"][0]["field"] == "rating"


def test_approve_reject_and_feature(client, admin_headers, create_testimonial):
    testimonial = create_testimonial()
    url = f"{BASE}/{testimonial['id']}"

    approved = client.patch(f"{url}/approve", headers=admin_headers)
    assert approved.get_json()["data"]["testimonial"]["status"] == "approved"

    rejected = client.patch(f"{url}/reject", headers=admin_headers)
    assert rejected.get_json()["data"]["testimonial"]["status"] == "rejected"

    featured = client.patch(f"{url}/featured", headers=admin_headers)
    assert featured.get_json()["data"]["testimonial"]["featured"] is True


def test_list_filters(client, create_testimonial):
    create_testimonial(name="Low Rater", rating=3, company="Initech", status="approved")
    create_testimonial(name="High Rater", rating=5, projectType="mobile app")

    high = client.get(f"{BASE}?rating=4").get_json()["data"]["testimonials"]
    assert [item["name"] for item in high] == ["High Rater"]

    approved = client.get(f"{BASE}?status=approved").get_json()["data"]["testimonials"]
    assert [item["name"] for item in approved] == ["Low Rater"]

    by_type = client.get(f"{BASE}?projectType=mobile%20app").get_json()["data"]["testimonials"]
    assert [item["name"] for item in by_type] == ["High Rater"]

    ordered = client.get(f"{BASE}?orderBy=rating").get_json()["data"]["testimonials"]
    assert [item["rating"] for item in ordered] == [5, 3]


def test_stats_and_facets(client, admin_headers, create_testimonial):
    create_testimonial(rating=4, company="Acme", status="approved", featured=True, projectType="api")
    create_testimonial(rating=5, company="Globex", projectType="website")
    create_testimonial(rating=3, company="Acme", status="rejected")

    stats = client.get(f"{BASE}/stats", headers=admin_headers).get_json()["data"]["stats"]
    assert stats == {
        "total": 3,
        "pending": 1,
        "approved": 1,
        "rejected": 1,
        "featured": 1,
        "average_rating": 4.0,
        "unique_companies": 2,
    }

    assert client.get(f"{BASE}/companies").get_json()["data"]["companies"] == ["Acme", "Globex"]
    assert client.get(f"{BASE}/project-types").get_json()["data"]["projectTypes"] == [
        "api",
        "website",
    ]


def test_stats_require_admin(client):
    assert client.get(f"{BASE}/stats").status_code == 401


def test_update_and_delete(client, admin_headers, create_testimonial):
    testimonial = create_testimonial()
    url = f"{BASE}/{testimonial['id']}"

    updated = client.put(url, json={"position": "CTO"}, headers=admin_headers)
    assert updated.get_json()["data"]["testimonial"]["position"] == "CTO"

    assert client.delete(url, headers=admin_headers).status_code == 200
    missing = client.get(url)
    assert missing.status_code == 404
    assert missing.get_json()["message"] == "Testimonial not found"
