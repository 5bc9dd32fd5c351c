"""Tests for the embed API endpoints"""
from unittest.mock import AsyncMock, Mock, patch

import pytest
from fastapi.testclient import TestClient

from review_embed.core.embedder import place_embedder
from review_embed.main import app
from review_embed.models.errors import ApplicationError, ErrorCode
from review_embed.models.place import PlacePayload

PAYLOAD = PlacePayload.model_validate({
    "rating": 4,
    "user_ratings_total": 3,
    "reviews": [{"author_name": "Ola", "profile_photo_url": "https://x/ola.jpg"}],
    "opening_hours": {"weekday_text": ["mandag: 08:00–16:00", "søndag: Stengt"]},
})


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def fetcher():
    mock = Mock()
    mock.fetch_place = AsyncMock(return_value=PAYLOAD)
    with patch.object(place_embedder, "fetcher", mock), patch.object(place_embedder, "closed_token", "stengt"):
        yield mock


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_embed_returns_schema_and_instructions(client, fetcher):
    response = client.post("/api/embed", json={
        "place_id": "ChIJ_cenv4TZFkYRGElooLAOVOE",
        "options": {"schemaEnabled": True, "reviewsEnabled": True, "openingHoursEnabled": True,
                    "schemaFields": {"type": "Dentist", "name": "Tannlege"}},
    })

    assert response.status_code == 200
    body = response.json()
    assert body["place_id"] == "ChIJ_cenv4TZFkYRGElooLAOVOE"
    assert body["schema"]["@type"] == "Dentist"
    assert body["schema"]["name"] == "Tannlege"
    assert "url" not in body["schema"]
    assert [e["dayOfWeek"] for e in body["schema"]["openingHoursSpecification"]] == ["Mandag"]
    assert body["html"] is None
    texts = [i["value"] for i in body["instructions"] if i["kind"] == "text"]
    assert texts == ["4"]
    rows = [i["row"] for i in body["instructions"] if i["kind"] == "hours_row"]
    assert [(r["day"], r["time"], r["is_last"]) for r in rows] == [
        ("Mandag", "08:00 - 16:00", False),
        ("Søndag", "Stengt", True),
    ]
    fetcher.fetch_place.assert_awaited_once_with("ChIJ_cenv4TZFkYRGElooLAOVOE")


def test_embed_renders_posted_html(client, fetcher):
    response = client.post("/api/embed", json={
        "place_id": "ChIJabc",
        "options": {"reviewsEnabled": True},
        "html": '<html><head></head><body><span hero-reviews="score"></span></body></html>',
    })
    assert response.status_code == 200
    assert '<span hero-reviews="score">4</span>' in response.json()["html"]


def test_embed_fetch_failure_maps_to_status(client):
    failing = Mock()
    failing.fetch_place = AsyncMock(side_effect=ApplicationError(
        code=ErrorCode.INVALID_PLACE_ID, message="Place not found: ChIJnope", place_id="ChIJnope"
    ))
    with patch.object(place_embedder, "fetcher", failing):
        response = client.post("/api/embed", json={"place_id": "ChIJnope", "options": {"schemaEnabled": True}})

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_PLACE_ID"


def test_embed_rejects_bad_place_id(client, fetcher):
    response = client.post("/api/embed", json={"place_id": "ChIJ<script>"})
    assert response.status_code == 422
    fetcher.fetch_place.assert_not_called()


def test_embed_rejects_unparsable_selector(client, fetcher):
    response = client.post("/api/embed", json={
        "place_id": "ChIJabc",
        "options": {"reviewsEnabled": True, "reviewSelectors": {"score": "[[bad"}},
    })
    assert response.status_code == 422
    fetcher.fetch_place.assert_not_called()


def test_schema_endpoint(client, fetcher):
    response = client.post("/api/schema", json={"place_id": "ChIJabc", "fields": {"priceRange": "$$"}})
    assert response.status_code == 200
    record = response.json()
    assert record["priceRange"] == "$$"
    assert record["aggregateRating"]["ratingValue"] == 4
    assert "address" not in record


def test_schema_endpoint_fetch_failure(client):
    failing = Mock()
    failing.fetch_place = AsyncMock(side_effect=ApplicationError(code=ErrorCode.FETCH_FAILED, message="down"))
    with patch.object(place_embedder, "fetcher", failing):
        response = client.post("/api/schema", json={"place_id": "ChIJabc"})
    assert response.status_code == 502
    assert response.json()["message"] == "down"
