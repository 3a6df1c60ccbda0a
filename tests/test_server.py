"""
Tests for the FastAPI server
"""

import pytest
from fastapi.testclient import TestClient

from server import app
from history_storage import clear_history, set_history_limit


SALE_SENTENCE = "The property at 123 Main St was sold by John Doe to Jane Smith on June 15, 2025."


@pytest.fixture
def client():
    clear_history()
    set_history_limit(5)
    yield TestClient(app)
    clear_history()


class TestHealth:

    def test_health_check(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestExtractEndpoint:

    def test_usage_document(self, client):
        response = client.get("/api/extract")
        assert response.status_code == 200
        body = response.json()
        assert "text" in body["example"]
        assert set(body["response_format"]) == {"address", "buyer", "seller", "date", "confidence"}

    def test_extract(self, client):
        response = client.post("/api/extract", json={"text": SALE_SENTENCE})
        assert response.status_code == 200
        assert response.json() == {
            "address": "123 Main St",
            "buyer": "Jane Smith",
            "seller": "John Doe",
            "date": "2025-06-15",
            "confidence": 0.93,
        }

    def test_spans_not_exposed(self, client):
        body = client.post("/api/extract", json={"text": SALE_SENTENCE}).json()
        assert "spans" not in body

    def test_blank_text_rejected(self, client):
        response = client.post("/api/extract", json={"text": "   "})
        assert response.status_code == 400

    def test_missing_text_rejected(self, client):
        assert client.post("/api/extract", json={}).status_code == 422

    def test_non_string_text_rejected(self, client):
        assert client.post("/api/extract", json={"text": 123}).status_code == 422

    def test_unextractable_text_is_degraded_success(self, client):
        response = client.post("/api/extract", json={"text": "hello there"})
        assert response.status_code == 200
        assert response.json()["confidence"] == 0.0


class TestHistoryEndpoints:

    def test_history_newest_first(self, client):
        client.post("/api/extract", json={"text": "first sentence"})
        client.post("/api/extract", json={"text": "second sentence"})
        assert client.get("/api/history").json() == ["second sentence", "first sentence"]

    def test_no_consecutive_duplicates(self, client):
        client.post("/api/extract", json={"text": SALE_SENTENCE})
        client.post("/api/extract", json={"text": SALE_SENTENCE})
        assert client.get("/api/history").json() == [SALE_SENTENCE]

    def test_blank_text_not_recorded(self, client):
        client.post("/api/extract", json={"text": "  "})
        assert client.get("/api/history").json() == []

    def test_clear_history(self, client):
        client.post("/api/extract", json={"text": SALE_SENTENCE})
        assert client.delete("/api/history").status_code == 200
        assert client.get("/api/history").json() == []


class TestFieldMapEndpoint:

    def test_maps_edited_fields(self, client):
        response = client.post("/api/fields/map", json={
            "address": "123 Main St",
            "buyer": "Jane Smith",
            "seller": "John Doe",
            "date": "2025-06-15",
            "confidence": 0.93,
        })
        assert response.status_code == 200
        body = response.json()
        assert body["pdf_fields"] == {
            "propertyAddress": "123 Main St",
            "buyer": "Jane Smith",
            "seller": "John Doe",
            "date": "2025-06-15",
        }
        assert body["health"]["has_issues"] is False
        assert body["health"]["filled_count"] == 4
        assert body["health"]["total_fields"] == 4

    def test_reports_gaps(self, client):
        body = client.post("/api/fields/map", json={"buyer": "Jane", "confidence": 0.5}).json()
        assert body["health"]["has_empty_fields"] is True
        assert body["health"]["is_low_confidence"] is True
        assert body["health"]["filled_count"] == 1
