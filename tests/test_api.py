"""
Tests for the HTTP interface.
"""

import pytest
from fastapi.testclient import TestClient

from extraction.heuristics import RegexExtractor
from extraction.orchestrator import ExtractorOrchestrator
from promo_extractor import __version__
from promo_extractor.api import create_app
from promo_extractor.config import Settings
from promo_extractor.utils.errors import ApiError

PAYLOAD = {
    "text": "👟 Tênis Nike Air Max Nuaxis\n🔥 DE 549 | POR 287\n🎟 CUPOM: NIKE40",
    "chat": "-100123456",
    "messageId": 981,
    "links": ["https://amzn.to/abc"],
}


class FailingStrategy:
    name = "openai"

    def is_configured(self):
        return True

    async def extract(self, request):
        raise ApiError("upstream down", 503)


@pytest.fixture
def client():
    orchestrator = ExtractorOrchestrator(fallback=RegexExtractor())
    return TestClient(create_app(orchestrator=orchestrator, settings=Settings()))


class TestExtractEndpoint:
    """Test POST /api/extractors/extract."""

    def test_extract(self, client):
        """Test a successful extraction."""
        response = client.post("/api/extractors/extract", json=PAYLOAD)

        assert response.status_code == 200
        body = response.json()
        assert body["text"] == PAYLOAD["text"]
        assert body["price"] == 28700
        assert body["product"] == "Tênis Nike Air Max Nuaxis"
        assert body["coupons"] == [
            {"code": "NIKE40", "discount": None, "description": None, "expiresAt": None, "url": None}
        ]
        assert body["productKey"] is None
        assert body["category"] is None

    def test_numeric_chat_id(self, client):
        """Test that numeric chat IDs are accepted."""
        response = client.post("/api/extractors/extract", json={**PAYLOAD, "chat": -100123456})

        assert response.status_code == 200

    @pytest.mark.parametrize(
        "payload",
        [
            {**PAYLOAD, "text": ""},
            {**PAYLOAD, "text": "   "},
            {**PAYLOAD, "messageId": 0},
            {**PAYLOAD, "links": ["not a url"]},
            {"chat": "x", "messageId": 1},
            ["not", "an", "object"],
        ],
    )
    def test_invalid_requests(self, client, payload):
        """Test that malformed requests are rejected with 422."""
        response = client.post("/api/extractors/extract", json=payload)

        assert response.status_code == 422
        assert response.json()["message"]

    def test_field_errors_reported(self, client):
        """Test that field errors name the offending field."""
        response = client.post("/api/extractors/extract", json={**PAYLOAD, "messageId": -5})

        fields = [error["field"] for error in response.json()["errors"]]
        assert fields == ["messageId"]

    def test_extraction_failure(self):
        """Test that extraction errors become 502."""
        orchestrator = ExtractorOrchestrator(primary=FailingStrategy())
        client = TestClient(create_app(orchestrator=orchestrator, settings=Settings()))

        response = client.post("/api/extractors/extract", json=PAYLOAD)

        assert response.status_code == 502
        assert response.json() == {"message": "upstream down"}


class TestHealthEndpoint:
    """Test GET /health."""

    def test_health(self, client):
        """Test status and strategy report."""
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["version"] == __version__
        assert body["llm_provider"] == "none"
        assert body["strategy"] == {"primary": "regex", "fallback": "regex"}
        assert body["timestamp"]
