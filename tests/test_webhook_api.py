"""
Tests for the HTTP surface.

The webhook handler is replaced through FastAPI dependency overrides so
no Omnivore or model calls are made.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from omnivore_annotate.app.dependencies import get_webhook_handler
from omnivore_annotate.app.main import app
from omnivore_annotate.automation import LabelWebhookHandler
from omnivore_annotate.automation.flows import FlowResult

WEBHOOK_URL = "/api/v1/webhook/omnivore"


@pytest.fixture
def stub_handler():
    handler = MagicMock()
    handler.handle = AsyncMock(return_value=FlowResult(200, "Annotation applied to the article."))
    return handler


@pytest.fixture
def client(stub_handler):
    app.dependency_overrides[get_webhook_handler] = lambda: stub_handler
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestWebhookEndpoint:
    """Tests for POST /api/v1/webhook/omnivore."""

    def test_result_becomes_plain_text_response(self, client, stub_handler, webhook_body):
        response = client.post(WEBHOOK_URL, json=webhook_body)

        assert response.status_code == 200
        assert response.text == "Annotation applied to the article."
        assert response.headers["content-type"].startswith("text/plain")
        stub_handler.handle.assert_awaited_once_with(webhook_body)

    @pytest.mark.parametrize(
        "result",
        [
            FlowResult(400, "No labels found in the webhook payload."),
            FlowResult(500, "Error processing Omnivore webhook: boom"),
        ],
    )
    def test_error_status_is_forwarded(self, client, stub_handler, webhook_body, result):
        stub_handler.handle.return_value = result

        response = client.post(WEBHOOK_URL, json=webhook_body)

        assert response.status_code == result.status_code
        assert response.text == result.message

    def test_invalid_json(self, client, stub_handler):
        response = client.post(
            WEBHOOK_URL,
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.text == "Webhook payload must be valid JSON."
        stub_handler.handle.assert_not_called()

    def test_real_handler_rejects_without_calling_out(
        self, mock_omnivore, settings, make_llm
    ):
        llm = make_llm("unused")
        app.dependency_overrides[get_webhook_handler] = lambda: LabelWebhookHandler(
            mock_omnivore, llm, settings
        )
        try:
            response = TestClient(app).post(
                WEBHOOK_URL,
                json={"label": {"pageId": "page-123", "labels": [{"name": "python"}]}},
            )
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 400
        assert response.text == "No 'do' labels found. Expected at least one 'do' or 'do:*' label."
        mock_omnivore.fetch_article.assert_not_called()
        assert llm.calls == []


class TestServiceEndpoints:
    """Tests for / and /health."""

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        body = response.json()
        assert body["service"] == "omnivore-annotate"
        assert body["status"] == "running"

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["trigger_label"]
        assert body["llm_provider"] in ("openai", "anthropic")
