"""Tests for POST /api/chat via FastAPI TestClient with mocked OpenAI + Supabase."""

from unittest.mock import AsyncMock, patch

import pytest

from kbchat.chains.answer_question import ERROR_MESSAGE
from kbchat.core.retrieval_policy import RETURNS_REPLY
from tests.fixtures_cards import CARD_ID_RETURNS, QUERY_EMBEDDING, SAMPLE_MATCHES

CHAIN = "kbchat.chains.answer_question"


@pytest.fixture
def upstream_mocks():
    with (
        patch(f"{CHAIN}.embed_text", new_callable=AsyncMock, return_value=QUERY_EMBEDDING),
        patch(f"{CHAIN}.match_knowledge_cards", return_value=list(SAMPLE_MATCHES)) as search,
        patch(
            f"{CHAIN}.complete_chat_async",
            new_callable=AsyncMock,
            return_value="Website orders can be returned within 14 days.",
        ) as completion,
    ):
        yield search, completion


class TestChatEndpoint:
    def test_debug_response_shape(self, client, upstream_mocks):
        resp = client.post("/api/chat", json={"question": "Can I return my dress?"})

        assert resp.status_code == 200
        data = resp.json()
        assert data["answer"] == "Website orders can be returned within 14 days."
        assert data["confidence"] == "high"
        assert data["debug"]["cards"][0] == {
            "id": CARD_ID_RETURNS,
            "title": "Returns policy",
            "similarity": 0.41,
        }
        assert len(data["debug"]["cards"]) == 3

    def test_public_response_has_no_debug_or_confidence(self, public_client, upstream_mocks):
        resp = public_client.post("/api/chat", json={"question": "Can I return my dress?"})

        assert resp.status_code == 200
        assert resp.json() == {"answer": "Website orders can be returned within 14 days."}

    def test_chat_api_does_not_need_session_cookie(self, client, upstream_mocks):
        resp = client.post("/api/chat", json={"question": "Hello?"}, follow_redirects=False)
        assert resp.status_code == 200

    def test_fallback_response(self, client, upstream_mocks):
        search, completion = upstream_mocks
        search.return_value = []

        resp = client.post("/api/chat", json={"question": "How do I get a REFUND?"})

        assert resp.status_code == 200
        assert resp.json() == {"answer": RETURNS_REPLY, "confidence": "low", "debug": {"cards": []}}
        completion.assert_not_awaited()

    def test_store_failure_returns_500_apology(self, client, upstream_mocks):
        search, _ = upstream_mocks
        search.side_effect = Exception("connection refused")

        resp = client.post("/api/chat", json={"question": "Can I return my dress?"})

        assert resp.status_code == 500
        assert resp.json() == {"answer": ERROR_MESSAGE, "confidence": "low", "debug": {"cards": []}}

    def test_store_failure_public_is_apology_only(self, public_client, upstream_mocks):
        search, _ = upstream_mocks
        search.side_effect = Exception("connection refused")

        resp = public_client.post("/api/chat", json={"question": "Can I return my dress?"})

        assert resp.status_code == 500
        assert resp.json() == {"answer": ERROR_MESSAGE}

    @pytest.mark.parametrize("body", [{"question": ""}, {"question": "   "}, {}])
    def test_blank_question_rejected(self, client, upstream_mocks, body):
        search, _ = upstream_mocks

        resp = client.post("/api/chat", json=body)

        assert resp.status_code == 400
        assert resp.json() == {"error": "Question is required."}
        search.assert_not_called()
