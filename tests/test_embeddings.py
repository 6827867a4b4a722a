"""Tests for embeddings generation with mocked OpenAI API."""

from unittest.mock import MagicMock, patch

import pytest

from kbchat.core.embeddings import embed_text, embed_texts
from kbchat.core.upstream import UpstreamError
from tests.fixtures_cards import make_settings


@pytest.fixture
def mock_openai_response():
    """Create a mock OpenAI embeddings response."""

    def _create_response(num_embeddings: int, dimension: int = 1536):
        mock_response = MagicMock()
        mock_response.data = []

        for _ in range(num_embeddings):
            mock_embedding = MagicMock()
            mock_embedding.embedding = [0.1] * dimension
            mock_response.data.append(mock_embedding)

        return mock_response

    return _create_response


def test_embed_texts_multiple(settings, mock_openai_response):
    with patch("kbchat.core.embeddings._get_client") as mock_get_client:
        mock_client = MagicMock()
        mock_client.embeddings.create.return_value = mock_openai_response(3)
        mock_get_client.return_value = mock_client

        embeddings = embed_texts(["one", "two", "three"], settings)

        assert len(embeddings) == 3
        for embedding in embeddings:
            assert len(embedding) == 1536


def test_embed_texts_empty(settings):
    assert embed_texts([], settings) == []


def test_embed_texts_dimension_validation(settings, mock_openai_response):
    with patch("kbchat.core.embeddings._get_client") as mock_get_client:
        mock_client = MagicMock()
        mock_client.embeddings.create.return_value = mock_openai_response(1, dimension=512)
        mock_get_client.return_value = mock_client

        with pytest.raises(ValueError, match="Embedding dimension mismatch"):
            embed_texts(["Test text"], settings)


def test_embed_texts_uses_configured_model(mock_openai_response):
    settings = make_settings(EMBEDDING_MODEL="text-embedding-3-large", EMBEDDING_DIM=3072)
    with patch("kbchat.core.embeddings._get_client") as mock_get_client:
        mock_client = MagicMock()
        mock_client.embeddings.create.return_value = mock_openai_response(1, dimension=3072)
        mock_get_client.return_value = mock_client

        embed_texts(["Test"], settings)

        call_args = mock_client.embeddings.create.call_args
        assert call_args[1]["model"] == "text-embedding-3-large"
        assert call_args[1]["input"] == ["Test"]


def test_client_has_timeout_and_no_sdk_retries(settings):
    with patch("kbchat.core.embeddings.OpenAI") as mock_openai:
        from kbchat.core.embeddings import _get_client

        _get_client(settings)

    kwargs = mock_openai.call_args.kwargs
    assert kwargs["api_key"] == "test-openai-key"
    assert kwargs["timeout"] == settings.UPSTREAM_TIMEOUT_SECONDS
    assert kwargs["max_retries"] == 0


@pytest.mark.asyncio
async def test_embed_text_returns_single_vector(settings, mock_openai_response):
    with patch("kbchat.core.embeddings._get_client") as mock_get_client:
        mock_client = MagicMock()
        mock_client.embeddings.create.return_value = mock_openai_response(1)
        mock_get_client.return_value = mock_client

        vector = await embed_text("Where are you based?", settings)

    assert vector == [0.1] * 1536
    assert mock_client.embeddings.create.call_args[1]["input"] == ["Where are you based?"]


@pytest.mark.asyncio
async def test_embed_text_api_failure_raises_upstream_error(mock_openai_response):
    settings = make_settings(UPSTREAM_MAX_RETRIES=1)
    with patch("kbchat.core.embeddings._get_client") as mock_get_client:
        mock_client = MagicMock()
        mock_client.embeddings.create.side_effect = ConnectionError("API Error")
        mock_get_client.return_value = mock_client

        with pytest.raises(UpstreamError, match="API Error"):
            await embed_text("Test text", settings)

    assert mock_client.embeddings.create.call_count == 2


@pytest.mark.asyncio
async def test_embed_text_dimension_mismatch_is_not_retried(mock_openai_response):
    settings = make_settings(UPSTREAM_MAX_RETRIES=2)
    with patch("kbchat.core.embeddings._get_client") as mock_get_client:
        mock_client = MagicMock()
        mock_client.embeddings.create.return_value = mock_openai_response(1, dimension=10)
        mock_get_client.return_value = mock_client

        with pytest.raises(UpstreamError, match="Embedding dimension mismatch"):
            await embed_text("Test text", settings)

    assert mock_client.embeddings.create.call_count == 1
