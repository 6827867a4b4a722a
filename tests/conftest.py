"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient

from tests.fixtures_cards import make_settings


@pytest.fixture(scope="session", autouse=True)
def setup_test_env():
    """Set up test environment variables."""
    os.environ["SUPABASE_URL"] = "https://test.supabase.co"
    os.environ["SUPABASE_SERVICE_ROLE_KEY"] = "test-key"
    os.environ["OPENAI_API_KEY"] = "test-openai-key"
    os.environ["KB_ENV"] = "test"


@pytest.fixture
def settings():
    """Internal (debug) deployment settings."""
    return make_settings()


@pytest.fixture
def public_settings():
    """Public deployment settings."""
    return make_settings(KB_PUBLIC_MODE="1", KB_PUBLIC_MODE_CLIENT="1")


@pytest.fixture
def client(settings):
    from kbchat.main import create_app

    return TestClient(create_app(settings), raise_server_exceptions=False)


@pytest.fixture
def authed_client(client, settings):
    client.cookies.set(settings.AUTH_COOKIE_NAME, "1")
    return client


@pytest.fixture
def public_client(public_settings):
    from kbchat.main import create_app

    return TestClient(create_app(public_settings), raise_server_exceptions=False)
