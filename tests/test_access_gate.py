"""Tests for the session gate, public-mode blocking and the pages."""

from urllib.parse import parse_qs, urlparse

import pytest


def _redirect(resp):
    assert resp.status_code in (302, 307)
    return urlparse(resp.headers["location"])


class TestSessionGate:
    @pytest.mark.parametrize("path", ["/chat", "/admin/new-card", "/"])
    def test_unauthenticated_redirects_to_login(self, client, path):
        resp = client.get(path, follow_redirects=False)

        location = _redirect(resp)
        assert location.path == "/login"
        assert parse_qs(location.query)["next"] == [path]

    def test_login_page_is_open(self, client):
        resp = client.get("/login")
        assert resp.status_code == 200
        assert "text/html" in resp.headers["content-type"]
        assert "/api/login" in resp.text

    def test_static_assets_are_open(self, client):
        resp = client.get("/static/styles.css")
        assert resp.status_code == 200

    def test_health_is_open(self, client):
        assert client.get("/health").status_code == 200

    def test_wrong_cookie_value_is_not_a_session(self, client, settings):
        client.cookies.set(settings.AUTH_COOKIE_NAME, "0")
        resp = client.get("/chat", follow_redirects=False)
        assert _redirect(resp).path == "/login"

    def test_authed_chat_page(self, authed_client):
        resp = authed_client.get("/chat")

        assert resp.status_code == 200
        assert "const PUBLIC_MODE = false;" in resp.text

    def test_authed_admin_page(self, authed_client):
        resp = authed_client.get("/admin/new-card")

        assert resp.status_code == 200
        assert "/api/cards/create" in resp.text

    def test_root_redirects_to_chat(self, authed_client):
        resp = authed_client.get("/", follow_redirects=False)
        assert _redirect(resp).path == "/chat"


class TestPublicMode:
    def test_admin_redirects_to_chat_even_when_authed(self, public_client, public_settings):
        public_client.cookies.set(public_settings.AUTH_COOKIE_NAME, "1")

        resp = public_client.get("/admin/new-card", follow_redirects=False)

        assert _redirect(resp).path == "/chat"

    def test_admin_redirects_to_chat_when_not_authed(self, public_client):
        resp = public_client.get("/admin/new-card", follow_redirects=False)
        assert _redirect(resp).path == "/chat"

    def test_chat_page_gets_client_flag(self, public_client, public_settings):
        public_client.cookies.set(public_settings.AUTH_COOKIE_NAME, "1")

        resp = public_client.get("/chat")

        assert resp.status_code == 200
        assert "const PUBLIC_MODE = true;" in resp.text

    def test_client_flag_is_independent(self):
        from fastapi.testclient import TestClient

        from kbchat.main import create_app
        from tests.fixtures_cards import make_settings

        settings = make_settings(KB_PUBLIC_MODE="0", KB_PUBLIC_MODE_CLIENT="1")
        client = TestClient(create_app(settings))
        client.cookies.set(settings.AUTH_COOKIE_NAME, "1")

        assert "const PUBLIC_MODE = true;" in client.get("/chat").text
        # Server flag is off, so admin stays reachable
        assert client.get("/admin/new-card").status_code == 200
