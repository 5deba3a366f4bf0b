"""
Tests for the Flask backend (register / verify endpoints)

Uses the app factory with TESTING enabled and the Flask test client.
"""

import logging

from totp_backend import app as app_module, create_app
from totp_core import base32, otp_core
from totp_core.config import QR_CHART_URL, REGISTRATION_SECRET_BYTES


class TestAppFactory:
    """create_app() leaves process-wide logging alone"""

    def test_existing_log_handlers_survive(self, caplog):
        create_app({"TESTING": True})
        logging.getLogger("totp_backend.tests").warning("still captured")
        assert "still captured" in caplog.text

    def test_main_configures_logging_and_runs(self, monkeypatch):
        calls = []
        monkeypatch.setattr(app_module.config, "configure_logging", lambda level: calls.append(("log", level)))
        monkeypatch.setattr(app_module.Flask, "run", lambda self, **kwargs: calls.append(("run", kwargs["port"])))

        app_module.main()

        assert calls == [("log", app_module.config.LOG_LEVEL), ("run", app_module.config.PORT)]


class TestIndex:

    def test_lists_endpoints(self, client):
        response = client.get('/')
        assert response.status_code == 200
        body = response.get_json()
        assert set(body["endpoints"]) == {"/register", "/verify"}


class TestRegister:
    """GET|POST /register"""

    def test_query_parameters(self, client):
        response = client.get('/register?app=MyApp&user=alice@example.com')
        assert response.status_code == 200
        body = response.get_json()

        assert body["app"] == "MyApp"
        assert body["user"] == "alice@example.com"
        assert len(base32.decode(body["key"])) == REGISTRATION_SECRET_BYTES
        assert body["uri"] == f"otpauth://totp/alice@example.com?secret={body['key']}&issuer=MyApp"
        assert body["url"].startswith(QR_CHART_URL)
        assert "otpauth://totp/alice@example.com%3Fsecret%3D" in body["url"]

    def test_missing_parameters_default_to_empty(self, client):
        body = client.get('/register').get_json()
        assert body["app"] == ""
        assert body["user"] == ""
        assert body["key"]

    def test_post_json_body(self, client):
        response = client.post('/register', json={"app": "MyApp", "user": "bob"})
        body = response.get_json()
        assert body["app"] == "MyApp"
        assert body["user"] == "bob"

    def test_post_form_body(self, client):
        body = client.post('/register', data={"app": "FormApp", "user": "carol"}).get_json()
        assert body["app"] == "FormApp"
        assert body["user"] == "carol"

    def test_fresh_key_each_call(self, client):
        first = client.get('/register').get_json()["key"]
        second = client.get('/register').get_json()["key"]
        assert first != second

    def test_cors_header(self, client):
        response = client.get('/register', headers={"Origin": "https://example.org"})
        assert response.headers.get("Access-Control-Allow-Origin") in ("*", "https://example.org")


class TestVerify:
    """GET|POST /verify"""

    def test_valid_token(self, client, fixed_clock):
        key = client.get('/register').get_json()["key"]
        token, _ = otp_core.generate_now(key)

        body = client.get(f'/verify?key={key}&token={token}').get_json()
        assert body == {"key": key, "token": token, "valid": True}

    def test_token_within_configured_window(self, client, fixed_clock):
        from tests.conftest import FIXED_NOW

        key = client.get('/register').get_json()["key"]
        token, _ = otp_core.generate_now(key)
        fixed_clock(FIXED_NOW + 90)
        assert client.post('/verify', json={"key": key, "token": token}).get_json()["valid"] is True
        fixed_clock(FIXED_NOW + 120)
        assert client.post('/verify', json={"key": key, "token": token}).get_json()["valid"] is False

    def test_wrong_token(self, client):
        # RFC 4226 key, code for counter 0 is far outside the current window
        key = base32.encode(b"12345678901234567890")
        body = client.get(f'/verify?key={key}&token=755224').get_json()
        assert body["valid"] is False

    def test_missing_token(self, client):
        response = client.get('/verify?key=JBSWY3DPEHPK3PXP')
        assert response.status_code == 200
        assert response.get_json() == {"key": "JBSWY3DPEHPK3PXP", "token": None, "valid": False}

    def test_malformed_key(self, client):
        response = client.get('/verify?key=not-base32!&token=123456')
        assert response.status_code == 400
        body = response.get_json()
        assert body["valid"] is False
        assert "error" in body

    def test_window_from_app_config(self, fixed_clock):
        from tests.conftest import FIXED_NOW

        client = create_app({"TESTING": True, "VERIFY_WINDOW": 0}).test_client()
        key = otp_core.generate_secret()
        token, _ = otp_core.generate_now(key)
        fixed_clock(FIXED_NOW + 30)
        assert client.get(f'/verify?key={key}&token={token}').get_json()["valid"] is False
