"""Shared fixtures for the OTP test suite."""

import pytest

from totp_backend import create_app

# RFC 4226 Appendix D / RFC 6238 Appendix B seeds, as raw bytes
RFC_SHA1_KEY = b"12345678901234567890"
RFC_SHA256_KEY = b"12345678901234567890123456789012"
RFC_SHA512_KEY = b"1234567890123456789012345678901234567890123456789012345678901234"

# 1_000_000_005 // 30 == 33333333, 15s into the step
FIXED_NOW = 1_000_000_005


@pytest.fixture
def fixed_clock(monkeypatch):
    """Freeze time.time() as seen by totp_core.otp_core; returns a setter."""
    from totp_core import otp_core

    state = {"now": float(FIXED_NOW)}
    monkeypatch.setattr(otp_core.time, "time", lambda: state["now"])

    def set_now(value):
        state["now"] = float(value)

    return set_now


@pytest.fixture
def app():
    return create_app({"TESTING": True, "VERIFY_WINDOW": 3})


@pytest.fixture
def client(app):
    return app.test_client()
