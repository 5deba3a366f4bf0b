"""
Tests for environment-driven settings in totp_core.config
"""

import importlib

import pytest

from totp_core import config


@pytest.fixture
def reload_config(monkeypatch):
    """Reload config under a patched environment, then reload it clean."""
    def _reload(**env):
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        return importlib.reload(config)

    yield _reload
    monkeypatch.undo()
    importlib.reload(config)


class TestEnvInt:

    def test_unset_uses_default(self, monkeypatch):
        monkeypatch.delenv("TOTP_PORT", raising=False)
        assert config._env_int("TOTP_PORT", 5000) == 5000

    def test_valid_value(self, monkeypatch):
        monkeypatch.setenv("TOTP_PORT", "8080")
        assert config._env_int("TOTP_PORT", 5000) == 8080

    @pytest.mark.parametrize("raw", ["", "abc", "80.5", "5k"])
    def test_malformed_value_falls_back(self, monkeypatch, raw):
        monkeypatch.setenv("TOTP_VERIFY_WINDOW", raw)
        assert config._env_int("TOTP_VERIFY_WINDOW", 3) == 3


class TestImportWithBadEnvironment:

    def test_malformed_settings_do_not_break_import(self, reload_config):
        cfg = reload_config(TOTP_PORT="not-a-port", TOTP_VERIFY_WINDOW="wide")
        assert cfg.PORT == 5000
        assert cfg.VERIFY_WINDOW == 3

    def test_valid_settings_are_read(self, reload_config):
        cfg = reload_config(TOTP_PORT="8081", TOTP_VERIFY_WINDOW="1")
        assert cfg.PORT == 8081
        assert cfg.VERIFY_WINDOW == 1
