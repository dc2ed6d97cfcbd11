"""Tests for environment-based settings."""

import pytest

from utils.config import DEFAULT_USER_AGENT, AuditSettings

ENV_KEYS = [
    "AUDIT_USER_AGENT", "AUDIT_FETCH_TIMEOUT", "AUDIT_ENGINE_TIMEOUT", "LIGHTHOUSE_PATH",
    "AUDIT_CHROME_FLAGS", "AUDIT_HEADLESS", "AUDIT_PORT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


class TestAuditSettings:

    def test_defaults(self):
        settings = AuditSettings.from_env()

        assert settings.user_agent == DEFAULT_USER_AGENT
        assert settings.fetch_timeout == 15.0
        assert settings.engine_timeout == 120.0
        assert settings.lighthouse_path == "lighthouse"
        assert settings.chrome_flags == ["--no-sandbox"]
        assert settings.headless is True
        assert settings.port == 3000

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("AUDIT_USER_AGENT", "CustomAgent/2.0")
        monkeypatch.setenv("AUDIT_FETCH_TIMEOUT", "5")
        monkeypatch.setenv("AUDIT_ENGINE_TIMEOUT", "60.5")
        monkeypatch.setenv("LIGHTHOUSE_PATH", "/opt/lighthouse")
        monkeypatch.setenv("AUDIT_CHROME_FLAGS", "--no-sandbox, --disable-gpu")
        monkeypatch.setenv("AUDIT_HEADLESS", "false")
        monkeypatch.setenv("AUDIT_PORT", "8080")

        settings = AuditSettings.from_env()

        assert settings.user_agent == "CustomAgent/2.0"
        assert settings.fetch_timeout == 5.0
        assert settings.engine_timeout == 60.5
        assert settings.lighthouse_path == "/opt/lighthouse"
        assert settings.chrome_flags == ["--no-sandbox", "--disable-gpu"]
        assert settings.headless is False
        assert settings.port == 8080

    @pytest.mark.parametrize("raw", ["abc", "0", "-3"])
    def test_invalid_timeouts_fall_back(self, monkeypatch, raw):
        monkeypatch.setenv("AUDIT_FETCH_TIMEOUT", raw)
        assert AuditSettings.from_env().fetch_timeout == 15.0

    def test_empty_chrome_flags(self, monkeypatch):
        monkeypatch.setenv("AUDIT_CHROME_FLAGS", "")
        assert AuditSettings.from_env().chrome_flags == []
