"""Tests for environment-driven settings."""

import pytest

from backoffice.config import BackofficeSettings, GatewayKind


class TestFromEnv:
    def test_defaults(self, monkeypatch):
        for name in (
            "BACKOFFICE_API_URL",
            "BACKOFFICE_API_TIMEOUT",
            "BACKOFFICE_GATEWAY",
            "BACKOFFICE_LIVENESS_INTERVAL",
            "BACKOFFICE_LOGOUT_GRACE",
            "BACKOFFICE_ACTIVITY_INTERVAL",
        ):
            monkeypatch.delenv(name, raising=False)

        settings = BackofficeSettings.from_env()

        assert settings.api_url == "http://localhost:3001"
        assert settings.gateway == GatewayKind.FAKE
        assert settings.liveness_interval == 3.0
        assert settings.logout_grace == 1.0
        assert settings.activity_interval == 30.0

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("BACKOFFICE_API_URL", "https://backoffice.example.com/")
        monkeypatch.setenv("BACKOFFICE_GATEWAY", "REST")
        monkeypatch.setenv("BACKOFFICE_API_TIMEOUT", "2.5")

        settings = BackofficeSettings.from_env()

        assert settings.api_url == "https://backoffice.example.com"
        assert settings.gateway == GatewayKind.REST
        assert settings.api_timeout == 2.5

    def test_unknown_gateway(self, monkeypatch):
        monkeypatch.setenv("BACKOFFICE_GATEWAY", "carrier-pigeon")
        with pytest.raises(ValueError):
            BackofficeSettings.from_env()

    def test_bad_number(self, monkeypatch):
        monkeypatch.setenv("BACKOFFICE_LOGOUT_GRACE", "soon")
        with pytest.raises(ValueError) as exc:
            BackofficeSettings.from_env()
        assert "BACKOFFICE_LOGOUT_GRACE" in str(exc.value)
