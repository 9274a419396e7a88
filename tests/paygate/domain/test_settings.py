"""Tests for runtime settings."""

import pytest
from paygate.config import Settings
from pydantic import ValidationError


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.default_currency == "EUR"
        assert settings.spec_version == "1.31"
        assert settings.gateway_adapter == "http"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("PAYGATE_GATEWAY_BASE_URL", "https://gw.example/api/")
        monkeypatch.setenv("PAYGATE_CUSTOMER_ID", "111")
        monkeypatch.setenv("PAYGATE_TERMINAL_ID", "222")
        monkeypatch.setenv("PAYGATE_USERNAME", "user")
        monkeypatch.setenv("PAYGATE_PASSWORD", "pass")
        monkeypatch.setenv("PAYGATE_PUBLIC_BASE_URL", "https://shop.example")
        monkeypatch.setenv("PAYGATE_DEFAULT_CURRENCY", "CHF")
        monkeypatch.setenv("PAYGATE_GATEWAY_TIMEOUT", "12.5")

        settings = Settings.from_env()

        assert settings.api_base_url == "https://gw.example/api"
        assert settings.customer_id == "111"
        assert settings.terminal_id == "222"
        assert settings.username == "user"
        assert settings.password == "pass"
        assert settings.default_currency == "CHF"
        assert settings.gateway_timeout == 12.5

    def test_public_base_url_falls_back_to_port(self, monkeypatch):
        monkeypatch.delenv("PAYGATE_PUBLIC_BASE_URL", raising=False)
        monkeypatch.setenv("PORT", "8123")
        assert Settings.from_env().public_base_url == "http://localhost:8123"

    def test_return_url(self):
        settings = Settings(public_base_url="https://shop.example/")
        assert (
            settings.return_url("success", "ORDER-1")
            == "https://shop.example/api/payments/return/success?orderId=ORDER-1"
        )

    def test_settings_are_frozen(self):
        settings = Settings()
        with pytest.raises(ValidationError):
            settings.customer_id = "other"

    def test_currency_must_be_three_letters(self):
        with pytest.raises(ValidationError):
            Settings(default_currency="EURO")
