"""Unit tests for environment-driven configuration getters."""

from zoneinfo import ZoneInfo

import pytest

from fincontrol.core import config


class TestTimezone:
    def test_default_is_utc(self, monkeypatch):
        monkeypatch.delenv("TZ", raising=False)

        assert config.get_app_timezone() == ZoneInfo("UTC")

    def test_invalid_timezone_falls_back_to_utc(self, monkeypatch):
        monkeypatch.setenv("TZ", "Mars/Olympus_Mons")

        assert config.get_app_timezone() == ZoneInfo("UTC")

    def test_named_timezone(self, monkeypatch):
        monkeypatch.setenv("TZ", "America/New_York")

        assert config.get_app_timezone() == ZoneInfo("America/New_York")


@pytest.mark.security
class TestSecretKey:
    def test_weak_key_allowed_outside_production(self, monkeypatch):
        monkeypatch.delenv("FLASK_ENV", raising=False)
        monkeypatch.setenv("FLASK_SECRET_KEY", "changeme")

        assert config.get_secret_key() == "changeme"

    @pytest.mark.parametrize("secret", ["dev-secret-change-me", "short-but-not-default"])
    def test_weak_key_rejected_in_production(self, monkeypatch, secret):
        monkeypatch.setenv("FLASK_ENV", "production")
        monkeypatch.setenv("FLASK_SECRET_KEY", secret)

        with pytest.raises(ValueError, match="FLASK_SECRET_KEY"):
            config.get_secret_key()

    def test_strong_key_accepted_in_production(self, monkeypatch):
        monkeypatch.setenv("FLASK_ENV", "production")
        monkeypatch.setenv("FLASK_SECRET_KEY", "x" * 48)

        assert config.get_secret_key() == "x" * 48


class TestMisc:
    def test_placeholder_image_default(self, monkeypatch):
        monkeypatch.delenv("CUSTOMER_PLACEHOLDER_IMAGE_URL", raising=False)

        assert config.get_customer_placeholder_image_url() == (
            "/static/customers/placeholder.svg"
        )

    def test_test_mode_detected(self):
        assert config.is_test_mode()
