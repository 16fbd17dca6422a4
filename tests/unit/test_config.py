"""Unit tests for settings loading."""

import pytest

from quest.config import load_settings
from quest.util.error import ConfigurationError


class TestLoadSettings:
    """Tests for load_settings()."""

    def test_loads_from_environment(self, monkeypatch):
        """Nested values are read with the double-underscore delimiter."""
        monkeypatch.setenv("AUTH__JWT_EXPIRY_SECONDS", "120")
        monkeypatch.setenv("ACCOUNT__DEFAULT_CHARACTER_CODE", "MASTER")

        settings = load_settings()

        assert settings.auth.jwt_expiry_seconds == 120
        assert settings.auth.jwt_algorithm == "HS256"
        assert settings.auth.google.client_id == "test-client-id"
        assert settings.auth.google.timeout_seconds == 10
        assert settings.account.default_character_code == "MASTER"
        assert settings.account.default_character_nickname == "トレちゃん"

    @pytest.mark.parametrize(
        ("variable", "location"),
        [
            ("AUTH__JWT_SECRET", "auth.jwt_secret"),
            ("AUTH__JWT_EXPIRY_SECONDS", "auth.jwt_expiry_seconds"),
            ("AUTH__GOOGLE__CLIENT_ID", "auth.google.client_id"),
            ("AUTH__GOOGLE__CLIENT_SECRET", "auth.google.client_secret"),
            ("AUTH__GOOGLE__CALLBACK_URL", "auth.google.callback_url"),
        ],
    )
    def test_missing_required_value_fails(self, monkeypatch, variable, location):
        """Every required value must be present; there are no fallbacks."""
        monkeypatch.delenv(variable)

        with pytest.raises(ConfigurationError) as exc_info:
            load_settings()

        assert location in str(exc_info.value)

    @pytest.mark.parametrize("value", ["0", "-5", "soon"])
    def test_invalid_token_lifetime_fails(self, monkeypatch, value):
        """Token lifetime must be a positive number of seconds."""
        monkeypatch.setenv("AUTH__JWT_EXPIRY_SECONDS", value)

        with pytest.raises(ConfigurationError):
            load_settings()

    def test_empty_secret_fails(self, monkeypatch):
        """An empty signing secret is rejected."""
        monkeypatch.setenv("AUTH__JWT_SECRET", "")

        with pytest.raises(ConfigurationError):
            load_settings()

    def test_unknown_character_fails(self, monkeypatch):
        """The starter character must be a known character code."""
        monkeypatch.setenv("ACCOUNT__DEFAULT_CHARACTER_CODE", "DRAGON")

        with pytest.raises(ConfigurationError):
            load_settings()
