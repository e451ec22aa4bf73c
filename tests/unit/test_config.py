"""Unit tests for settings."""

import pytest
from pydantic import ValidationError

from aw_license.core.config import Settings, clear_settings_cache, get_settings


class TestSettings:
    """Test environment-driven configuration."""

    def test_defaults(self) -> None:
        settings = Settings()
        assert settings.private_key is None
        assert not settings.has_private_key
        assert settings.license_months == 12
        assert settings.license_tier == "pro"
        assert settings.log_level == "WARNING"

    def test_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("A11Y_PRIVATE_KEY", '{"kty":"EC"}')
        monkeypatch.setenv("A11Y_LICENSE_MONTHS", "6")
        monkeypatch.setenv("A11Y_LOG_LEVEL", "debug")
        settings = Settings()
        assert settings.has_private_key
        assert settings.private_key is not None
        assert settings.private_key.get_secret_value() == '{"kty":"EC"}'
        assert settings.license_months == 6
        assert settings.log_level == "DEBUG"

    def test_secret_is_masked(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("A11Y_PRIVATE_KEY", '{"d":"secret"}')
        assert "secret" not in repr(Settings())

    @pytest.mark.parametrize(
        ("name", "value"),
        [("A11Y_LICENSE_MONTHS", "0"), ("A11Y_LICENSE_TIER", ""), ("A11Y_LOG_LEVEL", "loud")],
    )
    def test_invalid(self, monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
        monkeypatch.setenv(name, value)
        with pytest.raises(ValidationError):
            Settings()

    def test_frozen(self) -> None:
        settings = Settings()
        with pytest.raises(ValidationError):
            settings.license_months = 3  # type: ignore[misc]

    def test_cached(self) -> None:
        assert get_settings() is get_settings()
        first = get_settings()
        clear_settings_cache()
        assert get_settings() is not first
