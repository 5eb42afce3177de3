"""Tests for core configuration module."""

import pytest
from pydantic import ValidationError

from citytime.core.config import ConversionSettings, RateLimitSettings, Settings, DEFAULT_ZONES


class TestConversionSettings:
    """Test conversion settings configuration."""

    def test_default_conversion_settings(self):
        """Test default conversion settings."""
        settings = ConversionSettings()

        assert settings.supported_zones == DEFAULT_ZONES
        assert settings.default_source_zone == "America/Santiago"
        assert settings.resolution_strategy == "fixed_point"
        assert settings.max_iterations == 4

    def test_conversion_settings_from_env(self, monkeypatch):
        """Test conversion settings from environment variables."""
        monkeypatch.setenv("CONVERSION_RESOLUTION_STRATEGY", "anchor")
        monkeypatch.setenv("CONVERSION_SUPPORTED_ZONES", '["America/Bogota", "UTC"]')
        monkeypatch.setenv("CONVERSION_DEFAULT_SOURCE_ZONE", "UTC")

        settings = ConversionSettings()

        assert settings.resolution_strategy == "anchor"
        assert settings.supported_zones == ["America/Bogota", "UTC"]
        assert settings.default_source_zone == "UTC"

    def test_default_source_must_be_supported(self):
        """Test that the default source zone is validated against the list."""
        with pytest.raises(ValidationError):
            ConversionSettings(supported_zones=["America/Bogota"], default_source_zone="America/Santiago")

    def test_strategy_description_names_legacy_value(self):
        """Test the strategy field documents both values."""
        description = ConversionSettings.model_fields["resolution_strategy"].description

        assert "anchor" in description
        assert "legacy" in description
        assert "fixed_point" in description

    def test_unknown_strategy_rejected(self):
        """Test strategy validation."""
        with pytest.raises(ValidationError):
            ConversionSettings(resolution_strategy="guess")

    @pytest.mark.parametrize("value", [0, 11])
    def test_max_iterations_bounds(self, value):
        """Test iteration bound validation."""
        with pytest.raises(ValidationError):
            ConversionSettings(max_iterations=value)

    def test_zones_must_be_unique(self):
        """Test duplicate zones are rejected."""
        with pytest.raises(ValidationError):
            ConversionSettings(supported_zones=["America/Santiago", "America/Santiago"])

    def test_zones_must_not_be_empty(self):
        """Test an empty zone list is rejected."""
        with pytest.raises(ValidationError):
            ConversionSettings(supported_zones=[])


class TestSettings:
    """Test main settings configuration."""

    def test_default_settings(self):
        """Test default settings values."""
        settings = Settings()

        assert settings.environment == "development"
        assert settings.debug is False
        assert settings.host == "0.0.0.0"
        assert settings.port == 3000
        assert settings.app_name == "City Time Converter"

    def test_environment_validation(self):
        """Test environment validation."""
        for env in ["development", "staging", "production"]:
            settings = Settings(environment=env)
            assert settings.environment == env

        with pytest.raises(ValidationError):
            Settings(environment="invalid")

    def test_debug_rejected_in_production(self):
        """Test debug mode cannot be enabled in production."""
        with pytest.raises(ValidationError):
            Settings(environment="production", debug=True)

    def test_server_port_from_env(self, monkeypatch):
        """Test server settings from environment variables."""
        monkeypatch.setenv("SERVER_PORT", "8080")

        settings = Settings()

        assert settings.port == 8080

    def test_rate_limit_default(self):
        """Test the default rate limit string."""
        assert RateLimitSettings(enabled=True).default == "120/minute"
