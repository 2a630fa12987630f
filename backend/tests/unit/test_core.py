"""
Basic Tests for Core Functionality
Tests settings, provider validation and startup behavior
"""
import logging
import pytest
from unittest.mock import MagicMock

from leadcaller.core.config import Settings
from leadcaller.core.exceptions import ConfigurationError
from leadcaller.core.validation import ProviderValidator, validate_providers_on_startup
from leadcaller.main import create_app, lifespan


def bare_settings(**overrides):
    values = dict(
        _env_file=None,
        server_base_url=None,
        vercel_url=None,
        render_external_url=None,
        tagging_webhook_url=None,
    )
    values.update(overrides)
    return Settings(**values)


class TestBaseURL:
    """Public base URL detection"""
    
    def test_explicit_server_base_url_wins(self):
        settings = bare_settings(
            server_base_url="https://calls.example.com/",
            vercel_url="app.vercel.app",
        )
        
        assert settings.base_url == "https://calls.example.com"
    
    def test_vercel(self):
        assert bare_settings(vercel_url="app.vercel.app").base_url == "https://app.vercel.app"
    
    def test_render(self):
        settings = bare_settings(render_external_url="https://app.onrender.com")
        
        assert settings.base_url == "https://app.onrender.com"
    
    def test_localhost_fallback(self):
        assert bare_settings().base_url == "http://localhost:10000"
        assert bare_settings(port=8080).base_url == "http://localhost:8080"
    
    def test_contact_tagging_url(self):
        settings = bare_settings(server_base_url="https://calls.example.com")
        
        assert settings.contact_tagging_url == "https://calls.example.com/api/contacts"
        
        settings.tagging_webhook_url = "https://hooks.example.com/tag"
        assert settings.contact_tagging_url == "https://hooks.example.com/tag"
    
    def test_settings_from_environment(self, monkeypatch):
        monkeypatch.setenv("TWILIO_PHONE_NUMBER", "+15005550006")
        monkeypatch.setenv("BUSY_TAG", "line-busy")
        
        settings = bare_settings()
        
        assert settings.twilio_phone_number == "+15005550006"
        assert settings.busy_tag == "line-busy"
    
    def test_masked_account_sid(self, settings):
        assert settings.masked_account_sid() == "AC12..."
        assert bare_settings(twilio_account_sid="").masked_account_sid() == "missing"


class TestProviderValidator:
    """Tests for ProviderValidator."""
    
    def test_all_required_present(self, settings):
        validator = ProviderValidator(settings)
        
        all_valid, results = validator.validate_all()
        
        assert all_valid
        assert validator.missing_settings() == []
        assert validator.get_error_summary() is None
    
    def test_missing_credentials(self, settings):
        settings.ultravox_api_key = ""
        settings.ghl_location_id = ""
        validator = ProviderValidator(settings)
        
        all_valid, _ = validator.validate_all()
        
        assert not all_valid
        assert validator.missing_settings() == ["ULTRAVOX_API_KEY", "GHL_LOCATION_ID"]
        summary = validator.get_error_summary()
        assert "ULTRAVOX_API_KEY" in summary
        assert "GHL_LOCATION_ID" in summary
    
    def test_missing_base_url_is_warning(self, settings):
        settings.server_base_url = None
        validator = ProviderValidator(settings)
        
        all_valid, results = validator.validate_all()
        
        assert all_valid
        warning = [r for r in results if r.setting == "SERVER_BASE_URL"][0]
        assert warning.message.startswith("WARNING")
        assert "http://localhost:10000" in warning.message
    
    def test_startup_validation_raises(self, caplog):
        with caplog.at_level(logging.ERROR, logger="leadcaller.core.validation"):
            with pytest.raises(ConfigurationError) as exc_info:
                validate_providers_on_startup(bare_settings())
        
        assert "TWILIO_ACCOUNT_SID" in str(exc_info.value)
        assert "Refusing to start, missing: TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN" in caplog.text
    
    def test_startup_validation_masks_sid(self, settings, caplog):
        with caplog.at_level(logging.INFO, logger="leadcaller.core.validation"):
            validate_providers_on_startup(settings)
        
        assert "account_sid=AC12..." in caplog.text
        assert "test-token" not in caplog.text


class TestStartup:
    """Application startup"""
    
    @pytest.mark.asyncio
    async def test_lifespan_fails_without_credentials(self):
        services = MagicMock()
        services.settings = bare_settings()
        app = create_app(services=services)
        
        with pytest.raises(ConfigurationError):
            async with lifespan(app):
                pass
    
    @pytest.mark.asyncio
    async def test_lifespan_starts_when_configured(self, settings):
        services = MagicMock()
        services.settings = settings
        app = create_app(services=services)
        
        async with lifespan(app):
            assert app.state.services is services
    
    def test_routes_registered(self, settings):
        services = MagicMock()
        services.settings = settings
        app = create_app(services=services)
        
        paths = app.openapi()["paths"]
        
        assert {"/health", "/initiate-call", "/call-status", "/api/sms-webhook",
                "/send-sms", "/api/contacts"} <= set(paths)
        assert {"get", "post"} <= set(paths["/initiate-call"])
        assert {"get", "post"} <= set(paths["/api/contacts"])
