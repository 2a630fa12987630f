"""Shared fixtures for unit tests"""
import pytest

from leadcaller.core.config import Settings


@pytest.fixture
def settings():
    """Fully configured settings that ignore the local .env file."""
    return Settings(
        _env_file=None,
        twilio_account_sid="AC1234567890",
        twilio_auth_token="test-token",
        twilio_phone_number="+15005550006",
        ultravox_api_key="uv-test-key",
        ghl_api_key="ghl-test-key",
        ghl_location_id="loc-123",
        server_base_url="https://calls.example.com",
        vercel_url=None,
        render_external_url=None,
        tagging_webhook_url=None,
    )
