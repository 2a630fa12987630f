"""
Unit Tests for SMS Service
Tests for SMSService and the Twilio SMS provider.
"""
import pytest
from unittest.mock import AsyncMock, MagicMock
from datetime import datetime

from twilio.base.exceptions import TwilioRestException

from leadcaller.core.exceptions import DeliveryError, InvalidInput, InvalidRecipient
from leadcaller.infrastructure.connectors.sms import SMSResult, TwilioSMSProvider
from leadcaller.services.sms_service import SMSService


class TestSMSService:
    """Tests for SMSService."""
    
    @pytest.fixture
    def mock_provider(self):
        """Create mock SMS provider."""
        provider = MagicMock()
        provider.is_configured.return_value = True
        provider.send_sms = AsyncMock(return_value=SMSResult(
            success=True,
            message_id="SM123",
            provider="twilio",
            to_number="+15551234567",
            sent_at=datetime.utcnow()
        ))
        return provider
    
    @pytest.mark.asyncio
    async def test_send_sms_success(self, mock_provider):
        """Test successful SMS send returns the message id."""
        service = SMSService(mock_provider)
        
        message_id = await service.send("(555) 123-4567", "See you tomorrow")
        
        assert message_id == "SM123"
        mock_provider.send_sms.assert_awaited_once_with(
            to_number="+15551234567",
            message="See you tomorrow"
        )
    
    @pytest.mark.asyncio
    async def test_send_sms_invalid_recipient(self, mock_provider):
        """Undialable numbers are rejected before the provider is called."""
        service = SMSService(mock_provider)
        
        with pytest.raises(InvalidRecipient):
            await service.send("09171234567", "Hello")
        
        mock_provider.send_sms.assert_not_awaited()
    
    @pytest.mark.asyncio
    async def test_send_sms_empty_body(self, mock_provider):
        service = SMSService(mock_provider)
        
        with pytest.raises(InvalidInput):
            await service.send("5551234567", "")
    
    @pytest.mark.asyncio
    async def test_send_sms_provider_failure(self, mock_provider):
        """Provider failures surface as DeliveryError with the reason."""
        mock_provider.send_sms = AsyncMock(return_value=SMSResult(
            success=False,
            provider="twilio",
            to_number="+15551234567",
            error="Price exceeds max price",
            error_code=30450,
            http_status=400
        ))
        service = SMSService(mock_provider)
        
        with pytest.raises(DeliveryError) as exc_info:
            await service.send("5551234567", "Hello")
        
        assert "Price exceeds max price" in str(exc_info.value)
        assert exc_info.value.status_code == 400


class TestTwilioSMSProvider:
    """Tests for TwilioSMSProvider with a mocked Twilio client."""
    
    @pytest.fixture
    def twilio_client(self):
        client = MagicMock()
        client.messages.create.return_value = MagicMock(sid="SM999", status="queued")
        return client
    
    @pytest.mark.asyncio
    async def test_send_uses_sender_and_price_guard(self, settings, twilio_client):
        provider = TwilioSMSProvider(settings, client=twilio_client)
        
        result = await provider.send_sms("+15551234567", "Hi there")
        
        assert result.success is True
        assert result.message_id == "SM999"
        twilio_client.messages.create.assert_called_once_with(
            body="Hi there",
            from_="+15005550006",
            to="+15551234567",
            attempt=1,
            max_price=0.15,
        )
    
    @pytest.mark.asyncio
    async def test_send_reports_twilio_rejection(self, settings, twilio_client):
        twilio_client.messages.create.side_effect = TwilioRestException(
            status=400,
            uri="/Messages",
            msg="The 'To' number is not a valid phone number.",
            code=21211,
        )
        provider = TwilioSMSProvider(settings, client=twilio_client)
        
        result = await provider.send_sms("+15551234567", "Hi there")
        
        assert result.success is False
        assert result.error_code == 21211
        assert result.http_status == 400
        assert "not a valid phone number" in result.error
    
    @pytest.mark.asyncio
    async def test_send_reports_timeout(self, settings, twilio_client):
        twilio_client.messages.create.side_effect = TimeoutError("read timed out")
        provider = TwilioSMSProvider(settings, client=twilio_client)
        
        result = await provider.send_sms("+15551234567", "Hi there")
        
        assert result.success is False
        assert "timed out" in result.error
    
    def test_is_configured(self, settings):
        assert TwilioSMSProvider(settings).is_configured() is True
        
        settings.twilio_phone_number = ""
        assert TwilioSMSProvider(settings).is_configured() is False
    
    def test_default_client_uses_configured_timeout(self, settings):
        provider = TwilioSMSProvider(settings)
        
        client = provider._get_client()
        
        assert client.http_client.timeout == 30
        assert client.username == "AC1234567890"
        assert provider._get_client() is client
    
    def test_timeout_follows_settings(self, settings):
        settings.sms_timeout_seconds = 10
        
        client = TwilioSMSProvider(settings)._get_client()
        
        assert client.http_client.timeout == 10
