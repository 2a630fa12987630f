"""
Twilio SMS Provider
SMS implementation using Twilio Programmable Messaging.
"""
import asyncio
import logging
from typing import Optional
from datetime import datetime, timezone

from twilio.rest import Client
from twilio.http.http_client import TwilioHttpClient
from twilio.base.exceptions import TwilioException, TwilioRestException

from leadcaller.core.config import Settings
from .base import SMSProvider, SMSResult

logger = logging.getLogger(__name__)


class TwilioSMSProvider(SMSProvider):
    """
    Twilio SMS provider.
    
    Uses the account credentials and sender number from Settings. Each
    message is a single attempt with a bounded HTTP timeout and a
    maximum price guard.
    """
    
    def __init__(self, settings: Settings, client: Optional[Client] = None):
        self._settings = settings
        self._client = client
        self._from_number = settings.twilio_phone_number
        self._timeout = settings.sms_timeout_seconds
        self._max_price = settings.sms_max_price
    
    @property
    def provider_name(self) -> str:
        return "twilio"
    
    def is_configured(self) -> bool:
        """Check if Twilio credentials and sender are configured."""
        return bool(
            self._settings.twilio_account_sid
            and self._settings.twilio_auth_token
            and self._from_number
        )
    
    def _get_client(self) -> Client:
        if self._client is None:
            self._client = Client(
                self._settings.twilio_account_sid,
                self._settings.twilio_auth_token,
                http_client=TwilioHttpClient(timeout=self._timeout),
            )
        return self._client
    
    async def send_sms(self, to_number: str, message: str) -> SMSResult:
        """
        Send an SMS via Twilio.
        
        Args:
            to_number: Destination phone number (E.164)
            message: SMS content
            
        Returns:
            SMSResult with send status
        """
        logger.info(
            f"Sending SMS via Twilio: {self._from_number} -> {to_number[:6]}... "
            f"({len(message)} chars)"
        )
        
        try:
            msg = await asyncio.to_thread(
                self._get_client().messages.create,
                body=message,
                from_=self._from_number,
                to=to_number,
                attempt=1,
                max_price=self._max_price,
            )
        except TwilioRestException as e:
            logger.error(
                f"Twilio rejected SMS: status={e.status} code={e.code} msg={e.msg}",
                exc_info=True
            )
            return SMSResult(
                success=False,
                provider=self.provider_name,
                to_number=to_number,
                error=e.msg,
                error_code=e.code,
                http_status=e.status,
            )
        except (TwilioException, OSError) as e:
            # requests timeouts and connection errors are OSError subclasses
            logger.error(f"Exception sending SMS via Twilio: {e}", exc_info=True)
            return SMSResult(
                success=False,
                provider=self.provider_name,
                to_number=to_number,
                error=str(e),
            )
        
        logger.info(f"SMS sent successfully: sid={msg.sid} status={msg.status}")
        
        return SMSResult(
            success=True,
            message_id=msg.sid,
            provider=self.provider_name,
            to_number=to_number,
            status=msg.status,
            sent_at=datetime.now(timezone.utc),
        )
