"""
SMS Service
Sends single text messages on behalf of the API and the in-call agent.
"""
import logging

from leadcaller.core.exceptions import InvalidInput, InvalidRecipient, DeliveryError
from leadcaller.domain.services.phone_normalizer import normalize
from leadcaller.infrastructure.connectors.sms import SMSProvider

logger = logging.getLogger(__name__)


class SMSService:
    """
    Outbound messenger.
    
    Integration Points:
    - /api/sms-webhook: sendSMS tool invoked by the voice agent mid-call
    - /send-sms: direct sends
    """
    
    def __init__(self, provider: SMSProvider):
        self._provider = provider
    
    async def send(self, raw_phone: str, body: str) -> str:
        """
        Send one SMS.
        
        Args:
            raw_phone: Recipient in any supported format
            body: Message text
            
        Returns:
            Provider message id
            
        Raises:
            InvalidRecipient: If the number is not dialable
            InvalidInput: If the message is empty
            DeliveryError: If the provider fails the send
        """
        phone = normalize(raw_phone)
        if not phone.is_dialable:
            logger.error(f"Invalid phone number format: {raw_phone}")
            raise InvalidRecipient(raw_phone)
        if not body:
            raise InvalidInput("Message body is empty")
        
        result = await self._provider.send_sms(to_number=phone.dialable, message=body)
        
        if not result.success:
            logger.error(f"SMS send failed: {result.to_dict()}")
            raise DeliveryError(
                f"SMS send failed: {result.error}",
                status_code=result.http_status,
                body=str(result.error_code) if result.error_code is not None else None
            )
        
        return result.message_id
