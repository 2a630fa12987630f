"""
Call Orchestration
Creates the voice-AI session for a lead and dials them into it.
"""
import logging
from urllib.parse import urlencode

from leadcaller.core.config import Settings
from leadcaller.core.exceptions import InvalidRecipient
from leadcaller.domain.interfaces.telephony_provider import TelephonyProvider
from leadcaller.domain.models.lead import Lead
from leadcaller.domain.services.phone_normalizer import normalize
from leadcaller.services.session_factory import ConversationSessionFactory

logger = logging.getLogger(__name__)

CALL_STATUS_PATH = "/call-status"

# Twilio only accepts these four callback events. Every terminal status
# (busy, no-answer, failed, canceled, completed) arrives on "completed".
STATUS_CALLBACK_EVENTS = ("initiated", "ringing", "answered", "completed")


class CallOrchestrator:
    """
    Initiates calls.
    
    No call state is kept here: the lead's name and phone ride along in
    the status callback URL and come back with every status event.
    """
    
    def __init__(
        self,
        settings: Settings,
        session_factory: ConversationSessionFactory,
        telephony: TelephonyProvider
    ):
        self._settings = settings
        self._session_factory = session_factory
        self._telephony = telephony
    
    def status_callback_url(self, lead: Lead) -> str:
        query = urlencode({
            "clientName": lead.display_name,
            "phoneNumber": lead.raw_phone,
        })
        return f"{self._settings.base_url}{CALL_STATUS_PATH}?{query}"
    
    async def initiate_call(self, lead: Lead) -> str:
        """
        Create a session and dial the lead into it.
        
        Returns:
            Telephony call id
        
        Raises:
            InvalidRecipient: If the lead's phone is not dialable
            SessionCreateError: If the voice-AI session fails (nothing is dialed)
            DialError: If the telephony provider rejects the call
        """
        phone = normalize(lead.raw_phone)
        if not phone.is_dialable:
            raise InvalidRecipient(lead.raw_phone)
        
        logger.info(
            f"Creating call session for {lead.display_name} "
            f"({lead.user_segment.value}) at {phone.dialable}..."
        )
        session = await self._session_factory.create_session(lead)
        
        call_id = await self._telephony.make_call(
            to_number=phone.dialable,
            stream_url=session.join_url,
            status_callback_url=self.status_callback_url(lead),
            status_callback_events=STATUS_CALLBACK_EVENTS,
        )
        
        logger.info(f"Call initiated: {call_id}")
        return call_id
