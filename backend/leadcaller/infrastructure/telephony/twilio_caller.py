"""
Twilio Call Origination
Places outbound calls whose audio is streamed to a voice-AI join URL.
"""
import asyncio
import logging
from typing import Optional, Sequence

from twilio.rest import Client
from twilio.twiml.voice_response import VoiceResponse, Connect, Stream
from twilio.base.exceptions import TwilioException, TwilioRestException

from leadcaller.core.config import Settings
from leadcaller.core.exceptions import DialError
from leadcaller.domain.interfaces.telephony_provider import TelephonyProvider

logger = logging.getLogger(__name__)


def generate_stream_twiml(stream_url: str) -> str:
    """
    Generate TwiML that bridges the call to a bidirectional media stream.
    
    <Response><Connect><Stream url="..."/></Connect></Response>
    """
    response = VoiceResponse()
    connect = Connect()
    connect.append(Stream(url=stream_url))
    response.append(connect)
    return str(response)


class TwilioCaller(TelephonyProvider):
    """Client for placing outbound calls via Twilio."""
    
    def __init__(self, settings: Settings, client: Optional[Client] = None):
        self._settings = settings
        self._client = client
        self.from_number = settings.twilio_phone_number
    
    @property
    def name(self) -> str:
        return "twilio"
    
    def _get_client(self) -> Client:
        if self._client is None:
            self._client = Client(
                self._settings.twilio_account_sid,
                self._settings.twilio_auth_token,
            )
        return self._client
    
    async def make_call(
        self,
        to_number: str,
        stream_url: str,
        status_callback_url: str,
        status_callback_events: Sequence[str],
    ) -> str:
        """
        Initiate an outbound call with its audio connected to stream_url.
        
        Returns:
            Call SID
        
        Raises:
            DialError: If Twilio rejects the request
        """
        twiml = generate_stream_twiml(stream_url)
        
        logger.info(f"Initiating call: {self.from_number} -> {to_number}")
        
        try:
            call = await asyncio.to_thread(
                self._get_client().calls.create,
                twiml=twiml,
                to=to_number,
                from_=self.from_number,
                status_callback=status_callback_url,
                status_callback_event=list(status_callback_events),
                status_callback_method="POST",
            )
        except TwilioRestException as e:
            logger.error(
                f"Twilio rejected call to {to_number}: status={e.status} code={e.code} msg={e.msg}",
                exc_info=True
            )
            raise DialError(f"Call failed: {e.msg}", status_code=e.status, body=str(e.code)) from e
        except (TwilioException, OSError) as e:
            logger.error(f"Failed to initiate call to {to_number}: {e}", exc_info=True)
            raise DialError(f"Call failed: {e}") from e
        
        logger.info(f"Call initiated: sid={call.sid}")
        return call.sid
