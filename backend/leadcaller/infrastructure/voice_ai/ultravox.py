"""
Ultravox Voice-AI Client
Creates conversation sessions that Twilio calls stream into.
"""
import logging
from typing import Any, Dict, List, Optional
import httpx

from leadcaller.core.config import Settings
from leadcaller.core.exceptions import SessionCreateError
from leadcaller.domain.interfaces.voice_ai_provider import VoiceAIProvider

logger = logging.getLogger(__name__)


class UltravoxClient(VoiceAIProvider):
    """
    Ultravox calls API client.
    
    Each create_call() is one POST to /api/calls authenticated with the
    X-API-Key header. The response carries the joinUrl the telephony
    stream connects to.
    """
    
    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self._api_key = settings.ultravox_api_key
        self._api_url = settings.ultravox_api_url
        self._model = settings.ultravox_model
        self._voice = settings.ultravox_voice
        self._temperature = settings.ultravox_temperature
        self._first_speaker = settings.ultravox_first_speaker
        self._timeout = settings.voice_ai_timeout_seconds
        self._transport = transport
    
    @property
    def name(self) -> str:
        return "ultravox"
    
    def _get_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "X-API-Key": self._api_key
        }
    
    def build_call_config(
        self,
        system_prompt: str,
        selected_tools: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        """Request body for a Twilio-medium call."""
        return {
            "systemPrompt": system_prompt,
            "model": self._model,
            "voice": self._voice,
            "temperature": self._temperature,
            "firstSpeaker": self._first_speaker,
            "medium": {"twilio": {}},
            "selectedTools": selected_tools,
        }
    
    async def create_call(
        self,
        system_prompt: str,
        selected_tools: List[Dict[str, Any]],
    ) -> Dict[str, Any]:
        """
        Create an Ultravox call.
        
        Raises:
            SessionCreateError: On non-2xx responses or transport failures
        """
        payload = self.build_call_config(system_prompt, selected_tools)
        
        async with httpx.AsyncClient(transport=self._transport, timeout=self._timeout) as client:
            try:
                response = await client.post(
                    self._api_url,
                    json=payload,
                    headers=self._get_headers()
                )
            except httpx.HTTPError as e:
                logger.error(f"Ultravox request failed: {e}", exc_info=True)
                raise SessionCreateError(0, str(e)) from e
        
        if not response.is_success:
            logger.error(
                f"Ultravox call creation failed: {response.status_code} - {response.text}"
            )
            raise SessionCreateError(response.status_code, response.text)
        
        data = response.json()
        if not data.get("joinUrl"):
            logger.error(f"Ultravox response missing joinUrl: {data}")
            raise SessionCreateError(response.status_code, "Response missing joinUrl")
        
        logger.info(f"Ultravox call created: callId={data.get('callId')}")
        return data
