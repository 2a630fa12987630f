"""
Telephony Provider Interface
Abstract base class for providers that place calls and bridge audio
"""
from abc import ABC, abstractmethod
from typing import Sequence


class TelephonyProvider(ABC):
    """Abstract base class for telephony providers"""
    
    @abstractmethod
    async def make_call(
        self,
        to_number: str,
        stream_url: str,
        status_callback_url: str,
        status_callback_events: Sequence[str],
    ) -> str:
        """
        Initiate an outbound call bridged to a media stream
        
        Args:
            to_number: Destination phone number (E.164)
            stream_url: Join URL the call audio is streamed to
            status_callback_url: URL receiving lifecycle status callbacks
            status_callback_events: Events to subscribe to
            
        Returns:
            call_id: Unique call identifier
        
        Raises:
            DialError: If the provider rejects the call
        """
        pass
    
    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name"""
        pass
