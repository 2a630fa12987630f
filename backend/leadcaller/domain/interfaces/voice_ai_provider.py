"""
Voice-AI Provider Interface
Abstract base class for conversational voice session providers
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List


class VoiceAIProvider(ABC):
    """Creates conversation sessions that a call can be bridged into"""
    
    @abstractmethod
    async def create_call(
        self,
        system_prompt: str,
        selected_tools: List[Dict[str, Any]],
    ) -> Dict[str, Any]:
        """
        Create a conversation session.
        
        Returns:
            Provider response; must contain the join URL
        
        Raises:
            SessionCreateError: On any non-success response
        """
        pass
    
    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name"""
        pass
