"""
SMS Provider Base Classes
Abstract base class for SMS providers.
"""
from abc import ABC, abstractmethod
from typing import Optional, Dict, Any
from dataclasses import dataclass
from datetime import datetime


@dataclass
class SMSResult:
    """Result of an SMS send operation."""
    success: bool
    message_id: Optional[str] = None
    provider: str = ""
    to_number: str = ""
    status: Optional[str] = None
    error: Optional[str] = None
    error_code: Optional[int] = None
    http_status: Optional[int] = None
    sent_at: Optional[datetime] = None
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "success": self.success,
            "message_id": self.message_id,
            "provider": self.provider,
            "to_number": self.to_number,
            "status": self.status,
            "error": self.error,
            "error_code": self.error_code,
            "sent_at": self.sent_at.isoformat() if self.sent_at else None,
        }


class SMSProvider(ABC):
    """
    Abstract base class for SMS providers.
    
    All SMS providers must implement:
    - send_sms(): Send a single SMS message to an E.164 number
    - is_configured(): Check if provider is properly configured
    """
    
    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier (e.g., 'twilio')."""
        pass
    
    @abstractmethod
    async def send_sms(self, to_number: str, message: str) -> SMSResult:
        """
        Send an SMS message.
        
        Args:
            to_number: Destination phone number, already E.164
            message: Message content
            
        Returns:
            SMSResult with success status and message_id
        """
        pass
    
    @abstractmethod
    def is_configured(self) -> bool:
        """Check if the provider has valid configuration."""
        pass
