"""
Lead Domain Models
"""
from enum import Enum
from pydantic import BaseModel, ConfigDict


class UserSegment(str, Enum):
    """Conversation branch selected for a lead"""
    VIP = "VIP"
    GA = "GA"
    
    @classmethod
    def from_user_type(cls, user_type: str) -> "UserSegment":
        """Anything other than 'VIP' (case-insensitive) gets general admission."""
        if user_type and user_type.strip().upper() == cls.VIP.value:
            return cls.VIP
        return cls.GA


class Lead(BaseModel):
    """Person to call for one call attempt"""
    model_config = ConfigDict(frozen=True)
    
    display_name: str
    raw_phone: str
    user_segment: UserSegment = UserSegment.GA
    user_type: str = "non-VIP"  # Label as submitted, shown to the agent
    
    @classmethod
    def from_request(cls, client_name: str, phone_number: str, user_type: str = "non-VIP") -> "Lead":
        return cls(
            display_name=client_name,
            raw_phone=phone_number,
            user_segment=UserSegment.from_user_type(user_type),
            user_type=user_type,
        )
