"""
Call Domain Models
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple
from pydantic import BaseModel

from .tools import ToolSpec


class CallStatus(str, Enum):
    """Lifecycle status reported by the telephony provider"""
    INITIATED = "initiated"
    QUEUED = "queued"
    RINGING = "ringing"
    ANSWERED = "answered"
    IN_PROGRESS = "in-progress"
    BUSY = "busy"
    NO_ANSWER = "no-answer"
    FAILED = "failed"
    CANCELED = "canceled"
    COMPLETED = "completed"
    
    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["CallStatus"]:
        """Map a raw status string to a CallStatus, or None if unknown."""
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


TERMINAL_STATUSES = frozenset({
    CallStatus.BUSY,
    CallStatus.NO_ANSWER,
    CallStatus.FAILED,
    CallStatus.CANCELED,
    CallStatus.COMPLETED,
})


class CallStatusEvent(BaseModel):
    """
    One status callback.
    
    Lead identity comes from the query string of the callback URL,
    echoed back by the provider.
    """
    call_id: Optional[str] = None
    status: Optional[CallStatus] = None
    raw_status: Optional[str] = None
    destination_number: Optional[str] = None
    correlated_lead_name: Optional[str] = None
    correlated_phone: Optional[str] = None
    
    @classmethod
    def from_callback(
        cls,
        form: dict,
        query: dict
    ) -> "CallStatusEvent":
        raw_status = form.get("CallStatus")
        return cls(
            call_id=form.get("CallSid"),
            status=CallStatus.parse(raw_status),
            raw_status=raw_status,
            destination_number=form.get("To"),
            correlated_lead_name=query.get("clientName"),
            correlated_phone=query.get("phoneNumber"),
        )
    
    @property
    def contact_phone(self) -> Optional[str]:
        """Phone to tag: the one we dialed if known, else the provider's To."""
        return self.correlated_phone or self.destination_number
    
    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES


@dataclass(frozen=True)
class CallSession:
    """Voice-AI session created for one call attempt"""
    join_url: str
    script: str
    tools: Tuple[ToolSpec, ...] = field(default_factory=tuple)
    provider_call_id: Optional[str] = None
    
    def tool_names(self) -> Tuple[str, ...]:
        return tuple(tool.name for tool in self.tools)
