"""
Phone Number Models
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class NormalizedPhone:
    """
    Canonical forms of a loosely formatted phone number.
    
    dialable: E.164 number ready for the telephony provider, or None
        when the digits match no supported country pattern.
    tagging_key: digits only, used as the CRM lookup key.
    """
    dialable: Optional[str]
    tagging_key: str
    
    @property
    def is_dialable(self) -> bool:
        return self.dialable is not None
