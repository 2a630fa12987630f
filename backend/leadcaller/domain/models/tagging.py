"""
CRM Tagging Models
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TagAction:
    """A tag to attach to the contact identified by contact_key"""
    contact_key: str
    tag: str
    display_name: Optional[str] = None


@dataclass
class TagResult:
    """
    Outcome of a best-effort tagging attempt.
    
    Callers that must not fail on CRM errors get this instead of an
    exception, so the attempt stays observable.
    """
    action: TagAction
    attempted: bool = True
    success: bool = False
    contact_id: Optional[str] = None
    error: Optional[str] = None
    
    def to_dict(self):
        return {
            "contact_key": self.action.contact_key,
            "tag": self.action.tag,
            "attempted": self.attempted,
            "success": self.success,
            "contact_id": self.contact_id,
            "error": self.error,
        }
