"""
CRM Provider Base Class
Abstract interface for CRM integrations.
"""
from abc import ABC, abstractmethod
from typing import List, Dict, Any, Optional
from pydantic import BaseModel, ConfigDict


class CRMContact(BaseModel):
    """Represents a CRM contact."""
    model_config = ConfigDict(extra="allow")
    
    id: str
    name: Optional[str] = None
    phone: Optional[str] = None
    tags: List[str] = []
    
    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "CRMContact":
        return cls(
            id=data["id"],
            name=data.get("contactName") or data.get("name"),
            phone=data.get("phone"),
            tags=data.get("tags") or [],
        )


class CRMProvider(ABC):
    """
    Abstract base class for CRM providers.
    
    Each method is a single HTTP attempt and raises the matching
    CRMError subclass on failure.
    """
    
    @property
    @abstractmethod
    def provider_name(self) -> str:
        pass
    
    @abstractmethod
    async def find_contact_by_phone(self, phone: str) -> Optional[CRMContact]:
        """Search contacts by phone digits; first match or None."""
        pass
    
    @abstractmethod
    async def create_contact(self, phone: str, name: Optional[str] = None) -> CRMContact:
        """Create a contact in the configured workspace."""
        pass
    
    @abstractmethod
    async def add_tags(self, contact_id: str, tags: List[str]) -> Dict[str, Any]:
        """Attach tags to a contact."""
        pass
