"""
GoHighLevel CRM Connector
Location API key integration with the GoHighLevel v1 REST API.
"""
import logging
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar
import httpx

from leadcaller.core.config import Settings
from leadcaller.core.exceptions import (
    CRMError,
    ContactLookupError,
    ContactCreateError,
    TagApplyError,
)
from .base import CRMProvider, CRMContact

logger = logging.getLogger(__name__)

T = TypeVar("T")


class GoHighLevelConnector(CRMProvider):
    """
    GoHighLevel CRM integration.
    
    Setup Required:
    - GHL_API_KEY: location API key (Bearer token)
    - GHL_LOCATION_ID: workspace new contacts are created under
    """
    
    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self._api_key = settings.ghl_api_key
        self._location_id = settings.ghl_location_id
        self._api_url = settings.ghl_api_url.rstrip("/")
        self._timeout = settings.crm_timeout_seconds
        self._transport = transport
    
    @property
    def provider_name(self) -> str:
        return "gohighlevel"
    
    def _get_auth_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json"
        }
    
    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._api_url,
            headers=self._get_auth_headers(),
            timeout=self._timeout,
            transport=self._transport,
        )
    
    @staticmethod
    def _parse(response: httpx.Response, error_cls: Type[CRMError], extract: Callable[[Any], T]) -> T:
        """
        Decode a successful response and pull out what the stage needs.
        
        A 2xx body that is not JSON or lacks the expected fields is a
        failure of that stage, reported with the raw body.
        """
        try:
            return extract(response.json())
        except (ValueError, KeyError, TypeError, AttributeError, IndexError) as e:
            logger.error(
                f"Unexpected GoHighLevel response for {error_cls.stage}: "
                f"{response.status_code} - {response.text}"
            )
            raise error_cls(response.status_code, response.text) from e
    
    async def find_contact_by_phone(self, phone: str) -> Optional[CRMContact]:
        """Search contacts; returns the first match or None."""
        async with self._client() as client:
            try:
                response = await client.get("/contacts/search", params={"query": phone})
            except httpx.HTTPError as e:
                raise ContactLookupError(None, str(e)) from e
        
        if not response.is_success:
            logger.error(f"Contact search failed: {response.status_code} - {response.text}")
            raise ContactLookupError(response.status_code, response.text)
        
        def first_contact(data: Dict[str, Any]) -> Optional[CRMContact]:
            contacts = data.get("contacts") or []
            return CRMContact.from_api(contacts[0]) if contacts else None
        
        return self._parse(response, ContactLookupError, first_contact)
    
    async def create_contact(self, phone: str, name: Optional[str] = None) -> CRMContact:
        """Create a new contact under the configured location."""
        payload: Dict[str, Any] = {
            "phone": phone,
            "locationId": self._location_id
        }
        if name:
            payload["name"] = name
        
        async with self._client() as client:
            try:
                response = await client.post("/contacts", json=payload)
            except httpx.HTTPError as e:
                raise ContactCreateError(None, str(e)) from e
        
        if not response.is_success:
            logger.error(f"Contact creation failed: {response.status_code} - {response.text}")
            raise ContactCreateError(response.status_code, response.text)
        
        contact = self._parse(
            response, ContactCreateError, lambda data: CRMContact.from_api(data["contact"])
        )
        logger.info(f"Created GoHighLevel contact: {contact.id}")
        return contact
    
    async def add_tags(self, contact_id: str, tags: List[str]) -> Dict[str, Any]:
        """Attach tags to a contact. Duplicates are left to the CRM."""
        async with self._client() as client:
            try:
                response = await client.post(f"/contacts/{contact_id}/tags", json={"tags": tags})
            except httpx.HTTPError as e:
                raise TagApplyError(None, str(e)) from e
        
        if not response.is_success:
            logger.error(f"Adding tags failed: {response.status_code} - {response.text}")
            raise TagApplyError(response.status_code, response.text)
        
        return self._parse(response, TagApplyError, dict)
