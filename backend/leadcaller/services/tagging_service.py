"""
Tagging Service
Finds or creates a CRM contact by phone number and attaches a tag.
"""
import logging
from typing import Optional

from leadcaller.core.exceptions import InvalidInput, UpstreamError
from leadcaller.domain.models.tagging import TagAction, TagResult
from leadcaller.domain.services.phone_normalizer import normalize
from leadcaller.infrastructure.connectors.crm import CRMProvider, CRMContact

logger = logging.getLogger(__name__)


class TaggingService:
    """
    CRM tagger.
    
    Contacts are keyed by bare phone digits. Each stage is attempted once;
    failures raise the stage's CRMError. Callers that must not fail use
    tag_best_effort().
    """
    
    def __init__(self, crm: CRMProvider):
        self._crm = crm
    
    def build_action(
        self,
        raw_phone: Optional[str],
        display_name: Optional[str],
        tag: str
    ) -> TagAction:
        return TagAction(
            contact_key=normalize(raw_phone).tagging_key,
            tag=tag,
            display_name=display_name,
        )
    
    async def resolve_contact(self, contact_key: str, display_name: Optional[str] = None) -> CRMContact:
        """Find the contact by phone digits, creating it when absent."""
        contact = await self._crm.find_contact_by_phone(contact_key)
        if contact is not None:
            logger.debug(f"Found CRM contact {contact.id} for {contact_key}")
            return contact
        
        logger.info(f"No CRM contact for {contact_key}, creating one")
        return await self._crm.create_contact(phone=contact_key, name=display_name)
    
    async def apply(self, action: TagAction) -> CRMContact:
        """Resolve the contact and attach the tag."""
        if not action.contact_key:
            raise InvalidInput("Missing phone number for tagging")
        if not action.tag:
            raise InvalidInput("Missing tag")
        
        contact = await self.resolve_contact(action.contact_key, action.display_name)
        await self._crm.add_tags(contact.id, [action.tag])
        
        logger.info(f"Tagged contact {contact.id} ({action.contact_key}) with '{action.tag}'")
        return contact
    
    async def tag(
        self,
        raw_phone: Optional[str],
        display_name: Optional[str],
        tag: str
    ) -> CRMContact:
        """
        Tag the contact for raw_phone.
        
        Raises:
            InvalidInput: If there is no phone or tag
            ContactLookupError, ContactCreateError, TagApplyError: per CRM stage
        """
        return await self.apply(self.build_action(raw_phone, display_name, tag))
    
    async def tag_best_effort(
        self,
        raw_phone: Optional[str],
        display_name: Optional[str],
        tag: str
    ) -> TagResult:
        """Like tag(), but logs failures and reports them in the result."""
        action = self.build_action(raw_phone, display_name, tag)
        
        try:
            contact = await self.apply(action)
        except (InvalidInput, UpstreamError) as e:
            logger.error(
                f"Error tagging contact {action.contact_key or '<no phone>'} with '{tag}': {e}",
                exc_info=True
            )
            return TagResult(action=action, success=False, error=str(e))
        
        return TagResult(action=action, success=True, contact_id=contact.id)
