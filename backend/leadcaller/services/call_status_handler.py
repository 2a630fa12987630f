"""
Call Status Handling
Maps Twilio status callbacks to CRM tagging.

Each event is handled on its own, using only the data it carries.
Duplicate or out-of-order deliveries simply repeat the same work.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Optional

from leadcaller.core.config import Settings
from leadcaller.domain.models.call import CallStatus, CallStatusEvent
from leadcaller.domain.models.tagging import TagResult
from leadcaller.services.tagging_service import TaggingService

logger = logging.getLogger(__name__)


@dataclass
class StatusHandlingResult:
    """What was done for one status event"""
    event: CallStatusEvent
    tag_result: Optional[TagResult] = None
    
    @property
    def tagged(self) -> bool:
        return self.tag_result is not None and self.tag_result.success


class CallStatusHandler:
    """Stateless dispatcher over call status events"""
    
    def __init__(self, settings: Settings, tagging_service: TaggingService):
        self._tagging = tagging_service
        # Statuses that produce a CRM tag; all others are only logged
        self.status_tags: Dict[CallStatus, str] = {
            CallStatus.BUSY: settings.busy_tag,
            CallStatus.NO_ANSWER: settings.no_answer_tag,
        }
    
    async def handle(self, event: CallStatusEvent) -> StatusHandlingResult:
        """
        Process one status event. Never raises for tagging failures.
        """
        logger.info(
            f"Call status update: call_sid={event.call_id}, status={event.raw_status}, "
            f"to={event.destination_number}, client_name={event.correlated_lead_name}, "
            f"phone_number={event.correlated_phone}"
        )
        
        if event.status is None:
            logger.warning(f"Call {event.call_id}: unrecognized status {event.raw_status!r}")
            return StatusHandlingResult(event=event)
        
        tag = self.status_tags.get(event.status)
        if tag is None:
            self._log_transition(event)
            return StatusHandlingResult(event=event)
        
        logger.info(f"Call {event.call_id} was {event.status.value}, tagging contact with '{tag}'")
        tag_result = await self._tagging.tag_best_effort(
            event.contact_phone,
            event.correlated_lead_name,
            tag,
        )
        
        if tag_result.success:
            logger.info(
                f"Successfully tagged contact for {event.status.value} call: {event.destination_number}"
            )
        else:
            logger.warning(f"Tagging for call {event.call_id} failed: {tag_result.to_dict()}")
        
        return StatusHandlingResult(event=event, tag_result=tag_result)
    
    @staticmethod
    def _log_transition(event: CallStatusEvent) -> None:
        if event.status == CallStatus.COMPLETED:
            logger.info(f"Call {event.call_id} completed")
        elif event.is_terminal:
            logger.info(f"Call {event.call_id} was not completed ({event.status.value})")
        else:
            logger.info(f"Call {event.call_id} is {event.status.value}")
